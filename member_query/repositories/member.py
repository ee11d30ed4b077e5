"""Member repository — dynamic member/team search with paging.

Searches read a flattened projection (`MemberTeamOut`) from
`members LEFT OUTER JOIN teams`, filtered by the optional conditions from
`repositories.conditions`. Paged searches go through `paging.fetch_page`,
which decides whether the count query has to run.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Optional

from sqlalchemy import Select, func, select
from sqlalchemy.orm import contains_eager, joinedload

from member_query.core.exceptions import InvalidArgumentError
from member_query.core.pagination import CountMode, Page, PageRequest, SortDirection, SortOrder
from member_query.domain.member import Member
from member_query.domain.team import Team
from member_query.repositories.base import BaseRepository
from member_query.repositories.conditions import (
    Condition,
    compose_condition_list,
    compose_incremental,
    present,
)
from member_query.repositories.paging import fetch_page
from member_query.schemas.member import MemberSearchCondition, MemberTeamOut

logger = logging.getLogger(__name__)

# Public sort keys -> columns. Both camelCase (HTTP) and snake_case are accepted.
_SORT_COLUMNS = {
    "id": Member.id,
    "memberId": Member.id,
    "member_id": Member.id,
    "username": Member.username,
    "age": Member.age,
    "teamId": Team.id,
    "team_id": Team.id,
    "teamName": Team.name,
    "team_name": Team.name,
}


def _order_by(sort: Sequence[SortOrder]) -> list:
    """ORDER BY clauses for *sort*, nulls last, with member id as the final tiebreak."""
    clauses = []
    for order in sort:
        column = _SORT_COLUMNS.get(order.field)
        if column is None:
            raise InvalidArgumentError(f"Unknown sort field '{order.field}'")
        clause = column.desc() if order.direction is SortDirection.DESC else column.asc()
        clauses.append(clause.nulls_last())
    clauses.append(Member.id.asc())
    return clauses


def _slice(stmt: Select, offset: Optional[int], limit: Optional[int]) -> Select:
    if offset:
        stmt = stmt.offset(offset)
    if limit is not None:
        stmt = stmt.limit(limit)
    return stmt


class MemberRepository(BaseRepository[Member]):
    model = Member

    # ------------------------------------------------------------------
    # Simple lookups
    # ------------------------------------------------------------------

    async def get_by_id(self, entity_id: int) -> Optional[Member]:
        """Member with its team loaded, refreshed even if already in the session."""
        stmt = (
            select(Member)
            .options(joinedload(Member.team))
            .where(Member.id == entity_id)
            .execution_options(populate_existing=True)
        )
        result = await self._execute(stmt)
        return result.scalars().first()

    async def find_by_username(self, username: str) -> list[Member]:
        result = await self._execute(
            select(Member).where(Member.username == username).order_by(Member.id)
        )
        return list(result.scalars().all())

    # ------------------------------------------------------------------
    # Storage primitives (filter + sort + slice)
    # ------------------------------------------------------------------

    async def run_filtered_query(
        self,
        conditions: Iterable[Optional[Condition]],
        sort: Sequence[SortOrder] = (),
        offset: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> list[MemberTeamOut]:
        """Projected member/team rows matching every present condition."""
        stmt = (
            select(
                Member.id.label("member_id"),
                Member.username,
                Member.age,
                Team.id.label("team_id"),
                Team.name.label("team_name"),
            )
            .select_from(Member)
            .outerjoin(Team, Member.team_id == Team.id)
            .where(*present(conditions))
            .order_by(*_order_by(sort))
        )
        result = await self._execute(_slice(stmt, offset, limit))
        return [MemberTeamOut.model_validate(dict(row._mapping)) for row in result]

    async def run_count_query(self, conditions: Iterable[Optional[Condition]]) -> int:
        """Number of members matching every present condition (same join, no slice)."""
        stmt = (
            select(func.count(Member.id))
            .select_from(Member)
            .outerjoin(Team, Member.team_id == Team.id)
            .where(*present(conditions))
        )
        result = await self._execute(stmt)
        return result.scalar_one()

    async def run_joined_filtered_query(
        self,
        conditions: Iterable[Optional[Condition]],
        sort: Sequence[SortOrder] = (),
        offset: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> list[Member]:
        """Member entities with `team` populated from the same join (no per-row lookups)."""
        stmt = (
            select(Member)
            .outerjoin(Member.team)
            .options(contains_eager(Member.team))
            .where(*present(conditions))
            .order_by(*_order_by(sort))
        )
        result = await self._execute(_slice(stmt, offset, limit))
        return list(result.scalars().all())

    # ------------------------------------------------------------------
    # Searches
    # ------------------------------------------------------------------

    async def search(self, condition: MemberSearchCondition) -> list[MemberTeamOut]:
        """Every matching row, in insertion order."""
        return await self.run_filtered_query(compose_condition_list(condition))

    async def search_builder(self, condition: MemberSearchCondition) -> list[MemberTeamOut]:
        """Same as `search`, with the filter built incrementally."""
        return await self.run_filtered_query([compose_incremental(condition)])

    async def search_with_team(
        self,
        condition: MemberSearchCondition,
        sort: Sequence[SortOrder] = (),
    ) -> list[Member]:
        return await self.run_joined_filtered_query(compose_condition_list(condition), sort)

    async def search_page(
        self,
        condition: MemberSearchCondition,
        page_request: PageRequest,
        mode: CountMode = CountMode.OPTIMIZED,
    ) -> Page[MemberTeamOut]:
        conditions = present(compose_condition_list(condition))
        # Reject unknown sort fields before any query runs
        _order_by(page_request.sort)

        async def content(offset: int, limit: int, sort: Sequence[SortOrder]):
            return await self.run_filtered_query(conditions, sort, offset, limit)

        async def count() -> int:
            return await self.run_count_query(conditions)

        page = await fetch_page(page_request, content, count, mode)
        logger.debug(
            "member page %d: %d of %d rows",
            page.number, page.number_of_elements, page.total_elements,
        )
        return page

    async def search_page_simple(
        self, condition: MemberSearchCondition, page_request: PageRequest
    ) -> Page[MemberTeamOut]:
        """Paged search that always runs the count query."""
        return await self.search_page(condition, page_request, CountMode.SIMPLE)

    async def search_page_optimized(
        self, condition: MemberSearchCondition, page_request: PageRequest
    ) -> Page[MemberTeamOut]:
        """Paged search that skips the count query when the first page is short."""
        return await self.search_page(condition, page_request, CountMode.OPTIMIZED)
