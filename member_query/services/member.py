"""Member service — search and registration of members and teams.

Rule: No FastAPI here. Queries live in the repositories; this layer applies
business rules and raises AppException subclasses.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from member_query.core.exceptions import ConflictError, NotFoundError
from member_query.core.pagination import CountMode, Page, PageRequest
from member_query.domain.member import Member
from member_query.domain.team import Team
from member_query.repositories.member import MemberRepository
from member_query.repositories.team import TeamRepository
from member_query.schemas.member import (
    MemberCreate,
    MemberSearchCondition,
    MemberTeamOut,
    TeamCreate,
)

logger = logging.getLogger(__name__)

class MemberService:
    def __init__(self, session: AsyncSession):
        self._members = MemberRepository(session)
        self._teams = TeamRepository(session)

    async def search_members(self, condition: MemberSearchCondition) -> list[MemberTeamOut]:
        return await self._members.search(condition)

    async def search_members_with_team(self, condition: MemberSearchCondition) -> list[Member]:
        return await self._members.search_with_team(condition)

    async def search_page(
        self,
        condition: MemberSearchCondition,
        page_request: PageRequest,
        mode: CountMode = CountMode.OPTIMIZED,
    ) -> Page[MemberTeamOut]:
        return await self._members.search_page(condition, page_request, mode)

    async def get_member(self, member_id: int) -> Member:
        member = await self._members.get_by_id(member_id)
        if not member:
            raise NotFoundError("Member", member_id)
        return member

    async def register_team(self, data: TeamCreate) -> Team:
        if await self._teams.find_by_name(data.name):
            raise ConflictError(f"Team '{data.name}' already exists")
        team = await self._teams.create(name=data.name)
        logger.info("registered team %s (%s)", team.id, team.name)
        return team

    async def register_member(self, data: MemberCreate) -> Member:
        member = Member(username=data.username, age=data.age)
        if data.team_id is not None:
            team = await self._teams.get_by_id(data.team_id)
            if not team:
                raise NotFoundError("Team", data.team_id)
            member.change_team(team)
        member = await self._members.add(member)
        logger.info("registered member %s (%s)", member.id, member.username)
        return member
