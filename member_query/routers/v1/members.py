"""Member search router.

Pattern:
  1. Declare a router with prefix and tags
  2. Inject DB session via Depends
  3. Instantiate the service with the session
  4. Call service methods and wrap result in response envelope
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from member_query.core.pagination import PaginationParams
from member_query.core.response import DataResponse, ListResponse, PageResponse, paginated
from member_query.db.base import get_db
from member_query.schemas.member import (
    MemberCreate,
    MemberOut,
    MemberSearchCondition,
    MemberTeamOut,
    TeamCreate,
    TeamOut,
)
from member_query.services.member import MemberService

router = APIRouter(tags=["Members"])


# ------------------------------------------------------------------
# Dependencies
# ------------------------------------------------------------------

def _blank_as_absent(value: Optional[str]) -> Optional[str]:
    if value is not None and not value.strip():
        return None
    return value


def search_condition(
    username: Optional[str] = Query(default=None, description="Exact username"),
    team_name: Optional[str] = Query(default=None, alias="teamName", description="Exact team name"),
    age_goe: Optional[int] = Query(default=None, alias="ageGoe", description="Minimum age (inclusive)"),
    age_loe: Optional[int] = Query(default=None, alias="ageLoe", description="Maximum age (inclusive)"),
) -> MemberSearchCondition:
    """Criteria from the query string; `?username=` means no username filter."""
    return MemberSearchCondition(
        username=_blank_as_absent(username),
        team_name=_blank_as_absent(team_name),
        age_goe=age_goe,
        age_loe=age_loe,
    )


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.get("/members/search", response_model=ListResponse[MemberTeamOut])
async def search_members(
    condition: MemberSearchCondition = Depends(search_condition),
    session: AsyncSession = Depends(get_db),
):
    """Every member matching the criteria, in insertion order."""
    rows = await MemberService(session).search_members(condition)
    return {"data": rows}


@router.get("/members/search/page", response_model=PageResponse[MemberTeamOut])
async def search_members_page(
    condition: MemberSearchCondition = Depends(search_condition),
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
):
    """One page of matching members. `?mode=simple` always counts; `optimized` may skip it."""
    page = await MemberService(session).search_page(
        condition, pagination.to_page_request(), pagination.mode
    )
    return paginated(page)


@router.get("/members/search/with-team", response_model=ListResponse[MemberOut])
async def search_members_with_team(
    condition: MemberSearchCondition = Depends(search_condition),
    session: AsyncSession = Depends(get_db),
):
    """Matching members with their team loaded in the same query."""
    members = await MemberService(session).search_members_with_team(condition)
    return {"data": [MemberOut.model_validate(m) for m in members]}


@router.get("/members/{member_id}", response_model=DataResponse[MemberOut])
async def get_member(
    member_id: int,
    session: AsyncSession = Depends(get_db),
):
    member = await MemberService(session).get_member(member_id)
    return {"data": MemberOut.model_validate(member)}


@router.post("/members", response_model=DataResponse[MemberOut], status_code=status.HTTP_201_CREATED)
async def create_member(
    body: MemberCreate,
    session: AsyncSession = Depends(get_db),
):
    member = await MemberService(session).register_member(body)
    return {"data": MemberOut.model_validate(member)}


@router.post("/teams", response_model=DataResponse[TeamOut], status_code=status.HTTP_201_CREATED)
async def create_team(
    body: TeamCreate,
    session: AsyncSession = Depends(get_db),
):
    team = await MemberService(session).register_team(body)
    return {"data": TeamOut.model_validate(team)}
