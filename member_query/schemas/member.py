"""Member/Team Pydantic schemas (search criteria, projections, request DTOs and read models)."""

from member_query.schemas.common import CamelModel, FrozenCamelModel

class MemberSearchCondition(FrozenCamelModel):
    """Sparse search criteria. A `None` field places no constraint on its dimension."""

    username: str | None = None
    team_name: str | None = None
    age_goe: int | None = None
    age_loe: int | None = None

class MemberTeamOut(FrozenCamelModel):
    """Flattened member + team projection returned by searches."""

    member_id: int
    username: str | None = None
    age: int
    team_id: int | None = None
    team_name: str | None = None

class TeamCreate(CamelModel):
    name: str

class TeamOut(CamelModel):
    id: int
    name: str

class MemberCreate(CamelModel):
    username: str | None = None
    age: int = 0
    team_id: int | None = None

class MemberOut(CamelModel):
    id: int
    username: str | None = None
    age: int
    team_id: int | None = None
    team: TeamOut | None = None
