"""Team repository."""


from sqlalchemy import select

from member_query.domain.team import Team
from member_query.repositories.base import BaseRepository


class TeamRepository(BaseRepository[Team]):
    model = Team

    async def find_by_name(self, name: str) -> Team | None:
        result = await self._execute(select(Team).where(Team.name == name))
        return result.scalars().first()
