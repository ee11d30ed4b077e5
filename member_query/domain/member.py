"""SQLAlchemy ORM model for Members.

A member optionally belongs to one team. `username` is nullable on purpose:
search results must order null usernames after every non-null one.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from member_query.db.base import Base


class Member(Base):
    __tablename__ = "members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, index=True)
    age: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    team_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("teams.id", ondelete="SET NULL"), nullable=True, index=True
    )
    # Only populated by an explicit fetch-join (see MemberRepository.run_joined_filtered_query)
    team: Mapped[Optional["Team"]] = relationship(back_populates="members", lazy="noload")

    def change_team(self, team: "Team") -> None:
        """Move this member to *team*; back_populates keeps `team.members` in sync."""
        self.team = team
        self.team_id = team.id

    def __repr__(self) -> str:
        return f"Member(id={self.id!r}, username={self.username!r}, age={self.age!r})"
