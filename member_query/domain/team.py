"""SQLAlchemy ORM model for Teams."""

from __future__ import annotations

from typing import List

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from member_query.db.base import Base


class Team(Base):
    __tablename__ = "teams"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)

    members: Mapped[List["Member"]] = relationship(back_populates="team", lazy="noload")

    def __repr__(self) -> str:
        return f"Team(id={self.id!r}, name={self.name!r})"
