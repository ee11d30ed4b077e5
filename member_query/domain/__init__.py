"""Domain package — all ORM models are imported here so Base.metadata sees them.

Folder intent:
  team.py    — Team (one side of the member/team relationship)
  member.py  — Member, optionally assigned to one Team
"""

from member_query.domain.member import Member
from member_query.domain.team import Team

__all__ = [
    "Member",
    "Team",
]
