"""Optional WHERE-clause builders for member searches.

Each builder takes one optional value and returns a boolean clause, or `None`
when the value is absent. `None` means "no constraint": `all_of` and
`ConditionBuilder` both drop it, so a search with no criteria matches every row.

Two composition styles are supported and must select the same rows:

    stmt.where(*present(compose_condition_list(condition)))   # condition list
    stmt.where(compose_incremental(condition))                # incremental builder

Team conditions reference the `teams` table, so the statement they are applied
to must join it (member searches use a LEFT OUTER JOIN).
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, Optional

from sqlalchemy import ColumnElement, and_, true

from member_query.domain.member import Member
from member_query.domain.team import Team
from member_query.schemas.member import MemberSearchCondition

Condition = ColumnElement[bool]


# ------------------------------------------------------------------
# Single-dimension builders
# ------------------------------------------------------------------

def username_eq(username: Optional[str]) -> Optional[Condition]:
    if username is None:
        return None
    return Member.username == username


def team_name_eq(team_name: Optional[str]) -> Optional[Condition]:
    if team_name is None:
        return None
    return Team.name == team_name


def age_goe(age: Optional[int]) -> Optional[Condition]:
    if age is None:
        return None
    return Member.age >= age


def age_loe(age: Optional[int]) -> Optional[Condition]:
    if age is None:
        return None
    return Member.age <= age


# ------------------------------------------------------------------
# Combinators
# ------------------------------------------------------------------

def present(conditions: Iterable[Optional[Condition]]) -> list[Condition]:
    """Drop absent conditions, keeping the order of the rest."""
    return [c for c in conditions if c is not None]


def all_of(*conditions: Optional[Condition]) -> Condition:
    """AND together every present condition; with none left, match all rows."""
    kept = present(conditions)
    if not kept:
        return true()
    if len(kept) == 1:
        return kept[0]
    return and_(*kept)


class ConditionBuilder:
    """Immutable accumulator that starts as "match all".

    `and_` returns a new builder, so a partially built filter can be shared and
    extended in different directions without one branch leaking into another.
    """

    __slots__ = ("_conditions",)

    def __init__(self, conditions: tuple[Condition, ...] = ()):
        self._conditions = conditions

    def and_(self, condition: Optional[Condition]) -> ConditionBuilder:
        if condition is None:
            return self
        return ConditionBuilder(self._conditions + (condition,))

    def and_if(
        self, value: Any, factory: Callable[[Any], Optional[Condition]]
    ) -> ConditionBuilder:
        """Add `factory(value)` only when *value* is not None."""
        if value is None:
            return self
        return self.and_(factory(value))

    def build(self) -> Condition:
        return all_of(*self._conditions)


# ------------------------------------------------------------------
# Search-condition composition
# ------------------------------------------------------------------

def compose_condition_list(condition: MemberSearchCondition) -> list[Optional[Condition]]:
    """One optional clause per criteria field, in a fixed order (may contain None)."""
    return [
        username_eq(condition.username),
        team_name_eq(condition.team_name),
        age_goe(condition.age_goe),
        age_loe(condition.age_loe),
    ]


def compose_incremental(condition: MemberSearchCondition) -> Condition:
    """Builder-style composition of the same criteria as `compose_condition_list`."""
    return (
        ConditionBuilder()
        .and_if(condition.username, username_eq)
        .and_if(condition.team_name, team_name_eq)
        .and_if(condition.age_goe, age_goe)
        .and_if(condition.age_loe, age_loe)
        .build()
    )
