"""Shared Pydantic schema bases with camelCase aliases."""

from __future__ import annotations

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """All API schemas inherit from this to auto-generate camelCase aliases."""

    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
        "from_attributes": True,
    }


class FrozenCamelModel(CamelModel):
    """Read-only variant for search inputs and projected rows (hashable, no mutation)."""

    model_config = {**CamelModel.model_config, "frozen": True}


class HealthResponse(BaseModel):
    status: str = "ok"
    app: str
    env: str
