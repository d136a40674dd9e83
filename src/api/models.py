"""Requests and Response models"""

import math
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from src.core.exceptions import InvalidRequestError
from src.core.models import GamerModel, without_id
from src.core.shared_types import GamerFields

EXAMPLE_GAMER = {"id": "d5fE_asz", "title": "Score = 100", "author": "Allen B. Downey"}


# --- REQUEST BODY ---
class GamerPayload(BaseModel):
    """Any JSON object. Known fields are only suggestions (title, author), nothing is required."""

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={"example": without_id(EXAMPLE_GAMER)},
    )

    @model_validator(mode="after")
    def validate_finite_numbers(self) -> Self:
        """NaN / Infinity parse in Python but are not JSON, so they cannot be stored or served."""
        for name, value in (self.model_extra or {}).items():
            if _has_non_finite_number(value):
                raise InvalidRequestError(
                    f"Field {name!r} holds NaN or Infinity, which is not valid JSON."
                )
        return self

    def to_fields(self) -> GamerFields:
        return dict(self.model_extra or {})


def _has_non_finite_number(value: Any) -> bool:
    if isinstance(value, float):
        return not math.isfinite(value)
    if isinstance(value, dict):
        return any(_has_non_finite_number(item) for item in value.values())
    if isinstance(value, list):
        return any(_has_non_finite_number(item) for item in value)
    return False


# --- REQUEST MODELS ---
class GetGamerRequest(BaseModel):
    gamer_id: str

    @field_validator("gamer_id")
    @classmethod
    def validate_gamer_id(cls, value: str) -> str:
        if not value:
            raise InvalidRequestError("Gamer id cannot be empty.")
        return value


class CreateGamerRequest(BaseModel):
    fields: GamerFields


class UpdateGamerRequest(GetGamerRequest):
    fields: GamerFields


class DeleteGamerRequest(GetGamerRequest):
    pass


# --- RESPONSE MODELS ---
class GamerResponse(BaseModel):
    """A stored gamer: the generated id plus whatever fields the client sent."""

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={"example": EXAMPLE_GAMER},
    )

    id: str

    @classmethod
    def from_model(cls, model: GamerModel) -> Self:
        return cls.model_validate(model.to_record())


class ErrorResponse(BaseModel):
    error: str
    message: str
