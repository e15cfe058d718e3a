"""Shared pydantic base for BizMap wire models."""
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class BizMapModel(BaseModel):
    """
    Base model for every payload exchanged with the BizMap backend.

    The backend speaks camelCase JSON; attributes stay snake_case and either
    spelling is accepted on input. Unknown fields are ignored, and an explicit
    ``null`` is treated as a missing field so the declared default applies.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    def to_wire(self) -> dict:
        """Serialize with camelCase keys, skipping unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class BizMapRecord(BizMapModel):
    """Immutable response record."""

    model_config = ConfigDict(frozen=True)
