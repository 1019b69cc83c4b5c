"""Per-validator configuration schemas.

Constraint specs arrive as loosely typed JSON. Each built-in validator
declares the keys it needs here so malformed configs are rejected when the
field is resolved instead of failing later inside a validation function.
Unknown keys are allowed and flow through to the error payload.
"""

from __future__ import annotations

import re
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, field_validator

Number = Union[StrictInt, StrictFloat]


class ValidatorConfigModel(BaseModel):
    """Base schema shared by every built-in validator config."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    message: Optional[str] = None


class RequiredConfig(ValidatorConfigModel):
    pass


class EmailConfig(ValidatorConfigModel):
    pass


class SizeConfig(ValidatorConfigModel):
    min: Number
    max: Number


class MinConfig(ValidatorConfigModel):
    min: Number


class MaxConfig(ValidatorConfigModel):
    max: Number


class MinLengthConfig(ValidatorConfigModel):
    min_length: int = Field(alias="minLength", ge=0, strict=True)


class MaxLengthConfig(ValidatorConfigModel):
    max_length: int = Field(alias="maxLength", ge=0, strict=True)


class PatternConfig(ValidatorConfigModel):
    """Config for the ``pattern`` validator; ``value`` holds the regex."""

    value: str

    @field_validator("value")
    @classmethod
    def _compiles(cls, v: str) -> str:
        try:
            re.compile(v)
        except re.error as exc:
            raise ValueError(f"invalid regular expression {v!r}: {exc}") from exc
        return v


class UrlConfig(ValidatorConfigModel):
    schemes: list[str] = Field(default_factory=lambda: ["http", "https", "ftp"])
