"""Data models for the constraint engine.

This module re-exports all model classes for convenient access:
- Result types: ValidationErrors, ValidationFunction, ControlDescriptor
- Config schemas: one pydantic model per built-in validator
- Errors: RyanDataConstraintError
"""

from ryandata_form_constraints.models.configs import (
    EmailConfig,
    MaxConfig,
    MaxLengthConfig,
    MinConfig,
    MinLengthConfig,
    PatternConfig,
    RequiredConfig,
    SizeConfig,
    UrlConfig,
    ValidatorConfigModel,
)
from ryandata_form_constraints.models.errors import PACKAGE_NAME, RyanDataConstraintError
from ryandata_form_constraints.models.results import (
    ConstraintSpec,
    ControlDescriptor,
    ValidationErrors,
    ValidationFunction,
    ValidatorConfig,
    always_valid,
)

__all__ = [
    # Results
    "ConstraintSpec",
    "ControlDescriptor",
    "ValidationErrors",
    "ValidationFunction",
    "ValidatorConfig",
    "always_valid",
    # Config schemas
    "ValidatorConfigModel",
    "RequiredConfig",
    "SizeConfig",
    "MinConfig",
    "MaxConfig",
    "MinLengthConfig",
    "MaxLengthConfig",
    "EmailConfig",
    "PatternConfig",
    "UrlConfig",
    # Errors
    "PACKAGE_NAME",
    "RyanDataConstraintError",
]
