"""Result types shared by validators, controls and the service.

This module contains the type aliases for validation functions and their
error payloads, and the ControlDescriptor dataclass produced by the
form control builder.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Optional

# validator name -> {"message": ..., **config minus message}
ValidationErrors = dict[str, dict[str, Any]]

ValidationFunction = Callable[[Any], Optional[ValidationErrors]]

ValidatorConfig = Mapping[str, Any]

# type name -> field name -> validator name -> validator config
ConstraintSpec = Mapping[str, Mapping[str, Mapping[str, ValidatorConfig]]]


def always_valid(value: Any) -> None:
    """Validation function for fields without constraints."""
    return None


@dataclass(frozen=True)
class ControlDescriptor:
    """A field's current value paired with its composed validator."""

    value: Any
    validator: ValidationFunction = always_valid

    @property
    def errors(self) -> ValidationErrors | None:
        """Run the validator against the stored value."""
        return self.validator(self.value)

    @property
    def is_valid(self) -> bool:
        """True if the stored value passes its validator."""
        return self.errors is None
