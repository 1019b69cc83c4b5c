"""Reference form control tree.

A minimal in-process implementation of ControlProtocol and
ControlTreeProtocol. Host form frameworks supply their own controls; these
classes are used by the service helpers, the HTTP API and the tests.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from ryandata_form_constraints.models.results import (
    ControlDescriptor,
    ValidationErrors,
    ValidationFunction,
)


@dataclass
class FormControl:
    """A single control holding a value and an optional validator."""

    value: Any = None
    validator: Optional[ValidationFunction] = None

    @property
    def errors(self) -> ValidationErrors | None:
        """Current validation errors, or None if the value is valid."""
        if self.validator is None:
            return None
        return self.validator(self.value)

    @property
    def valid(self) -> bool:
        return self.errors is None

    def set_value(self, value: Any) -> None:
        self.value = value

    @classmethod
    def from_descriptor(cls, descriptor: ControlDescriptor) -> FormControl:
        return cls(value=descriptor.value, validator=descriptor.validator)


@dataclass
class FormGroup:
    """A named group of controls."""

    controls: dict[str, FormControl] = field(default_factory=dict)

    def get(self, name: str) -> FormControl | None:
        return self.controls.get(name)

    @property
    def value(self) -> dict[str, Any]:
        return {name: control.value for name, control in self.controls.items()}

    @property
    def errors(self) -> dict[str, ValidationErrors]:
        """Errors of every invalid control, keyed by field name."""
        errors: dict[str, ValidationErrors] = {}
        for name, control in self.controls.items():
            control_errors = control.errors
            if control_errors is not None:
                errors[name] = control_errors
        return errors

    @property
    def valid(self) -> bool:
        return all(control.valid for control in self.controls.values())

    @classmethod
    def from_values(cls, values: Mapping[str, Any]) -> FormGroup:
        """Create a group of unvalidated controls from field values."""
        return cls({name: FormControl(value=value) for name, value in values.items()})

    @classmethod
    def from_descriptors(cls, descriptors: Mapping[str, ControlDescriptor]) -> FormGroup:
        """Create a group from control descriptors built by FormControlBuilder."""
        return cls(
            {
                name: FormControl.from_descriptor(descriptor)
                for name, descriptor in descriptors.items()
            }
        )
