from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ryandata_form_constraints.models import ValidationFunction, ValidatorConfig


@runtime_checkable
class ValidatorFactoryProtocol(Protocol):
    """Protocol for validator factories.

    A factory turns one validator config from the constraint spec into one
    or more validation functions. Built-in and user-supplied factories are
    interchangeable; registering a factory under an existing name replaces
    the previous one.
    """

    @property
    def name(self) -> str:
        """Validator name used as the key in constraint specs."""
        ...

    def create_validator(self, config: ValidatorConfig) -> list[ValidationFunction]:
        """Create validation functions for a validator config.

        Args:
            config: Validator config from the constraint spec.

        Returns:
            List of validation functions to compose for the field.
        """
        ...


@runtime_checkable
class ControlProtocol(Protocol):
    """Protocol for a single form control in a host form framework.

    The engine reads the control's value and reads/writes its validator,
    composing with whatever validator the control already carries.
    """

    value: Any
    validator: Optional[ValidationFunction]


@runtime_checkable
class ControlTreeProtocol(Protocol):
    """Protocol for a group of named form controls."""

    def get(self, name: str) -> ControlProtocol | None:
        """Get the control for a field name.

        Args:
            name: Field name.

        Returns:
            The control if present, None otherwise.
        """
        ...
