"""Constraint configuration error classes.

Validation failures are returned as data; these errors are reserved for
configuration mistakes such as unknown validator names or malformed
validator configs.
"""

from __future__ import annotations

from typing import Any

from pydantic_core import PydanticCustomError

# Package identifier for error context
PACKAGE_NAME = "ryandata_form_constraints"


class RyanDataConstraintError(PydanticCustomError):
    """Configuration error raised by the constraint engine.

    Inherits from PydanticCustomError so it carries an error type, a message
    template and a context dict, and can be raised from inside pydantic
    validators without being re-wrapped.

    Error types:
    - unknown_validator: a constraint references an unregistered validator
    - invalid_validator_config: a validator config fails its schema
    - invalid_constraint_spec: the constraint spec is not a nested mapping
    - invalid_validator_factory: an object does not satisfy the factory protocol
    """

    @classmethod
    def unknown_validator(
        cls,
        validator: str,
        available: list[str],
        type_name: str | None = None,
        field_name: str | None = None,
    ) -> RyanDataConstraintError:
        """Build an error for a validator name missing from the registry.

        Args:
            validator: The validator name that failed to resolve.
            available: Names currently registered.
            type_name: Type the constraint was declared on, if known.
            field_name: Field the constraint was declared on, if known.

        Returns:
            RyanDataConstraintError of type ``unknown_validator``.
        """
        location = _location(type_name, field_name)
        return cls(
            "unknown_validator",
            "Unknown validator '{validator}'{location}. Available validators: {available}",
            {
                "package": PACKAGE_NAME,
                "validator": validator,
                "location": location,
                "available": ", ".join(available),
                "type_name": type_name,
                "field_name": field_name,
            },
        )

    @classmethod
    def invalid_config(
        cls,
        validator: str,
        detail: str,
        type_name: str | None = None,
        field_name: str | None = None,
    ) -> RyanDataConstraintError:
        """Build an error for a validator config that fails its schema.

        Args:
            validator: Name of the validator whose config is malformed.
            detail: Human-readable description of the problem.
            type_name: Type the constraint was declared on, if known.
            field_name: Field the constraint was declared on, if known.

        Returns:
            RyanDataConstraintError of type ``invalid_validator_config``.
        """
        location = _location(type_name, field_name)
        return cls(
            "invalid_validator_config",
            "Invalid config for validator '{validator}'{location}: {detail}",
            {
                "package": PACKAGE_NAME,
                "validator": validator,
                "location": location,
                "detail": detail,
                "type_name": type_name,
                "field_name": field_name,
            },
        )

    @classmethod
    def invalid_spec(cls, detail: str) -> RyanDataConstraintError:
        """Build an error for a constraint spec with the wrong shape."""
        return cls(
            "invalid_constraint_spec",
            "Invalid constraint specification: {detail}",
            {"package": PACKAGE_NAME, "detail": detail},
        )

    @classmethod
    def invalid_factory(cls, factory: Any) -> RyanDataConstraintError:
        """Build an error for an object that is not a validator factory."""
        return cls(
            "invalid_validator_factory",
            "Object {factory} is not a validator factory: "
            "it needs a 'name' and a 'create_validator' method",
            {"package": PACKAGE_NAME, "factory": repr(factory)},
        )

    @classmethod
    def from_validation_error(
        cls,
        validator: str,
        error: Exception,
        type_name: str | None = None,
        field_name: str | None = None,
    ) -> RyanDataConstraintError:
        """Wrap a pydantic.ValidationError raised while checking a config.

        Errors that are already RyanDataConstraintError instances keep
        their detail and gain the type/field location.

        Args:
            validator: Name of the validator whose config was checked.
            error: The exception to wrap.
            type_name: Type the constraint was declared on.
            field_name: Field the constraint was declared on.

        Returns:
            RyanDataConstraintError of type ``invalid_validator_config``.
        """
        from pydantic import ValidationError

        if isinstance(error, cls):
            detail = (error.context or {}).get("detail") or error.message()
        elif isinstance(error, ValidationError):
            detail = "; ".join(
                f"{'.'.join(str(loc) for loc in e.get('loc', ())) or 'config'}: {e.get('msg')}"
                for e in error.errors()
            )
        else:
            detail = str(error)
        return cls.invalid_config(validator, detail, type_name, field_name)


def _location(type_name: str | None, field_name: str | None) -> str:
    if type_name is None or field_name is None:
        return ""
    return f" on {type_name}.{field_name}"
