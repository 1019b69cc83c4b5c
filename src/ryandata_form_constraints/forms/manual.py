from __future__ import annotations

from typing import Any

from ryandata_form_constraints.core.resolver import FieldResolver
from ryandata_form_constraints.models.results import ValidationErrors


class ManualValidator:
    """On-demand validation of a single value against a field's constraints.

    Nothing is cached: each call resolves the field against the current
    registries.
    """

    def __init__(self, resolver: FieldResolver) -> None:
        self._resolver = resolver

    def validate(self, type_name: str, field_name: str, value: Any) -> ValidationErrors | None:
        """Validate a value as if it were the field of a model.

        Args:
            type_name: Type name the constraints are declared under.
            field_name: Field name within the type.
            value: Candidate value.

        Returns:
            Merged validation errors, or None if the value is valid.

        Raises:
            RyanDataConstraintError: If the field references an unknown
                validator or carries a malformed config.
        """
        return self._resolver.resolve(type_name, field_name)(value)
