"""Per-field validator resolution.

Looks up a field's constraints, resolves each validator name to a factory,
invokes the factory and composes the resulting functions. Shared by the
form control builder, the validator attacher and the manual validator.
"""

from __future__ import annotations

import copy
import logging

from pydantic import ValidationError

from ryandata_form_constraints.core.composer import combine
from ryandata_form_constraints.core.constraints import ConstraintRegistry
from ryandata_form_constraints.core.registry import ValidatorFactoryRegistry
from ryandata_form_constraints.models.errors import RyanDataConstraintError
from ryandata_form_constraints.models.results import ValidationFunction

logger = logging.getLogger(__name__)


class FieldResolver:
    """Resolves the composed validator for a (type, field) pair."""

    def __init__(
        self,
        constraints: ConstraintRegistry,
        factories: ValidatorFactoryRegistry,
    ) -> None:
        self._constraints = constraints
        self._factories = factories

    @property
    def constraints(self) -> ConstraintRegistry:
        return self._constraints

    @property
    def factories(self) -> ValidatorFactoryRegistry:
        return self._factories

    def resolve_functions(self, type_name: str, field_name: str) -> list[ValidationFunction]:
        """Resolve the flat list of validation functions for a field.

        Functions are returned in the order their validators appear in the
        spec.

        Args:
            type_name: Type name as used in the constraint spec.
            field_name: Field name as used in the constraint spec.

        Returns:
            Validation functions; empty if the field has no constraints.

        Raises:
            RyanDataConstraintError: If a validator name is unknown or its
                config is malformed.
        """
        functions: list[ValidationFunction] = []
        for name, config in self._constraints.get(type_name, field_name).items():
            try:
                factory = self._factories.resolve(name)
            except RyanDataConstraintError:
                raise RyanDataConstraintError.unknown_validator(
                    name, self._factories.available_names(), type_name, field_name
                ) from None
            try:
                created = factory.create_validator(copy.deepcopy(dict(config)))
            except (ValidationError, RyanDataConstraintError) as exc:
                raise RyanDataConstraintError.from_validation_error(
                    name, exc, type_name, field_name
                ) from exc
            functions.extend(created)
        if functions:
            logger.debug(
                "Resolved %d validation function(s) for %s.%s",
                len(functions),
                type_name,
                field_name,
            )
        return functions

    def resolve(self, type_name: str, field_name: str) -> ValidationFunction:
        """Resolve and compose the validator for a field.

        Args:
            type_name: Type name as used in the constraint spec.
            field_name: Field name as used in the constraint spec.

        Returns:
            Composed validation function; always passes for unconstrained fields.
        """
        return combine(self.resolve_functions(type_name, field_name))
