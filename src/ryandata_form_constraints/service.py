from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any, Union

from abstract_validation_base import ValidationResult

from ryandata_form_constraints.core import (
    ConstraintRegistry,
    FieldResolver,
    ValidatorFactoryRegistry,
)
from ryandata_form_constraints.forms import (
    FormControlBuilder,
    FormGroup,
    ManualValidator,
    ValidatorAttacher,
    model_fields,
)
from ryandata_form_constraints.models import (
    ConstraintSpec,
    ControlDescriptor,
    RyanDataConstraintError,
    ValidationErrors,
    ValidationFunction,
)

if TYPE_CHECKING:
    from ryandata_form_constraints.protocols import ControlTreeProtocol, ValidatorFactoryProtocol

logger = logging.getLogger(__name__)

CONSTRAINTS_FILE_ENV = "RYANDATA_CONSTRAINTS_FILE"

ConstraintSource = Union[ConstraintSpec, str, Path]


def read_constraint_source(source: ConstraintSource) -> Any:
    """Decode a constraint spec from a mapping, a JSON string or a JSON file.

    Strings that look like JSON objects are decoded directly; other strings
    and Path objects are treated as file paths.

    Args:
        source: Spec mapping, JSON text, or path to a JSON file.

    Returns:
        The decoded (not yet validated) spec.

    Raises:
        RyanDataConstraintError: If the JSON cannot be decoded.
        FileNotFoundError: If a path does not exist.
    """
    if isinstance(source, Mapping):
        return source
    if isinstance(source, str) and source.lstrip().startswith("{"):
        text = source
    else:
        text = Path(source).read_text(encoding="utf-8")
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise RyanDataConstraintError.invalid_spec(f"invalid JSON: {exc}") from exc


class ConstraintService:
    """Main service for constraint-driven form validation.

    Owns one constraint registry and one validator factory registry and
    exposes the public operations on top of them.

    Example:
        >>> service = ConstraintService(
        ...     {"Person": {"firstName": {"required": {"message": "First name is required."}}}}
        ... )
        >>> service.validate("Person", "firstName", "")
        {'required': {'message': 'First name is required.'}}
        >>> service.validate("Person", "firstName", "John") is None
        True
    """

    def __init__(
        self,
        constraints: ConstraintSource | None = None,
        factories: Iterable[ValidatorFactoryProtocol] | None = None,
        *,
        include_builtins: bool = True,
        constraint_registry: ConstraintRegistry | None = None,
        factory_registry: ValidatorFactoryRegistry | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            constraints: Initial constraint spec (mapping, JSON text or path).
            factories: Custom validator factories registered after the built-ins.
            include_builtins: If True, seed the factory registry with the built-ins.
                Ignored when factory_registry is given.
            constraint_registry: Existing constraint registry to share.
            factory_registry: Existing factory registry to share.
        """
        self._constraints = (
            constraint_registry if constraint_registry is not None else ConstraintRegistry()
        )
        if factory_registry is None:
            factory_registry = ValidatorFactoryRegistry(include_builtins=include_builtins)
        self._factories = factory_registry
        self._resolver = FieldResolver(self._constraints, self._factories)
        self._builder = FormControlBuilder(self._resolver)
        self._attacher = ValidatorAttacher(self._resolver)
        self._manual = ManualValidator(self._resolver)

        if factories is not None:
            self.register_validator_factories(factories)
        if constraints is not None:
            self.load_constraints(constraints)

    @property
    def constraint_registry(self) -> ConstraintRegistry:
        return self._constraints

    @property
    def factory_registry(self) -> ValidatorFactoryRegistry:
        return self._factories

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    def set_constraints(self, spec: ConstraintSpec) -> None:
        """Replace the whole constraint spec.

        Args:
            spec: Mapping of type name -> field name -> validator name -> config.

        Raises:
            RyanDataConstraintError: If the constraint spec has the wrong shape.
        """
        self._constraints.set_constraints(spec)

    def load_constraints(self, source: ConstraintSource) -> None:
        """Replace the constraint spec from a mapping, JSON text or JSON file.

        Args:
            source: Spec mapping, JSON text, or path to a JSON file.
        """
        self.set_constraints(read_constraint_source(source))

    def register_validator_factories(self, factories: Iterable[ValidatorFactoryProtocol]) -> None:
        """Register custom validator factories, overriding same-named ones.

        Args:
            factories: Factories to register, in order.
        """
        self._factories.register_many(factories)

    def register_validator_factory(self, factory: ValidatorFactoryProtocol) -> None:
        """Register a single custom validator factory."""
        self._factories.register(factory)

    def available_validators(self) -> list[str]:
        """Get the sorted list of registered validator names."""
        return self._factories.available_names()

    def check_constraints(self) -> list[RyanDataConstraintError]:
        """Resolve every constrained field and collect configuration errors.

        Returns:
            One error per field that fails to resolve; empty if the constraint spec is sound.
        """
        errors: list[RyanDataConstraintError] = []
        for type_name in self._constraints.type_names():
            for field_name in self._constraints.field_names(type_name):
                try:
                    self._resolver.resolve(type_name, field_name)
                except RyanDataConstraintError as exc:
                    errors.append(exc)
        if errors:
            logger.warning("Constraint check found %d configuration error(s)", len(errors))
        return errors

    # -------------------------------------------------------------------------
    # Form operations
    # -------------------------------------------------------------------------

    def create_form_group_controls(self, model: Any, type_name: str) -> dict[str, ControlDescriptor]:
        """Build a control descriptor for every field of a model.

        Args:
            model: Model instance (mapping, pydantic model, dataclass or object).
            type_name: Type name the constraints are declared under.

        Returns:
            Mapping of field name -> ControlDescriptor.
        """
        return self._builder.build(model, type_name)

    def create_form_group(self, model: Any, type_name: str) -> FormGroup:
        """Build a reference FormGroup for a model."""
        return FormGroup.from_descriptors(self.create_form_group_controls(model, type_name))

    def add_validators(self, control_tree: ControlTreeProtocol, type_name: str) -> None:
        """Compose constraint validators onto an existing control tree.

        Args:
            control_tree: Object whose ``get(field)`` returns a control or None.
            type_name: Type name the constraints are declared under.
        """
        self._attacher.attach(control_tree, type_name)

    def field_validator(self, type_name: str, field_name: str) -> ValidationFunction:
        """Resolve the composed validator for one field.

        Args:
            type_name: Type name the constraints are declared under.
            field_name: Field name within the type.

        Returns:
            Composed validation function; always passes for unconstrained fields.
        """
        return self._resolver.resolve(type_name, field_name)

    def validate(self, type_name: str, field_name: str, value: Any) -> ValidationErrors | None:
        """Validate a single value against a field's constraints.

        Args:
            type_name: Type name the constraints are declared under.
            field_name: Field name within the type.
            value: Candidate value.

        Returns:
            Merged validation errors, or None if the value is valid.
        """
        return self._manual.validate(type_name, field_name, value)

    def validate_model(self, model: Any, type_name: str) -> ValidationResult:
        """Validate every field of a model and collect a ValidationResult.

        Each failing validator adds one error; the message falls back to the
        validator name when the config has none.

        Args:
            model: Model instance (mapping, pydantic model, dataclass or object).
            type_name: Type name the constraints are declared under.

        Returns:
            ValidationResult with one entry per failing validator per field.
        """
        result = ValidationResult(is_valid=True)
        for field_name, value in model_fields(model).items():
            errors = self.validate(type_name, field_name, value)
            for validator_name, details in (errors or {}).items():
                result.add_error(
                    field=field_name,
                    message=details.get("message") or validator_name,
                    value=value,
                )
        return result


# Module-level convenience function
_default_service: ConstraintService | None = None


def get_default_service() -> ConstraintService:
    """Get the default ConstraintService singleton.

    On first use, constraints are loaded from the JSON file named by the
    ``RYANDATA_CONSTRAINTS_FILE`` environment variable, if set.

    Returns:
        Shared ConstraintService instance.
    """
    global _default_service
    if _default_service is None:
        constraints_file = os.getenv(CONSTRAINTS_FILE_ENV)
        if constraints_file:
            logger.debug("Loading default constraints from %s", constraints_file)
        _default_service = ConstraintService(Path(constraints_file) if constraints_file else None)
    return _default_service


def reset_default_service() -> None:
    """Drop the default service so the next call builds a fresh one."""
    global _default_service
    _default_service = None


def set_constraints(spec: ConstraintSpec) -> None:
    """Replace the default service's constraint spec."""
    get_default_service().set_constraints(spec)


def register_validator_factories(factories: Iterable[ValidatorFactoryProtocol]) -> None:
    """Register custom validator factories on the default service."""
    get_default_service().register_validator_factories(factories)


def create_form_group_controls(model: Any, type_name: str) -> dict[str, ControlDescriptor]:
    """Build control descriptors for a model using the default service."""
    return get_default_service().create_form_group_controls(model, type_name)


def add_validators(control_tree: ControlTreeProtocol, type_name: str) -> None:
    """Attach constraint validators to a control tree using the default service."""
    get_default_service().add_validators(control_tree, type_name)


def validate(type_name: str, field_name: str, value: Any) -> ValidationErrors | None:
    """Validate a single value using the default service."""
    return get_default_service().validate(type_name, field_name, value)
