"""Constraint registry.

Holds the constraint specification keyed by type name, field name and
validator name. The stored spec is a read-only snapshot; replacing it is a
single reference swap so readers never observe a partial update.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import TypeAdapter, ValidationError

from ryandata_form_constraints.models.errors import RyanDataConstraintError
from ryandata_form_constraints.models.results import ConstraintSpec, ValidatorConfig

logger = logging.getLogger(__name__)

_EMPTY: Mapping[str, Any] = MappingProxyType({})

_spec_adapter: TypeAdapter[dict[str, dict[str, dict[str, dict[str, Any]]]]] = TypeAdapter(
    dict[str, dict[str, dict[str, dict[str, Any]]]]
)


def parse_constraint_spec(spec: Any) -> dict[str, dict[str, dict[str, dict[str, Any]]]]:
    """Check that a value has the nested constraint spec shape.

    Args:
        spec: Candidate spec, usually decoded JSON.

    Returns:
        A plain nested dict copy of the constraint spec.

    Raises:
        RyanDataConstraintError: If the value is not a mapping of
            type -> field -> validator -> config mapping.
    """
    try:
        parsed = _spec_adapter.validate_python(spec, strict=False)
    except ValidationError as exc:
        detail = "; ".join(
            f"{'.'.join(str(loc) for loc in e.get('loc', ())) or 'spec'}: {e.get('msg')}"
            for e in exc.errors()
        )
        raise RyanDataConstraintError.invalid_spec(detail) from exc
    return copy.deepcopy(parsed)


def _freeze(spec: dict[str, dict[str, dict[str, dict[str, Any]]]]) -> ConstraintSpec:
    return MappingProxyType(
        {
            type_name: MappingProxyType(
                {
                    field_name: MappingProxyType(
                        {name: MappingProxyType(config) for name, config in validators.items()}
                    )
                    for field_name, validators in fields.items()
                }
            )
            for type_name, fields in spec.items()
        }
    )


class ConstraintRegistry:
    """Registry of declarative field constraints.

    Example:
        >>> registry = ConstraintRegistry()
        >>> registry.set_constraints(
        ...     {"Person": {"firstName": {"required": {"message": "Required."}}}}
        ... )
        >>> dict(registry.get("Person", "firstName"))
        {'required': mappingproxy({'message': 'Required.'})}
        >>> dict(registry.get("Person", "lastName"))
        {}
    """

    def __init__(self, spec: ConstraintSpec | None = None) -> None:
        """Initialize the registry.

        Args:
            spec: Optional initial constraint spec.
        """
        self._spec: ConstraintSpec = MappingProxyType({})
        if spec is not None:
            self.set_constraints(spec)

    def set_constraints(self, spec: ConstraintSpec) -> None:
        """Replace the whole constraint spec.

        The new spec is validated and frozen before it is swapped in; on
        error the previous spec stays in place.

        Args:
            spec: Mapping of type name -> field name -> validator name -> config.

        Raises:
            RyanDataConstraintError: If the constraint spec has the wrong shape.
        """
        frozen = _freeze(parse_constraint_spec(spec))
        self._spec = frozen
        logger.debug("Constraint spec replaced: %d type(s)", len(frozen))

    def get(self, type_name: str, field_name: str) -> Mapping[str, ValidatorConfig]:
        """Get the validators declared for a field.

        Args:
            type_name: Type name as used in the constraint spec.
            field_name: Field name as used in the constraint spec.

        Returns:
            Read-only mapping of validator name -> config; empty if the type
            or field is not constrained.
        """
        spec = self._spec
        return spec.get(type_name, _EMPTY).get(field_name, _EMPTY)

    def type_names(self) -> list[str]:
        """Get the constrained type names, in spec order."""
        return list(self._spec.keys())

    def field_names(self, type_name: str) -> list[str]:
        """Get the constrained field names of a type, in spec order."""
        return list(self._spec.get(type_name, _EMPTY).keys())

    def to_dict(self) -> dict[str, dict[str, dict[str, dict[str, Any]]]]:
        """Get a mutable deep copy of the current spec."""
        spec = self._spec
        return {
            type_name: {
                field_name: {
                    name: copy.deepcopy(dict(config)) for name, config in validators.items()
                }
                for field_name, validators in fields.items()
            }
            for type_name, fields in spec.items()
        }

    def __contains__(self, type_name: object) -> bool:
        return type_name in self._spec

    def __len__(self) -> int:
        return len(self._spec)
