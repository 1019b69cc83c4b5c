from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from ryandata_form_constraints.core.resolver import FieldResolver
from ryandata_form_constraints.models.results import ControlDescriptor

logger = logging.getLogger(__name__)


def model_fields(model: Any) -> dict[str, Any]:
    """Get the own fields of a model instance as a name -> value dict.

    Supports mappings, pydantic models, dataclass instances and plain
    objects (public instance attributes). Values are returned as-is;
    nested objects are not traversed.

    Args:
        model: Model instance.

    Returns:
        Field values in declaration order.

    Raises:
        TypeError: If the object exposes no fields.
    """
    if isinstance(model, Mapping):
        return dict(model)
    if isinstance(model, BaseModel):
        return {name: getattr(model, name) for name in type(model).model_fields}
    if dataclasses.is_dataclass(model) and not isinstance(model, type):
        return {f.name: getattr(model, f.name) for f in dataclasses.fields(model)}
    try:
        attributes = vars(model)
    except TypeError:
        raise TypeError(f"Cannot read fields from {type(model).__name__!r} instance") from None
    return {name: value for name, value in attributes.items() if not name.startswith("_")}


class FormControlBuilder:
    """Builds control descriptors for every field of a model.

    Example:
        >>> builder = FormControlBuilder(resolver)
        >>> controls = builder.build({"firstName": "John"}, "Person")
        >>> controls["firstName"].errors is None
        True
    """

    def __init__(self, resolver: FieldResolver) -> None:
        self._resolver = resolver

    def build(self, model: Any, type_name: str) -> dict[str, ControlDescriptor]:
        """Build one control descriptor per model field.

        Fields without constraints get a validator that always passes.

        Args:
            model: Model instance (mapping, pydantic model, dataclass or object).
            type_name: Type name the constraints are declared under.

        Returns:
            Mapping of field name -> ControlDescriptor.

        Raises:
            RyanDataConstraintError: If a field references an unknown
                validator or carries a malformed config.
        """
        controls = {
            field_name: ControlDescriptor(
                value=value,
                validator=self._resolver.resolve(type_name, field_name),
            )
            for field_name, value in model_fields(model).items()
        }
        logger.debug("Built %d control(s) for %s", len(controls), type_name)
        return controls
