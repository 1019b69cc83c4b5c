from __future__ import annotations

import logging

from ryandata_form_constraints.core.composer import combine
from ryandata_form_constraints.core.resolver import FieldResolver
from ryandata_form_constraints.protocols import ControlTreeProtocol

logger = logging.getLogger(__name__)


class ValidatorAttacher:
    """Attaches constraint validators to an existing control tree.

    Validators already present on a control are kept: the control ends up
    with ``combine([existing, new])``.
    """

    def __init__(self, resolver: FieldResolver) -> None:
        self._resolver = resolver

    def attach(self, control_tree: ControlTreeProtocol, type_name: str) -> None:
        """Compose the type's constraints onto matching controls.

        Only fields that are both constrained under ``type_name`` and present
        in the tree are touched. Control values are left unchanged.

        Args:
            control_tree: Object whose ``get(field)`` returns a control or None.
            type_name: Type name the constraints are declared under.

        Raises:
            RyanDataConstraintError: If a field references an unknown
                validator or carries a malformed config.
        """
        for field_name in self._resolver.constraints.field_names(type_name):
            control = control_tree.get(field_name)
            if control is None:
                continue
            validator = self._resolver.resolve(type_name, field_name)
            existing = getattr(control, "validator", None)
            control.validator = combine([existing, validator])
            logger.debug("Attached validators to %s.%s", type_name, field_name)
