"""Core constraint engine.

Usage:
    from ryandata_form_constraints.core import (
        ConstraintRegistry,
        ValidatorFactoryRegistry,
        FieldResolver,
        combine,
    )
"""

from __future__ import annotations

from ryandata_form_constraints.core.composer import combine
from ryandata_form_constraints.core.constraints import ConstraintRegistry, parse_constraint_spec
from ryandata_form_constraints.core.registry import ValidatorFactoryRegistry
from ryandata_form_constraints.core.resolver import FieldResolver

__all__ = [
    "ConstraintRegistry",
    "FieldResolver",
    "ValidatorFactoryRegistry",
    "combine",
    "parse_constraint_spec",
]
