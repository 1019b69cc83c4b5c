"""Composition of validation functions.

Combines the validation functions resolved for one field into a single
function that runs all of them and merges every failure, so a field can
report several violations at once.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Optional

from ryandata_form_constraints.models.results import (
    ValidationErrors,
    ValidationFunction,
    always_valid,
)


def combine(functions: Iterable[Optional[ValidationFunction]]) -> ValidationFunction:
    """Merge validation functions into one aggregate validation function.

    Functions run in the given order. Every non-None result is merged into
    a new dict keyed by validator name; on a key collision the later
    result wins.

    Args:
        functions: Validation functions to compose. None entries are skipped.

    Returns:
        A validation function returning the merged errors, or None if every
        function passed.
    """
    validators = tuple(fn for fn in functions if fn is not None)

    if not validators:
        return always_valid

    def composed(value: Any) -> ValidationErrors | None:
        errors: ValidationErrors = {}
        for validator in validators:
            result = validator(value)
            if result:
                errors.update(result)
        return errors or None

    return composed
