"""Abstract base class for the built-in validator factories.

Custom factories only need to satisfy ValidatorFactoryProtocol; this base
class exists to share config checking and error payload construction
between the built-ins.
"""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from typing import Any, ClassVar

from ryandata_form_constraints.models.configs import ValidatorConfigModel
from ryandata_form_constraints.models.results import (
    ValidationErrors,
    ValidationFunction,
    ValidatorConfig,
)


def is_empty_input(value: Any) -> bool:
    """True for None and for empty strings, lists and tuples."""
    if value is None:
        return True
    return isinstance(value, (str, list, tuple)) and len(value) == 0


def failure(name: str, config: ValidatorConfig) -> ValidationErrors:
    """Build the error payload for a failed validator.

    Args:
        name: Validator name, used as the error key.
        config: Raw validator config from the constraint spec.

    Returns:
        ``{name: {"message": config["message"], **other config keys}}``.
    """
    details = {key: copy.deepcopy(value) for key, value in config.items() if key != "message"}
    return {name: {"message": config.get("message"), **details}}


class BaseValidatorFactory(ABC):
    """Base class for built-in validator factories.

    Subclasses set ``name`` and ``config_model`` and implement ``check``.
    The config is validated once in create_validator(); the returned
    function only calls ``check``.

    Example:
        class EvenFactory(BaseValidatorFactory):
            name = "even"
            config_model = ValidatorConfigModel

            def check(self, value, options):
                return value % 2 == 0
    """

    name: ClassVar[str]
    config_model: ClassVar[type[ValidatorConfigModel]] = ValidatorConfigModel
    skip_empty: ClassVar[bool] = True

    @abstractmethod
    def check(self, value: Any, options: Any) -> bool:
        """Check a single non-empty value.

        Args:
            value: Candidate value.
            options: Parsed config (an instance of ``config_model``).

        Returns:
            True if the value is valid.
        """
        ...

    def create_validator(self, config: ValidatorConfig) -> list[ValidationFunction]:
        """Create the validation function for a config.

        Args:
            config: Validator config from the constraint spec.

        Returns:
            A single-element list with the validation function.

        Raises:
            pydantic.ValidationError: If the config fails ``config_model``.
        """
        options = self.config_model.model_validate(dict(config))
        error = failure(self.name, config)
        skip_empty = self.skip_empty
        check = self.check

        def validate(value: Any) -> ValidationErrors | None:
            if skip_empty and is_empty_input(value):
                return None
            if check(value, options):
                return None
            return copy.deepcopy(error)

        return [validate]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
