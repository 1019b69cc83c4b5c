"""Validator factory implementations.

This module provides the built-in validator factories and the base class
they share.
"""

from ryandata_form_constraints.validators.base import (
    BaseValidatorFactory,
    failure,
    is_empty_input,
)
from ryandata_form_constraints.validators.builtin import (
    BUILTIN_FACTORY_CLASSES,
    EmailValidatorFactory,
    MaxLengthValidatorFactory,
    MaxValidatorFactory,
    MinLengthValidatorFactory,
    MinValidatorFactory,
    PatternValidatorFactory,
    RequiredValidatorFactory,
    SizeValidatorFactory,
    UrlValidatorFactory,
    as_number,
    create_default_factories,
    is_valid_email,
    is_valid_url,
)

__all__ = [
    "BaseValidatorFactory",
    "BUILTIN_FACTORY_CLASSES",
    "RequiredValidatorFactory",
    "SizeValidatorFactory",
    "MinValidatorFactory",
    "MaxValidatorFactory",
    "MinLengthValidatorFactory",
    "MaxLengthValidatorFactory",
    "EmailValidatorFactory",
    "PatternValidatorFactory",
    "UrlValidatorFactory",
    "as_number",
    "create_default_factories",
    "failure",
    "is_empty_input",
    "is_valid_email",
    "is_valid_url",
]
