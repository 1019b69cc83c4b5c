"""Built-in validator factories.

One factory per built-in rule. Every rule except ``required`` passes on
empty input (None, "", empty list/tuple) so ``required`` alone decides
whether a value must be present.
"""

from __future__ import annotations

import ipaddress
import math
import numbers
import re
from collections.abc import Sized
from decimal import Decimal
from typing import Any, ClassVar
from urllib.parse import urlsplit

from ryandata_form_constraints.models.configs import (
    EmailConfig,
    MaxConfig,
    MaxLengthConfig,
    MinConfig,
    MinLengthConfig,
    PatternConfig,
    RequiredConfig,
    SizeConfig,
    UrlConfig,
    ValidatorConfigModel,
)
from ryandata_form_constraints.validators.base import BaseValidatorFactory

EMAIL_PATTERN = re.compile(
    r"(?=.{1,254}\Z)(?=.{1,64}@)"
    r"[a-zA-Z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[a-zA-Z0-9!#$%&'*+/=?^_`{|}~-]+)*"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*"
)

_HOST_LABEL = re.compile(r"(?!-)[a-zA-Z0-9-]{1,63}(?<!-)")
# Alphabetic TLD or an IDNA (punycode) TLD such as xn--p1ai
_TLD = re.compile(r"[a-zA-Z]{2,63}|xn--[a-zA-Z0-9-]{1,59}")


# -----------------------------------------------------------------------------
# Value helpers
# -----------------------------------------------------------------------------


def as_number(value: Any) -> float | int | Decimal | None:
    """Coerce a value to a number for range checks.

    Booleans, NaN and non-numeric strings are not numbers.

    Args:
        value: Candidate value.

    Returns:
        The numeric value, or None if the value is not numeric.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if isinstance(value, Decimal):
        return None if value.is_nan() else value
    if isinstance(value, numbers.Real):
        return None if math.isnan(value) else value
    return None


def is_valid_email(value: str) -> bool:
    """Check that a string has the shape of an email address."""
    return EMAIL_PATTERN.fullmatch(value) is not None


def is_valid_url(value: str, schemes: list[str] | None = None) -> bool:
    """Check that a string has the shape of an absolute URL.

    Args:
        value: Candidate URL.
        schemes: Allowed schemes. Defaults to http, https and ftp.

    Returns:
        True if the scheme is allowed and the host is a domain name,
        ``localhost`` or an IPv4/IPv6 address (IPv6 in brackets).
    """
    allowed = schemes if schemes is not None else ["http", "https", "ftp"]
    if not value or any(ch.isspace() for ch in value):
        return False
    try:
        parts = urlsplit(value)
        _ = parts.port
    except ValueError:
        return False
    if parts.scheme.lower() not in {s.lower() for s in allowed}:
        return False
    host = parts.hostname
    if not host:
        return False
    if host == "localhost" or _is_ip_address(host):
        return True
    labels = host.rstrip(".").split(".")
    if len(labels) < 2 or not _TLD.fullmatch(labels[-1]):
        return False
    return all(_HOST_LABEL.fullmatch(label) for label in labels)


def _is_ip_address(host: str) -> bool:
    # urlsplit strips the brackets from IPv6 literals
    try:
        ipaddress.ip_address(host)
    except ValueError:
        return False
    return True


# -----------------------------------------------------------------------------
# Factories
# -----------------------------------------------------------------------------


class RequiredValidatorFactory(BaseValidatorFactory):
    """Fails on None and on the empty string."""

    name: ClassVar[str] = "required"
    config_model: ClassVar[type[ValidatorConfigModel]] = RequiredConfig
    skip_empty: ClassVar[bool] = False

    def check(self, value: Any, options: RequiredConfig) -> bool:
        return value is not None and value != ""


class SizeValidatorFactory(BaseValidatorFactory):
    """Checks string/sequence length or numeric value against ``[min, max]``."""

    name: ClassVar[str] = "size"
    config_model: ClassVar[type[ValidatorConfigModel]] = SizeConfig

    def check(self, value: Any, options: SizeConfig) -> bool:
        magnitude = len(value) if isinstance(value, Sized) else as_number(value)
        if magnitude is None:
            return True
        return options.min <= magnitude <= options.max


class MinValidatorFactory(BaseValidatorFactory):
    name: ClassVar[str] = "min"
    config_model: ClassVar[type[ValidatorConfigModel]] = MinConfig

    def check(self, value: Any, options: MinConfig) -> bool:
        number = as_number(value)
        return number is not None and number >= options.min


class MaxValidatorFactory(BaseValidatorFactory):
    name: ClassVar[str] = "max"
    config_model: ClassVar[type[ValidatorConfigModel]] = MaxConfig

    def check(self, value: Any, options: MaxConfig) -> bool:
        number = as_number(value)
        return number is not None and number <= options.max


class MinLengthValidatorFactory(BaseValidatorFactory):
    name: ClassVar[str] = "minLength"
    config_model: ClassVar[type[ValidatorConfigModel]] = MinLengthConfig

    def check(self, value: Any, options: MinLengthConfig) -> bool:
        return not isinstance(value, Sized) or len(value) >= options.min_length


class MaxLengthValidatorFactory(BaseValidatorFactory):
    name: ClassVar[str] = "maxLength"
    config_model: ClassVar[type[ValidatorConfigModel]] = MaxLengthConfig

    def check(self, value: Any, options: MaxLengthConfig) -> bool:
        return not isinstance(value, Sized) or len(value) <= options.max_length


class EmailValidatorFactory(BaseValidatorFactory):
    name: ClassVar[str] = "email"
    config_model: ClassVar[type[ValidatorConfigModel]] = EmailConfig

    def check(self, value: Any, options: EmailConfig) -> bool:
        return isinstance(value, str) and is_valid_email(value)


class PatternValidatorFactory(BaseValidatorFactory):
    """Requires the whole value to match the regular expression in ``value``.

    Non-string values are matched against their str() form.
    """

    name: ClassVar[str] = "pattern"
    config_model: ClassVar[type[ValidatorConfigModel]] = PatternConfig

    def check(self, value: Any, options: PatternConfig) -> bool:
        return re.fullmatch(options.value, str(value)) is not None


class UrlValidatorFactory(BaseValidatorFactory):
    name: ClassVar[str] = "url"
    config_model: ClassVar[type[ValidatorConfigModel]] = UrlConfig

    def check(self, value: Any, options: UrlConfig) -> bool:
        return isinstance(value, str) and is_valid_url(value, options.schemes)


BUILTIN_FACTORY_CLASSES: tuple[type[BaseValidatorFactory], ...] = (
    RequiredValidatorFactory,
    SizeValidatorFactory,
    MinValidatorFactory,
    MaxValidatorFactory,
    MinLengthValidatorFactory,
    MaxLengthValidatorFactory,
    EmailValidatorFactory,
    PatternValidatorFactory,
    UrlValidatorFactory,
)


def create_default_factories() -> list[BaseValidatorFactory]:
    """Create one instance of every built-in validator factory.

    Returns:
        Built-in factories in registration order.
    """
    return [factory_class() for factory_class in BUILTIN_FACTORY_CLASSES]
