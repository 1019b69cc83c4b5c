"""Validator factory registry.

Maps validator names to factories. Seeded with the built-in factories and
extensible at runtime; registering a name that already exists overrides it,
which is also how built-ins are replaced.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from ryandata_form_constraints.models.errors import RyanDataConstraintError
from ryandata_form_constraints.protocols import ValidatorFactoryProtocol

logger = logging.getLogger(__name__)


class ValidatorFactoryRegistry:
    """Registry of validator factories keyed by validator name.

    Every mutation builds a new table and swaps it in, so a concurrent
    resolve() sees either the old or the new table.

    Example:
        >>> registry = ValidatorFactoryRegistry()
        >>> registry.resolve("required").name
        'required'

        # Register a custom factory (or override a built-in)
        >>> registry.register(MyFactory())
        >>> registry.resolve("validByValue")
    """

    _entity_name = "validator"

    def __init__(
        self,
        factories: Iterable[ValidatorFactoryProtocol] | None = None,
        *,
        include_builtins: bool = True,
    ) -> None:
        """Initialize the registry.

        Args:
            factories: Extra factories registered after the built-ins.
            include_builtins: If True, seed the registry with the built-ins.
        """
        self._factories: Mapping[str, ValidatorFactoryProtocol] = MappingProxyType({})
        if include_builtins:
            from ryandata_form_constraints.validators.builtin import create_default_factories

            self.register_many(create_default_factories())
        if factories is not None:
            self.register_many(factories)

    def register(self, factory: ValidatorFactoryProtocol) -> None:
        """Register a factory under its name.

        Args:
            factory: Object implementing ValidatorFactoryProtocol.

        Raises:
            RyanDataConstraintError: If the object is not a factory.
        """
        self.register_many([factory])

    def register_many(self, factories: Iterable[ValidatorFactoryProtocol]) -> None:
        """Register several factories in order; later entries win on name clashes.

        The table is swapped once, after every factory has been checked.

        Args:
            factories: Factories to register.

        Raises:
            RyanDataConstraintError: If any object is not a factory. Nothing
                is registered in that case.
        """
        table = dict(self._factories)
        for factory in factories:
            if not isinstance(factory, ValidatorFactoryProtocol) or not isinstance(
                getattr(factory, "name", None), str
            ):
                raise RyanDataConstraintError.invalid_factory(factory)
            if factory.name in table:
                logger.debug("Overriding %s factory: %s", self._entity_name, factory.name)
            table[factory.name] = factory
        self._factories = MappingProxyType(table)

    def unregister(self, name: str) -> None:
        """Remove a factory by name. Unknown names are ignored.

        Args:
            name: Validator name to remove.
        """
        if name not in self._factories:
            return
        table = dict(self._factories)
        table.pop(name)
        self._factories = MappingProxyType(table)

    def resolve(self, name: str) -> ValidatorFactoryProtocol:
        """Get the factory registered for a validator name.

        Args:
            name: Validator name from the constraint spec.

        Returns:
            The registered factory.

        Raises:
            RyanDataConstraintError: If no factory is registered under name.
        """
        factories = self._factories
        try:
            return factories[name]
        except KeyError:
            raise RyanDataConstraintError.unknown_validator(name, sorted(factories)) from None

    def available_names(self) -> list[str]:
        """Get the sorted list of registered validator names."""
        return sorted(self._factories.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __len__(self) -> int:
        return len(self._factories)
