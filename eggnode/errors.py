# eggnode/errors.py
from __future__ import annotations


class EggNodeError(Exception):
    """Base class for every error raised by eggnode."""


class UnknownType(EggNodeError, KeyError):
    """A type handle was queried that the registry never registered.

    This points at a registration-order bug (a class used before it was
    initialised), so it is always raised and never defaulted.
    """

    def __init__(self, handle: object, registry_name: str | None = None):
        self.handle = handle
        self.registry_name = registry_name
        where = f" in registry '{registry_name}'" if registry_name else ""
        super().__init__(f"Type {handle!r} is not registered{where}.")

    def __str__(self) -> str:
        # KeyError would repr() the message.
        return str(self.args[0])


class TypeRegistryError(EggNodeError):
    """The type hierarchy itself is malformed, e.g. a derivation cycle."""
