# eggnode/nodes.py
from __future__ import annotations

import logging
from typing import Any, ClassVar

from pydantic import BaseModel

from .errors import TypeRegistryError
from .registry import TypeHandle, registry

log = logging.getLogger(__name__)

# Registered type name -> the one class allowed to own it.
node_classes: dict[str, type] = {}


class TypedMeta(type(BaseModel)):
    """
    Metaclass that registers every node class with the process-wide type
    registry as soon as the class statement runs.

    The registered name is the class name unless a `type_name=` class keyword
    is given. Every base class that is itself typed becomes a parent, so
    multiple inheritance is mirrored in the registry. A type name belongs to
    exactly one class: defining a second class under a taken name raises
    `TypeRegistryError`.
    """

    def __new__(
        mcs,
        name: str,
        bases: tuple[type, ...],
        attrs: dict[str, Any],
        type_name: str | None = None,
        **kwargs: Any,
    ):
        class_log = log.getChild(name)

        kls = super().__new__(mcs, name, bases, attrs, **kwargs)

        parents = [base.get_class_type() for base in bases if isinstance(base, TypedMeta)]
        kls.__type_name__ = type_name or name

        owner = node_classes.get(kls.__type_name__)
        owner_desc = repr(owner) if owner is not None else "a registration without a class"
        if owner is not None or kls.__type_name__ in registry:
            class_log.error(
                "Type name already taken by another class.",
                extra={"type_name": kls.__type_name__, "owner": owner_desc},
            )
            raise TypeRegistryError(
                f"Type name '{kls.__type_name__}' is already registered"
                f" by {owner_desc}. Pass a different type_name=."
            )

        kls.__type_handle__ = registry.register_type(kls.__type_name__, parents)
        node_classes[kls.__type_name__] = kls

        class_log.debug(
            "Node class registered.",
            extra={
                "type_name": kls.__type_name__,
                "type_index": kls.__type_handle__.index,
                "parents": [p.name for p in parents],
            },
        )
        return kls


class TypedObject(BaseModel, metaclass=TypedMeta):
    """Root of the node hierarchy: anything that can report its own type."""

    __type_name__: ClassVar[str]
    __type_handle__: ClassVar[TypeHandle]

    @classmethod
    def get_class_type(cls) -> TypeHandle:
        """Handle of this class, whatever the runtime class of an instance is."""
        return cls.__type_handle__

    @classmethod
    def init_type(cls) -> TypeHandle:
        """
        (Re-)registers this class and its typed bases. Safe to call any
        number of times; every call returns the same handle.
        """
        parents = [base.init_type() for base in cls.__bases__ if isinstance(base, TypedMeta)]
        cls.__type_handle__ = registry.register_type(cls.__type_name__, parents)
        return cls.__type_handle__

    def get_type(self) -> TypeHandle:
        """Handle of the concrete class of this instance."""
        return type(self).get_class_type()

    def force_init_type(self) -> TypeHandle:
        """Re-registers the runtime class of this instance; returns its handle."""
        return type(self).init_type()

    def is_of_type(self, handle: TypeHandle) -> bool:
        return registry.is_derived_from(self.get_type(), handle)

    def is_exact_type(self, handle: TypeHandle) -> bool:
        return self.get_type() == handle


class NamedObject(TypedObject):
    """A typed object carrying a name, which may be empty."""

    name: str = ""

    def __init__(self, name: str | None = None, /, **data: Any) -> None:
        if name is not None:
            data["name"] = name
        super().__init__(**data)

    def __str__(self) -> str:
        return f"<{self.get_type()} name={self.name!r}>"


class PrimitiveNode(NamedObject):
    """Base for every geometric primitive of a model (polygons, curves, ...)."""
