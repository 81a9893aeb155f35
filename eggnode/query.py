# eggnode/query.py
from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from .nodes import TypedObject
from .registry import TypeHandle, registry

log = logging.getLogger(__name__)


def nodes_of_type(nodes: Iterable[TypedObject], handle: TypeHandle) -> Iterator[TypedObject]:
    """
    Yields the nodes whose runtime type is `handle` or derives from it,
    e.g. every node of a model that is a primitive.
    """
    for node in nodes:
        if registry.is_derived_from(node.get_type(), handle):
            yield node


def group_by_type(nodes: Iterable[TypedObject]) -> dict[TypeHandle, list[TypedObject]]:
    """Groups nodes by their concrete type, in the order types are first seen."""
    groups: dict[TypeHandle, list[TypedObject]] = {}
    for node in nodes:
        groups.setdefault(node.get_type(), []).append(node)

    log.debug(
        "Grouped nodes by type.",
        extra={"group_sizes": {handle.name: len(group) for handle, group in groups.items()}},
    )
    return groups
