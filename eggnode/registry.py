# eggnode/registry.py
from __future__ import annotations

import functools
import logging
import threading
from collections.abc import Iterable, Iterator

from pydantic import BaseModel, ConfigDict

from .errors import TypeRegistryError, UnknownType

log = logging.getLogger(__name__)


@functools.total_ordering
class TypeHandle(BaseModel):
    """
    Opaque identifier of a type registered in a `TypeRegistry`.

    Handles are small immutable values: hashable, equal when they name the
    same registration and ordered by registration index. Parent and child
    links live in the registry, not on the handle.
    """

    model_config = ConfigDict(frozen=True)

    index: int
    name: str

    @classmethod
    def none(cls) -> TypeHandle:
        """The reserved "no type" handle. It is never registered."""
        return _NONE_HANDLE

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, TypeHandle):
            return NotImplemented
        return self.index < other.index

    def __str__(self) -> str:
        return self.name


_NONE_HANDLE = TypeHandle(index=0, name="none")


class _TypeRecord:
    __slots__ = ("handle", "parents", "children")

    def __init__(self, handle: TypeHandle, parents: tuple[TypeHandle, ...]):
        self.handle = handle
        # Rebound (never mutated in place) so readers always see a whole tuple.
        self.parents = parents
        self.children: list[TypeHandle] = []


class TypeRegistry:
    """
    Name -> handle table plus the parent/child graph between handles.

    Registration is append-only and idempotent: registering a name a second
    time hands back the first handle. Writers are serialised by a lock that
    is only taken on the path that mutates the tables; lookups and
    `is_derived_from` never lock and never write, so they are safe to call
    from any number of threads once the types they touch are registered.
    """

    def __init__(self, name: str = "default"):
        self.name = name
        self._lock = threading.Lock()
        self._by_name: dict[str, TypeHandle] = {}
        self._records: dict[int, _TypeRecord] = {}
        self._next_index = 1
        self.log = log.getChild(name)

    # --- Registration ---

    def register_type(
        self,
        name: str,
        parents: TypeHandle | Iterable[TypeHandle] = (),
    ) -> TypeHandle:
        """
        Registers `name` as a type deriving from `parents` and returns its handle.

        If `name` is already registered the existing handle is returned and
        its parents are left as they were.
        """
        if not isinstance(name, str) or not name:
            raise ValueError("Type name must be a non-empty string.")

        parent_handles = self._normalize_parents(parents)
        for parent in parent_handles:
            self._record(parent)

        existing = self._by_name.get(name)
        if existing is None:
            with self._lock:
                existing = self._by_name.get(name)
                if existing is None:
                    return self._insert(name, parent_handles)

        record = self._records[existing.index]
        if parent_handles and set(parent_handles) != set(record.parents):
            self.log.warning(
                "Type re-registered with different parents; keeping the original ones.",
                extra={
                    "type_name": name,
                    "registered_parents": [p.name for p in record.parents],
                    "requested_parents": [p.name for p in parent_handles],
                },
            )
        return existing

    def _insert(self, name: str, parents: tuple[TypeHandle, ...]) -> TypeHandle:
        # Caller holds self._lock.
        handle = TypeHandle(index=self._next_index, name=name)
        self._next_index += 1

        self._records[handle.index] = _TypeRecord(handle, parents)
        for parent in parents:
            self._records[parent.index].children.append(handle)
        # Published last: a reader that finds the name also finds the record.
        self._by_name[name] = handle

        self.log.debug(
            "Registered type.",
            extra={
                "type_name": name,
                "type_index": handle.index,
                "parents": [p.name for p in parents],
            },
        )
        return handle

    def record_derivation(self, child: TypeHandle, parent: TypeHandle) -> None:
        """Adds `parent` to the parents of an already registered `child`."""
        with self._lock:
            child_record = self._record(child)
            parent_record = self._record(parent)
            if parent in child_record.parents:
                return
            if self.is_derived_from(parent, child):
                self.log.error(
                    "Rejected derivation that would create a cycle.",
                    extra={"child_type": child.name, "parent_type": parent.name},
                )
                raise TypeRegistryError(
                    f"Deriving '{child.name}' from '{parent.name}' would create a cycle."
                )
            child_record.parents = child_record.parents + (parent,)
            parent_record.children.append(child)

        self.log.debug(
            "Recorded derivation.",
            extra={"child_type": child.name, "parent_type": parent.name},
        )

    # --- Lookups ---

    def find_type(self, name: str) -> TypeHandle | None:
        return self._by_name.get(name)

    def get_name(self, handle: TypeHandle) -> str:
        return self._record(handle).handle.name

    def get_parents(self, handle: TypeHandle) -> tuple[TypeHandle, ...]:
        return self._record(handle).parents

    def get_children(self, handle: TypeHandle) -> tuple[TypeHandle, ...]:
        return tuple(self._record(handle).children)

    def get_root_classes(self) -> tuple[TypeHandle, ...]:
        """Every registered type without a parent, in registration order."""
        return tuple(
            record.handle
            for _, record in sorted(self._records.items())
            if not record.parents
        )

    def get_types(self) -> tuple[TypeHandle, ...]:
        return tuple(record.handle for _, record in sorted(self._records.items()))

    def is_derived_from(self, handle: TypeHandle, ancestor: TypeHandle) -> bool:
        """True if `handle` is `ancestor` or inherits from it, directly or not."""
        self._record(handle)
        self._record(ancestor)
        if handle == ancestor:
            return True

        stack = [handle]
        seen = {handle}
        while stack:
            current = stack.pop()
            for parent in self._records[current.index].parents:
                if parent == ancestor:
                    return True
                if parent not in seen:
                    seen.add(parent)
                    stack.append(parent)
        return False

    def format_hierarchy(self, root: TypeHandle | None = None) -> str:
        """
        Renders the hierarchy as an indented tree, one type per line.
        A type with several parents is listed under each of them.
        """
        roots = (self._record(root).handle,) if root is not None else self.get_root_classes()
        lines: list[str] = []

        def walk(handle: TypeHandle, depth: int) -> None:
            lines.append(f"{'  ' * depth}{handle.name}")
            for child in sorted(self._records[handle.index].children):
                walk(child, depth + 1)

        for handle in roots:
            walk(handle, 0)
        return "\n".join(lines)

    # --- Helpers ---

    def _record(self, handle: TypeHandle) -> _TypeRecord:
        record = (
            self._records.get(handle.index) if isinstance(handle, TypeHandle) else None
        )
        if record is None or record.handle != handle:
            self.log.error(
                "Lookup of an unregistered type.",
                extra={"type_handle": repr(handle)},
            )
            raise UnknownType(handle, self.name)
        return record

    @staticmethod
    def _normalize_parents(
        parents: TypeHandle | Iterable[TypeHandle],
    ) -> tuple[TypeHandle, ...]:
        if isinstance(parents, TypeHandle):
            return (parents,)
        # dict.fromkeys keeps the declared order while dropping repeats.
        return tuple(dict.fromkeys(parents))

    def __contains__(self, item: object) -> bool:
        if isinstance(item, str):
            return item in self._by_name
        if isinstance(item, TypeHandle):
            record = self._records.get(item.index)
            return record is not None and record.handle == item
        return False

    def __iter__(self) -> Iterator[TypeHandle]:
        return iter(self.get_types())

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"<TypeRegistry name={self.name!r} types={len(self)}>"


# Process-wide registry shared by every node class.
registry = TypeRegistry()
