# eggnode/__init__.py
import logging

# 1. Package-wide logger. Every module calls `logging.getLogger(__name__)`,
#    so e.g. `eggnode.registry` inherits this logger and its settings.
log = logging.getLogger(__name__)

# 2. NullHandler: a library never decides where its logs go. Applications
#    configure handlers themselves (see `eggnode.log_config`).
log.addHandler(logging.NullHandler())

from .errors import EggNodeError, TypeRegistryError, UnknownType  # noqa: E402
from .registry import TypeHandle, TypeRegistry, registry  # noqa: E402
from .nodes import NamedObject, PrimitiveNode, TypedMeta, TypedObject  # noqa: E402
from .curve import CurveNode, CurveType, string_curve_type  # noqa: E402
from .query import group_by_type, nodes_of_type  # noqa: E402

__all__ = [
    "CurveNode",
    "CurveType",
    "EggNodeError",
    "NamedObject",
    "PrimitiveNode",
    "TypeHandle",
    "TypeRegistry",
    "TypeRegistryError",
    "TypedMeta",
    "TypedObject",
    "UnknownType",
    "group_by_type",
    "nodes_of_type",
    "registry",
    "string_curve_type",
]
