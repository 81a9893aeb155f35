# eggnode/curve.py
from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from typing import Any

from pydantic import ConfigDict, Field, field_validator

from .config import settings
from .nodes import PrimitiveNode

log = logging.getLogger(__name__)


class CurveType(str, enum.Enum):
    """
    How the coordinates of a curve are to be interpreted.

    The value of each member is its keyword in the model file; `NONE`
    ("unspecified") renders as "none", which no real kind uses.
    """

    NONE = "none"
    XYZ = "xyz"
    HPR = "hpr"
    T = "t"
    PARAMETRIC = "t"

    def __str__(self) -> str:
        return self.value

    def __format__(self, format_spec: str) -> str:
        return format(self.value, format_spec)


def string_curve_type(
    token: str,
    on_unknown: Callable[[str], None] | None = None,
) -> CurveType:
    """
    Returns the `CurveType` named by `token`, or `CurveType.NONE` if the token
    is not one of the keywords. Matching is exact and case-sensitive.

    An unrecognised token is passed to `on_unknown` when given; otherwise it
    is logged as a warning (unless disabled in the settings). It never raises,
    so a file written by a newer or older tool still loads.
    """
    try:
        return CurveType(token)
    except ValueError:
        pass

    if on_unknown is not None:
        on_unknown(token)
    elif settings.warn_unknown_curve_type:
        log.warning(
            "Unrecognized curve type keyword, treating it as unspecified.",
            extra={"token": token},
        )
    return CurveType.NONE


class CurveNode(PrimitiveNode):
    """A parametric curve of some kind, e.g. a NURBS curve."""

    # Setters go through validation too, so curve_type stays a CurveType.
    model_config = ConfigDict(validate_assignment=True)

    subdiv: int = Field(default_factory=lambda: settings.default_subdiv)
    curve_type: CurveType = CurveType.NONE

    string_curve_type = staticmethod(string_curve_type)

    @field_validator("curve_type", mode="before")
    @classmethod
    def parse_curve_type(cls, value: Any) -> Any:
        # Keywords coming from a parser go through the tolerant lookup.
        if isinstance(value, str) and not isinstance(value, CurveType):
            return string_curve_type(value)
        return value

    @classmethod
    def from_copy(cls, other: CurveNode) -> CurveNode:
        """New, independent node holding the same values as `other`."""
        return cls.model_validate(other.model_dump(include=set(cls.model_fields)))

    def assign(self, other: CurveNode) -> CurveNode:
        """Overwrites this node's values with those of `other`."""
        for field in CurveNode.model_fields:
            setattr(self, field, getattr(other, field))
        return self

    def set_subdiv(self, subdiv: int) -> None:
        """
        Sets the number of subdivisions to use when tessellating the curve.
        The value is stored as given; interpreting it is up to the consumer.
        """
        self.subdiv = subdiv

    def get_subdiv(self) -> int:
        return self.subdiv

    def set_curve_type(self, curve_type: CurveType) -> None:
        """Keywords are parsed like file input; other non-members raise ValidationError."""
        self.curve_type = curve_type

    def get_curve_type(self) -> CurveType:
        return self.curve_type
