# logjam/core/types.py
"""
Enumerations and dataclasses shared by label placement, geometry and rendering.
Alignment values are the matplotlib ``ha`` / ``va`` strings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import numpy as np

from logjam.core.config import BBox
from logjam.core.geometry import project_lonlat


class HAlign(str, Enum):
    """Horizontal anchor: which edge of the label sits on the anchor point."""
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class VAlign(str, Enum):
    """Vertical anchor: which edge of the label sits on the anchor point."""
    BOTTOM = "bottom"
    CENTER = "center"
    TOP = "top"


class Region(str, Enum):
    WORLD = "World"
    US = "US"
    CUS = "CUS"

    @classmethod
    def parse(cls, value: Region | str) -> Region:
        """Accept a member or its value (case-insensitive); ValueError otherwise."""
        if isinstance(value, cls):
            return value
        for member in cls:
            if str(value).lower() in (member.value.lower(), member.name.lower()):
                return member
        choices = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown region {value!r}; choose one of: {choices}.")


class Backend(str, Enum):
    """matplotlib backends: AGG renders to files, the others open windows."""
    AGG = "agg"
    TKAGG = "tkagg"
    QTAGG = "qtagg"

    @classmethod
    def parse(cls, value: Backend | str) -> Backend:
        if isinstance(value, cls):
            return value
        for member in cls:
            if str(value).lower() in (member.value, member.name.lower()):
                return member
        choices = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown backend {value!r}; choose one of: {choices}.")


Alignment = tuple[HAlign, VAlign]
Offset = tuple[float, float]


@dataclass
class LabelPlacement:
    """
    Per-point label alignment and offset, order-aligned with the input points.
    Offsets are in the caller's offset units (pt when drawn with matplotlib).
    """
    align: list[Alignment] = field(default_factory=list)
    offset: list[Offset] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.align)

    def text_kwargs(self, i: int) -> dict[str, Any]:
        """Keyword arguments for ``ax.annotate`` placing label i."""
        ha, va = self.align[i]
        return {
            "ha": ha.value,
            "va": va.value,
            "xytext": self.offset[i],
            "textcoords": "offset points",
        }


@dataclass
class MapView:
    """Figure, axis and drawn border layers returned by make_map."""
    fig: Any
    ax: Any
    layers: list[Any]
    limits: BBox

    def project(self, lon: Any, lat: Any) -> tuple[np.ndarray, np.ndarray]:
        """Geographic coordinates to this map's axis coordinates (Web Mercator)."""
        return project_lonlat(lon, lat)
