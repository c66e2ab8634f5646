from __future__ import annotations

from dataclasses import dataclass, field

from ..buffer import LineStore
from ..geometry import ScreenGeometry
from ..viewport import CursorState, ViewOffset


@dataclass
class ViewerState:
    lines: LineStore
    geometry: ScreenGeometry
    cursor: CursorState = field(default_factory=CursorState)
    view: ViewOffset = field(default_factory=ViewOffset)
