"""
Arrow-key focus movement between interactive cells.

Left/right walk the cells in reading order. Up/down pick the nearest cell
strictly above/below the focused one, scoring candidates by vertical distance
plus horizontal offset between centers, so berths spanning two rows still
land on sensible neighbours.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any, Optional, Union

from .geometry import GeometryProvider, Rect


class Direction(str, Enum):
    left = "left"
    right = "right"
    up = "up"
    down = "down"


KEY_DIRECTIONS: dict[str, Direction] = {
    "ArrowLeft": Direction.left,
    "ArrowRight": Direction.right,
    "ArrowUp": Direction.up,
    "ArrowDown": Direction.down,
    "left": Direction.left,
    "right": Direction.right,
    "up": Direction.up,
    "down": Direction.down,
}


def direction_for_key(key: str) -> Optional[Direction]:
    return KEY_DIRECTIONS.get(key)


def _rect_of(cell: Any) -> Rect:
    if isinstance(cell, Rect):
        return cell
    if isinstance(cell, Mapping):
        return cell["rect"]
    return cell.rect


def compute_next_focus(
    cells: Sequence[Any],
    current_index: int,
    direction: Union[Direction, str],
) -> Optional[int]:
    """
    Index of the cell that should receive focus, or None to stay put.

    ``cells`` are the interactive cells in reading order, each a ``Rect`` or
    an object or mapping carrying a ``rect``.
    """
    try:
        direction = Direction(direction)
    except ValueError:
        return None
    n = len(cells)
    if not (0 <= current_index < n):
        return None

    if direction is Direction.right:
        return current_index + 1 if current_index + 1 < n else None
    if direction is Direction.left:
        return current_index - 1 if current_index - 1 >= 0 else None

    sign = 1 if direction is Direction.down else -1
    cx, cy = _rect_of(cells[current_index]).center

    best_index: Optional[int] = None
    best_distance = math.inf
    for i, cell in enumerate(cells):
        if i == current_index:
            continue
        x, y = _rect_of(cell).center
        vertical = (y - cy) * sign
        if vertical <= 0:
            continue
        distance = vertical + abs(x - cx)
        if distance < best_distance:
            best_distance = distance
            best_index = i
    return best_index


def focus_next(
    provider: GeometryProvider,
    current_index: int,
    direction: Union[Direction, str],
) -> Optional[int]:
    return compute_next_focus(provider.interactive_rects(), current_index, direction)
