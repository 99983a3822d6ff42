from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from shapely.geometry import Point, Polygon as ShapelyPolygon, box
from shapely.ops import unary_union

from .cells import Cell, is_berth, is_seat
from .config import RuntimeConfig
from .notation import Layer


@dataclass(frozen=True)
class Rect:
    top: float
    left: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def center(self) -> tuple[float, float]:
        return (self.left + self.width / 2, self.top + self.height / 2)

    def to_polygon(self) -> ShapelyPolygon:
        return box(self.left, self.top, self.right, self.bottom)

    def contains(self, x: float, y: float) -> bool:
        # Edges count as inside.
        return self.to_polygon().covers(Point(x, y))


class GeometryProvider(Protocol):
    def interactive_rects(self) -> list[Rect]: ...


class StaticGeometry:
    """Fixed rectangles, for callers that measure layout themselves."""

    def __init__(self, rects: Sequence[Rect]):
        self.rects = list(rects)

    def interactive_rects(self) -> list[Rect]:
        return list(self.rects)


@dataclass(frozen=True)
class PlacedCell:
    layer: int
    row: int
    col: int
    cell: Cell
    rect: Rect


def default_is_interactive(cell: Cell) -> bool:
    return is_seat(cell) and cell.is_available


class GridGeometry:
    """
    Lays parsed layers out the way the seat widget renders them.

    Layers sit side by side. A layer without berths is a column of centered
    flex rows; a layer with berths is a fixed grid where each berth spans its
    own row and the one below it.
    """

    def __init__(
        self,
        layers: Sequence[Layer],
        *,
        is_interactive: Optional[Callable[[Cell], bool]] = None,
        cell_size: float = 32.0,
        gap: float = 8.0,
        layer_gap: float = 16.0,
    ):
        self.layers = list(layers)
        self.is_interactive = is_interactive or default_is_interactive
        self.cell_size = float(cell_size)
        self.gap = float(gap)
        self.layer_gap = float(layer_gap)
        self._placed: Optional[list[PlacedCell]] = None

    @classmethod
    def from_config(
        cls,
        layers: Sequence[Layer],
        config: RuntimeConfig,
        *,
        is_interactive: Optional[Callable[[Cell], bool]] = None,
    ) -> "GridGeometry":
        return cls(
            layers,
            is_interactive=is_interactive,
            cell_size=config.cell_size,
            gap=config.gap,
            layer_gap=config.layer_gap,
        )

    def _span(self, n: int) -> float:
        if n <= 0:
            return 0.0
        return n * self.cell_size + (n - 1) * self.gap

    def _cell_height(self, cell: Cell) -> float:
        return self._span(2) if is_berth(cell) else self.cell_size

    def layer_width(self, layer: Layer) -> float:
        return self._span(max((len(r) for r in layer.grid), default=0))

    def _place_flex(self, index: int, layer: Layer, x0: float) -> list[PlacedCell]:
        width = self.layer_width(layer)
        out: list[PlacedCell] = []
        top = 0.0
        for r, row in enumerate(layer.grid):
            left = x0 + (width - self._span(len(row))) / 2
            for c, cell in enumerate(row):
                rect = Rect(top=top, left=left + c * (self.cell_size + self.gap), width=self.cell_size, height=self.cell_size)
                out.append(PlacedCell(layer=index, row=r, col=c, cell=cell, rect=rect))
            # Empty flex rows collapse to zero height but keep the gap.
            top += (self.cell_size if row else 0.0) + self.gap
        return out

    def _place_grid(self, index: int, layer: Layer, x0: float) -> list[PlacedCell]:
        step = self.cell_size + self.gap
        out: list[PlacedCell] = []
        for r, row in enumerate(layer.grid):
            for c, cell in enumerate(row):
                rect = Rect(top=r * step, left=x0 + c * step, width=self.cell_size, height=self._cell_height(cell))
                out.append(PlacedCell(layer=index, row=r, col=c, cell=cell, rect=rect))
        return out

    def placed_cells(self) -> list[PlacedCell]:
        if self._placed is None:
            placed: list[PlacedCell] = []
            x0 = 0.0
            for i, layer in enumerate(self.layers):
                has_berths = any(is_berth(cell) for row in layer.grid for cell in row)
                if has_berths:
                    placed.extend(self._place_grid(i, layer, x0))
                else:
                    placed.extend(self._place_flex(i, layer, x0))
                x0 += self.layer_width(layer) + self.layer_gap
            self._placed = placed
        return list(self._placed)

    def interactive_cells(self) -> list[PlacedCell]:
        return [p for p in self.placed_cells() if self.is_interactive(p.cell)]

    def interactive_rects(self) -> list[Rect]:
        return [p.rect for p in self.interactive_cells()]

    def hit_test(self, x: float, y: float) -> Optional[PlacedCell]:
        for p in self.placed_cells():
            if p.rect.contains(x, y):
                return p
        return None

    def bounds(self) -> Optional[Rect]:
        placed = self.placed_cells()
        if not placed:
            return None
        minx, miny, maxx, maxy = unary_union([p.rect.to_polygon() for p in placed]).bounds
        return Rect(top=miny, left=minx, width=maxx - minx, height=maxy - miny)
