from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Optional, Union

from pydantic import ValidationError

from .cells import Cell, Seat, is_berth, is_seat
from .config import RuntimeConfig
from .errors import SeatingChartError, SelectionError
from .geometry import GeometryProvider, GridGeometry
from .navigation import Direction, compute_next_focus
from .notation import Layer, SeatMaps, parse_layers, resolve_type
from .schemas import ChartDefinition, LegendItem, SeatTypeConfig
from .selection import MaxSeatsReachedCallback, SelectionChangeCallback, SelectionStore

__all__ = ["SeatChart", "SeatingChartError", "SelectionError"]

logger = logging.getLogger(__name__)


class SeatChart:
    """
    A parsed seat map with its selection state.

    Seat maps are either a list of notation rows or a mapping of layer names
    to rows; numbering runs across layers. Only available seats can be
    toggled, and nothing can be toggled while the chart is disabled.
    """

    def __init__(
        self,
        seat_maps: SeatMaps,
        seat_types: Mapping[str, Union[SeatTypeConfig, Mapping[str, Any]]],
        booked_seats: Iterable[str] = (),
        blocked_seats: Iterable[str] = (),
        *,
        legends: Optional[Iterable[Union[LegendItem, Mapping[str, Any]]]] = None,
        disabled: bool = False,
        max_selectable_seats: Optional[int] = None,
        on_selection_change: Optional[SelectionChangeCallback] = None,
        on_max_seats_reached: Optional[MaxSeatsReachedCallback] = None,
    ):
        self.seat_maps = seat_maps
        self.seat_types = dict(seat_types)
        self.booked_seats = list(booked_seats or ())
        self.blocked_seats = list(blocked_seats or ())
        self.legends = [item if isinstance(item, LegendItem) else LegendItem.model_validate(item) for item in (legends or ())]
        self.disabled = disabled

        self.layers, self.seat_count = parse_layers(seat_maps, self.seat_types, self.booked_seats, self.blocked_seats)
        self._by_label: dict[str, Seat] = {}
        for seat in self.seats():
            # First occurrence wins when explicit labels repeat.
            self._by_label.setdefault(seat.label, seat)

        self.store = SelectionStore(
            on_selection_change=on_selection_change,
            max_selectable_seats=max_selectable_seats,
            on_max_seats_reached=on_max_seats_reached,
        )

    @property
    def is_multi_layer(self) -> bool:
        return len(self.layers) > 1

    def _layer(self, layer: Union[int, str]) -> Layer:
        if isinstance(layer, int):
            if not 0 <= layer < len(self.layers):
                raise SeatingChartError(f"layer index out of range: {layer}")
            return self.layers[layer]
        for lyr in self.layers:
            if lyr.name == layer:
                return lyr
        raise SeatingChartError(f"unknown layer: {layer!r}")

    def cells(self) -> Iterable[Cell]:
        for layer in self.layers:
            for row in layer.grid:
                yield from row

    def seats(self) -> list[Seat]:
        return [cell for cell in self.cells() if is_seat(cell)]

    def find(self, label: str) -> Optional[Seat]:
        return self._by_label.get(label)

    def dimensions(self, layer: Union[int, str] = 0) -> tuple[int, int]:
        grid = self._layer(layer).grid
        return len(grid), max((len(r) for r in grid), default=0)

    def has_berths(self, layer: Union[int, str] = 0) -> bool:
        return any(is_berth(cell) for row in self._layer(layer).grid for cell in row)

    def is_interactive(self, cell: Cell) -> bool:
        return not self.disabled and is_seat(cell) and cell.is_available

    def interactive_seats(self) -> list[Seat]:
        return [seat for seat in self.seats() if self.is_interactive(seat)]

    # Selection

    @property
    def selection(self):
        return self.store.selection

    def is_selected(self, label: str) -> bool:
        return self.store.is_selected(label)

    def toggle(self, label: str) -> bool:
        seat = self.find(label)
        if seat is None:
            raise SeatingChartError(f"no seat labeled {label!r}")
        if not self.is_interactive(seat):
            reason = "chart is disabled" if self.disabled else f"seat is {seat.status}"
            logger.warning("refusing to toggle seat %s: %s", label, reason)
            return False
        self.store.toggle(seat)
        return True

    # Navigation

    def geometry(self, config: Optional[RuntimeConfig] = None) -> GridGeometry:
        return GridGeometry.from_config(self.layers, config or RuntimeConfig.from_env(), is_interactive=self.is_interactive)

    def navigate(
        self,
        label: str,
        direction: Union[Direction, str],
        geometry: Optional[GeometryProvider] = None,
    ) -> Optional[str]:
        """Label of the seat focus moves to from ``label``, or None to stay."""
        interactive = self.interactive_seats()
        labels = [s.label for s in interactive]
        if label not in labels:
            return None
        provider = geometry if geometry is not None else self.geometry()
        rects = provider.interactive_rects()
        if len(rects) != len(labels):
            raise SeatingChartError(f"geometry has {len(rects)} rects for {len(labels)} interactive seats")
        nxt = compute_next_focus(rects, labels.index(label), direction)
        return None if nxt is None else labels[nxt]

    # Definitions

    @staticmethod
    def _type_config(config: Any) -> SeatTypeConfig:
        if isinstance(config, SeatTypeConfig):
            return config
        # Store what the parser resolved, so unknown kinds export as space.
        kind, price = resolve_type(config)
        return SeatTypeConfig(kind=kind, price=price)

    def to_definition(self) -> ChartDefinition:
        seat_maps = self.seat_maps
        if isinstance(seat_maps, Mapping):
            seat_maps = {str(k): list(v) for k, v in seat_maps.items()}
        else:
            seat_maps = list(seat_maps)
        try:
            return ChartDefinition(
                seat_maps=seat_maps,
                seat_types={k: self._type_config(v) for k, v in self.seat_types.items()},
                booked_seats=self.booked_seats,
                blocked_seats=self.blocked_seats,
                legends=self.legends,
                max_selectable_seats=self.store.max_selectable_seats,
                disabled=self.disabled,
            )
        except ValidationError as e:
            raise SeatingChartError(f"chart cannot be exported: {e}") from e

    @classmethod
    def from_definition(
        cls,
        definition: ChartDefinition,
        *,
        on_selection_change: Optional[SelectionChangeCallback] = None,
        on_max_seats_reached: Optional[MaxSeatsReachedCallback] = None,
    ) -> "SeatChart":
        return cls(
            seat_maps=definition.seat_maps,
            seat_types=definition.seat_types,
            booked_seats=definition.booked_seats,
            blocked_seats=definition.blocked_seats,
            legends=definition.legends,
            disabled=definition.disabled,
            max_selectable_seats=definition.max_selectable_seats,
            on_selection_change=on_selection_change,
            on_max_seats_reached=on_max_seats_reached,
        )
