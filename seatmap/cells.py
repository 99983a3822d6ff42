from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

SeatKind = Literal["seat", "berth"]
LayoutKind = Literal["driver", "door", "space"]
CellKind = Literal["seat", "berth", "driver", "door", "space"]
SeatStatus = Literal["available", "booked", "blocked"]

SEAT_KINDS: frozenset[str] = frozenset({"seat", "berth"})
LAYOUT_KINDS: frozenset[str] = frozenset({"driver", "door", "space"})
CELL_KINDS: frozenset[str] = SEAT_KINDS | LAYOUT_KINDS


@dataclass(frozen=True)
class Seat:
    kind: SeatKind
    label: str
    price: float = 0
    status: SeatStatus = "available"

    @property
    def is_available(self) -> bool:
        return self.status == "available"


@dataclass(frozen=True)
class LayoutCell:
    kind: LayoutKind = "space"


Cell = Union[Seat, LayoutCell]


@dataclass(frozen=True)
class SelectedSeat:
    """A seat as it was when it got selected."""

    label: str
    kind: SeatKind
    price: float
    status: SeatStatus


def is_seat(cell: Cell) -> bool:
    return cell.kind in SEAT_KINDS


def is_layout_cell(cell: Cell) -> bool:
    return cell.kind in LAYOUT_KINDS


def is_berth(cell: Cell) -> bool:
    return cell.kind == "berth"
