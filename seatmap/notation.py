"""
Seat map notation parser.

A row is read left to right as a sequence of tokens::

    token := letter ( "[" index ( "," label )? "]" )?

``letter`` is looked up in the seat type mapping. Seats and berths receive a
label (explicit, or the next value of a running counter) and a status derived
from the booked/blocked label sets. Everything else becomes a layout cell.
Characters that cannot start a token are skipped.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Union

from .cells import LAYOUT_KINDS, SEAT_KINDS, Cell, LayoutCell, Seat, SeatStatus

logger = logging.getLogger(__name__)

TOKEN_RE = re.compile(
    r"(?P<letter>[a-z_])(?:\[(?P<index>[0-9a-z_]+)(?:,(?P<label>[0-9a-z_ ]+))?\])?",
    re.IGNORECASE | re.ASCII,
)

SeatMaps = Union[Sequence[str], Mapping[str, Sequence[str]]]


@dataclass(frozen=True)
class ParseResult:
    grid: list[list[Cell]]
    next_index: int


@dataclass(frozen=True)
class Layer:
    name: str
    grid: list[list[Cell]]


def resolve_type(config: Any) -> tuple[str, float]:
    # Accepts schema objects as well as plain {"kind"/"type", "price"} mappings.
    if config is None:
        return "space", 0
    if isinstance(config, Mapping):
        kind = config.get("kind", config.get("type"))
        price = config.get("price")
    else:
        kind = getattr(config, "kind", None)
        price = getattr(config, "price", None)
    if kind is not None and not isinstance(kind, str):
        kind = getattr(kind, "value", kind)
    if kind not in SEAT_KINDS and kind not in LAYOUT_KINDS:
        kind = "space"
    if price is None:
        price = 0
    elif isinstance(price, bool) or not isinstance(price, (int, float)) or not price >= 0:
        # Prices are never negative.
        logger.warning("ignoring invalid price %r for %s", price, kind)
        price = 0
    return kind, price


def _status_for(label: str, booked: frozenset[str], blocked: frozenset[str]) -> SeatStatus:
    if label in booked:
        return "booked"
    if label in blocked:
        return "blocked"
    return "available"


def tokenize(row: str) -> list[tuple[str, str | None, str | None]]:
    """Split one notation row into ``(letter, index, label)`` tuples."""
    out = []
    for m in TOKEN_RE.finditer(row or ""):
        label = m.group("label")
        if label is not None:
            label = label.strip() or None
        out.append((m.group("letter"), m.group("index"), label))
    return out


def parse_seat_map(
    rows: Sequence[str],
    seat_types: Mapping[str, Any],
    booked_seats: Iterable[str] = (),
    blocked_seats: Iterable[str] = (),
    start_index: int = 0,
) -> ParseResult:
    booked = frozenset(booked_seats or ())
    blocked = frozenset(blocked_seats or ())
    counter = int(start_index)
    unknown: set[str] = set()

    grid: list[list[Cell]] = []
    for row in rows:
        cells: list[Cell] = []
        for letter, _index, label in tokenize(row):
            config = seat_types.get(letter)
            if config is None:
                unknown.add(letter)
            kind, price = resolve_type(config)
            if kind in SEAT_KINDS:
                if label is None:
                    counter += 1
                    label = str(counter)
                cells.append(Seat(kind=kind, label=label, price=price, status=_status_for(label, booked, blocked)))
            else:
                cells.append(LayoutCell(kind=kind))
        grid.append(cells)

    if unknown:
        logger.debug("letters without a seat type, treated as space: %s", "".join(sorted(unknown)))
    return ParseResult(grid=grid, next_index=counter)


def parse_layers(
    seat_maps: SeatMaps,
    seat_types: Mapping[str, Any],
    booked_seats: Iterable[str] = (),
    blocked_seats: Iterable[str] = (),
) -> tuple[list[Layer], int]:
    """
    Parse a single seat map or a mapping of named layers.

    Numbering continues across layers in mapping order. A plain list of rows
    becomes one unnamed layer.
    """
    booked = frozenset(booked_seats or ())
    blocked = frozenset(blocked_seats or ())

    if isinstance(seat_maps, Mapping):
        named = list(seat_maps.items())
    else:
        named = [("", seat_maps)]

    layers: list[Layer] = []
    index = 0
    for name, rows in named:
        result = parse_seat_map(rows, seat_types, booked, blocked, start_index=index)
        seats = result.next_index - index
        logger.debug("parsed layer %r: %d rows, %d numbered seats, next index %d", name, len(result.grid), seats, result.next_index)
        layers.append(Layer(name=str(name), grid=result.grid))
        index = result.next_index
    return layers, index
