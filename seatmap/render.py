from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

from .cells import Cell, Seat, is_berth, is_seat
from .chart import SeatChart
from .schemas import LegendItem

STATUS_MARKERS = {
    "available": "",
    "selected": "*",
    "booked": "x",
    "blocked": "#",
}
LAYOUT_SYMBOLS = {"driver": "D", "door": "O", "space": ""}
BERTH_TAIL = "|"


def _format_price(price: float) -> str:
    return str(int(price)) if float(price).is_integer() else str(price)


def describe_seat(seat: Seat, selected: bool = False) -> str:
    """Accessible description, e.g. ``"Seat 12, available, $100"``."""
    noun = "Berth" if is_berth(seat) else "Seat"
    status = "selected" if selected else seat.status
    text = f"{noun} {seat.label}, {status}"
    if seat.price > 0:
        text += f", ${_format_price(seat.price)}"
    return text


def _cell(text: Optional[str], width: int) -> str:
    if not text:
        return " " * width
    t = str(text)
    if len(t) > width:
        t = t[: max(0, width - 1)] + "…"
    return t.center(width)


def _cell_text(cell: Cell, selected: bool) -> str:
    if is_seat(cell):
        return cell.label + STATUS_MARKERS["selected" if selected else cell.status]
    return LAYOUT_SYMBOLS.get(cell.kind, "")


def render_ascii(chart: SeatChart, *, cell_width: int = 5) -> str:
    cell_width = max(3, int(cell_width))
    lines: list[str] = []

    for i, layer in enumerate(chart.layers):
        if i:
            lines.append("")
        if layer.name:
            lines.append(layer.name)

        ncols = max((len(r) for r in layer.grid), default=0)
        tails = {
            (r + 1, c)
            for r, row in enumerate(layer.grid)
            for c, cell in enumerate(row)
            if is_berth(cell)
        }
        for r, row in enumerate(layer.grid):
            texts = []
            for c in range(ncols):
                text = ""
                if c < len(row):
                    cell = row[c]
                    text = _cell_text(cell, is_seat(cell) and chart.is_selected(cell.label))
                if not text and (r, c) in tails:
                    text = BERTH_TAIL
                texts.append(_cell(text, cell_width))
            lines.append(" ".join(texts).rstrip())
    return "\n".join(lines)


def render_legend(legends: Iterable[LegendItem]) -> str:
    lines = []
    for item in legends:
        marker = STATUS_MARKERS[item.status] or "-"
        lines.append(f"{marker} {item.kind.capitalize()}: {item.status}")
    return "\n".join(lines)
