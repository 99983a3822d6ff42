from __future__ import annotations

import argparse
from typing import Optional, Sequence

from .cells import SelectedSeat
from .chart import SeatingChartError
from .config import RuntimeConfig, configure_logging
from .navigation import direction_for_key
from .render import describe_seat, render_ascii, render_legend
from .schemas import ChartDefinition, SeatTypeConfig
from .storage import load_chart, save_definition

DEFAULT_FILE = "seat_chart.json"


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--file",
        default=DEFAULT_FILE,
        help=f"Path to chart JSON file (default: {DEFAULT_FILE})",
    )


def _parse_type(value: str) -> tuple[str, SeatTypeConfig]:
    # "a=seat:100" or "d=driver"
    try:
        letter, rest = value.split("=", 1)
        kind, _, price = rest.partition(":")
        return letter, SeatTypeConfig(kind=kind, price=float(price) if price else 0)
    except ValueError as e:
        raise SeatingChartError(f"invalid seat type {value!r}: {e}") from e


def _labels(seats: Sequence[SelectedSeat]) -> str:
    return ", ".join(s.label for s in seats) or "(none)"


def cmd_init(args: argparse.Namespace) -> int:
    seat_types = dict(_parse_type(t) for t in args.type)
    try:
        definition = ChartDefinition(
            seat_maps=list(args.row),
            seat_types=seat_types,
            booked_seats=args.booked,
            blocked_seats=args.blocked,
            max_selectable_seats=args.max,
        )
    except ValueError as e:
        raise SeatingChartError(f"invalid chart definition: {e}") from e
    save_definition(definition, args.file)
    print(f"Initialized chart at {args.file} ({len(args.row)} rows)")
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    chart = load_chart(args.file)
    for label in args.select:
        chart.toggle(label)
    print(render_ascii(chart, cell_width=args.width))
    if chart.legends:
        print()
        print(render_legend(chart.legends))
    return 0


def cmd_seats(args: argparse.Namespace) -> int:
    chart = load_chart(args.file)
    for seat in chart.seats():
        if args.status and seat.status != args.status:
            continue
        print(describe_seat(seat))
    return 0


def cmd_select(args: argparse.Namespace) -> int:
    def on_change(seats: list[SelectedSeat]) -> None:
        print(f"Selection changed: {_labels(seats)}")

    def on_max(limit: int) -> None:
        print(f"Limit of {limit} seats reached")

    chart = load_chart(args.file, on_selection_change=on_change, on_max_seats_reached=on_max)
    for label in args.labels:
        if not chart.toggle(label):
            seat = chart.find(label)
            print(f"Cannot select {label}: {seat.status if seat else 'unknown'}")
    print(f"Selected: {_labels(chart.selection)}")
    print(f"Total: ${chart.store.total_price():g}")
    return 0


def cmd_navigate(args: argparse.Namespace) -> int:
    chart = load_chart(args.file)
    if chart.find(args.start) is None:
        raise SeatingChartError(f"no seat labeled {args.start!r}")
    current = args.start
    for key in [k.strip() for k in args.keys.split(",") if k.strip()]:
        direction = direction_for_key(key)
        if direction is None:
            raise SeatingChartError(f"not a navigation key: {key!r}")
        nxt = chart.navigate(current, direction)
        if nxt is not None:
            current = nxt
        print(f"{key}: {current}")
    return 0


def cmd_legend(args: argparse.Namespace) -> int:
    chart = load_chart(args.file)
    print(render_legend(chart.legends))
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="seatmap", description="Seat map notation tools (CLI).")
    p.add_argument("--log-level", default=None, help="Logging level (default: $SEATMAP_LOG_LEVEL or WARNING)")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_init = sub.add_parser("init", help="Create a chart JSON file from notation rows")
    _add_common_args(p_init)
    p_init.add_argument("--row", action="append", required=True, help="Notation row, repeat for each row")
    p_init.add_argument("--type", action="append", required=True, help="Seat type, e.g. a=seat:100 or d=driver")
    p_init.add_argument("--booked", action="append", default=[], help="Booked seat label")
    p_init.add_argument("--blocked", action="append", default=[], help="Blocked seat label")
    p_init.add_argument("--max", type=int, help="Maximum selectable seats")
    p_init.set_defaults(func=cmd_init)

    p_show = sub.add_parser("show", help="Print the seat chart")
    _add_common_args(p_show)
    p_show.add_argument("--width", type=int, default=None, help="Cell width for display")
    p_show.add_argument("--select", action="append", default=[], help="Mark a seat label as selected")
    p_show.set_defaults(func=cmd_show)

    p_seats = sub.add_parser("seats", help="List seats with kind, price and status")
    _add_common_args(p_seats)
    p_seats.add_argument("--status", choices=["available", "booked", "blocked"])
    p_seats.set_defaults(func=cmd_seats)

    p_select = sub.add_parser("select", help="Toggle seats in order and print the selection")
    _add_common_args(p_select)
    p_select.add_argument("labels", nargs="+")
    p_select.set_defaults(func=cmd_select)

    p_nav = sub.add_parser("navigate", help="Replay arrow keys from a starting seat")
    _add_common_args(p_nav)
    p_nav.add_argument("--start", required=True, help="Label of the focused seat")
    p_nav.add_argument("--keys", required=True, help="Comma separated keys, e.g. down,right or ArrowUp")
    p_nav.set_defaults(func=cmd_navigate)

    p_legend = sub.add_parser("legend", help="Print the chart legend")
    _add_common_args(p_legend)
    p_legend.set_defaults(func=cmd_legend)

    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)
    try:
        config = RuntimeConfig.from_env()
        configure_logging(args.log_level or config.log_level)
        if getattr(args, "width", "") is None:
            args.width = config.cell_width
        return int(args.func(args))
    except SeatingChartError as e:
        print(f"Error: {e}")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
