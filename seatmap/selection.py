from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Callable, Literal, Optional, Union

from .cells import SelectedSeat
from .errors import SelectionError

logger = logging.getLogger(__name__)

SelectionChangeCallback = Callable[[list[SelectedSeat]], Any]
MaxSeatsReachedCallback = Callable[[int], Any]


@dataclass(frozen=True)
class Select:
    seat: SelectedSeat
    type: Literal["select"] = "select"


@dataclass(frozen=True)
class Deselect:
    label: str
    type: Literal["deselect"] = "deselect"


SelectionAction = Union[Select, Deselect]


def selection_reducer(state: list[SelectedSeat], action: SelectionAction) -> list[SelectedSeat]:
    if isinstance(action, Select):
        return [*state, action.seat]
    if isinstance(action, Deselect):
        return [s for s in state if s.label != action.label]
    raise SelectionError(f"unknown selection action: {action!r}")


class SelectionStore:
    """
    Holds the seats picked in one chart session.

    The store does not know which seats exist or whether they are available;
    callers must only toggle seats a user is allowed to pick. Subscribers are
    notified after each successful change with the full ordered selection.
    """

    def __init__(
        self,
        on_selection_change: Optional[SelectionChangeCallback] = None,
        max_selectable_seats: Optional[int] = None,
        on_max_seats_reached: Optional[MaxSeatsReachedCallback] = None,
    ):
        if max_selectable_seats is not None and max_selectable_seats < 0:
            raise SelectionError("max_selectable_seats must not be negative")
        self.on_selection_change = on_selection_change
        self.max_selectable_seats = max_selectable_seats
        self.on_max_seats_reached = on_max_seats_reached

        self._selection: list[SelectedSeat] = []
        self._labels: set[str] = set()
        self._toggling = False

    def _dispatch(self, action: SelectionAction) -> list[SelectedSeat]:
        self._selection = selection_reducer(self._selection, action)
        self._labels = {s.label for s in self._selection}
        return list(self._selection)

    def _notify(self, selection: list[SelectedSeat]) -> None:
        if self.on_selection_change is not None:
            self.on_selection_change(selection)

    @property
    def selection(self) -> tuple[SelectedSeat, ...]:
        return tuple(self._selection)

    @property
    def selected_labels(self) -> frozenset[str]:
        return frozenset(self._labels)

    def is_selected(self, label: str) -> bool:
        return label in self._labels

    def __contains__(self, label: object) -> bool:
        return label in self._labels

    def __len__(self) -> int:
        return len(self._selection)

    def __iter__(self) -> Iterator[SelectedSeat]:
        return iter(tuple(self._selection))

    def total_price(self) -> float:
        return sum(s.price for s in self._selection)

    def toggle(self, seat: Any) -> None:
        """Select ``seat`` if it is not selected yet, otherwise deselect it."""
        if self._toggling:
            raise SelectionError("toggle called while another toggle is in progress")
        self._toggling = True
        try:
            self._toggle(seat)
        finally:
            self._toggling = False

    def _toggle(self, seat: Any) -> None:
        label = seat.label
        if label in self._labels:
            new_selection = self._dispatch(Deselect(label=label))
            logger.debug("deselected seat %s (%d selected)", label, len(new_selection))
            self._notify(new_selection)
            return

        limit = self.max_selectable_seats
        if limit is not None and len(self._selection) >= limit:
            logger.info("selection limit of %d reached, ignoring seat %s", limit, label)
            if self.on_max_seats_reached is not None:
                self.on_max_seats_reached(limit)
            return

        record = SelectedSeat(label=label, kind=seat.kind, price=seat.price, status=seat.status)
        new_selection = self._dispatch(Select(seat=record))
        logger.debug("selected seat %s (%d selected)", label, len(new_selection))
        self._notify(new_selection)

    def clear(self) -> None:
        if not self._selection:
            return
        self._selection = []
        self._labels = set()
        self._notify([])
