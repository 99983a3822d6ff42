from __future__ import annotations

import re
from typing import Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, Field, field_validator

from .cells import CellKind

_LETTER_RE = re.compile(r"[A-Za-z_]")


class SeatTypeConfig(BaseModel):
    # "type" is accepted as an alias used by older seat type maps.
    kind: CellKind = Field(validation_alias=AliasChoices("kind", "type"))
    price: float = Field(ge=0, default=0)


class LegendItem(BaseModel):
    status: Literal["available", "booked", "blocked", "selected"]
    kind: Literal["seat", "berth"] = Field(default="seat", validation_alias=AliasChoices("kind", "type"))


class ChartDefinition(BaseModel):
    # Either rows for a single layer or {layer name: rows}.
    seat_maps: Union[list[str], dict[str, list[str]]]
    seat_types: dict[str, SeatTypeConfig]
    booked_seats: list[str] = Field(default_factory=list)
    blocked_seats: list[str] = Field(default_factory=list)
    legends: list[LegendItem] = Field(default_factory=list)
    max_selectable_seats: Optional[int] = Field(default=None, ge=1)
    disabled: bool = False

    @field_validator("seat_types")
    @classmethod
    def _single_letter_keys(cls, v: dict[str, SeatTypeConfig]) -> dict[str, SeatTypeConfig]:
        bad = sorted(k for k in v if not _LETTER_RE.fullmatch(k))
        if bad:
            raise ValueError(f"seat type keys must be a single letter or underscore: {bad}")
        return v
