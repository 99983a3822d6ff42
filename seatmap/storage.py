from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .chart import SeatChart, SeatingChartError
from .schemas import ChartDefinition


def load_definition(path: str | Path) -> ChartDefinition:
    p = Path(path)
    if not p.exists():
        raise SeatingChartError(f"chart file not found: {p}")

    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise SeatingChartError(f"failed to read chart JSON: {e}") from e

    try:
        return ChartDefinition.model_validate(data)
    except ValidationError as e:
        raise SeatingChartError(f"invalid chart definition in {p}: {e}") from e


def save_definition(definition: ChartDefinition, path: str | Path) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    data = definition.model_dump(mode="json", exclude_none=True)
    p.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


def load_chart(path: str | Path, **callbacks: Any) -> SeatChart:
    return SeatChart.from_definition(load_definition(path), **callbacks)


def save_chart(chart: SeatChart, path: str | Path) -> None:
    save_definition(chart.to_definition(), path)
