from __future__ import annotations


class SeatingChartError(Exception):
    pass


class SelectionError(SeatingChartError):
    pass
