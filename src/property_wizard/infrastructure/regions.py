"""In-memory region directory.

The gazetteer itself is owned by another service; this table-backed
implementation is what the wizard uses when the data is already loaded
(and in tests).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence


class StaticRegionDirectory:
    """Region lookups over a nested ``{state: {lga: [areas]}}`` table.

    Lookups are case-insensitive; results keep the table's spelling and order.
    """

    def __init__(self, table: Mapping[str, Mapping[str, Sequence[str]]]) -> None:
        self._table = {state: {lga: list(areas) for lga, areas in lgas.items()} for state, lgas in table.items()}

    @staticmethod
    def _find(keys: list[str], wanted: str) -> str | None:
        lowered = wanted.strip().lower()
        return next((key for key in keys if key.lower() == lowered), None)

    def states_of(self) -> list[str]:
        return list(self._table)

    def lgas_of(self, state: str) -> list[str]:
        key = self._find(list(self._table), state)
        if key is None:
            return []
        return list(self._table[key])

    def areas_of(self, state: str, lga: str) -> list[str]:
        state_key = self._find(list(self._table), state)
        if state_key is None:
            return []
        lga_key = self._find(list(self._table[state_key]), lga)
        if lga_key is None:
            return []
        return list(self._table[state_key][lga_key])
