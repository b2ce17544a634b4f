from __future__ import annotations

from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict


class Holiday(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: date
    brief: str


class HolidayTable:
    """
    Read-only lookup over a list of public holidays.

    Matching is exact calendar-date equality. When two entries share a date,
    the first one wins.
    """

    def __init__(self, entries: Iterable[Holiday]):
        self._entries = tuple(entries)
        self._by_date: Dict[date, Holiday] = {}
        for h in self._entries:
            self._by_date.setdefault(h.date, h)

    @classmethod
    def from_pairs(cls, pairs: Iterable[Sequence]) -> "HolidayTable":
        """Build a table from (date, brief) pairs; dates may be ISO strings."""
        return cls(Holiday(date=d, brief=b) for d, b in pairs)

    def __iter__(self):
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def on(self, d: date) -> Optional[Holiday]:
        return self._by_date.get(d)

    def matching(self, days: Iterable[date]) -> List[Holiday]:
        """Holidays falling on any of `days`, in the order of `days`."""
        out: List[Holiday] = []
        for d in days:
            h = self._by_date.get(d)
            if h is not None:
                out.append(h)
        return out


# French public holidays, 2024.
FRANCE_2024 = HolidayTable.from_pairs(
    [
        ("2024-01-01", "1er janvier"),
        ("2024-04-01", "Lundi de Pâques"),
        ("2024-05-01", "1er mai"),
        ("2024-05-08", "8 mai"),
        ("2024-05-09", "Ascension"),
        ("2024-05-20", "Lundi de Pentecôte"),
        ("2024-07-14", "14 juillet"),
        ("2024-08-15", "Assomption"),
        ("2024-11-01", "Toussaint"),
        ("2024-11-11", "11 novembre"),
        ("2024-12-25", "Jour de Noël"),
    ]
)

DEFAULT_HOLIDAYS = FRANCE_2024
