"""Heuristic column detection for loosely structured daily temperature CSVs.

Source files name their columns in many ways (``DATE``, ``obs_date``, ``TMAX``,
``temperature_max``, ``Max Temp``, a lone ``Temperature`` ...). Detection looks
at the header of one sample record and resolves four roles:

  date_key         the observation date
  max_key          daily maximum temperature
  min_key          daily minimum temperature
  single_temp_key  one undifferentiated temperature value

Each role has an ordered list of rules. Rules are evaluated top to bottom and
the first key (in record order) satisfying a rule wins; there is no scoring.
A role that no rule resolves stays ``None``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Optional, Sequence, Tuple, Union

__all__ = [
    "ColumnRule",
    "ColumnMapping",
    "DATE_RULES",
    "MAX_RULES",
    "MIN_RULES",
    "SINGLE_TEMP_RULES",
    "first_match",
    "detect_columns",
]


@dataclass(frozen=True)
class ColumnRule:
    patterns: Tuple[str, ...]
    exact: bool = False

    def matches(self, key: str) -> bool:
        k = key.strip().lower()
        if self.exact:
            return any(k == p for p in self.patterns)
        return any(p in k for p in self.patterns)


@dataclass(frozen=True)
class ColumnMapping:
    date_key: Optional[str] = None
    max_key: Optional[str] = None
    min_key: Optional[str] = None
    single_temp_key: Optional[str] = None

    @property
    def has_temperature(self) -> bool:
        return any(k is not None for k in (self.max_key, self.min_key, self.single_temp_key))

    def tmax_source(self) -> Optional[str]:
        return self.max_key if self.max_key is not None else self.single_temp_key

    def tmin_source(self) -> Optional[str]:
        return self.min_key if self.min_key is not None else self.single_temp_key


DATE_RULES: Tuple[ColumnRule, ...] = (
    ColumnRule(("date",), exact=True),
    ColumnRule(("date",)),
)

MAX_RULES: Tuple[ColumnRule, ...] = (
    ColumnRule(("tmax",)),
    ColumnRule(("temp_max", "temperature_max")),
    ColumnRule(("max",)),
)

MIN_RULES: Tuple[ColumnRule, ...] = (
    ColumnRule(("tmin",)),
    ColumnRule(("temp_min", "temperature_min")),
    ColumnRule(("min",)),
)

SINGLE_TEMP_RULES: Tuple[ColumnRule, ...] = (
    ColumnRule(("temp", "temperature")),
    ColumnRule(("value",)),
)


def first_match(keys: Sequence[str], rules: Iterable[ColumnRule]) -> Optional[str]:
    for rule in rules:
        for key in keys:
            if rule.matches(key):
                return key
    return None


def detect_columns(sample: Union[Mapping[str, object], Sequence[str]]) -> ColumnMapping:
    """Resolve column roles from one sample record (or its header keys).

    The date role falls back to the first key when no rule matches; the
    temperature roles have no fallback.
    """
    keys = [str(k) for k in (sample.keys() if isinstance(sample, Mapping) else sample)]
    date_key = first_match(keys, DATE_RULES)
    if date_key is None and keys:
        date_key = keys[0]
    return ColumnMapping(
        date_key=date_key,
        max_key=first_match(keys, MAX_RULES),
        min_key=first_match(keys, MIN_RULES),
        single_temp_key=first_match(keys, SINGLE_TEMP_RULES),
    )
