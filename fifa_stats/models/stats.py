from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import pandas as pd

from fifa_stats.data.players import Player

# (label, low inclusive, high exclusive or None for open-ended)
AGE_BRACKETS: List[Tuple[str, int, Optional[int]]] = [
    ("16-20", 16, 20),
    ("21-24", 21, 24),
    ("25-28", 25, 29),
    ("29-32", 29, 33),
    ("33+", 33, None),
]

OVERALL_BRACKETS: List[Tuple[str, int, Optional[int]]] = [
    ("47-58", 47, 58),
    ("58-63", 58, 63),
    ("63-66", 63, 67),
    ("67-72", 67, 73),
    ("73-79", 73, 80),
    ("80-83", 80, 84),
    ("84-94", 84, 95),
    ("95+", 95, None),
]


@dataclass
class Bucket:
    label: str
    count: int
    percent: float


@dataclass
class Extremes:
    lowest: List[Player] = field(default_factory=list)
    highest: List[Player] = field(default_factory=list)


@dataclass
class CountryExtremes:
    most: str
    most_count: int
    least: str
    least_count: int


def percent(count: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return count / total * 100.0


def _buckets(counts: Dict[str, int], order: Sequence[str]) -> List[Bucket]:
    total = sum(counts.values())
    return [Bucket(label, counts[label], percent(counts[label], total)) for label in order]


def bracket_for(value: int, brackets: Sequence[Tuple[str, int, Optional[int]]]) -> Optional[str]:
    for label, lo, hi in brackets:
        if value >= lo and (hi is None or value < hi):
            return label
    return None


def _bracket_stats(values: Sequence[int], brackets) -> List[Bucket]:
    counts: Counter = Counter()
    for v in values:
        label = bracket_for(v, brackets)
        if label is not None:
            counts[label] += 1
    return _buckets(counts, sorted(counts))


def position_stats(players: Sequence[Player]) -> List[Bucket]:
    """Players per position, most common first.

    Positions with equal counts keep ascending label order.
    """
    counts = Counter(p.position for p in players)
    order = sorted(sorted(counts), key=lambda k: counts[k], reverse=True)
    return _buckets(counts, order)


def age_stats(players: Sequence[Player]) -> List[Bucket]:
    return _bracket_stats([p.age for p in players], AGE_BRACKETS)


def overall_stats(players: Sequence[Player]) -> List[Bucket]:
    """Rating histogram; ratings under 47 are not counted anywhere."""
    return _bracket_stats([p.overall for p in players], OVERALL_BRACKETS)


def _first_last(players: Sequence[Player], key: Callable[[Player], int]) -> Extremes:
    ordered = sorted(players, key=key)
    if not ordered:
        return Extremes()
    lo = key(ordered[0])
    hi = key(ordered[-1])
    lowest = [p for p in ordered if key(p) == lo]
    highest = [p for p in reversed(ordered) if key(p) == hi]
    return Extremes(lowest=lowest, highest=highest)


def first_last_age(players: Sequence[Player]) -> Extremes:
    return _first_last(players, lambda p: p.age)


def first_last_overall(players: Sequence[Player]) -> Extremes:
    return _first_last(players, lambda p: p.overall)


def country_stats(players: Sequence[Player]) -> Optional[CountryExtremes]:
    """Most and least represented nationality.

    Countries are scanned in ascending name order and only a strictly larger
    (or smaller) count replaces the current pick.
    """
    counts = Counter(p.nationality for p in players)
    if not counts:
        return None
    most, most_n = "", 0
    least, least_n = "", None
    for country in sorted(counts):
        n = counts[country]
        if n > most_n:
            most, most_n = country, n
        if least_n is None or n < least_n:
            least, least_n = country, n
    return CountryExtremes(most=most, most_count=most_n, least=least, least_count=least_n or 0)


def buckets_frame(buckets: Sequence[Bucket]) -> pd.DataFrame:
    return pd.DataFrame(
        [{"label": b.label, "count": b.count, "percent": b.percent} for b in buckets],
        columns=["label", "count", "percent"],
    )


@dataclass
class DatasetStats:
    label: str
    players: int
    positions: List[Bucket]
    ages: List[Bucket]
    overalls: List[Bucket]
    age_extremes: Extremes
    overall_extremes: Extremes
    countries: Optional[CountryExtremes]


def compute_all(label: str, players: Sequence[Player]) -> DatasetStats:
    return DatasetStats(
        label=label,
        players=len(players),
        positions=position_stats(players),
        ages=age_stats(players),
        overalls=overall_stats(players),
        age_extremes=first_last_age(players),
        overall_extremes=first_last_overall(players),
        countries=country_stats(players),
    )
