from __future__ import annotations

from typing import Iterable, List, Sequence

from fifa_stats.models.stats import Bucket, CountryExtremes, DatasetStats, Extremes

SEPARATOR = "*" * 25


def _section(title: str) -> List[str]:
    return [SEPARATOR, title, SEPARATOR]


def bucket_lines(buckets: Iterable[Bucket]) -> List[str]:
    return [f"{b.label}:     {b.count}     {b.percent:g}%" for b in buckets]


def extremes_lines(ext: Extremes, attr: str) -> List[str]:
    return [f"{p.name} {getattr(p, attr)}" for p in [*ext.lowest, *ext.highest]]


def country_lines(ce: CountryExtremes | None) -> List[str]:
    if ce is None:
        return []
    return [f"{ce.most} {ce.most_count}", f"{ce.least} {ce.least_count}"]


def render_dataset(stats: DatasetStats) -> List[str]:
    lines = _section(f"{stats.label}:")
    lines.append("Position stats: ")
    lines += bucket_lines(stats.positions)
    lines += _section("Age stats: ")
    lines += bucket_lines(stats.ages)
    lines += _section("Overall stats: ")
    lines += bucket_lines(stats.overalls)
    lines += _section("Highest and lowest age: ")
    lines += extremes_lines(stats.age_extremes, "age")
    lines += _section("Highest and lowest overall: ")
    lines += extremes_lines(stats.overall_extremes, "overall")
    lines += _section("Country stats: ")
    lines += country_lines(stats.countries)
    lines.append("")
    return lines


def render_report(elapsed_ms: float, datasets: Sequence[DatasetStats]) -> str:
    lines = [f"{int(elapsed_ms)} ms", ""]
    for stats in datasets:
        lines += render_dataset(stats)
    return "\n".join(lines) + "\n"
