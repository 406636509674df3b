import pytest

from fifa_stats.data.players import Player
from fifa_stats.models.stats import (
    age_stats,
    bracket_for,
    buckets_frame,
    compute_all,
    country_stats,
    first_last_age,
    first_last_overall,
    overall_stats,
    percent,
    position_stats,
    AGE_BRACKETS,
    OVERALL_BRACKETS,
)


def _p(name, age=25, overall=70, position="ST", nationality="Spain"):
    return Player(name=name, position=position, age=age, overall=overall, nationality=nationality)


def test_position_stats_sorted_desc_with_label_tiebreak():
    ps = [_p("a", position="ST"), _p("b", position="CB"), _p("c", position="GK"),
          _p("d", position="CB"), _p("e", position="ST"), _p("f", position="LW")]
    out = position_stats(ps)
    assert [(b.label, b.count) for b in out] == [("CB", 2), ("ST", 2), ("GK", 1), ("LW", 1)]
    assert sum(b.count for b in out) == len(ps)
    assert sum(b.percent for b in out) == pytest.approx(100.0)


def test_age_stats_example():
    ps = [_p("a", age=25), _p("b", age=30), _p("c", age=25)]
    out = age_stats(ps)
    assert [(b.label, b.count) for b in out] == [("25-28", 2), ("29-32", 1)]
    assert out[0].percent == pytest.approx(66.6667, abs=1e-3)
    assert out[1].percent == pytest.approx(33.3333, abs=1e-3)


@pytest.mark.parametrize("age,label", [
    (15, None), (16, "16-20"), (19, "16-20"), (20, None), (21, "21-24"), (23, "21-24"),
    (24, None), (25, "25-28"), (28, "25-28"), (29, "29-32"), (32, "29-32"), (33, "33+"), (45, "33+"),
])
def test_age_bracket_edges(age, label):
    assert bracket_for(age, AGE_BRACKETS) == label


@pytest.mark.parametrize("ovr,label", [
    (46, None), (47, "47-58"), (57, "47-58"), (58, "58-63"), (66, "63-66"), (67, "67-72"),
    (79, "73-79"), (83, "80-83"), (94, "84-94"), (95, "95+"), (99, "95+"),
])
def test_overall_bracket_edges(ovr, label):
    assert bracket_for(ovr, OVERALL_BRACKETS) == label


def test_age_buckets_in_label_order():
    ps = [_p("a", age=35), _p("b", age=17), _p("c", age=22)]
    assert [b.label for b in age_stats(ps)] == ["16-20", "21-24", "33+"]


def test_overall_below_47_excluded_from_denominator():
    ps = [_p("a", overall=40), _p("b", overall=60), _p("c", overall=96)]
    out = overall_stats(ps)
    assert [(b.label, b.count) for b in out] == [("58-63", 1), ("95+", 1)]
    assert sum(b.count for b in out) < len(ps)
    assert [b.percent for b in out] == [50.0, 50.0]


def test_first_last_age_ties():
    ps = [_p("old", age=30), _p("y1", age=25), _p("y2", age=25)]
    ext = first_last_age(ps)
    assert [p.name for p in ext.lowest] == ["y1", "y2"]
    assert [p.name for p in ext.highest] == ["old"]
    # input untouched
    assert [p.name for p in ps] == ["old", "y1", "y2"]


def test_first_last_overall_highest_walks_from_end():
    ps = [_p("a", overall=90), _p("b", overall=50), _p("c", overall=90)]
    ext = first_last_overall(ps)
    assert [p.name for p in ext.lowest] == ["b"]
    assert [p.name for p in ext.highest] == ["c", "a"]


def test_first_last_single_player_is_both():
    ext = first_last_age([_p("solo", age=20)])
    assert [p.name for p in ext.lowest] == ["solo"]
    assert [p.name for p in ext.highest] == ["solo"]


def test_country_stats_strict_comparison_first_wins():
    ps = [_p("a", nationality="Spain"), _p("b", nationality="Brazil"),
          _p("c", nationality="Spain"), _p("d", nationality="Brazil"),
          _p("e", nationality="Chile"), _p("f", nationality="Angola")]
    ce = country_stats(ps)
    assert (ce.most, ce.most_count) == ("Brazil", 2)
    assert (ce.least, ce.least_count) == ("Angola", 1)


def test_empty_inputs_do_not_fault():
    assert position_stats([]) == []
    assert age_stats([]) == []
    assert overall_stats([]) == []
    assert first_last_age([]).lowest == []
    assert first_last_overall([]).highest == []
    assert country_stats([]) is None
    assert percent(3, 0) == 0.0
    stats = compute_all("empty", [])
    assert stats.players == 0
    assert stats.countries is None


def test_buckets_frame():
    df = buckets_frame(age_stats([_p("a", age=25)]))
    assert list(df.columns) == ["label", "count", "percent"]
    assert df.iloc[0]["label"] == "25-28"
    assert buckets_frame([]).empty
