"""Tests for diversity-constrained selection."""

from collections import Counter

from moodrecs.core.diversity import ScoredItem, diversify, tag_cluster


def _scored(make_item, item_id, score, genres=("drama",), tags=("a", "b")):
    return ScoredItem(item=make_item(item_id, genres=genres, tags=tags), score=score)


def test_tag_cluster_key():
    assert tag_cluster(("light", "fun", "comfort")) == "fun|light"
    assert tag_cluster(("solo",)) == "solo"
    assert tag_cluster(()) == ""


def test_empty_input():
    assert diversify([], 12) == []


def test_output_cardinality_and_unique_ids(make_item):
    candidates = [_scored(make_item, f"i{n}", score=n) for n in range(20)]

    assert len(diversify(candidates, 12)) == 12
    assert len(diversify(candidates[:5], 12)) == 5

    ids = [s.item.id for s in diversify(candidates, 12)]
    assert len(ids) == len(set(ids))


def test_duplicate_ids_are_selected_once(make_item):
    candidates = [
        _scored(make_item, "same", score=90, genres=("comedy",), tags=("x", "y")),
        _scored(make_item, "same", score=80, genres=("drama",), tags=("p", "q")),
        _scored(make_item, "other", score=70, genres=("horror",), tags=("m", "n")),
    ]

    result = diversify(candidates, 5)

    assert [s.item.id for s in result] == ["same", "other"]


def test_first_pass_genre_cap(make_item):
    """Only two picks per primary genre while other genres are available."""
    candidates = [
        _scored(make_item, "c1", 99, genres=("comedy",), tags=("t1", "u1")),
        _scored(make_item, "c2", 98, genres=("comedy",), tags=("t2", "u2")),
        _scored(make_item, "c3", 97, genres=("comedy",), tags=("t3", "u3")),
        _scored(make_item, "d1", 50, genres=("drama",), tags=("t4", "u4")),
    ]

    result = diversify(candidates, 3)

    assert [s.item.id for s in result] == ["c1", "c2", "d1"]


def test_first_pass_tag_cluster_cap(make_item):
    candidates = [
        _scored(make_item, "a", 99, genres=("comedy",), tags=("light", "fun")),
        _scored(make_item, "b", 98, genres=("drama",), tags=("fun", "light")),
        _scored(make_item, "c", 97, genres=("horror",), tags=("light", "fun")),
        _scored(make_item, "d", 10, genres=("war",), tags=("dark", "tense")),
    ]

    result = diversify(candidates, 3)

    assert [s.item.id for s in result] == ["a", "b", "d"]


def test_second_pass_prefers_new_clusters(make_item):
    """Third comedy with a fresh cluster beats a higher-scored repeat cluster."""
    candidates = [
        _scored(make_item, "c1", 99, genres=("comedy",), tags=("a", "b")),
        _scored(make_item, "c2", 98, genres=("comedy",), tags=("a", "b")),
        _scored(make_item, "c3", 97, genres=("comedy",), tags=("a", "b")),
        _scored(make_item, "c4", 96, genres=("comedy",), tags=("new", "cluster")),
    ]

    result = diversify(candidates, 3)

    assert [s.item.id for s in result] == ["c1", "c2", "c4"]


def test_final_pass_fills_regardless_of_constraints(make_item):
    candidates = [_scored(make_item, f"c{n}", 100 - n, genres=("comedy",)) for n in range(6)]

    result = diversify(candidates, 5)

    assert [s.item.id for s in result] == ["c0", "c1", "c2", "c3", "c4"]


def test_unknown_genre_bucket(make_item):
    candidates = [_scored(make_item, f"u{n}", 100 - n, genres=(), tags=(f"t{n}", "x")) for n in range(4)]

    result = diversify(candidates, 4)

    # two from the first pass, the third "unknown" via a fresh cluster, the fourth by score
    assert [s.item.id for s in result] == ["u0", "u1", "u2", "u3"]


def test_genre_cap_with_diverse_pool(make_item):
    genres = ["comedy", "drama", "horror", "documentary", "romance", "action"]
    candidates = [
        _scored(
            make_item,
            f"{genre}-{n}",
            score=100 - (n * 7 + idx),
            genres=(genre,),
            tags=(f"{genre}{n}", "x"),
        )
        for idx, genre in enumerate(genres)
        for n in range(5)
    ]

    result = diversify(candidates, 12)
    counts = Counter(s.item.primary_genre for s in result)

    assert len(result) == 12
    assert max(counts.values()) <= 3


def test_stable_for_equal_scores(make_item):
    candidates = [
        _scored(make_item, "first", 50, genres=("comedy",), tags=("a", "b")),
        _scored(make_item, "second", 50, genres=("drama",), tags=("c", "d")),
    ]

    result = diversify(candidates, 1)

    assert result[0].item.id == "first"
