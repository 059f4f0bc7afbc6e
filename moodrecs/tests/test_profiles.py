"""Tests for the state profile table."""

import pytest

from moodrecs.core.contracts import ContentType, Focus, UserState
from moodrecs.core.profiles import (
    FOCUS_MULTIPLIERS,
    STATE_PROFILES,
    ProfileConfigurationError,
    UnknownStateError,
    _validate_profiles,
    focus_multiplier,
    intensity_in_range,
    novelty_fit,
    profile_of,
)


def test_every_state_has_profile():
    """Test that the table is total over UserState."""
    for state in UserState:
        profile = profile_of(state)
        assert profile is STATE_PROFILES[state]
        assert len(profile.mood_tags) == 4


def test_profile_of_accepts_string_value():
    assert profile_of("calm-seeking") is STATE_PROFILES[UserState.CALM_SEEKING]


def test_profile_of_unknown_state():
    with pytest.raises(UnknownStateError):
        profile_of("euphoric")


def test_positive_weights_sum_close_to_100():
    for state, profile in STATE_PROFILES.items():
        w = profile.weights
        total = w.mood + w.time + w.energy + w.preference + w.quality
        assert 80 <= total <= 100, state
        assert w.novelty >= 0


def test_validate_profiles_missing_state():
    """A table without every state must fail loudly."""
    partial = dict(STATE_PROFILES)
    partial.pop(UserState.UNDECIDED)

    with pytest.raises(UnknownStateError, match="undecided"):
        _validate_profiles(partial)


def test_validate_profiles_bad_range():
    from dataclasses import replace

    broken = dict(STATE_PROFILES)
    broken[UserState.CALM_SEEKING] = replace(
        STATE_PROFILES[UserState.CALM_SEEKING], intensity_range=(0.8, 0.2)
    )

    with pytest.raises(ProfileConfigurationError):
        _validate_profiles(broken)


def test_validate_profiles_negative_novelty_weight():
    from dataclasses import replace

    profile = STATE_PROFILES[UserState.LOW_STIMULATION]
    broken = dict(STATE_PROFILES)
    broken[UserState.LOW_STIMULATION] = replace(
        profile, weights=replace(profile.weights, novelty=-10)
    )

    with pytest.raises(ProfileConfigurationError):
        _validate_profiles(broken)


def test_profiles_are_read_only():
    with pytest.raises(TypeError):
        STATE_PROFILES[UserState.CALM_SEEKING] = None  # type: ignore[index]


def test_profile_genre_maps_are_read_only():
    profile = profile_of(UserState.CALM_SEEKING)

    with pytest.raises(TypeError):
        profile.genre_boosts["horror"] = 9.0  # type: ignore[index]
    with pytest.raises(TypeError):
        profile.genre_penalties["horror"] = 1.0  # type: ignore[index]

    assert "horror" not in STATE_PROFILES[UserState.CALM_SEEKING].genre_boosts
    assert STATE_PROFILES[UserState.CALM_SEEKING].genre_penalties["horror"] == 0.5


def test_profile_copies_caller_maps():
    from dataclasses import replace

    boosts = {"comedy": 1.3}
    profile = replace(
        STATE_PROFILES[UserState.CALM_SEEKING], genre_boosts=boosts
    )

    boosts["horror"] = 2.0

    assert dict(profile.genre_boosts) == {"comedy": 1.3}


def test_focus_multiplier_rows_are_read_only():
    with pytest.raises(TypeError):
        FOCUS_MULTIPLIERS[Focus.WATCH][ContentType.WATCH] = 5.0  # type: ignore[index]


def test_focus_multiplier_exact_match_is_highest():
    for focus in Focus:
        row = FOCUS_MULTIPLIERS[focus]
        exact = focus_multiplier(focus, ContentType(focus.value))
        assert exact == max(row.values())


def test_focus_multiplier_defaults_to_one():
    assert focus_multiplier(Focus.WATCH, "hologram") == 1.0
    assert focus_multiplier("juggle", ContentType.WATCH) == 1.0


def test_focus_multiplier_accepts_music_alias():
    assert focus_multiplier("music", ContentType.LISTEN) == focus_multiplier(
        Focus.LISTEN, ContentType.LISTEN
    )


def test_intensity_in_range_closed_interval():
    assert intensity_in_range(0.05, (0.05, 0.35))
    assert intensity_in_range(0.35, (0.05, 0.35))
    assert not intensity_in_range(0.36, (0.05, 0.35))


@pytest.mark.parametrize(
    "novelty,preference,expected",
    [
        (0.2, "low", 1.0),
        (0.5, "low", 0.7),
        (0.9, "low", 0.4),
        (0.5, "medium", 1.0),
        (0.25, "medium", 0.8),
        (0.95, "medium", 0.5),
        (0.8, "high", 1.0),
        (0.5, "high", 0.7),
        (0.1, "high", 0.4),
    ],
)
def test_novelty_fit_curves(novelty, preference, expected):
    assert novelty_fit(novelty, preference) == expected


def test_novelty_fit_unknown_preference():
    with pytest.raises(ValueError):
        novelty_fit(0.5, "extreme")  # type: ignore[arg-type]
