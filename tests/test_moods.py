"""Tests for the compatibility table."""

from mood_match.domain.moods import (
    COMPATIBILITY,
    MOOD_PRESENTATION,
    Mood,
    compatible_moods,
    mood_label,
    preferred_moods,
)


def test_every_mood_has_presentation_and_rule() -> None:
    assert set(MOOD_PRESENTATION) == set(Mood)
    assert set(COMPATIBILITY) == set(Mood)


def test_compatible_moods_start_with_the_mood_itself() -> None:
    for mood in Mood:
        assert compatible_moods(mood)[0] == mood


def test_preferred_moods_are_compatible_and_exclude_self() -> None:
    for mood in Mood:
        preferred = preferred_moods(mood)
        assert mood not in preferred
        assert preferred <= set(compatible_moods(mood))


def test_table_is_not_required_to_be_symmetric() -> None:
    assert Mood.HAPPY in compatible_moods(Mood.SAD)
    assert Mood.SUPPORT in preferred_moods(Mood.SAD)
    assert Mood.ANGRY in compatible_moods(Mood.SUPPORT)
    assert Mood.ANGRY not in preferred_moods(Mood.SUPPORT)
    assert Mood.NEUTRAL in compatible_moods(Mood.ANGRY)
    assert Mood.ANGRY not in compatible_moods(Mood.NEUTRAL)


def test_mood_label() -> None:
    assert mood_label(Mood.SUPPORT) == "Support"
