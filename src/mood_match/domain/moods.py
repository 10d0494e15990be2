"""Mood catalogue and compatibility table."""

from dataclasses import dataclass
from enum import StrEnum


class Mood(StrEnum):
    """Closed set of conversation moods a user can search with."""

    SAD = "sad"
    HAPPY = "happy"
    ANXIOUS = "anxious"
    ADVICE = "advice"
    SUPPORT = "support"
    CHAT = "chat"
    THOUGHTS = "thoughts"
    ANGRY = "angry"
    LOVE = "love"
    BORED = "bored"
    FRIENDS = "friends"
    RELATIONSHIP = "relationship"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class MoodPresentation:
    """Display attributes for a mood. Not used by matching."""

    label: str
    emoji: str
    color: str


@dataclass(frozen=True)
class CompatibilityRule:
    """Acceptable partner moods for one mood.

    ``compatible`` is ordered and always starts with the mood itself.
    ``preferred`` is the complementary subset tried before same-mood partners.
    """

    compatible: tuple[Mood, ...]
    preferred: frozenset[Mood] = frozenset()


MOOD_PRESENTATION: dict[Mood, MoodPresentation] = {
    Mood.SAD: MoodPresentation("Sad", "😢", "#4A90E2"),
    Mood.HAPPY: MoodPresentation("Happy", "😊", "#FFD93D"),
    Mood.ANXIOUS: MoodPresentation("Anxious", "😰", "#6BCF7F"),
    Mood.ADVICE: MoodPresentation("Advice", "🤔", "#A78BFA"),
    Mood.SUPPORT: MoodPresentation("Support", "🤝", "#F5A623"),
    Mood.CHAT: MoodPresentation("Fun chat", "🎉", "#FF6B6B"),
    Mood.THOUGHTS: MoodPresentation("Philosophical", "💭", "#667EEA"),
    Mood.ANGRY: MoodPresentation("Angry", "😠", "#FF8E53"),
    Mood.LOVE: MoodPresentation("In love", "😍", "#FF6B9D"),
    Mood.BORED: MoodPresentation("Bored", "🥱", "#95E1D3"),
    Mood.FRIENDS: MoodPresentation("Looking for friends", "👫", "#4ECDC4"),
    Mood.RELATIONSHIP: MoodPresentation("Looking for a relationship", "💕", "#FF9A8B"),
    Mood.NEUTRAL: MoodPresentation("Neutral", "😐", "#95A5A6"),
}

# Not symmetric: a sad user is offered a supporter first, while a supporter
# only lists sad and anxious users as preferred partners.
COMPATIBILITY: dict[Mood, CompatibilityRule] = {
    Mood.SAD: CompatibilityRule(
        compatible=(Mood.SAD, Mood.SUPPORT, Mood.HAPPY),
        preferred=frozenset({Mood.SUPPORT}),
    ),
    Mood.ANXIOUS: CompatibilityRule(
        compatible=(Mood.ANXIOUS, Mood.SUPPORT, Mood.ADVICE),
        preferred=frozenset({Mood.SUPPORT}),
    ),
    Mood.SUPPORT: CompatibilityRule(
        compatible=(Mood.SUPPORT, Mood.SAD, Mood.ANXIOUS, Mood.ANGRY),
        preferred=frozenset({Mood.SAD, Mood.ANXIOUS}),
    ),
    Mood.ADVICE: CompatibilityRule(
        compatible=(Mood.ADVICE, Mood.THOUGHTS, Mood.SUPPORT),
        preferred=frozenset({Mood.THOUGHTS}),
    ),
    Mood.ANGRY: CompatibilityRule(
        compatible=(Mood.ANGRY, Mood.SUPPORT, Mood.NEUTRAL),
        preferred=frozenset({Mood.SUPPORT}),
    ),
    Mood.HAPPY: CompatibilityRule(compatible=(Mood.HAPPY, Mood.CHAT, Mood.SAD)),
    Mood.CHAT: CompatibilityRule(
        compatible=(Mood.CHAT, Mood.HAPPY, Mood.BORED),
        preferred=frozenset({Mood.BORED}),
    ),
    Mood.BORED: CompatibilityRule(
        compatible=(Mood.BORED, Mood.CHAT, Mood.FRIENDS),
        preferred=frozenset({Mood.CHAT}),
    ),
    Mood.THOUGHTS: CompatibilityRule(compatible=(Mood.THOUGHTS, Mood.ADVICE)),
    Mood.LOVE: CompatibilityRule(compatible=(Mood.LOVE, Mood.RELATIONSHIP)),
    Mood.FRIENDS: CompatibilityRule(compatible=(Mood.FRIENDS, Mood.BORED)),
    Mood.RELATIONSHIP: CompatibilityRule(compatible=(Mood.RELATIONSHIP, Mood.LOVE)),
    Mood.NEUTRAL: CompatibilityRule(compatible=(Mood.NEUTRAL,)),
}


def compatible_moods(mood: Mood) -> tuple[Mood, ...]:
    """Return acceptable partner moods, always including ``mood`` first."""
    rule = COMPATIBILITY.get(mood)
    if rule is None:
        return (mood,)
    if mood in rule.compatible:
        return rule.compatible
    return (mood, *rule.compatible)


def preferred_moods(mood: Mood) -> frozenset[Mood]:
    """Return the complementary moods that take precedence over same-mood."""
    rule = COMPATIBILITY.get(mood)
    if rule is None:
        return frozenset()
    return rule.preferred - {mood}


def mood_label(mood: Mood) -> str:
    """Return the display label for a mood."""
    return MOOD_PRESENTATION[mood].label
