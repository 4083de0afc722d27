from __future__ import annotations

from cognitive_core.learning_style import MULTIMODAL_STRATEGY, classify, default_style, normalize_style
from cognitive_core.types import ScoreEntry


def test_label_normalisation():
    assert normalize_style("Visual-Spatial Learner") == "visual-spatial"
    assert normalize_style("  AUDITORY ") == "auditory"
    assert normalize_style("linguistic") == "verbal"
    assert normalize_style("telepathic") is None
    assert normalize_style(None) is None


def test_explicit_label_wins():
    style = classify("Kinesthetic learner", [ScoreEntry("Memory", 95)])
    assert style.primary_style == "Kinesthetic"


def test_inferred_from_top_strength():
    assert classify(None, [ScoreEntry("Memory", 95)]).primary_style == "Visual-Spatial"
    assert classify(None, [ScoreEntry("Problem Solving", 88)]).primary_style == "Logical"
    assert classify("telepathic", [ScoreEntry("Vocabulary", 80)]).primary_style == "Verbal"


def test_default_is_visual():
    assert default_style().primary_style == "Visual"
    assert classify(None, [ScoreEntry("Navigation", 90)]).primary_style == "Visual"


def test_weakness_strategies_then_multimodal_last():
    style = classify(None, [], [ScoreEntry("Vocabulary", 40), ScoreEntry("Memory", 50), ScoreEntry("Navigation", 55)])
    extra = [s for s in style.teaching_strategies if s.startswith("Support ")]
    assert [s.split(" Development")[0] for s in extra] == ["Support Vocabulary", "Support Memory"]
    assert style.teaching_strategies[-1] == MULTIMODAL_STRATEGY


def test_to_dict_keys():
    d = default_style().to_dict()
    assert set(d) == {"primaryStyle", "analysisText", "recommendations", "description",
                      "teachingStrategies", "accommodations"}
    assert d["accommodations"]
