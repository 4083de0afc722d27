from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from .config import DEFAULT_LEARNING_STYLE
from .types import Domain, LearningStyleAnalysis, ScoreEntry

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class StyleProfile:
    display: str
    description: str
    analysis_text: str
    teaching_strategies: Tuple[str, ...]
    accommodations: Tuple[str, ...]
    recommendations: Tuple[str, ...]


STYLES: Dict[str, StyleProfile] = {
    "visual": StyleProfile(
        display="Visual",
        description="Based on your cognitive strengths, you appear to learn best through visual means.",
        analysis_text="Your cognitive profile suggests you learn most effectively through visual methods.",
        teaching_strategies=(
            "Use diagrams and visual representations",
            "Organize information with color-coding and spatial arrangements",
            "Provide visual metaphors and examples",
        ),
        accommodations=(
            "Provide information in visual formats when possible",
            "Allow time for processing visual information",
            "Use visual cues to highlight important information",
        ),
        recommendations=(
            "Use visual aids when learning new information",
            "Create diagrams or mind maps to organize concepts",
            "Practice visualizing information to improve recall",
        ),
    ),
    "auditory": StyleProfile(
        display="Auditory",
        description="You appear to absorb information most readily when it is heard and discussed.",
        analysis_text="Your profile suggests spoken explanation and discussion help you retain information.",
        teaching_strategies=(
            "Explain new concepts aloud and invite verbal summaries",
            "Use discussion, debate, and question-and-answer formats",
            "Pair written material with recorded explanations",
        ),
        accommodations=(
            "Provide recorded lectures or audio notes",
            "Allow reading instructions aloud",
            "Reduce background noise during focused work",
        ),
        recommendations=(
            "Read difficult passages aloud",
            "Explain what you learned to someone else",
            "Use mnemonics and rhythm to memorize sequences",
        ),
    ),
    "kinesthetic": StyleProfile(
        display="Kinesthetic",
        description="You appear to learn best by doing: handling materials and moving through a task.",
        analysis_text="Your profile suggests hands-on practice anchors new concepts for you.",
        teaching_strategies=(
            "Use manipulatives, models, and hands-on experiments",
            "Break lessons into short active segments",
            "Let the learner demonstrate a procedure before explaining it",
        ),
        accommodations=(
            "Allow movement breaks during longer tasks",
            "Offer physical objects to illustrate abstract ideas",
            "Assess through projects and demonstrations",
        ),
        recommendations=(
            "Practice skills in realistic settings",
            "Build or sketch models of what you are learning",
            "Take short active breaks between study blocks",
        ),
    ),
    "visual-spatial": StyleProfile(
        display="Visual-Spatial",
        description=("Based on the cognitive profile, this individual likely processes information most "
                     "effectively through visual and spatial representations. They tend to think in pictures "
                     "rather than words and understand concepts when presented in a visual format."),
        analysis_text="Your cognitive profile suggests you learn most effectively through visual and spatial methods.",
        teaching_strategies=(
            "Use diagrams, charts, and visual aids when presenting new information",
            "Encourage mind-mapping for organizing thoughts and ideas",
            "Incorporate color-coding to highlight important information",
        ),
        accommodations=(
            "Provide graphic organizers for complex information",
            "Allow extra time for processing verbal instructions",
            "Offer opportunities to demonstrate knowledge through visual projects",
        ),
        recommendations=(
            "Use visual aids when learning new information",
            "Create diagrams or mind maps to organize concepts",
            "Practice visualizing information to improve recall",
        ),
    ),
    "logical": StyleProfile(
        display="Logical",
        description="You appear to learn best when material is structured around reasons, rules, and systems.",
        analysis_text="Your profile suggests you learn most effectively by working out how ideas connect.",
        teaching_strategies=(
            "Present the underlying rule before worked examples",
            "Use problem sets that build step by step",
            "Encourage classifying and comparing concepts",
        ),
        accommodations=(
            "Provide outlines that show the structure of a topic",
            "Allow time to ask why a procedure works",
            "Offer data and patterns to analyze",
        ),
        recommendations=(
            "Turn new topics into step-by-step procedures",
            "Look for patterns and rules in what you study",
            "Test yourself with problems rather than rereading",
        ),
    ),
    "verbal": StyleProfile(
        display="Verbal",
        description="You appear to learn best through words, both written and spoken.",
        analysis_text="Your profile suggests reading, writing, and discussion are your strongest channels.",
        teaching_strategies=(
            "Use reading assignments and written summaries",
            "Encourage note-taking in the learner's own words",
            "Use word games and discussion to review material",
        ),
        accommodations=(
            "Provide written instructions alongside spoken ones",
            "Allow written responses in place of diagrams",
            "Offer glossaries for technical vocabulary",
        ),
        recommendations=(
            "Summarize each study session in writing",
            "Rewrite key ideas in your own words",
            "Discuss new material with a study partner",
        ),
    ),
    "sequential": StyleProfile(
        display="Sequential",
        description="You appear to learn best when material arrives in clear, ordered steps.",
        analysis_text="Your profile suggests a linear, step-by-step presentation suits you best.",
        teaching_strategies=(
            "Present material in a clear linear order",
            "Provide checklists for multi-step tasks",
            "Review prior steps before introducing the next one",
        ),
        accommodations=(
            "Share an agenda at the start of each session",
            "Warn ahead of changes in routine",
            "Break large assignments into ordered milestones",
        ),
        recommendations=(
            "Plan study sessions as ordered checklists",
            "Master each step before moving on",
            "Keep a consistent study routine",
        ),
    ),
    "multimodal": StyleProfile(
        display="Multimodal",
        description="You appear to learn well through several channels and benefit from variety.",
        analysis_text="Your profile suggests you draw on several learning channels with no single preference.",
        teaching_strategies=(
            "Combine visual, spoken, and hands-on presentation of each concept",
            "Let the learner choose how to demonstrate understanding",
            "Rotate activity types within a session",
        ),
        accommodations=(
            "Provide materials in more than one format",
            "Allow flexible response formats",
            "Offer both individual and group work",
        ),
        recommendations=(
            "Mix reading, listening, and practice for each topic",
            "Switch study methods when progress stalls",
            "Teach material back in a different format",
        ),
    ),
}

_ALIASES: Dict[str, str] = {
    "visual spatial": "visual-spatial",
    "visualspatial": "visual-spatial",
    "spatial": "visual-spatial",
    "verbal/linguistic": "verbal",
    "linguistic": "verbal",
    "physical": "kinesthetic",
}

# top strength -> inferred style; anything else stays on the default
_STRENGTH_STYLE: Dict[Domain, str] = {
    Domain.MEMORY: "visual-spatial",
    Domain.SPATIAL_REASONING: "visual-spatial",
    Domain.PROBLEM_SOLVING: "logical",
    Domain.VOCABULARY: "verbal",
}

WEAKNESS_STRATEGY: Dict[Domain, str] = {
    Domain.MEMORY: "Use mnemonic devices, spaced repetition, and visual associations to support information retention.",
    Domain.PROBLEM_SOLVING: "Scaffold complex problems, provide guided examples, and encourage verbalization of thought processes.",
    Domain.VOCABULARY: "Pre-teach key terminology, create word walls, and incorporate vocabulary games into instruction.",
    Domain.SPATIAL_REASONING: "Incorporate diagrams, mind maps, and spatial organizers to help visualize concepts and relationships.",
    Domain.NAVIGATION: "Use manipulatives, hands-on activities, and physical models to make abstract concepts concrete.",
    Domain.COGNITIVE_FLEXIBILITY: "Practice transitions between activities, use multiple representations of concepts, and teach explicit strategies for shifting focus.",
}
GENERIC_WEAKNESS_STRATEGY = "Provide additional support and practice in this area through targeted activities."

MULTIMODAL_STRATEGY = (
    "Multimodal Learning Activities: Incorporate variety in instructional approaches to develop all "
    "cognitive domains while emphasizing strengths."
)


def normalize_style(label: Optional[str]) -> Optional[str]:
    """Map a free-form label ("Visual-Spatial Learner") to a known style key."""
    if not label:
        return None
    key = re.sub(r"\s+", " ", str(label).strip().lower())
    key = re.sub(r"\s*learner$", "", key).strip()
    key = _ALIASES.get(key, key)
    return key if key in STYLES else None


def infer_style(strengths: Sequence[ScoreEntry]) -> Optional[str]:
    if not strengths:
        return None
    top = Domain.from_label(strengths[0].name)
    return _STRENGTH_STYLE.get(top) if top else None


def classify(
    label: Optional[str],
    strengths: Sequence[ScoreEntry] = (),
    weaknesses: Sequence[ScoreEntry] = (),
) -> LearningStyleAnalysis:
    key = normalize_style(label)
    if label and key is None:
        log.info("unrecognised learning style %r; using strength profile", label)
    if key is None:
        key = infer_style(strengths)
    if key is None:
        key = DEFAULT_LEARNING_STYLE
    profile = STYLES[key]

    strategies: List[str] = list(profile.teaching_strategies)
    for weak in list(weaknesses)[:2]:
        dom = Domain.from_label(weak.name)
        text = WEAKNESS_STRATEGY.get(dom, GENERIC_WEAKNESS_STRATEGY) if dom else GENERIC_WEAKNESS_STRATEGY
        strategies.append(f"Support {weak.name} Development: {text}")
    strategies.append(MULTIMODAL_STRATEGY)

    return LearningStyleAnalysis(
        primary_style=profile.display,
        analysis_text=profile.analysis_text,
        description=profile.description,
        recommendations=list(profile.recommendations),
        teaching_strategies=strategies,
        accommodations=list(profile.accommodations),
    )


def default_style() -> LearningStyleAnalysis:
    return classify(None)
