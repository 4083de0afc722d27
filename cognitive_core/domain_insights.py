from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from .bands import band
from .config import STRENGTH_MIN_SCORE, WEAKNESS_MAX_SCORE
from .types import Band, Domain, DomainAnalysis, DomainScores

M, PS, V, SR, N, CF = (
    Domain.MEMORY,
    Domain.PROBLEM_SOLVING,
    Domain.VOCABULARY,
    Domain.SPATIAL_REASONING,
    Domain.NAVIGATION,
    Domain.COGNITIVE_FLEXIBILITY,
)
EX, VG, G, ND = Band.EXCELLENT, Band.VERY_GOOD, Band.GOOD, Band.NEEDS_DEVELOPMENT

_ANALYSIS: Dict[Tuple[Domain, Band], str] = {
    (M, EX): "You demonstrate exceptional visual memory abilities, with strong recall and pattern recognition. "
             "Your quick reaction time suggests efficient memory processing.",
    (PS, EX): "Your problem-solving skills are excellent, showing strong logical reasoning and efficient solution "
              "planning. You approach problems methodically and find optimal solutions.",
    (V, EX): "You exhibit outstanding word recognition and processing abilities. Your vocabulary skills are "
             "well-developed, allowing for quick and accurate word processing.",
    (SR, EX): "Your spatial reasoning abilities are exceptional, with excellent pattern recognition and visual "
              "processing. You can easily identify and remember complex spatial patterns.",
    (N, EX): "You demonstrate superior spatial navigation skills, planning efficient routes with minimal "
             "backtracking. Your spatial awareness and planning abilities are highly developed.",
    (CF, EX): "Your cognitive flexibility is excellent, showing strong ability to switch between tasks and resist "
              "interference. Your attention control and mental adaptability are well-developed.",

    (M, VG): "You show good memory abilities with solid recall and recognition. Your visual memory is functioning "
             "well, though there's room for improvement in reaction time.",
    (PS, VG): "Your problem-solving skills are good, with effective logical reasoning. You find solutions "
              "efficiently, though occasionally not taking the most optimal path.",
    (V, VG): "You demonstrate good word recognition and processing. Your vocabulary skills are solid, with room "
             "for improvement in processing speed.",
    (SR, VG): "Your spatial reasoning is good, with effective pattern recognition. You can identify and remember "
              "spatial patterns well, with some room for improvement.",
    (N, VG): "You show good spatial navigation abilities, planning routes effectively with occasional "
             "backtracking. Your spatial awareness is well-developed.",
    (CF, VG): "Your cognitive flexibility is good, showing ability to switch between tasks and manage "
              "interference. Your attention control is effective.",

    (M, G): "Your memory abilities are average, with moderate recall and recognition. There's potential for "
            "improvement in both accuracy and reaction time.",
    (PS, G): "Your problem-solving skills are average, showing basic logical reasoning. You can find solutions, "
             "though often not taking the most efficient approach.",
    (V, G): "You demonstrate average word recognition and processing. Your vocabulary skills are functional but "
            "could benefit from further development.",
    (SR, G): "Your spatial reasoning is average, with basic pattern recognition. You can identify simple patterns "
             "but may struggle with more complex ones.",
    (N, G): "You show average spatial navigation abilities, with some inefficiency in route planning and moderate "
            "backtracking. There's room for improvement in spatial awareness.",
    (CF, G): "Your cognitive flexibility is average, showing some ability to switch between tasks but with "
             "noticeable interference effects. Your attention control could be improved.",

    (M, ND): "Your memory abilities need development, with challenges in recall and recognition. Focused practice "
             "could significantly improve your visual memory performance.",
    (PS, ND): "Your problem-solving skills need development, with challenges in logical reasoning. Structured "
              "practice could help improve your approach to finding solutions.",
    (V, ND): "You face challenges with word recognition and processing. Targeted vocabulary exercises could help "
             "strengthen these skills.",
    (SR, ND): "Your spatial reasoning needs development, with difficulties in pattern recognition. Specific "
              "exercises could help improve your spatial processing abilities.",
    (N, ND): "You show challenges with spatial navigation, with inefficient route planning and frequent "
             "backtracking. Focused practice could improve your spatial awareness.",
    (CF, ND): "Your cognitive flexibility needs development, with difficulties switching between tasks and "
              "managing interference. Targeted exercises could improve your attention control.",
}

_GENERIC_ANALYSIS: Dict[Band, str] = {
    EX: "You show excellent performance in this cognitive domain.",
    VG: "You show good performance in this cognitive domain.",
    G: "You show average performance in this cognitive domain.",
    ND: "This cognitive domain would benefit from focused development.",
}

_STRENGTH_USE: Dict[Domain, str] = {
    M: "Excel at learning new information and recalling facts for exams and presentations",
    PS: "Tackle complex projects and find innovative solutions to challenging problems",
    V: "Communicate ideas clearly and understand complex written materials",
    SR: "Excel in fields requiring visual thinking like design, engineering, or mathematics",
    N: "Easily navigate new environments and understand spatial relationships in projects",
    CF: "Adapt quickly to changing priorities and manage multiple projects effectively",
}

_WEAKNESS_FOCUS: Dict[Domain, str] = {
    M: "Use memory aids and structured note-taking to improve information retention",
    PS: "Practice breaking down problems into smaller, manageable components",
    V: "Build reading comprehension through regular exposure to diverse texts",
    SR: "Use visual aids and diagrams to improve understanding of spatial concepts",
    N: "Practice creating mental maps and using landmarks for orientation",
    CF: "Develop structured approaches to task-switching and managing competing demands",
}

DOMAIN_RECOMMENDATION: Dict[Domain, str] = {
    M: "Practice memory games daily, starting with simple patterns and gradually increasing complexity. "
       "Use visualization techniques and spaced repetition to strengthen recall abilities.",
    PS: "Engage with logic puzzles, strategic games, and real-world problem scenarios. Break down complex "
        "problems into smaller steps and practice identifying multiple solution paths.",
    V: "Read diverse materials daily, learn 5 new words per week, and practice word association games. "
       "Use context clues to deduce meanings and create connections between related words.",
    SR: "Practice with 3D puzzles, mental rotation exercises, and pattern recognition activities. Visualize "
        "objects from different perspectives and recreate complex patterns from memory.",
    N: "Practice map reading, create mental maps of familiar places, and try navigating new environments "
       "without GPS. Identify landmarks and practice finding alternative routes.",
    CF: "Practice task-switching exercises, engage with activities requiring divided attention, and try "
        "Stroop-like exercises with increasing difficulty. Mindfulness meditation can also improve "
        "cognitive control.",
}
GENERIC_RECOMMENDATION = "Practice targeted exercises focusing on this cognitive domain regularly."

TRAINING_ACTIVITIES: Dict[Domain, Sequence[str]] = {
    M: ("Pattern memorization games", "Spaced repetition practice", "Dual n-back exercises"),
    PS: ("Logic puzzles and riddles", "Strategic board games", "Algorithm visualization"),
    V: ("Word association games", "Etymology exploration", "Context-based word learning"),
    SR: ("3D mental rotation exercises", "Complex pattern recreation", "Spatial visualization tasks"),
    N: ("Mental mapping exercises", "Landmark identification practice", "Alternative route planning"),
    CF: ("Task-switching games", "Interference control exercises", "Mindfulness meditation"),
}
_GENERIC_ACTIVITIES = ("Targeted cognitive exercises", "Progressive difficulty training", "Regular practice sessions")


def analysis_text(domain: Domain, b: Band) -> str:
    return _ANALYSIS.get((domain, b), _GENERIC_ANALYSIS[b])


def build_domain_analysis(domain: Domain, score: int) -> DomainAnalysis:
    b = band(score)
    label = domain.label

    strengths: List[str] = []
    if score >= STRENGTH_MIN_SCORE:
        strengths.append(f"Strong {label.lower()} performance ({score}/100)")
        use = _STRENGTH_USE.get(domain)
        if use:
            strengths.append(use)

    weaknesses: List[str] = []
    if score < WEAKNESS_MAX_SCORE:
        weaknesses.append(f"{label} needs improvement ({score}/100)")
        focus = _WEAKNESS_FOCUS.get(domain)
        if focus:
            weaknesses.append(focus)

    activities = TRAINING_ACTIVITIES.get(domain, _GENERIC_ACTIVITIES)
    recommendations = [
        DOMAIN_RECOMMENDATION.get(domain, GENERIC_RECOMMENDATION),
        "Suggested activities: " + ", ".join(activities) + ".",
    ]

    return DomainAnalysis(
        domain=domain,
        score=score,
        band=b,
        analysis=analysis_text(domain, b),
        strengths=strengths,
        weaknesses=weaknesses,
        recommendations=recommendations,
    )


def build_domain_analyses(scores: DomainScores) -> List[DomainAnalysis]:
    """One analysis per domain with data; null domains are left out, never zeroed."""
    return [build_domain_analysis(dom, s) for dom, s in scores.known()]


def describe(domain: Optional[Domain]) -> str:
    descriptions = {
        M: "Ability to retain and recall information over short periods",
        PS: "Ability to analyze situations and find logical solutions",
        V: "Word recognition and language processing abilities",
        SR: "Ability to understand and manipulate visual patterns",
        N: "Ability to plan routes and navigate spatial environments",
        CF: "Ability to switch between different mental tasks",
    }
    return descriptions.get(domain, "Cognitive ability score") if domain else "Cognitive ability score"
