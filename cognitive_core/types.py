from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple


class Domain(str, Enum):
    MEMORY = "memory"
    PROBLEM_SOLVING = "problemSolving"
    VOCABULARY = "vocabulary"
    SPATIAL_REASONING = "spatialReasoning"
    NAVIGATION = "navigation"
    COGNITIVE_FLEXIBILITY = "cognitiveFlexibility"

    @property
    def label(self) -> str:
        return _DOMAIN_LABELS[self]

    @classmethod
    def from_label(cls, text: str) -> Optional["Domain"]:
        key = str(text or "").strip().lower()
        for dom in cls:
            if key in (dom.value.lower(), dom.label.lower()):
                return dom
        return None


_DOMAIN_LABELS: Dict[Domain, str] = {
    Domain.MEMORY: "Memory",
    Domain.PROBLEM_SOLVING: "Problem Solving",
    Domain.VOCABULARY: "Vocabulary",
    Domain.SPATIAL_REASONING: "Spatial Reasoning",
    Domain.NAVIGATION: "Navigation",
    Domain.COGNITIVE_FLEXIBILITY: "Cognitive Flexibility",
}

# Fixed iteration order for every per-domain loop in the pipeline.
DOMAINS: Tuple[Domain, ...] = tuple(Domain)


class Band(str, Enum):
    EXCELLENT = "Excellent"
    VERY_GOOD = "Very Good"
    GOOD = "Good"
    NEEDS_DEVELOPMENT = "Needs Development"


def to_basic(x: Any) -> Any:
    """Make any report object JSON-safe (enums, dataclasses, tuples)."""
    if isinstance(x, Enum):
        return x.value
    if x is None or isinstance(x, (bool, int, float, str)):
        return x
    if isinstance(x, Mapping):
        return {str(to_basic(k)): to_basic(v) for k, v in x.items()}
    if isinstance(x, (list, tuple, set)):
        return [to_basic(v) for v in x]
    if hasattr(x, "to_dict"):
        return to_basic(x.to_dict())
    if hasattr(x, "__dict__"):
        return to_basic(vars(x))
    return str(x)


@dataclass(frozen=True)
class DomainScores:
    """Per-domain integer score in [0, 100], or None when there is no data."""
    memory: Optional[int] = None
    problem_solving: Optional[int] = None
    vocabulary: Optional[int] = None
    spatial_reasoning: Optional[int] = None
    navigation: Optional[int] = None
    cognitive_flexibility: Optional[int] = None

    @classmethod
    def from_mapping(cls, values: Mapping[Domain, Optional[int]]) -> "DomainScores":
        return cls(**{_SCORE_ATTRS[d]: values.get(d) for d in DOMAINS})

    def get(self, domain: Domain) -> Optional[int]:
        return getattr(self, _SCORE_ATTRS[domain])

    def items(self) -> List[Tuple[Domain, Optional[int]]]:
        return [(d, self.get(d)) for d in DOMAINS]

    def known(self) -> List[Tuple[Domain, int]]:
        return [(d, s) for d, s in self.items() if s is not None]

    def to_dict(self) -> Dict[str, Optional[int]]:
        return {d.value: s for d, s in self.items()}


_SCORE_ATTRS: Dict[Domain, str] = {
    Domain.MEMORY: "memory",
    Domain.PROBLEM_SOLVING: "problem_solving",
    Domain.VOCABULARY: "vocabulary",
    Domain.SPATIAL_REASONING: "spatial_reasoning",
    Domain.NAVIGATION: "navigation",
    Domain.COGNITIVE_FLEXIBILITY: "cognitive_flexibility",
}


@dataclass
class Insight:
    summary: str
    detailed_analysis: Dict[str, Any] = field(default_factory=dict)
    dominant_style: Optional[str] = None
    consistency_level: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"summary": self.summary}
        if self.dominant_style is not None:
            out["dominantStyle"] = self.dominant_style
        if self.consistency_level is not None:
            out["consistencyLevel"] = self.consistency_level
        out["detailedAnalysis"] = to_basic(self.detailed_analysis)
        return out


@dataclass
class DomainAnalysis:
    domain: Domain
    score: int
    band: Band
    analysis: str
    strengths: List[str] = field(default_factory=list)
    weaknesses: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "domain": self.domain.label,
            "domainKey": self.domain.value,
            "score": self.score,
            "band": self.band.value,
            "analysis": self.analysis,
            "strengths": list(self.strengths),
            "weaknesses": list(self.weaknesses),
            "recommendations": list(self.recommendations),
        }


@dataclass
class RelationshipInsight:
    domains: Tuple[str, str]
    insight: str

    def to_dict(self) -> Dict[str, Any]:
        return {"domains": list(self.domains), "insight": self.insight}


@dataclass
class ScoreEntry:
    name: str
    score: int

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "score": self.score}


@dataclass
class LearningStyleAnalysis:
    primary_style: str
    analysis_text: str
    description: str
    recommendations: List[str] = field(default_factory=list)
    teaching_strategies: List[str] = field(default_factory=list)
    accommodations: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "primaryStyle": self.primary_style,
            "analysisText": self.analysis_text,
            "recommendations": list(self.recommendations),
            "description": self.description,
            "teachingStrategies": list(self.teaching_strategies),
            "accommodations": list(self.accommodations),
        }


@dataclass
class UserData:
    name: str = ""
    id: Optional[str] = None
    age: Optional[int] = None
    education: Optional[str] = None
    difficulty: Optional[str] = None
    learning_style: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any] | None) -> "UserData":
        p = dict(payload or {})
        age = p.get("age")
        try:
            age = int(age) if age is not None else None
        except (TypeError, ValueError):
            age = None
        uid = p.get("id")
        return cls(
            name=str(p.get("name") or ""),
            id=str(uid) if uid is not None else None,
            age=age,
            education=p.get("education"),
            difficulty=p.get("difficulty"),
            learning_style=p.get("learningStyle") or p.get("learning_style"),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "age": self.age,
            "education": self.education,
            "difficulty": self.difficulty,
        }
        if self.learning_style:
            out["learningStyle"] = self.learning_style
        return out


@dataclass
class CognitiveReport:
    user_data: UserData
    overall_score: int
    summary_analysis: str
    domain_analyses: List[DomainAnalysis]
    learning_style: LearningStyleAnalysis
    recommendations: List[str]
    detailed_performance_data: Dict[str, Any]
    strengths: List[ScoreEntry]
    weaknesses: List[ScoreEntry]
    relationship_insights: List[RelationshipInsight]
    is_fallback: bool = False
    created_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "userData": self.user_data.to_dict(),
            "overallScore": self.overall_score,
            "summaryAnalysis": self.summary_analysis,
            "domainAnalyses": [d.to_dict() for d in self.domain_analyses],
            "learningStyle": self.learning_style.to_dict(),
            "recommendations": list(self.recommendations),
            "detailedPerformanceData": to_basic(self.detailed_performance_data),
            "strengths": [s.to_dict() for s in self.strengths],
            "weaknesses": [w.to_dict() for w in self.weaknesses],
            "relationshipInsights": [r.to_dict() for r in self.relationship_insights],
            "isFallback": self.is_fallback,
            "createdAt": self.created_at,
        }
