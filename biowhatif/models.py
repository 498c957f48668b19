"""Pydantic models for request/response schemas."""

import math
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from biowhatif.prompts import DEFAULT_DEPTH

SUMMARY_PLACEHOLDER = "Analysis complete."

ImpactLevelName = Literal["molecular", "thermodynamic", "cellular", "clinical"]
ConfidenceClass = Literal["known", "well_characterized", "speculative"]

# Model output is only held to its enum sets and numeric ranges; everything else
# is coerced into shape or dropped.


def _list_or_empty(value):
    return value if isinstance(value, list) else []


def _is_scalar(value) -> bool:
    return isinstance(value, (str, int, float))


def _text(value):
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _optional_text(value):
    return None if value is None else _text(value)


def _string_items(value):
    return [_text(item) for item in _list_or_empty(value) if _is_scalar(item)]


def _object_items(value):
    return [item for item in _list_or_empty(value) if isinstance(item, dict)]


def _number(value) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _flag(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"true", "yes", "y", "1"}
    return bool(value)


def _lower(value):
    return value.strip().lower() if isinstance(value, str) else value


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


class CamelModel(BaseModel):
    """Fields are snake_case in Python and camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnalysisRecord(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# -- Requests --

class MutationRequest(CamelModel):
    mutation: str = ""
    explanation_depth: str = DEFAULT_DEPTH

    @field_validator("explanation_depth", mode="before")
    @classmethod
    def default_depth(cls, value):
        return value if isinstance(value, str) and value else DEFAULT_DEPTH


class ChatMessage(BaseModel):
    role: str
    content: str = ""


class ChatRequest(BaseModel):
    message: str = ""
    history: list[ChatMessage] = []

    @field_validator("history", mode="before")
    @classmethod
    def drop_malformed_messages(cls, value):
        return [
            item for item in _object_items(value)
            if isinstance(item.get("role"), str) and isinstance(item.get("content"), str)
        ]


class ChatReply(BaseModel):
    message: str


class Preset(BaseModel):
    label: str
    value: str


# -- Mutation analysis --

class ImpactLevel(AnalysisRecord):
    level: ImpactLevelName
    title: str = ""
    insight: str = ""
    visual_hint: Optional[str] = None

    normalize_level = field_validator("level", mode="before")(_lower)
    coerce_text = field_validator("title", "insight", mode="before")(_text)
    coerce_optional_text = field_validator("visual_hint", mode="before")(_optional_text)


class SeverityScore(AnalysisRecord):
    name: str = ""
    score: float = 0.0
    description: str = ""

    coerce_text = field_validator("name", "description", mode="before")(_text)
    coerce_score = field_validator("score", mode="before")(_number)

    @field_validator("score")
    @classmethod
    def clamp_score(cls, value: float) -> float:
        return _clamp(value, 0, 10)


class CascadeStep(AnalysisRecord):
    step: int = 0
    scale: str = ""
    description: str = ""
    icon: Optional[str] = None

    coerce_text = field_validator("scale", "description", mode="before")(_text)
    coerce_optional_text = field_validator("icon", mode="before")(_optional_text)

    @field_validator("step", mode="before")
    @classmethod
    def coerce_step(cls, value):
        return int(_number(value))


class PatientScenario(AnalysisRecord):
    patient_age: Optional[str] = None
    presenting_symptoms: list[str] = []
    lab_findings: list[str] = []
    disease_progression: Optional[str] = None
    treatment_challenges: list[str] = []
    long_term_complications: list[str] = []

    coerce_optional_text = field_validator(
        "patient_age", "disease_progression", mode="before",
    )(_optional_text)
    coerce_lists = field_validator(
        "presenting_symptoms", "lab_findings", "treatment_challenges", "long_term_complications",
        mode="before",
    )(_string_items)


class ResearchContext(AnalysisRecord):
    related_diseases: list[str] = []
    similar_mutations: list[str] = []
    research_opportunities: list[str] = []
    experimental_questions: list[str] = []

    coerce_lists = field_validator(
        "related_diseases", "similar_mutations", "research_opportunities", "experimental_questions",
        mode="before",
    )(_string_items)


class ConfidenceInfo(AnalysisRecord):
    score: float = 0.0
    classification: ConfidenceClass
    data_backed: bool = False
    uncertainty_note: Optional[str] = None

    normalize_classification = field_validator("classification", mode="before")(_lower)
    coerce_score = field_validator("score", mode="before")(_number)
    coerce_flag = field_validator("data_backed", mode="before")(_flag)
    coerce_optional_text = field_validator("uncertainty_note", mode="before")(_optional_text)

    @field_validator("score")
    @classmethod
    def clamp_score(cls, value: float) -> float:
        return _clamp(value, 0, 100)


class MutationAnalysis(AnalysisRecord):
    chain_of_thought: list[str] = []
    impact_map: list[ImpactLevel] = []
    severity_scores: list[SeverityScore] = []
    mutation_summary: str = SUMMARY_PLACEHOLDER
    pdb_id: Optional[str] = None
    affected_residue: Optional[str] = None
    cascade_steps: list[CascadeStep] = []
    patient_scenario: Optional[PatientScenario] = None
    research_context: Optional[ResearchContext] = None
    confidence: Optional[ConfidenceInfo] = None

    coerce_reasoning = field_validator("chain_of_thought", mode="before")(_string_items)
    coerce_records = field_validator(
        "impact_map", "severity_scores", "cascade_steps", mode="before",
    )(_object_items)
    coerce_optional_text = field_validator("pdb_id", "affected_residue", mode="before")(_optional_text)

    @field_validator("mutation_summary", mode="before")
    @classmethod
    def default_summary(cls, value):
        if not value:
            return SUMMARY_PLACEHOLDER
        return _text(value)

    @field_validator("patient_scenario", "research_context", "confidence", mode="before")
    @classmethod
    def drop_non_objects(cls, value):
        return value if isinstance(value, dict) else None
