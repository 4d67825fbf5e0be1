"""Models for scored questions, generated insights and their cache."""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from nutrition_insights.domain.analysis import AnalysisResult
from nutrition_insights.domain.questions import QuestionDefinition

Sentiment = Literal["positive", "neutral", "negative"]
InsightSource = Literal["llm", "template"]
ModelStatus = Literal[
    "not_downloaded",
    "downloading",
    "ready",
    "loading",
    "generating",
    "error",
    "unsupported",
]


class ScoredQuestion(BaseModel):
    """A catalog question with its analysis, score and gate outcome."""

    model_config = ConfigDict(frozen=True)

    question_id: str
    definition: QuestionDefinition
    score: float
    is_available: bool
    is_pinned: bool
    analysis_result: AnalysisResult


class KeyMetric(BaseModel):
    """A short label/value pair shown beside an insight."""

    model_config = ConfigDict(frozen=True)

    label: str
    value: str


class InsightResponse(BaseModel):
    """Narrative answer for one question in one week."""

    model_config = ConfigDict(frozen=True)

    question_id: str
    text: str
    icon: str
    generated_at: datetime
    source: InsightSource
    week_start_date: str
    sentiment: Sentiment = "neutral"
    key_metrics: list[KeyMetric] = Field(default_factory=list)
    follow_up_ids: list[str] = Field(default_factory=list)


class WeeklyInsightsCache(BaseModel):
    """Persisted record of one week's scored questions and responses."""

    model_config = ConfigDict(frozen=True)

    week_start_date: str
    questions: list[ScoredQuestion]
    headline: str
    responses: dict[str, InsightResponse] = Field(default_factory=dict)
    generated_at: datetime
    valid_until: datetime


class UnavailableQuestion(BaseModel):
    """A gated question and how many more logged days it needs."""

    model_config = ConfigDict(frozen=True)

    question: ScoredQuestion
    days_needed: int


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of a single language model call."""

    success: bool
    text: str | None = None


@dataclass(frozen=True)
class Toast:
    """Transient notification shown to the user."""

    message: str = ""
    visible: bool = False
