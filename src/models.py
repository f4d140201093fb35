from dataclasses import dataclass
from typing import Any, TypedDict, Optional, Literal, Union
from pydantic import BaseModel, ConfigDict, Field

from src.errors import ClassificationError


# Shared constant, ordered from most to least urgent. Imported by src/dashboard.py and main.py
ESCALATION_LEVELS = ["RED", "YELLOW", "GREEN"]

EscalationLevel = Literal["RED", "YELLOW", "GREEN"]


class ClassificationResult(BaseModel):
    """Validated classification handed back to the caller for persistence."""
    escalation_level: EscalationLevel = Field(
        description="Priority tier assigned to the feedback"
    )

    explanation: str = Field(
        min_length=1,
        description="One-sentence, human-readable reason for the tier"
    )

    easy_win: bool = Field(
        description="True when the item can be fixed with minimal effort"
    )


class KeywordSets(BaseModel):
    """Lower-case phrases used by the rule-based classifier."""
    model_config = ConfigDict(frozen=True)

    red: tuple[str, ...] = Field(
        description="Outage, security, payment, revenue or critical-access language"
    )
    green: tuple[str, ...] = Field(
        description="Praise or minor-suggestion language"
    )
    easy_win: tuple[str, ...] = Field(
        description="Typo, grammar or small-fix language"
    )


class ModelReply(BaseModel):
    """Shape of the JSON object the model is asked to return."""
    escalation_level: EscalationLevel
    explanation: Optional[Any] = None
    easy_win: Optional[Any] = None


# --- Model path outcome ---

@dataclass(frozen=True)
class ModelSuccess:
    result: ClassificationResult


@dataclass(frozen=True)
class ModelFailure:
    error: ClassificationError


ModelOutcome = Union[ModelSuccess, ModelFailure]


class ClassificationState(TypedDict):
    # Input
    text: str

    # Output
    result: Optional[ClassificationResult]  # Set by whichever node produced the answer
    failure: Optional[str]                  # Why the model path was abandoned, if it was
    path: Optional[str]                     # "model" | "rules"


class FeedbackRecord(TypedDict):
    """Schema for one row in the feedback table."""
    id: int
    feedback_text: str
    escalation_level: str
    explanation: str
    easy_win: int  # 0 | 1
    created_at: str
