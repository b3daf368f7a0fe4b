# fakecheck/models.py

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional
import uuid

from pydantic import BaseModel, ConfigDict, Field


class InputKind(str, Enum):
    PHONE = "phone"
    URL = "url"
    MESSAGE = "message"


class Severity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    DANGER = "danger"


class RiskLevel(str, Enum):
    SAFE = "safe"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ThreatLevel(str, Enum):
    SAFE = "safe"
    SUSPICIOUS = "suspicious"
    DANGEROUS = "dangerous"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class ValidationReport(_Frozen):
    kind: InputKind
    is_valid: bool = False
    exists: bool = False
    metadata: Dict[str, Any] = Field(default_factory=dict)
    details: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


class Indicator(_Frozen):
    category: str
    severity: Severity
    description: str

    def render(self) -> str:
        return f"{self.category}: {self.description}"


class ThreatAnalysis(_Frozen):
    risk_level: RiskLevel
    raw_score: int = Field(0, ge=0, le=100)
    confidence: int = Field(0, ge=0, le=100)
    threats: List[str] = Field(default_factory=list)
    indicators: List[Indicator] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    security_tips: List[str] = Field(default_factory=list)


def _new_id() -> str:
    return uuid.uuid4().hex


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Assessment(_Frozen):
    """Final verdict for one checked input."""

    id: str = Field(default_factory=_new_id)
    kind: InputKind
    normalized_input: str
    threat_level: ThreatLevel
    score: int = Field(..., ge=0, le=100)
    details: List[str] = Field(..., min_length=1)
    timestamp: datetime = Field(default_factory=_now)
    validation: Optional[ValidationReport] = None
    analysis: Optional[ThreatAnalysis] = None
    degraded: bool = False


class LiveInsights(_Frozen):
    warnings: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    live_indicators: List[str] = Field(default_factory=list)
