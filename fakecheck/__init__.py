# fakecheck/__init__.py

"""
Rule-based risk assessment for phone numbers, URLs and messages.

Exposes:
    check(kind, raw)   -> Assessment
    check_phone(raw)   -> Assessment
    check_url(raw)     -> Assessment
    check_message(raw) -> Assessment
"""

from .engine import check, check_message, check_phone, check_url
from .models import (
    Assessment,
    Indicator,
    InputKind,
    RiskLevel,
    Severity,
    ThreatAnalysis,
    ThreatLevel,
    ValidationReport,
)
