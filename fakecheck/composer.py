# fakecheck/composer.py

"""
Verdict composer: merges a ValidationReport and a ThreatAnalysis into the
final Assessment shown to users.

The analyzer's additive score only picks the risk bucket. The displayed
score comes from a fixed lookup on that bucket.
"""

from __future__ import annotations

from typing import Callable, List
import json
import logging

from .models import (
    Assessment,
    InputKind,
    RiskLevel,
    ThreatAnalysis,
    ThreatLevel,
    ValidationReport,
)

logger = logging.getLogger("fakecheck.composer")

THREAT_LEVELS = {
    RiskLevel.CRITICAL: ThreatLevel.DANGEROUS,
    RiskLevel.HIGH: ThreatLevel.DANGEROUS,
    RiskLevel.MEDIUM: ThreatLevel.SUSPICIOUS,
    RiskLevel.LOW: ThreatLevel.SUSPICIOUS,
    RiskLevel.SAFE: ThreatLevel.SAFE,
}

DISPLAY_SCORES = {
    RiskLevel.SAFE: 95,
    RiskLevel.LOW: 70,
    RiskLevel.MEDIUM: 50,
    RiskLevel.HIGH: 25,
    RiskLevel.CRITICAL: 10,
}

TOP_RECOMMENDATIONS = 3

VALIDATION_HEADER = "=== VALIDATION RESULTS ==="
WARNINGS_HEADER = "VALIDATION WARNINGS:"
ANALYSIS_HEADER = "=== THREAT ANALYSIS ==="
RECOMMENDATIONS_HEADER = "RECOMMENDATIONS:"
NOT_FOUND_NOTE = "CRITICAL: Input does not exist or is not reachable"
REASSURANCE = (
    "✓ No immediate threats detected",
    "✓ Analysis complete - exercise normal caution",
)

FALLBACK_SCORE = 50


def threat_level_for(risk: RiskLevel) -> ThreatLevel:
    return THREAT_LEVELS[risk]


def display_score(risk: RiskLevel) -> int:
    return max(0, min(100, DISPLAY_SCORES[risk]))


def compose(
    kind: InputKind,
    normalized_input: str,
    report: ValidationReport,
    analysis: ThreatAnalysis,
) -> Assessment:
    threat_level = threat_level_for(analysis.risk_level)

    details: List[str] = [VALIDATION_HEADER]
    details.extend(report.details)
    if report.warnings:
        details.extend(["", WARNINGS_HEADER])
        details.extend(report.warnings)

    details.extend(["", ANALYSIS_HEADER])
    details.extend(analysis.threats)
    details.extend(indicator.render() for indicator in analysis.indicators)

    if analysis.recommendations:
        details.extend(["", RECOMMENDATIONS_HEADER])
        details.extend(analysis.recommendations[:TOP_RECOMMENDATIONS])

    # Messages have no existence concept.
    if kind is not InputKind.MESSAGE and not report.exists:
        threat_level = ThreatLevel.DANGEROUS
        details.extend(["", NOT_FOUND_NOTE])

    if not analysis.threats and threat_level is ThreatLevel.SAFE:
        details.extend(REASSURANCE)

    return Assessment(
        kind=kind,
        normalized_input=normalized_input,
        threat_level=threat_level,
        score=display_score(analysis.risk_level),
        details=details,
        validation=report,
        analysis=analysis,
    )


def fallback_assessment(kind: InputKind, raw: str, exc: BaseException) -> Assessment:
    return Assessment(
        kind=kind,
        normalized_input=raw,
        threat_level=ThreatLevel.SUSPICIOUS,
        score=FALLBACK_SCORE,
        details=[
            "Error occurred during analysis",
            str(exc) or exc.__class__.__name__,
            "Unable to complete full threat assessment",
            "Please try again or contact support",
        ],
        degraded=True,
    )


def compose_safely(
    kind: InputKind,
    raw: str,
    validate: Callable[[str], ValidationReport],
    analyze: Callable[[str], ThreatAnalysis],
    normalize: Callable[[ValidationReport, str], str] = lambda report, text: text,
) -> Assessment:
    """
    Run validate -> analyze -> compose for one input. Any exception from
    those stages yields the degraded assessment instead of propagating.
    """
    try:
        report = validate(raw)
        analysis = analyze(raw)
        return compose(kind, normalize(report, raw), report, analysis)
    except Exception as exc:
        logger.error(
            json.dumps({"event": "assessment_degraded", "kind": kind.value, "error": repr(exc)})
        )
        return fallback_assessment(kind, raw, exc)
