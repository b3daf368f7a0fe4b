# fakecheck/engine.py

"""
Check pipeline: validate -> analyze -> compose.

Every entry point takes a raw, trimmed, non-empty string and always returns
an Assessment. Malformed input shows up in the assessment; it is never an
exception. The engine keeps no state between calls.
"""

from __future__ import annotations

from typing import Optional, Union
import json
import logging

from .analyzer import ANALYZERS
from .composer import compose_safely
from .models import Assessment, InputKind, ValidationReport
from .simulation import SimulationSource, default_source
from .validation import validate_message, validate_phone, validate_url

logger = logging.getLogger("fakecheck.engine")

VALIDATORS = {
    InputKind.PHONE: validate_phone,
    InputKind.URL: validate_url,
    InputKind.MESSAGE: validate_message,
}


def _normalized(report: ValidationReport, text: str) -> str:
    return report.metadata.get("normalized_url", text) if report.kind is InputKind.URL else text


def check(
    kind: Union[InputKind, str],
    raw: str,
    *,
    source: Optional[SimulationSource] = None,
) -> Assessment:
    """
    Assess one input. `kind` may be an InputKind or its string value; an
    unknown kind raises ValueError.
    """
    kind = InputKind(kind)
    source = source or default_source()
    text = raw.strip()
    validate = VALIDATORS[kind]

    assessment = compose_safely(
        kind,
        text,
        validate=lambda t: validate(t, source=source),
        analyze=ANALYZERS[kind],
        normalize=_normalized,
    )
    logger.info(
        json.dumps(
            {
                "event": "check",
                "kind": kind.value,
                "threat_level": assessment.threat_level.value,
                "score": assessment.score,
                "degraded": assessment.degraded,
            }
        )
    )
    return assessment


def check_phone(raw: str, *, source: Optional[SimulationSource] = None) -> Assessment:
    return check(InputKind.PHONE, raw, source=source)


def check_url(raw: str, *, source: Optional[SimulationSource] = None) -> Assessment:
    return check(InputKind.URL, raw, source=source)


def check_message(raw: str, *, source: Optional[SimulationSource] = None) -> Assessment:
    return check(InputKind.MESSAGE, raw, source=source)
