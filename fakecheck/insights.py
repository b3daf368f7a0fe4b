# fakecheck/insights.py

"""
Live hints for a form field while the user is still typing. Cheap regex
checks only; the full pipeline runs on submit.
"""

from __future__ import annotations

from typing import List, Union
import re

from .models import InputKind, LiveInsights
from .patterns import digits_only

MIN_CHARS = 3
FULL_PHONE_DIGITS = 10
URL_KEYWORDS = ("paypal", "amazon", "bank", "secure", "verify")


def _phone(text: str, warnings: List[str], suggestions: List[str], live: List[str]) -> None:
    digits = digits_only(text)
    if digits:
        live.append(f"{len(digits)} digits detected")
    if re.search(r"(.)\1{3,}", text):
        warnings.append("Repeated digits detected - common in spam numbers")
    if len(digits) >= FULL_PHONE_DIGITS:
        suggestions.append("Ready for analysis")
    elif digits:
        suggestions.append(f"Need {FULL_PHONE_DIGITS - len(digits)} more digits for full analysis")


def _url(text: str, warnings: List[str], suggestions: List[str], live: List[str]) -> None:
    if not text.lower().startswith("http"):
        warnings.append("Missing protocol - will add https:// automatically")
    if ".." in text:
        warnings.append("Suspicious URL pattern detected")
    if re.search(r"\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}", text):
        warnings.append("IP address detected - unusual for legitimate sites")
    lowered = text.lower()
    for keyword in URL_KEYWORDS:
        if keyword in lowered:
            live.append(f'Contains "{keyword}" - verify authenticity')


def _message(text: str, warnings: List[str], suggestions: List[str], live: List[str]) -> None:
    live.append(f"{len(text)} characters")
    if re.search(r"urgent|immediately|act now", text, re.IGNORECASE):
        warnings.append("Urgency language detected - common scam tactic")
    if re.search(r"click|verify|confirm|suspended", text, re.IGNORECASE):
        warnings.append("Phishing keywords detected")
    if re.search(r"\$\d+|money|prize|won", text, re.IGNORECASE):
        warnings.append("Financial content - verify sender carefully")
    links = len(re.findall(r"https?://", text))
    if links:
        live.append(f"{links} link(s) found")
    if len(text) >= 20:
        suggestions.append("Sufficient content for detailed analysis")


_HANDLERS = {
    InputKind.PHONE: _phone,
    InputKind.URL: _url,
    InputKind.MESSAGE: _message,
}


def live_insights(kind: Union[InputKind, str], text: str) -> LiveInsights:
    kind = InputKind(kind)
    if not text or len(text) < MIN_CHARS:
        return LiveInsights()

    warnings: List[str] = []
    suggestions: List[str] = []
    live: List[str] = []
    _HANDLERS[kind](text, warnings, suggestions, live)
    return LiveInsights(warnings=warnings, suggestions=suggestions, live_indicators=live)
