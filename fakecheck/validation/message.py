# fakecheck/validation/message.py

"""
Message validation: content extraction (links, emails, phone numbers),
keyword counts, language and sentiment guesses, spam and readability
scores. Messages have no structural failure mode, so the report is always
valid.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional
import re

import nltk
import textstat

from ..models import InputKind, ValidationReport
from ..patterns import (
    EMAIL_RE,
    FINANCIAL_TERMS,
    PERSONAL_INFO_TERMS,
    PHONE_RE,
    URL_RE,
    count_terms,
    text_speak_count,
)
from ..simulation import SimulationSource

LANGUAGE_WORDS = {
    "English": ("the", "and", "is", "are", "you", "your", "have", "this"),
    "Spanish": ("el", "la", "de", "que", "es", "en", "un", "por"),
    "French": ("le", "de", "un", "être", "et", "à", "avoir", "que"),
}
DEFAULT_LANGUAGE = "English (assumed)"

URGENT_RE = re.compile(r"\b(urgent|immediately|now|asap|hurry|quick|deadline|expir)", re.IGNORECASE)
NEGATIVE_RE = re.compile(r"\b(problem|issue|suspended|locked|alert|warning|fraud|unauthorized)", re.IGNORECASE)
POSITIVE_RE = re.compile(r"\b(congratulations|winner|won|free|prize|bonus|reward)", re.IGNORECASE)


def detect_language(text: str) -> str:
    words = set(re.findall(r"[^\W\d_]+", text.lower()))
    for language, markers in LANGUAGE_WORDS.items():
        if words.intersection(markers):
            return language
    return DEFAULT_LANGUAGE


def sentiment(text: str) -> str:
    # Urgency outranks negative, which outranks positive.
    if URGENT_RE.search(text):
        return "urgent"
    if NEGATIVE_RE.search(text):
        return "negative"
    if POSITIVE_RE.search(text):
        return "positive"
    return "neutral"


def spam_score(contains: Dict[str, int], mood: str) -> int:
    score = 0
    if contains["urls"] > 2:
        score += 20
    if contains["financial_terms"] > 1:
        score += 25
    if contains["personal_info_requests"] > 0:
        score += 30
    if mood == "urgent":
        score += 15
    if mood == "positive" and contains["financial_terms"] > 0:
        score += 10
    return min(100, score)


def readability(text: str) -> int:
    words = len(text.split())
    sentences = [s for s in re.split(r"[.!?]+", text) if s.strip()]
    avg_words = words / max(1, len(sentences))

    score = 100
    if avg_words > 25:
        score -= 20
    if avg_words < 5:
        score -= 15
    score -= text_speak_count(text) * 10
    return max(0, min(100, score))


def cmudict_available() -> bool:
    """True when the CMU pronouncing dictionary is already on disk."""
    try:
        nltk.data.find("corpora/cmudict")
    except LookupError:
        return False
    return True


def _flesch(text: str) -> Optional[float]:
    # textstat fetches cmudict over the network when it is not on disk.
    if not cmudict_available():
        return None
    try:
        return round(float(textstat.flesch_reading_ease(text)), 1)
    except Exception:
        return 0.0


def validate_message(raw: str, source: Optional[SimulationSource] = None) -> ValidationReport:
    # `source` is accepted for a uniform validator signature; nothing here is simulated.
    urls = URL_RE.findall(raw)
    emails = EMAIL_RE.findall(raw)
    phones = PHONE_RE.findall(raw)

    contains = {
        "urls": len(urls),
        "emails": len(emails),
        "phones": len(phones),
        "financial_terms": count_terms(raw, FINANCIAL_TERMS),
        "personal_info_requests": count_terms(raw, PERSONAL_INFO_TERMS),
    }
    language = detect_language(raw)
    mood = sentiment(raw)
    spam = spam_score(contains, mood)
    readable = readability(raw)

    metadata: Dict[str, Any] = {
        "length": len(raw),
        "language": language,
        "sentiment": mood,
        "encoding": "UTF-8",
        "readability_score": readable,
        "flesch_reading_ease": _flesch(raw),
        "spam_score": spam,
        "contains": contains,
        "extracted": {"urls": urls, "emails": emails, "phones": phones},
    }

    details: List[str] = [
        f"Message length: {len(raw)} characters",
        f"Language: {language}",
        f"Sentiment: {mood}",
        f"Readability score: {readable}/100",
        f"Spam likelihood: {spam}/100",
    ]
    for label, items in (("URL", urls), ("Email", emails), ("Phone", phones)):
        if not items:
            continue
        details.append(f"Contains {len(items)} {label.lower()}(s)")
        details.extend(f"  {label} {i}: {item}" for i, item in enumerate(items, 1))

    warnings: List[str] = []
    if contains["financial_terms"] > 2:
        warnings.append("Multiple financial terms detected - verify sender")
    if contains["personal_info_requests"] > 0:
        warnings.append("Message requests personal information - likely phishing")
    if mood == "urgent":
        warnings.append("Urgent/pressuring language detected")
    if spam > 70:
        warnings.append("High spam probability detected")
    elif spam > 40:
        warnings.append("Moderate spam indicators present")
    if readable < 40:
        warnings.append("Poor writing quality - may indicate spam")

    return ValidationReport(
        kind=InputKind.MESSAGE,
        is_valid=True,
        exists=True,
        metadata=metadata,
        details=details,
        warnings=warnings,
    )
