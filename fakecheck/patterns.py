# fakecheck/patterns.py

"""
Pattern library for the threat analyzer.

Every detection rule is a tagged record (id, group, weight, severity,
description) so evaluation order and scoring stay reproducible. Tables are
built once at import time and never mutated afterwards.

Exposes:
    RULE_GROUPS[kind]          -> ordered tuple of RuleGroup
    AD_HOC_RULES[kind]         -> ordered tuple of Rule (structural checks)
    match_groups(kind, text)   -> [(group_name, matched), ...]
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Pattern, Sequence, Tuple
from urllib.parse import urlparse
import re

from .models import InputKind, Severity


# ---------------------------------------------------------
# RULE RECORDS
# ---------------------------------------------------------

@dataclass(frozen=True)
class Rule:
    id: str
    weight: int
    severity: Severity
    category: str
    description: str
    threat: Optional[str] = None


@dataclass(frozen=True)
class RuleGroup:
    """
    A named set of regexes. The group matches when any pattern matches and
    contributes its rule's weight once. `target` selects which view of the
    input the patterns run against: "input", "digits" or "host".
    """

    name: str
    rule: Rule
    patterns: Tuple[Pattern[str], ...]
    target: str = "input"

    def matches(self, text: str) -> bool:
        return any(p.search(text) for p in self.patterns)


def _compile(*patterns: str) -> Tuple[Pattern[str], ...]:
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


# ---------------------------------------------------------
# PHONE
# ---------------------------------------------------------

PHONE_GROUPS: Tuple[RuleGroup, ...] = (
    RuleGroup(
        name="spam",
        rule=Rule(
            id="phone.spam",
            weight=25,
            severity=Severity.WARNING,
            category="Spam Pattern Detected",
            description="This number structure is commonly used by telemarketers",
            threat="Matches known spam number patterns",
        ),
        patterns=_compile(
            r"^1?(800|888|877|866|855|844|833)",  # toll-free
            r"(\d)\1{5,}",                        # repeated digits
            r"^(000|111|999)",
        ),
        target="digits",
    ),
    RuleGroup(
        name="scam",
        rule=Rule(
            id="phone.scam",
            weight=40,
            severity=Severity.DANGER,
            category="Scam Risk",
            description="Number format linked to fraudulent activities",
            threat="Associated with scam operations",
        ),
        patterns=_compile(
            r"^(234|268|473|809|876)",  # one-ring / callback scam regions
            r"^1?900",                  # premium rate
        ),
        target="digits",
    ),
    RuleGroup(
        name="spoofed",
        rule=Rule(
            id="phone.spoofed",
            weight=50,
            severity=Severity.DANGER,
            category="Spoofing Detected",
            description="Number appears to be falsified or manipulated",
            threat="Likely spoofed or fake number",
        ),
        patterns=_compile(r"^1?(555|000|111|999)"),
        target="digits",
    ),
)

PHONE_SEQUENTIAL = Rule(
    id="phone.sequential",
    weight=15,
    severity=Severity.INFO,
    category="Sequential Pattern",
    description="Contains sequential number pattern",
)
PHONE_SHORT = Rule(
    id="phone.short",
    weight=10,
    severity=Severity.WARNING,
    category="Incomplete Number",
    description="Number length is unusually short",
)

SEQUENTIAL_RE = re.compile(r"012|123|234|345|456|567|678|789|890")


# ---------------------------------------------------------
# URL
# ---------------------------------------------------------

URL_SHORTENERS = ("bit.ly", "tinyurl", "goo.gl", "t.co", "is.gd", "cutt.ly", "ow.ly")

URL_GROUPS: Tuple[RuleGroup, ...] = (
    RuleGroup(
        name="phishing",
        rule=Rule(
            id="url.phishing",
            weight=45,
            severity=Severity.DANGER,
            category="Phishing Indicators",
            description="URL contains common phishing keywords",
            threat="Phishing attempt detected",
        ),
        patterns=_compile(
            r"paypal.*verify",
            r"amazon.*account.*suspend",
            r"bank.*secure.*update",
            r"apple.*id.*locked",
            r"microsoft.*security.*alert",
            r"crypto.*wallet.*verify",
            r"urgent.*action.*required",
        ),
    ),
    RuleGroup(
        name="suspicious",
        rule=Rule(
            id="url.suspicious",
            weight=15,
            severity=Severity.WARNING,
            category="Suspicious Structure",
            description="URL has unusual formatting or characters",
        ),
        patterns=_compile(
            r"^\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}$",  # raw IP literal
            r"(^|\.)(" + "|".join(re.escape(s) for s in URL_SHORTENERS) + r")($|\.)",
            r"(-[^-]*){3,}",                          # hyphen overload
            r"[^a-z0-9.\-]",
        ),
        target="host",
    ),
    RuleGroup(
        name="dangerous",
        rule=Rule(
            id="url.dangerous",
            weight=35,
            severity=Severity.DANGER,
            category="High Risk Domain",
            description="Domain associated with malicious activity",
            threat="Dangerous website indicators",
        ),
        patterns=_compile(
            r"\.(tk|ml|ga|cf)([/:?#]|$)",  # free domains
            r"download.*exe|install.*now",
            r"click.*here.*prize",
            r"congratulations.*winner",
        ),
    ),
)

URL_NO_HTTPS = Rule(
    id="url.no_https",
    weight=20,
    severity=Severity.WARNING,
    category="No Secure Connection",
    description="Website does not use HTTPS encryption",
)
URL_TYPOSQUAT = Rule(
    id="url.typosquat",
    weight=30,
    severity=Severity.DANGER,
    category="Typosquatting",
    description='URL mimics "{brand}" but is not the official domain',
    threat="Possible brand impersonation",
)
URL_DEEP_SUBDOMAIN = Rule(
    id="url.deep_subdomain",
    weight=20,
    severity=Severity.WARNING,
    category="Complex Domain",
    description="Unusually deep subdomain structure",
)

BRANDS = ("google", "amazon", "paypal", "microsoft", "apple", "facebook", "netflix")
MAX_HOST_LABELS = 4


# ---------------------------------------------------------
# MESSAGE
# ---------------------------------------------------------

MESSAGE_GROUPS: Tuple[RuleGroup, ...] = (
    RuleGroup(
        name="phishing",
        rule=Rule(
            id="message.phishing",
            weight=35,
            severity=Severity.DANGER,
            category="Phishing Language",
            description="Message uses common phishing tactics",
            threat="Phishing attempt detected",
        ),
        patterns=_compile(
            r"verify.*account|confirm.*identity",
            r"suspended.*account|locked.*account",
            r"click.*link.*immediately|urgent.*action",
            r"claim.*prize|you.*won",
            r"refund.*pending|tax.*return",
        ),
    ),
    RuleGroup(
        name="scam",
        rule=Rule(
            id="message.scam",
            weight=40,
            severity=Severity.DANGER,
            category="Scam Content",
            description="Message contains financial scam keywords",
            threat="Financial scam indicators",
        ),
        patterns=_compile(
            r"send.*money|transfer.*funds|wire.*payment",
            r"gift.*card|itunes.*card|prepaid.*card",
            r"bitcoin|cryptocurrency|crypto.*wallet",
            r"social.*security.*number|\bssn\b|bank.*account",
            r"password|pin.*code|verification.*code",
        ),
    ),
    RuleGroup(
        name="urgency",
        rule=Rule(
            id="message.urgency",
            weight=25,
            severity=Severity.WARNING,
            category="Urgency Pressure",
            description="Message uses pressure tactics to force quick action",
        ),
        patterns=_compile(
            r"urgent|immediately|right.*now|\basap\b",
            r"limited.*time|expires.*today|act.*now",
            r"last.*chance|final.*notice|deadline",
        ),
    ),
    RuleGroup(
        name="impersonation",
        rule=Rule(
            id="message.impersonation",
            weight=30,
            severity=Severity.DANGER,
            category="Impersonation",
            description="Message claims to be from trusted organization",
            threat="Entity impersonation detected",
        ),
        patterns=_compile(
            r"\b(irs|fbi|police)\b|government.*agency",
            r"\b(amazon|paypal|microsoft|apple|google)\b",
            r"\bbank\b|credit.*union|financial.*institution",
        ),
    ),
)

MESSAGE_LINKS = Rule(
    id="message.links",
    weight=15,
    severity=Severity.WARNING,
    category="Contains Links",
    description="Message contains {count} link(s)",
)
MESSAGE_DANGEROUS_LINK = Rule(
    id="message.dangerous_link",
    weight=25,
    severity=Severity.DANGER,
    category="Dangerous Link",
    description="At least one embedded link is high risk on its own",
    threat="Message contains dangerous links",
)
MESSAGE_FINANCIAL = Rule(
    id="message.financial_terms",
    weight=10,
    severity=Severity.WARNING,
    category="Financial Language",
    description="Message mentions {count} financial terms",
)
MESSAGE_PERSONAL_INFO = Rule(
    id="message.personal_info",
    weight=20,
    severity=Severity.DANGER,
    category="Personal Information Request",
    description="Message asks for sensitive personal information",
    threat="Requests sensitive personal information",
)
MESSAGE_CAPS = Rule(
    id="message.caps",
    weight=15,
    severity=Severity.INFO,
    category="Excessive Capitalization",
    description="Unusual use of capital letters (attention-grabbing tactic)",
)
MESSAGE_TEXT_SPEAK = Rule(
    id="message.text_speak",
    weight=10,
    severity=Severity.INFO,
    category="Poor Writing Quality",
    description="Unprofessional language may indicate spam",
)

CAPS_RATIO_LIMIT = 0.5
TEXT_SPEAK_LIMIT = 2


# ---------------------------------------------------------
# SHARED KEYWORD LISTS (validator + analyzer)
# ---------------------------------------------------------

FINANCIAL_TERMS = (
    "$", "payment", "bank", "credit card", "account", "wire", "transfer",
    "paypal", "venmo", "bitcoin", "refund", "gift card", "prize", "winner",
)

PERSONAL_INFO_TERMS = (
    "password", "ssn", "social security", "pin", "cvv", "date of birth",
    "mothers maiden", "verify", "confirm your", "account number",
)

TEXT_SPEAK_TOKENS = ("ur", "u", "thru", "plz", "thx", "lol", "omg")
# Informal tokens the analyzer counts against writing quality.
POOR_GRAMMAR_TOKENS = ("ur", "u", "thru", "plz", "asap")

URL_RE = re.compile(r"https?://[^\s]+", re.IGNORECASE)
EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
PHONE_RE = re.compile(r"(?:\+\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}", re.ASCII)

_TEXT_SPEAK_RE = re.compile(r"\b(" + "|".join(TEXT_SPEAK_TOKENS) + r")\b", re.IGNORECASE)
_POOR_GRAMMAR_RE = re.compile(r"\b(" + "|".join(POOR_GRAMMAR_TOKENS) + r")\b", re.IGNORECASE)
SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+\-.]*://")


def _term_regex(term: str) -> Pattern[str]:
    # Word boundaries only where the term edge is a word character ("$" has none).
    left = r"\b" if term[0].isalnum() else ""
    right = r"\b" if term[-1].isalnum() else ""
    return re.compile(left + re.escape(term) + right, re.IGNORECASE)


_TERM_CACHE: Dict[str, Pattern[str]] = {t: _term_regex(t) for t in FINANCIAL_TERMS + PERSONAL_INFO_TERMS}


# ---------------------------------------------------------
# HELPERS
# ---------------------------------------------------------

RULE_GROUPS: Dict[InputKind, Tuple[RuleGroup, ...]] = {
    InputKind.PHONE: PHONE_GROUPS,
    InputKind.URL: URL_GROUPS,
    InputKind.MESSAGE: MESSAGE_GROUPS,
}

AD_HOC_RULES: Dict[InputKind, Tuple[Rule, ...]] = {
    InputKind.PHONE: (PHONE_SEQUENTIAL, PHONE_SHORT),
    InputKind.URL: (URL_NO_HTTPS, URL_TYPOSQUAT, URL_DEEP_SUBDOMAIN),
    InputKind.MESSAGE: (
        MESSAGE_LINKS,
        MESSAGE_DANGEROUS_LINK,
        MESSAGE_FINANCIAL,
        MESSAGE_PERSONAL_INFO,
        MESSAGE_CAPS,
        MESSAGE_TEXT_SPEAK,
    ),
}


def digits_only(text: str) -> str:
    return re.sub(r"[^0-9]", "", text)


def url_host(text: str) -> str:
    """Hostname of `text`, parsed as https when no scheme is given."""
    candidate = text if SCHEME_RE.match(text) else f"https://{text}"
    try:
        return (urlparse(candidate).hostname or "").lower()
    except ValueError:
        return ""


def target_views(kind: InputKind, text: str) -> Dict[str, str]:
    views = {"input": text}
    if kind is InputKind.PHONE:
        views["digits"] = digits_only(text)
    elif kind is InputKind.URL:
        views["host"] = url_host(text)
    return views


def match_groups(kind: InputKind, text: str) -> List[Tuple[str, bool]]:
    views = target_views(kind, text)
    return [(g.name, g.matches(views[g.target])) for g in RULE_GROUPS[kind]]


def count_terms(text: str, terms: Sequence[str]) -> int:
    """Number of distinct terms present in text."""
    return sum(1 for t in terms if (_TERM_CACHE.get(t) or _term_regex(t)).search(text))


def text_speak_count(text: str) -> int:
    return len(_TEXT_SPEAK_RE.findall(text))


def poor_grammar_count(text: str) -> int:
    return len(_POOR_GRAMMAR_RE.findall(text))


def caps_ratio(text: str) -> float:
    if not text:
        return 0.0
    return len(re.findall(r"[A-Z]", text)) / len(text)
