# fakecheck/analyzer.py

"""
Rule-based threat analyzer.

Each kind runs its pattern groups, then a few structural checks. Every hit
adds its fixed weight to an additive score and records an indicator; the
score is then bucketed into a risk level. Nothing here depends on the
simulated lookup data, so the same input always gets the same analysis.
"""

from __future__ import annotations

from typing import Dict, List, Tuple

from .models import Indicator, InputKind, RiskLevel, ThreatAnalysis
from .patterns import (
    BRANDS,
    CAPS_RATIO_LIMIT,
    FINANCIAL_TERMS,
    MAX_HOST_LABELS,
    MESSAGE_CAPS,
    MESSAGE_DANGEROUS_LINK,
    MESSAGE_FINANCIAL,
    MESSAGE_LINKS,
    MESSAGE_PERSONAL_INFO,
    MESSAGE_TEXT_SPEAK,
    PERSONAL_INFO_TERMS,
    PHONE_SEQUENTIAL,
    PHONE_SHORT,
    RULE_GROUPS,
    SEQUENTIAL_RE,
    TEXT_SPEAK_LIMIT,
    URL_DEEP_SUBDOMAIN,
    URL_NO_HTTPS,
    URL_RE,
    URL_TYPOSQUAT,
    Rule,
    caps_ratio,
    count_terms,
    poor_grammar_count,
    target_views,
)


# ---------------------------------------------------------
# STATIC TABLES
# ---------------------------------------------------------

# (base, per threat, cap)
CONFIDENCE = {
    InputKind.PHONE: (70, 8, 95),
    InputKind.URL: (75, 6, 98),
    InputKind.MESSAGE: (72, 7, 96),
}

RISK_THRESHOLDS: Tuple[Tuple[int, RiskLevel], ...] = (
    (70, RiskLevel.CRITICAL),
    (50, RiskLevel.HIGH),
    (30, RiskLevel.MEDIUM),
    (15, RiskLevel.LOW),
)

# (score strictly above, recommendations); last band is the fallback.
RECOMMENDATIONS: Dict[InputKind, Tuple[Tuple[int, List[str]], ...]] = {
    InputKind.PHONE: (
        (30, [
            "Do not answer calls from this number",
            "Block this number in your phone settings",
            "Report to your carrier if you receive calls",
        ]),
        (15, [
            "Let unknown calls from this number go to voicemail",
            "Verify caller identity before sharing information",
            "Look the number up before calling back",
        ]),
        (-1, [
            "Exercise caution when answering",
            "Verify caller identity before sharing information",
        ]),
    ),
    InputKind.URL: (
        (40, [
            "DO NOT visit this website",
            "DO NOT enter any personal information",
            "Report this URL to security authorities",
            "Delete any messages containing this link",
        ]),
        (20, [
            "Proceed with extreme caution",
            "Verify the website is legitimate before visiting",
            "Never enter sensitive information",
        ]),
        (-1, [
            "Verify URL matches the expected website",
            "Check for HTTPS and valid certificate",
        ]),
    ),
    InputKind.MESSAGE: (
        (50, [
            "Delete this message immediately",
            "DO NOT click any links in the message",
            "DO NOT respond or provide any information",
            "Report as spam/phishing to your provider",
            "Block the sender",
        ]),
        (25, [
            "Treat with extreme caution",
            "Verify sender through official channels",
            "Do not click links or download attachments",
        ]),
        (-1, [
            "Verify sender identity before taking action",
            "Contact the organization directly if unsure",
        ]),
    ),
}

SECURITY_TIPS: Dict[InputKind, List[str]] = {
    InputKind.PHONE: [
        "Never share personal information over unexpected calls",
        "Legitimate organizations won't ask for passwords via phone",
        "Use call blocking features to filter spam calls",
    ],
    InputKind.URL: [
        "Always verify URLs before clicking links",
        "Look for HTTPS and a padlock icon in your browser",
        "Hover over links to see the actual destination",
        "Bookmark important websites instead of clicking links",
    ],
    InputKind.MESSAGE: [
        "Legitimate organizations rarely request sensitive info via text/email",
        "When in doubt, contact the company directly using official contact info",
        "Never click links from unknown or suspicious senders",
        "Enable two-factor authentication on all important accounts",
    ],
}


# ---------------------------------------------------------
# ACCUMULATOR
# ---------------------------------------------------------

class _Findings:
    def __init__(self, kind: InputKind) -> None:
        self.kind = kind
        self.score = 0
        self.threats: List[str] = []
        self.indicators: List[Indicator] = []

    def hit(self, rule: Rule, **fmt: object) -> None:
        self.score += rule.weight
        if rule.threat:
            self.threats.append(rule.threat)
        self.indicators.append(
            Indicator(
                category=rule.category,
                severity=rule.severity,
                description=rule.description.format(**fmt) if fmt else rule.description,
            )
        )

    def run_groups(self, text: str) -> None:
        views = target_views(self.kind, text)
        for group in RULE_GROUPS[self.kind]:
            if group.matches(views[group.target]):
                self.hit(group.rule)

    def finish(self) -> ThreatAnalysis:
        base, step, cap = CONFIDENCE[self.kind]
        confidence = min(cap, base + step * len(self.threats))
        return ThreatAnalysis(
            risk_level=risk_level(self.score),
            raw_score=max(0, min(100, self.score)),
            confidence=max(0, min(100, confidence)),
            threats=self.threats,
            indicators=self.indicators,
            recommendations=list(recommendations_for(self.kind, self.score)),
            security_tips=list(SECURITY_TIPS[self.kind]),
        )


def risk_level(score: int) -> RiskLevel:
    for threshold, level in RISK_THRESHOLDS:
        if score >= threshold:
            return level
    return RiskLevel.SAFE


def recommendations_for(kind: InputKind, score: int) -> List[str]:
    for floor, items in RECOMMENDATIONS[kind]:
        if score > floor:
            return items
    return RECOMMENDATIONS[kind][-1][1]


# ---------------------------------------------------------
# PER-KIND ANALYZERS
# ---------------------------------------------------------

def analyze_phone(raw: str) -> ThreatAnalysis:
    findings = _Findings(InputKind.PHONE)
    findings.run_groups(raw)

    digits = target_views(InputKind.PHONE, raw)["digits"]
    if SEQUENTIAL_RE.search(digits):
        findings.hit(PHONE_SEQUENTIAL)
    if len(digits) < 10:
        findings.hit(PHONE_SHORT)
    return findings.finish()


def analyze_url(raw: str) -> ThreatAnalysis:
    findings = _Findings(InputKind.URL)
    findings.run_groups(raw)

    lowered = raw.lower()
    if not lowered.startswith("https://"):
        findings.hit(URL_NO_HTTPS)

    for brand in BRANDS:
        if brand in lowered and f"{brand}.com" not in lowered:
            findings.hit(URL_TYPOSQUAT, brand=brand)

    host = target_views(InputKind.URL, raw)["host"]
    if host and len(host.split(".")) > MAX_HOST_LABELS:
        findings.hit(URL_DEEP_SUBDOMAIN)
    return findings.finish()


def analyze_message(raw: str) -> ThreatAnalysis:
    findings = _Findings(InputKind.MESSAGE)
    findings.run_groups(raw)

    links = URL_RE.findall(raw)
    if links:
        findings.hit(MESSAGE_LINKS, count=len(links))
        if any(_is_high_risk(analyze_url(link).risk_level) for link in links):
            findings.hit(MESSAGE_DANGEROUS_LINK)

    financial = count_terms(raw, FINANCIAL_TERMS)
    if financial > 1:
        findings.hit(MESSAGE_FINANCIAL, count=financial)
    if count_terms(raw, PERSONAL_INFO_TERMS) > 0:
        findings.hit(MESSAGE_PERSONAL_INFO)

    if caps_ratio(raw) > CAPS_RATIO_LIMIT:
        findings.hit(MESSAGE_CAPS)
    if poor_grammar_count(raw) > TEXT_SPEAK_LIMIT:
        findings.hit(MESSAGE_TEXT_SPEAK)
    return findings.finish()


def _is_high_risk(level: RiskLevel) -> bool:
    return level in (RiskLevel.HIGH, RiskLevel.CRITICAL)


ANALYZERS = {
    InputKind.PHONE: analyze_phone,
    InputKind.URL: analyze_url,
    InputKind.MESSAGE: analyze_message,
}


def analyze(kind: InputKind, raw: str) -> ThreatAnalysis:
    return ANALYZERS[InputKind(kind)](raw)


def security_tips(kind: InputKind) -> List[str]:
    return list(SECURITY_TIPS[InputKind(kind)])
