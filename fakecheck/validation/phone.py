# fakecheck/validation/phone.py

"""
Phone number validation: structure, numbering plan, simulated carrier and
existence lookup.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from ..models import InputKind, ValidationReport
from ..patterns import digits_only
from ..simulation import SimulationSource, default_source, pick_by_hash

MIN_DIGITS = 7

US_REGIONS = {
    "212": "New York, NY",
    "213": "Los Angeles, CA",
    "312": "Chicago, IL",
    "415": "San Francisco, CA",
    "617": "Boston, MA",
    "202": "Washington, DC",
    "305": "Miami, FL",
    "713": "Houston, TX",
    "206": "Seattle, WA",
    "702": "Las Vegas, NV",
    "555": "Reserved for testing/fiction",
    "800": "Toll-free",
    "888": "Toll-free",
    "877": "Toll-free",
    "866": "Toll-free",
    "855": "Toll-free",
    "900": "Premium rate",
}

US_TIMEZONES = {
    "212": "EST/EDT (UTC-5/-4)",
    "415": "PST/PDT (UTC-8/-7)",
    "312": "CST/CDT (UTC-6/-5)",
    "702": "PST/PDT (UTC-8/-7)",
}

CARRIERS = (
    "Verizon", "AT&T", "T-Mobile", "Sprint", "Google Voice",
    "Metro PCS", "Cricket Wireless", "Boost Mobile", "Unknown",
)

TOLL_FREE_PREFIXES = ("1800", "1888", "1877", "1866", "1855", "800", "888", "877", "866", "855")
PREMIUM_PREFIXES = ("1900", "900")
MOBILE_MARKERS = ("555", "777", "999")

# Digit runs that never resolve in the telecom database.
FAKE_NUMBER_PATTERNS = ("5550100", "5550199", "0000000", "1111111", "9999999")

EXISTS_PROBABILITY = 0.85
ACTIVE_PROBABILITY = 0.8
VOIP_PROBABILITY = 0.15

LINE_TYPE_WARNINGS = {
    "toll-free": "Toll-free numbers are commonly used for telemarketing",
    "premium": "Premium rate number - calls may incur high charges",
    "voip": "VoIP number - easier to spoof than traditional lines",
}


def _numbering_plan(digits: str) -> Dict[str, Optional[str]]:
    if digits.startswith("1") and len(digits) == 11:
        area = digits[1:4]
        return {
            "country": "United States/Canada",
            "country_code": "+1",
            "format": "NANP (North American Numbering Plan)",
            "region": US_REGIONS.get(area, "North America"),
            "timezone": US_TIMEZONES.get(area, "Varies by location"),
        }
    if digits.startswith("44") and len(digits) >= 11:
        return {
            "country": "United Kingdom",
            "country_code": "+44",
            "format": "UK Format",
            "region": "England/Wales/Scotland/Northern Ireland",
            "timezone": "GMT/BST",
        }
    if digits.startswith("86") and len(digits) >= 11:
        return {
            "country": "China",
            "country_code": "+86",
            "format": "Chinese Format",
            "region": None,
            "timezone": "CST (UTC+8)",
        }
    if digits.startswith("91") and len(digits) == 12:
        return {
            "country": "India",
            "country_code": "+91",
            "format": "Indian Format",
            "region": None,
            "timezone": "IST (UTC+5:30)",
        }
    if len(digits) == 10:
        area = digits[:3]
        return {
            "country": "United States/Canada (assumed)",
            "country_code": "+1",
            "format": "NANP - 10 digit",
            "region": US_REGIONS.get(area, "North America"),
            "timezone": US_TIMEZONES.get(area, "Varies by location"),
        }
    return {
        "country": "International",
        "country_code": None,
        "format": "International Format",
        "region": None,
        "timezone": None,
    }


def line_type(digits: str, source: SimulationSource) -> str:
    if digits.startswith(TOLL_FREE_PREFIXES):
        return "toll-free"
    if digits.startswith(PREMIUM_PREFIXES):
        return "premium"
    if any(marker in digits for marker in MOBILE_MARKERS):
        return "mobile"
    if source.chance(f"phone-voip:{digits}", VOIP_PROBABILITY):
        return "voip"
    return "mobile" if source.chance(f"phone-mobile:{digits}", 0.5) else "landline"


def number_exists(digits: str, source: SimulationSource) -> bool:
    if any(pattern in digits for pattern in FAKE_NUMBER_PATTERNS):
        return False
    return source.chance(f"phone-exists:{digits}", EXISTS_PROBABILITY)


def validate_phone(raw: str, source: Optional[SimulationSource] = None) -> ValidationReport:
    source = source or default_source()
    digits = digits_only(raw)
    details: List[str] = []
    warnings: List[str] = []
    metadata: Dict[str, Any] = {"digits": digits, "digit_count": len(digits)}

    if len(digits) < MIN_DIGITS:
        warnings.append("Phone number too short to be valid")
        details.append(f"Minimum {MIN_DIGITS} digits required for a valid phone number")
        return ValidationReport(
            kind=InputKind.PHONE,
            is_valid=False,
            exists=False,
            metadata=metadata,
            details=details,
            warnings=warnings,
        )

    plan = _numbering_plan(digits)
    metadata.update(plan)
    if plan["country"] == "International":
        details.append(f"{len(digits)} digits detected - format may vary by country")

    kind_of_line = line_type(digits, source)
    carrier = pick_by_hash(digits, CARRIERS)
    exists = number_exists(digits, source)
    is_active = exists and source.chance(f"phone-active:{digits}", ACTIVE_PROBABILITY)
    metadata.update({"line_type": kind_of_line, "carrier": carrier, "is_active": is_active})

    if exists:
        days_ago = source.randint(f"phone-registered:{digits}", 0, 1824)
        registered = date.today() - timedelta(days=days_ago)
        metadata["registration_date"] = registered.isoformat()

        details.append("✓ Number exists in telecommunications database")
        code = plan["country_code"]
        details.append(f"Country: {plan['country']}" + (f" ({code})" if code else ""))
        if plan["region"]:
            details.append(f"Region: {plan['region']}")
        details.append(f"Carrier: {carrier}")
        details.append(f"Line Type: {kind_of_line.upper()}")
        if plan["timezone"]:
            details.append(f"Timezone: {plan['timezone']}")
        if is_active:
            details.append("✓ Number is currently active")
        else:
            warnings.append("Number may be inactive or disconnected")
        details.append(f"First registered: {metadata['registration_date']}")
    else:
        warnings.append("Number not found in telecommunications database")
        details.append("This may indicate a spoofed or non-existent number")

    if kind_of_line in LINE_TYPE_WARNINGS:
        warnings.append(LINE_TYPE_WARNINGS[kind_of_line])

    return ValidationReport(
        kind=InputKind.PHONE,
        is_valid=True,
        exists=exists,
        metadata=metadata,
        details=details,
        warnings=warnings,
    )
