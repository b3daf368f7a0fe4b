# fakecheck/utils/input_checks.py

"""
Form-level checks the caller runs before handing input to the engine.
Each precheck returns a user-facing error string, or None when the input
may be submitted.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional
from urllib.parse import urlparse
import re

from ..models import InputKind


class InputRejected(ValueError):
    """Input failed the caller-side precondition and must not reach the engine."""


def precheck_phone(phone: str) -> Optional[str]:
    trimmed = phone.strip()
    if not trimmed:
        return "Phone number is required"
    if len(trimmed) < 7:
        return "Phone number is too short (minimum 7 digits)"
    if len(trimmed) > 20:
        return "Phone number is too long (maximum 20 characters)"
    if len(re.findall(r"[0-9]", trimmed)) < 7:
        return "Phone number must contain at least 7 digits"
    if not re.fullmatch(r"[0-9\s+\-()]+", trimmed):
        return "Phone number contains invalid characters"
    return None


def precheck_url(url: str) -> Optional[str]:
    trimmed = url.strip()
    if not trimmed:
        return "URL is required"
    if len(trimmed) < 4:
        return "URL is too short"
    if len(trimmed) > 2048:
        return "URL is too long (maximum 2048 characters)"

    has_protocol = re.match(r"^https?://", trimmed, re.IGNORECASE) is not None
    if not has_protocol and not re.search(r"\w+\.\w+", trimmed):
        return "Please enter a valid URL (e.g., https://example.com)"

    candidate = trimmed if has_protocol else f"https://{trimmed}"
    try:
        host = urlparse(candidate).hostname or ""
    except ValueError:
        return "Invalid URL format"
    if len(host) < 3:
        return "Invalid domain name"
    return None


def precheck_message(message: str) -> Optional[str]:
    trimmed = message.strip()
    if not trimmed:
        return "Message is required"
    if len(trimmed) < 5:
        return "Message is too short (minimum 5 characters)"
    if len(trimmed) > 5000:
        return "Message is too long (maximum 5000 characters)"
    unusual = re.findall(r"[^\w\s.,!?@#$%&*()]", trimmed)
    if len(unusual) > len(trimmed) * 0.5:
        return "Message contains too many unusual characters"
    return None


PRECHECKS: Dict[InputKind, Callable[[str], Optional[str]]] = {
    InputKind.PHONE: precheck_phone,
    InputKind.URL: precheck_url,
    InputKind.MESSAGE: precheck_message,
}


def require_input(raw: Optional[str]) -> str:
    """Trim input; raise InputRejected when nothing is left."""
    text = (raw or "").strip()
    if not text:
        raise InputRejected("Input cannot be empty")
    return text
