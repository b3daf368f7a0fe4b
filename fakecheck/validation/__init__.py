# fakecheck/validation/__init__.py

"""
Format validators.

Exposes:
    validate_phone(raw, source=None)   -> ValidationReport
    validate_url(raw, source=None)     -> ValidationReport
    validate_message(raw, source=None) -> ValidationReport
"""

from .message import validate_message
from .phone import validate_phone
from .url import normalize_url, validate_url
