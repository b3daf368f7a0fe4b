# fakecheck/validation/url.py

"""
URL validation: parsing, simulated existence check and site enrichment
(SSL, hosting, registration, HTTP status, security scan, reputation).
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse
import ipaddress
import re

import idna
import tldextract
import validators

from ..models import InputKind, ValidationReport
from ..patterns import SCHEME_RE
from ..simulation import SimulationSource, default_source, pick_by_hash


# ---------------------------------------------------------
# REFERENCE DATA
# ---------------------------------------------------------

TRUSTED_DOMAINS = {
    "google.com", "youtube.com", "gmail.com", "microsoft.com", "live.com",
    "outlook.com", "office.com", "amazon.com", "apple.com", "icloud.com",
    "github.com", "dropbox.com", "paypal.com", "linkedin.com", "netflix.com",
    "facebook.com", "wikipedia.org",
}

FAKE_DOMAINS = ("example.com", "test.com", "fake.tk", "scam.ml")
TYPOSQUAT_MARKERS = ("paypa1", "arnaz0n", "micros0ft")
YOUNG_DOMAIN_MARKERS = ("verify", "secure", "urgent")
SUSPICIOUS_TLDS = {"tk", "ml", "ga", "cf", "gq", "xyz", "top"}

HOSTING_PROVIDERS = (
    {"provider": "AWS (Amazon Web Services)", "location": "Virginia", "country": "USA"},
    {"provider": "Google Cloud", "location": "Iowa", "country": "USA"},
    {"provider": "Microsoft Azure", "location": "Amsterdam", "country": "Netherlands"},
    {"provider": "DigitalOcean", "location": "New York", "country": "USA"},
    {"provider": "Cloudflare", "location": "San Francisco", "country": "USA"},
    {"provider": "GoDaddy", "location": "Arizona", "country": "USA"},
    {"provider": "Bluehost", "location": "Utah", "country": "USA"},
    {"provider": "Unknown Provider", "location": "Unknown", "country": "Unknown"},
)

REGISTRARS = ("GoDaddy", "Namecheap", "Google Domains", "Network Solutions", "Cloudflare", "Tucows")

EXISTS_PROBABILITY = 0.9
FAKE_DOMAIN_EXISTS_PROBABILITY = 0.3
TYPOSQUAT_EXISTS_PROBABILITY = 0.7
SSL_VALID_PROBABILITY = 0.9

BAD_HOST_CHARS_RE = re.compile(r"[\s<>\"{}|\\^`]")

# Offline public-suffix snapshot; never fetches the list over the network.
_EXTRACT = tldextract.TLDExtract(cache_dir=None, suffix_list_urls=())


# ---------------------------------------------------------
# HELPERS
# ---------------------------------------------------------

def normalize_url(raw: str) -> str:
    raw = raw.strip()
    return raw if SCHEME_RE.match(raw) else f"https://{raw}"


def _is_ip(host: str) -> bool:
    try:
        ipaddress.ip_address(host)
    except ValueError:
        return False
    return True


def root_domain(host: str) -> str:
    ext = _EXTRACT(host)
    if not ext.suffix:
        return host
    return f"{ext.domain}.{ext.suffix}".lower()


def domain_exists(host: str, root: str, source: SimulationSource) -> bool:
    if root in TRUSTED_DOMAINS:
        return True
    key = f"url-exists:{host}"
    if any(fake in host for fake in FAKE_DOMAINS):
        return source.chance(key, FAKE_DOMAIN_EXISTS_PROBABILITY)
    if any(marker in host for marker in TYPOSQUAT_MARKERS):
        return source.chance(key, TYPOSQUAT_EXISTS_PROBABILITY)
    return source.chance(key, EXISTS_PROBABILITY)


def _fake_ip(host: str, source: SimulationSource) -> str:
    return ".".join(str(source.randint(f"url-ip:{host}:{i}", 0, 255)) for i in range(4))


def _domain_info(host: str, trusted: bool, source: SimulationSource) -> Dict[str, Any]:
    if trusted:
        age_days = source.randint(f"url-age:{host}", 3651, 9000)
    else:
        young = any(marker in host for marker in YOUNG_DOMAIN_MARKERS)
        age_days = source.randint(f"url-age:{host}", 1, 90 if young else 3650)
    today = date.today()
    expires = today + timedelta(days=source.randint(f"url-expiry:{host}", 30, 394))
    return {
        "registrar": pick_by_hash(host, REGISTRARS),
        "registration_date": (today - timedelta(days=age_days)).isoformat(),
        "expiration_date": expires.isoformat(),
        "age_days": age_days,
    }


def _status_code(host: str, trusted: bool, source: SimulationSource) -> int:
    if "error" in host or "broken" in host:
        return 404
    if "redirect" in host:
        return 301
    if trusted:
        return 200
    return 404 if source.chance(f"url-status:{host}", 0.1) else 200


def _security_scan(host: str, trusted: bool, source: SimulationSource) -> Dict[str, bool]:
    if trusted:
        return {"malware": False, "phishing": False, "spam": False}
    return {
        "malware": "malware" in host or source.chance(f"url-malware:{host}", 0.02),
        "phishing": "paypa1" in host or "verify-account" in host
        or source.chance(f"url-phishing:{host}", 0.05),
        "spam": "free-prize" in host or source.chance(f"url-spam:{host}", 0.1),
    }


def reputation_score(
    has_ssl: bool,
    ssl_valid: bool,
    age_days: int,
    status_code: int,
    security: Dict[str, bool],
) -> int:
    score = 50
    if has_ssl and ssl_valid:
        score += 20
    if age_days > 365:
        score += 20
    if not security["malware"] and not security["phishing"]:
        score += 10
    if status_code == 200:
        score += 10

    if security["malware"]:
        score -= 50
    if security["phishing"]:
        score -= 40
    if not has_ssl:
        score -= 15
    if age_days < 30:
        score -= 20
    return max(0, min(100, score))


def _invalid(raw: str, reason: str) -> ValidationReport:
    return ValidationReport(
        kind=InputKind.URL,
        is_valid=False,
        exists=False,
        metadata={"normalized_url": normalize_url(raw)},
        details=[reason],
        warnings=["Invalid URL format"],
    )


# ---------------------------------------------------------
# MAIN VALIDATOR
# ---------------------------------------------------------

def validate_url(raw: str, source: Optional[SimulationSource] = None) -> ValidationReport:
    source = source or default_source()
    normalized = normalize_url(raw)

    try:
        parsed = urlparse(normalized)
        host = (parsed.hostname or "").lower()
        port = parsed.port
    except ValueError as exc:
        return _invalid(raw, str(exc) or "Unable to parse URL")

    if not host or BAD_HOST_CHARS_RE.search(host):
        return _invalid(raw, "Unable to parse URL")

    details: List[str] = []
    warnings: List[str] = []
    protocol = parsed.scheme.lower()
    has_ssl = protocol == "https"
    is_ip = _is_ip(host)
    root = host if is_ip else root_domain(host)
    trusted = root in TRUSTED_DOMAINS

    metadata: Dict[str, Any] = {
        "normalized_url": normalized,
        "protocol": protocol,
        "hostname": host,
        "root_domain": root,
        "has_ssl": has_ssl,
        "port": port,
    }

    if not validators.url(normalized):
        warnings.append("URL does not follow standard formatting")

    if any(ord(c) > 127 for c in host):
        warnings.append("Hostname contains Unicode characters")
    elif "xn--" in host:
        try:
            decoded = idna.decode(host)
            metadata["decoded_hostname"] = decoded
            warnings.append(f"Punycode hostname decodes to '{decoded}' (possible look-alike domain)")
        except (idna.IDNAError, UnicodeError):
            warnings.append("Invalid IDNA encoding in hostname")

    exists = domain_exists(host, root, source)
    if not exists:
        warnings.append("Domain does not appear to exist or is unreachable")
        details.append("Domain may be expired, suspended, or fake")
        return ValidationReport(
            kind=InputKind.URL,
            is_valid=True,
            exists=False,
            metadata=metadata,
            details=details,
            warnings=warnings,
        )

    ssl_valid = has_ssl and (trusted or source.chance(f"url-ssl:{host}", SSL_VALID_PROBABILITY))
    metadata["ssl_valid"] = ssl_valid
    if has_ssl:
        if ssl_valid:
            details.append("✓ Valid SSL/TLS certificate detected")
            details.append("✓ Encrypted connection available")
        else:
            warnings.append("SSL certificate issues detected")
    else:
        warnings.append("No SSL encryption - connection is not secure")
        details.append("Data transmitted may be visible to third parties")

    ip_address = host if is_ip else _fake_ip(host, source)
    metadata["ip_address"] = ip_address
    details.append(f"IP Address: {ip_address}")

    hosting = dict(pick_by_hash(host, HOSTING_PROVIDERS))
    metadata["hosting"] = hosting
    details.append(f"Hosting: {hosting['provider']}")
    details.append(f"Location: {hosting['location']}, {hosting['country']}")

    info = _domain_info(host, trusted, source)
    metadata["domain_info"] = info
    metadata["domain_age_days"] = info["age_days"]
    details.append(f"Registrar: {info['registrar']}")
    details.append(f"Registered: {info['registration_date']}")
    details.append(f"Expires: {info['expiration_date']}")
    details.append(f"Domain Age: {info['age_days']} days")

    metadata["dns_records"] = {
        "a_record": True,
        "mx_record": trusted or source.chance(f"url-mx:{host}", 0.7),
        "txt_record": trusted or source.chance(f"url-txt:{host}", 0.5),
    }

    status = _status_code(host, trusted, source)
    metadata["status_code"] = status
    if status == 200:
        details.append("✓ Website is accessible (HTTP 200)")
    elif 300 <= status < 400:
        metadata["redirect"] = "https://example-redirect.com"
        warnings.append(f"Page redirects to another location ({status})")
    elif status >= 400:
        warnings.append(f"Website returned error code {status}")

    security = _security_scan(host, trusted, source)
    metadata["security"] = security
    if security["malware"]:
        warnings.append("MALWARE DETECTED on this domain")
    if security["phishing"]:
        warnings.append("PHISHING SITE - Do not enter credentials")
    if security["spam"]:
        warnings.append("Domain associated with spam activities")

    reputation = reputation_score(has_ssl, ssl_valid, info["age_days"], status, security)
    metadata["reputation_score"] = reputation
    details.append(f"Domain Reputation Score: {reputation}/100")

    age = info["age_days"]
    if age < 30:
        warnings.append("Very new domain (less than 30 days old) - exercise caution")
    elif age < 180:
        warnings.append("Relatively new domain (less than 6 months old)")
    elif age > 3650:
        details.append(f"✓ Established domain ({age // 365} years old)")

    tld = root.rsplit(".", 1)[-1] if not is_ip else ""
    if tld in SUSPICIOUS_TLDS:
        warnings.append(f"Domain uses .{tld} TLD - commonly associated with malicious sites")

    return ValidationReport(
        kind=InputKind.URL,
        is_valid=True,
        exists=True,
        metadata=metadata,
        details=details,
        warnings=warnings,
    )
