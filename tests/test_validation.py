import socket

import pytest

from fakecheck.models import InputKind
from fakecheck.validation import normalize_url, validate_message, validate_phone, validate_url
from fakecheck.validation import message
from fakecheck.validation.message import detect_language, readability, sentiment, spam_score
from fakecheck.validation.phone import CARRIERS
from fakecheck.validation.url import reputation_score

from .conftest import ScriptedSource


# ---------------------------------------------------------
# Phone
# ---------------------------------------------------------

class TestPhoneValidation:
    def test_too_short_is_invalid(self, hashed_source):
        report = validate_phone("12345", source=hashed_source)
        assert report.kind is InputKind.PHONE
        assert report.is_valid is False
        assert report.exists is False
        assert report.warnings == ["Phone number too short to be valid"]

    @pytest.mark.parametrize(
        "raw",
        ["5550100", "555-0199", "+1 (212) 555-7890", "+44 20 7946 0958", "2129876540", "3312345678901"],
    )
    def test_seven_or_more_digits_is_valid(self, raw, hashed_source):
        assert validate_phone(raw, source=hashed_source).is_valid is True

    def test_non_ascii_digits_are_not_digits(self, hashed_source):
        report = validate_phone("١٢٣٤٥٦٧٨", source=hashed_source)
        assert report.is_valid is False
        assert report.metadata["digit_count"] == 0

    def test_mixed_digits_keep_only_ascii(self, hashed_source):
        report = validate_phone("555١٢٣0100", source=hashed_source)
        assert report.metadata["digits"] == "5550100"

    def test_known_fake_number_does_not_exist(self, hashed_source):
        report = validate_phone("555-0100", source=hashed_source)
        assert report.exists is False
        assert "Number not found in telecommunications database" in report.warnings

    def test_nanp_number(self, existing_source):
        report = validate_phone("+1 (212) 555-7890", source=existing_source)
        meta = report.metadata
        assert meta["country"] == "United States/Canada"
        assert meta["country_code"] == "+1"
        assert meta["region"] == "New York, NY"
        assert meta["timezone"] == "EST/EDT (UTC-5/-4)"
        assert meta["line_type"] == "mobile"
        assert report.exists is True
        assert "✓ Number is currently active" in report.details

    def test_ten_digits_assumed_nanp(self, existing_source):
        meta = validate_phone("4155551234", source=existing_source).metadata
        assert meta["country"] == "United States/Canada (assumed)"
        assert meta["region"] == "San Francisco, CA"

    def test_uk_number(self, existing_source):
        assert validate_phone("+44 20 7946 0958", source=existing_source).metadata["country"] == "United Kingdom"

    def test_international_fallback(self, existing_source):
        report = validate_phone("3312345678901", source=existing_source)
        assert report.metadata["country"] == "International"
        assert "13 digits detected - format may vary by country" in report.details

    def test_toll_free_warning(self, existing_source):
        report = validate_phone("1-800-123-4567", source=existing_source)
        assert report.metadata["line_type"] == "toll-free"
        assert "Toll-free numbers are commonly used for telemarketing" in report.warnings

    def test_premium_warning(self, existing_source):
        report = validate_phone("900-123-4567", source=existing_source)
        assert report.metadata["line_type"] == "premium"
        assert any("Premium rate number" in w for w in report.warnings)

    def test_voip_warning(self):
        source = ScriptedSource(chances={"phone-exists": True, "phone-voip": True})
        report = validate_phone("4041234567", source=source)
        assert report.metadata["line_type"] == "voip"
        assert "VoIP number - easier to spoof than traditional lines" in report.warnings

    def test_inactive_number_warns(self):
        source = ScriptedSource(chances={"phone-exists": True, "phone-active": False})
        report = validate_phone("4041234567", source=source)
        assert report.exists is True
        assert "Number may be inactive or disconnected" in report.warnings

    def test_carrier_is_deterministic(self, hashed_source):
        first = validate_phone("4041234567", source=hashed_source)
        second = validate_phone("404-123-4567", source=hashed_source)
        assert first.metadata["carrier"] == second.metadata["carrier"]
        assert first.metadata["carrier"] in CARRIERS
        assert first.exists == second.exists


# ---------------------------------------------------------
# URL
# ---------------------------------------------------------

class TestUrlValidation:
    @pytest.mark.parametrize("raw", ["google.com", "sub.example.org/path?q=1", "189.24.5.10/login"])
    def test_missing_scheme_becomes_https(self, raw):
        assert normalize_url(raw).startswith("https://")

    def test_existing_scheme_is_kept(self):
        assert normalize_url("http://example.org") == "http://example.org"

    def test_trusted_domain(self, hashed_source):
        report = validate_url("google.com", source=hashed_source)
        meta = report.metadata
        assert report.is_valid and report.exists
        assert meta["normalized_url"] == "https://google.com"
        assert meta["protocol"] == "https"
        assert meta["root_domain"] == "google.com"
        assert meta["ssl_valid"] is True
        assert meta["status_code"] == 200
        assert meta["security"] == {"malware": False, "phishing": False, "spam": False}
        assert meta["reputation_score"] == 100
        assert report.warnings == []

    @pytest.mark.parametrize("raw", ["https://", "http://[::1", "exa mple.com"])
    def test_unparseable_url_is_invalid(self, raw, hashed_source):
        report = validate_url(raw, source=hashed_source)
        assert report.is_valid is False
        assert report.exists is False
        assert "Invalid URL format" in report.warnings

    def test_missing_domain_short_circuits(self, missing_source):
        report = validate_url("https://unknown-shop.net", source=missing_source)
        assert report.is_valid is True
        assert report.exists is False
        assert "Domain does not appear to exist or is unreachable" in report.warnings
        assert "ip_address" not in report.metadata
        assert not any(d.startswith("IP Address") for d in report.details)

    def test_ip_literal_without_ssl(self, existing_source):
        report = validate_url("http://189.24.5.10/login", source=existing_source)
        assert report.metadata["ip_address"] == "189.24.5.10"
        assert report.metadata["has_ssl"] is False
        assert "No SSL encryption - connection is not secure" in report.warnings

    def test_suspicious_tld_warning(self, existing_source):
        report = validate_url("https://free-stuff.xyz", source=existing_source)
        assert report.metadata["root_domain"] == "free-stuff.xyz"
        assert any(".xyz TLD" in w for w in report.warnings)

    def test_young_domain(self):
        source = ScriptedSource(chances={"url-exists": True, "url-ssl": True})
        report = validate_url("https://secure-verify-login.com", source=source)
        assert report.metadata["domain_age_days"] == 1
        assert report.metadata["reputation_score"] == 70
        assert "Very new domain (less than 30 days old) - exercise caution" in report.warnings

    def test_security_flags_from_hostname(self, existing_source):
        report = validate_url("https://malware-host.com", source=existing_source)
        assert report.metadata["security"]["malware"] is True
        assert "MALWARE DETECTED on this domain" in report.warnings

    def test_redirect_status(self, existing_source):
        report = validate_url("https://redirect-me.com", source=existing_source)
        assert report.metadata["status_code"] == 301
        assert report.metadata["redirect"]

    def test_punycode_hostname_warns(self, existing_source):
        report = validate_url("https://xn--80ak6aa92e.com", source=existing_source)
        assert any("Punycode" in w or "IDNA" in w for w in report.warnings)

    def test_hashed_source_is_reproducible(self, hashed_source):
        first = validate_url("https://some-site.net", source=hashed_source)
        second = validate_url("https://some-site.net", source=hashed_source)
        assert first == second

    def test_reputation_is_clamped(self):
        flags = {"malware": True, "phishing": True, "spam": True}
        assert reputation_score(False, False, 5, 404, flags) == 0
        clean = {"malware": False, "phishing": False, "spam": False}
        assert reputation_score(True, True, 4000, 200, clean) == 100


# ---------------------------------------------------------
# Message
# ---------------------------------------------------------

class TestMessageValidation:
    SCAM = "URGENT: verify your account now, send your SSN to claim your prize"

    def test_always_valid(self):
        report = validate_message("ok")
        assert report.is_valid is True
        assert report.metadata["length"] == 2

    def test_scam_message_counts(self):
        meta = validate_message(self.SCAM).metadata
        assert meta["contains"]["financial_terms"] == 2
        assert meta["contains"]["personal_info_requests"] == 2
        assert meta["sentiment"] == "urgent"
        assert meta["spam_score"] == 70
        assert meta["language"] == "English"
        assert meta["readability_score"] == 100

    def test_scam_message_warnings(self):
        warnings = validate_message(self.SCAM).warnings
        assert "Message requests personal information - likely phishing" in warnings
        assert "Urgent/pressuring language detected" in warnings
        assert "Moderate spam indicators present" in warnings

    def test_extraction(self):
        text = "Call 555-123-4567 or email help@bank-secure.com, visit https://bank-secure.com/login today"
        report = validate_message(text)
        extracted = report.metadata["extracted"]
        assert extracted["urls"] == ["https://bank-secure.com/login"]
        assert extracted["emails"] == ["help@bank-secure.com"]
        assert extracted["phones"] == ["555-123-4567"]
        assert "  URL 1: https://bank-secure.com/login" in report.details

    def test_flesch_score_when_dictionary_is_present(self, monkeypatch):
        monkeypatch.setattr(message, "cmudict_available", lambda: True)
        monkeypatch.setattr(message.textstat, "flesch_reading_ease", lambda text: 87.654)
        meta = validate_message("The cat sat on the mat. It was happy.").metadata
        assert meta["flesch_reading_ease"] == 87.7

    def test_flesch_skipped_without_dictionary(self, monkeypatch):
        calls = []
        monkeypatch.setattr(message, "cmudict_available", lambda: False)
        monkeypatch.setattr(message.textstat, "flesch_reading_ease", lambda text: calls.append(text))
        meta = validate_message("The cat sat on the mat.").metadata
        assert meta["flesch_reading_ease"] is None
        assert calls == []

    def test_no_network_access(self, monkeypatch):
        attempts = []

        def refuse(host, port, *args, **kwargs):
            attempts.append((host, port))
            raise OSError("network disabled in tests")

        def refuse_connection(address, *args, **kwargs):
            attempts.append(address)
            raise OSError("network disabled in tests")

        monkeypatch.setattr(socket, "getaddrinfo", refuse)
        monkeypatch.setattr(socket, "create_connection", refuse_connection)
        validate_message("The cat sat on the mat.")
        validate_message(self.SCAM)
        assert attempts == []

    @pytest.mark.parametrize(
        "contains, mood, expected",
        [
            ({"urls": 3, "financial_terms": 0, "personal_info_requests": 0}, "neutral", 20),
            ({"urls": 2, "financial_terms": 0, "personal_info_requests": 0}, "neutral", 0),
            ({"urls": 0, "financial_terms": 2, "personal_info_requests": 0}, "neutral", 25),
            ({"urls": 0, "financial_terms": 1, "personal_info_requests": 0}, "neutral", 0),
            ({"urls": 0, "financial_terms": 0, "personal_info_requests": 1}, "neutral", 30),
            ({"urls": 0, "financial_terms": 0, "personal_info_requests": 0}, "urgent", 15),
            ({"urls": 0, "financial_terms": 1, "personal_info_requests": 0}, "positive", 10),
            ({"urls": 0, "financial_terms": 0, "personal_info_requests": 0}, "positive", 0),
            ({"urls": 5, "financial_terms": 4, "personal_info_requests": 3}, "urgent", 90),
            ({"urls": 5, "financial_terms": 4, "personal_info_requests": 3}, "positive", 85),
        ],
    )
    def test_spam_score_terms(self, contains, mood, expected):
        assert spam_score(contains, mood) == expected

    def test_spam_score_is_capped(self):
        for mood in ("urgent", "negative", "positive", "neutral"):
            worst = {"urls": 99, "financial_terms": 99, "personal_info_requests": 99}
            assert 0 <= spam_score(worst, mood) <= 100

    def test_many_links_raise_spam_score(self):
        text = "Deals: http://a.example http://b.example http://c.example"
        assert validate_message(text).metadata["spam_score"] == 20

    def test_positive_financial_message(self):
        meta = validate_message("Congratulations, a bonus payment for you").metadata
        assert meta["sentiment"] == "positive"
        assert meta["spam_score"] == 10

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Act now, this offer will expire", "urgent"),
            ("Your account was suspended", "negative"),
            ("Congratulations, you are a winner", "positive"),
            ("Hello friend, see you at lunch", "neutral"),
        ],
    )
    def test_sentiment_priority(self, text, expected):
        assert sentiment(text) == expected

    def test_urgency_beats_positive(self):
        assert sentiment("Congratulations! Claim your prize immediately") == "urgent"

    def test_language(self):
        assert detect_language("Hola, el paquete de la tienda") == "Spanish"
        assert detect_language("Bonjour") == "English (assumed)"

    def test_readability_penalties(self):
        assert readability("plz send thx u r lol omg") == 50
        assert readability("Hi. Yes. No.") == 85
