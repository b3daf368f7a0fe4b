from fakecheck.insights import live_insights
from fakecheck.models import LiveInsights


def test_short_input_gets_nothing():
    assert live_insights("phone", "55") == LiveInsights()
    assert live_insights("message", "") == LiveInsights()


def test_partial_phone():
    result = live_insights("phone", "555-12")
    assert result.live_indicators == ["5 digits detected"]
    assert result.suggestions == ["Need 5 more digits for full analysis"]


def test_complete_phone_with_repeats():
    result = live_insights("phone", "800-000-0000")
    assert "Repeated digits detected - common in spam numbers" in result.warnings
    assert result.suggestions == ["Ready for analysis"]


def test_url_hints():
    result = live_insights("url", "189.24.5.10/paypal")
    assert "Missing protocol - will add https:// automatically" in result.warnings
    assert "IP address detected - unusual for legitimate sites" in result.warnings
    assert 'Contains "paypal" - verify authenticity' in result.live_indicators


def test_url_with_protocol_has_no_protocol_warning():
    result = live_insights("url", "https://example.org")
    assert result.warnings == []


def test_message_hints():
    text = "URGENT: click here, you won $500 at https://x.tk"
    result = live_insights("message", text)
    assert result.warnings == [
        "Urgency language detected - common scam tactic",
        "Phishing keywords detected",
        "Financial content - verify sender carefully",
    ]
    assert result.live_indicators == [f"{len(text)} characters", "1 link(s) found"]
    assert result.suggestions == ["Sufficient content for detailed analysis"]
