import pytest

from fakecheck.simulation import HashedSimulation


class ScriptedSource:
    """
    Simulation source with fixed answers per key prefix (the part of the
    key before the first ':'). Unscripted chances return `default`,
    unscripted integers return the low bound.
    """

    def __init__(self, chances=None, ints=None, default=False):
        self.chances = dict(chances or {})
        self.ints = dict(ints or {})
        self.default = default

    def chance(self, key, probability):
        return self.chances.get(key.split(":", 1)[0], self.default)

    def randint(self, key, low, high):
        value = self.ints.get(key.split(":", 1)[0])
        if value is None:
            return low
        return max(low, min(high, value))


@pytest.fixture
def hashed_source():
    return HashedSimulation("test-salt")


@pytest.fixture
def existing_source():
    """Everything exists, is active and has valid SSL; no scan flags, no VoIP."""
    return ScriptedSource(
        chances={
            "phone-exists": True,
            "phone-active": True,
            "url-exists": True,
            "url-ssl": True,
        },
        ints={"url-age": 400, "phone-registered": 100},
    )


@pytest.fixture
def missing_source():
    return ScriptedSource(chances={"phone-exists": False, "url-exists": False})
