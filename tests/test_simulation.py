from fakecheck.simulation import (
    HashedSimulation,
    SeededSimulation,
    char_code_hash,
    default_source,
    pick_by_hash,
)


def test_hashed_simulation_is_deterministic():
    a = HashedSimulation("salt")
    b = HashedSimulation("salt")
    assert a.chance("url-exists:example.org", 0.5) == b.chance("url-exists:example.org", 0.5)
    assert a.randint("url-age:example.org", 1, 3650) == b.randint("url-age:example.org", 1, 3650)


def test_hashed_simulation_respects_bounds():
    source = HashedSimulation("bounds")
    for i in range(200):
        value = source.randint(f"k{i}", 3, 7)
        assert 3 <= value <= 7


def test_chance_extremes():
    source = HashedSimulation()
    assert not any(source.chance(f"k{i}", 0.0) for i in range(50))
    assert all(source.chance(f"k{i}", 1.0) for i in range(50))


def test_salt_changes_outcomes():
    keys = [f"phone-exists:{i}" for i in range(64)]
    first = [HashedSimulation("one").chance(k, 0.5) for k in keys]
    second = [HashedSimulation("two").chance(k, 0.5) for k in keys]
    assert first != second


def test_seeded_simulation_repeats_with_same_seed():
    a = SeededSimulation(7)
    b = SeededSimulation(7)
    assert [a.randint("x", 0, 100) for _ in range(10)] == [b.randint("x", 0, 100) for _ in range(10)]


def test_pick_by_hash_uses_code_point_sum():
    assert char_code_hash("ab") == 97 + 98
    assert pick_by_hash("ab", ("x", "y", "z")) == ("x", "y", "z")[195 % 3]


def test_default_source_is_shared():
    assert default_source() is default_source()
