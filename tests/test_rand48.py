from freelist_lab.rand48 import Rand48


def test_values_lie_in_unit_interval():
    rng = Rand48(2)
    values = [rng.random() for _ in range(1000)]
    assert all(0.0 <= v < 1.0 for v in values)


def test_same_seed_gives_same_sequence():
    a = Rand48(12345)
    b = Rand48(12345)
    assert [a.random() for _ in range(50)] == [b.random() for _ in range(50)]


def test_different_seeds_differ():
    a = Rand48(1)
    b = Rand48(2)
    assert [a.random() for _ in range(5)] != [b.random() for _ in range(5)]


def test_reseeding_restarts_sequence():
    rng = Rand48(54321)
    first = [rng.random() for _ in range(10)]
    rng.seed(54321)
    assert [rng.random() for _ in range(10)] == first


def test_seed_uses_low_32_bits_only():
    a = Rand48(7)
    b = Rand48(7 + (1 << 32))
    assert [a.random() for _ in range(5)] == [b.random() for _ in range(5)]


def test_values_are_spread_over_interval():
    rng = Rand48(3)
    values = [rng.random() for _ in range(2000)]
    assert min(values) < 0.1
    assert max(values) > 0.9