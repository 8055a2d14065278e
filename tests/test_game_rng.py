import pytest

from game_rng import GameRNG


def test_same_seed_same_sequence():
    a = GameRNG(seed=42)
    b = GameRNG(seed=42)
    assert [a.get_int(0, 1000) for _ in range(20)] == [b.get_int(0, 1000) for _ in range(20)]
    assert a.get_float() == b.get_float()


def test_unseeded_rng_records_its_seed():
    rng = GameRNG()
    replay = GameRNG(seed=rng.initial_seed)
    assert rng.get_int(0, 10**6) == replay.get_int(0, 10**6)


def test_get_int_is_inclusive():
    rng = GameRNG(seed=1)
    values = {rng.get_int(3, 5) for _ in range(200)}
    assert values == {3, 4, 5}
    assert rng.get_int(7, 7) == 7


def test_get_float_stays_in_range():
    rng = GameRNG(seed=1)
    for _ in range(100):
        assert 2.0 <= rng.get_float(2.0, 3.0) < 3.0


def test_get_int_array_shape_and_bounds():
    values = GameRNG(seed=3).get_int_array(0, 99, (4, 6))
    assert values.shape == (4, 6)
    assert values.min() >= 0
    assert values.max() <= 99


def test_reversed_bounds_raise():
    rng = GameRNG(seed=1)
    with pytest.raises(ValueError):
        rng.get_int(5, 1)
    with pytest.raises(ValueError):
        rng.get_float(1.0, 0.0)
    with pytest.raises(ValueError):
        rng.get_int_array(2, 1, 3)


def test_choice_and_coin_flip():
    rng = GameRNG(seed=9)
    assert rng.choice([1, 2, 3]) in (1, 2, 3)
    with pytest.raises(ValueError):
        rng.choice([])
    assert rng.coin_flip(1.0) == "heads"
    assert rng.coin_flip(0.0) == "tails"
    with pytest.raises(ValueError):
        rng.coin_flip(1.5)


def test_state_round_trip_through_file(tmp_path):
    rng = GameRNG(seed=5)
    rng.get_int(0, 100)
    path = tmp_path / "rng.json"
    rng.save_state_to_file(str(path))
    expected = [rng.get_int(0, 100) for _ in range(10)]

    restored = GameRNG(seed=1)
    restored.load_state_from_file(str(path))
    assert restored.initial_seed == 5
    assert [restored.get_int(0, 100) for _ in range(10)] == expected


def test_reset_restarts_sequence():
    rng = GameRNG(seed=8)
    first = [rng.get_int(0, 100) for _ in range(5)]
    rng.reset(8)
    assert [rng.get_int(0, 100) for _ in range(5)] == first


def test_shuffle_keeps_elements():
    items = list(range(10))
    GameRNG(seed=4).shuffle(items)
    assert sorted(items) == list(range(10))
