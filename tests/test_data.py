import pytest

from data.generator import generate_multiple_instances, generate_random_instance
from data.instances import (REFERENCE_INSTANCE, homogeneous_patterns, load_instance, make_instance,
                            save_instance)


def test_homogeneous_patterns():
    assert homogeneous_patterns(100, [14, 31, 36, 45]) == [
        [7, 0, 0, 0], [0, 3, 0, 0], [0, 0, 2, 0], [0, 0, 0, 2]]


def test_make_instance_defaults_seeds():
    inst = make_instance(10, [3, 4], [5, 6])
    assert inst["seed_patterns"] == [[3, 0], [0, 2]]


@pytest.mark.parametrize("args", [
    (0, [3], [1]),
    (10, [3, 4], [1]),
    (10, [0], [1]),
    (10, [11], [1]),
    (10, [3], [-1]),
])
def test_make_instance_validation(args):
    with pytest.raises(ValueError):
        make_instance(*args)


@pytest.mark.parametrize("name", ["inst.json", "inst.pkl"])
def test_save_and_load(tmp_path, name):
    path = str(tmp_path / name)
    save_instance(REFERENCE_INSTANCE, path)
    assert load_instance(path) == REFERENCE_INSTANCE


def test_load_rejects_unknown_format(tmp_path):
    path = tmp_path / "inst.txt"
    path.write_text("100")
    with pytest.raises(ValueError):
        load_instance(str(path))


def test_generator_is_reproducible():
    a = generate_random_instance(5, 100, min_width=10, max_width=50, seed=3)
    b = generate_random_instance(5, 100, min_width=10, max_width=50, seed=3)
    assert a == b
    assert len(set(a["widths"])) == 5
    assert all(10 <= w <= 50 for w in a["widths"])
    assert all(1 <= d <= 10 for d in a["demands"])


def test_generate_multiple_instances_uses_distinct_seeds():
    instances = generate_multiple_instances(count=3, seed=1, num_widths=4, roll_width=50, min_width=5)
    assert len(instances) == 3
    assert instances[0] != instances[1]
    assert instances == generate_multiple_instances(count=3, seed=1, num_widths=4, roll_width=50,
                                                    min_width=5)


def test_generator_range_too_small():
    with pytest.raises(ValueError):
        generate_random_instance(5, 100, min_width=10, max_width=12)
