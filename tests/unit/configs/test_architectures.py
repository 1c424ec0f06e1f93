import dataclasses

import pytest
from hypothesis import given
from hypothesis import strategies as st

from devicequery.configs.architectures import (
    Architecture,
    ArchitectureTable,
    cores_per_multiprocessor,
    default_table,
)

PUBLISHED_CORES = {
    (2, 0): 32,
    (2, 1): 48,
    (3, 0): 192,
    (3, 2): 192,
    (3, 5): 192,
    (3, 7): 192,
    (5, 0): 128,
    (5, 2): 128,
    (5, 3): 128,
    (6, 0): 64,
    (6, 1): 128,
    (6, 2): 128,
    (7, 0): 64,
    (7, 2): 64,
    (7, 5): 64,
    (8, 0): 64,
    (8, 6): 128,
    (8, 7): 128,
    (8, 9): 128,
    (9, 0): 128,
    (10, 0): 128,
    (10, 1): 128,
    (10, 3): 128,
    (11, 0): 128,
    (12, 0): 128,
    (12, 1): 128,
}


@pytest.mark.parametrize("version,cores", sorted(PUBLISHED_CORES.items()))
def test_packaged_table_matches_published_counts(version, cores):
    assert cores_per_multiprocessor(*version) == cores


def test_packaged_table_has_no_extra_entries():
    table = default_table()
    assert len(table) == len(PUBLISHED_CORES)
    for version in PUBLISHED_CORES:
        assert version in table


def test_unknown_capability_falls_back_to_none():
    assert cores_per_multiprocessor(99, 9) is None
    assert cores_per_multiprocessor(8, 8) is None


@given(
    st.tuples(st.integers(min_value=0, max_value=200), st.integers(min_value=0, max_value=20))
)
def test_lookup_never_raises(version):
    result = cores_per_multiprocessor(*version)
    if version in PUBLISHED_CORES:
        assert result == PUBLISHED_CORES[version]
    else:
        assert result is None


def test_default_table_is_cached():
    assert default_table() is default_table()


def test_lookup_returns_architecture_name():
    arch = default_table().lookup(8, 9)
    assert arch == Architecture(name="Ada", major=8, minor=9, cores=128)


def test_from_yaml(small_table_path):
    table = ArchitectureTable.from_yaml(str(small_table_path))
    assert len(table) == 2
    assert table.cores_per_multiprocessor(7, 5) == 64
    assert table.cores_per_multiprocessor(8, 6) is None


def test_from_dict_builds_nested_entries():
    table = ArchitectureTable.from_dict(
        {"architectures": [{"name": "Hopper", "major": 9, "minor": 0, "cores": 128}]}
    )
    assert isinstance(table.architectures, tuple)
    assert isinstance(table.architectures[0], Architecture)


def test_to_dict_round_trips():
    table = ArchitectureTable.from_dict(
        {"architectures": [{"name": "Volta", "major": 7, "minor": 0, "cores": 64}]}
    )
    assert ArchitectureTable.from_dict(table.to_dict()) == table


def test_duplicate_entries_rejected():
    entry = {"name": "Ada", "major": 8, "minor": 9, "cores": 128}
    with pytest.raises(ValueError, match="Duplicate"):
        ArchitectureTable.from_dict({"architectures": [entry, entry]})


def test_non_positive_cores_rejected():
    with pytest.raises(ValueError, match="must be positive"):
        ArchitectureTable.from_dict(
            {"architectures": [{"name": "Bogus", "major": 1, "minor": 0, "cores": 0}]}
        )


def test_non_mapping_yaml_rejected():
    with pytest.raises(ValueError, match="expects a YAML mapping"):
        ArchitectureTable.from_yaml_text("- 1\n- 2\n")


def test_table_is_immutable():
    table = default_table()
    with pytest.raises(dataclasses.FrozenInstanceError):
        table.architectures = ()
    with pytest.raises(TypeError):
        table._by_version[(1, 0)] = None
