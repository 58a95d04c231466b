"""Tests for PropertyCell.

Critical Invariants:
- A cell's value always satisfies its domain
- Map mutations validate the prospective map before touching the live one
"""

import pytest

from gamekb.core.domain import IntDomain, MapDomain, TextDomain
from gamekb.core.errors import DomainViolationError
from gamekb.core.property import PropertyCell


@pytest.fixture
def counters():
    return PropertyCell(
        "counters",
        {},
        MapDomain(key_domain=TextDomain(min_length=1), value_domain=IntDomain(min=0), max_size=2),
    )


def test_initial_value_is_validated():
    with pytest.raises(DomainViolationError):
        PropertyCell("life", "twenty", IntDomain())


def test_set_value_rejects_and_keeps_previous():
    cell = PropertyCell("life", 20, IntDomain(min=-1000, max=1000))
    with pytest.raises(DomainViolationError):
        cell.set_value(5000)
    assert cell.value == 20
    cell.set_value(17)
    assert cell.value == 17


def test_is_valid_does_not_store():
    cell = PropertyCell("life", 20, IntDomain(min=0))
    assert cell.is_valid(3)
    assert not cell.is_valid(-3)
    assert cell.value == 20


def test_unconstrained_cell_accepts_anything():
    cell = PropertyCell("notes", None)
    cell.set_value({"free": ["form"]})
    assert cell.value == {"free": ["form"]}


def test_map_put_beyond_max_size_leaves_map_unchanged(counters):
    """CRITICAL: a rejected put must not partially mutate the map.

    Why: the live map is shared by reference with readers; a half-applied
    write would expose an invalid state.
    """
    counters.put("P1P1", 1)
    counters.put("Charge", 2)
    live = counters.value
    with pytest.raises(DomainViolationError):
        counters.put("Loyalty", 3)
    assert counters.value == {"P1P1": 1, "Charge": 2}
    assert counters.value is live


def test_map_put_overwrites_existing_key_within_size(counters):
    counters.put_all({"P1P1": 1, "Charge": 2})
    counters.put("P1P1", 5)
    assert counters.value == {"P1P1": 5, "Charge": 2}


def test_map_put_rejects_invalid_entry(counters):
    with pytest.raises(DomainViolationError):
        counters.put("P1P1", -1)
    with pytest.raises(DomainViolationError):
        counters.put("", 1)
    assert counters.value == {}


def test_map_put_all_is_atomic(counters):
    counters.put("P1P1", 1)
    with pytest.raises(DomainViolationError):
        counters.put_all({"Charge": 1, "Loyalty": 1})
    assert counters.value == {"P1P1": 1}


def test_map_remove_and_clear(counters):
    counters.put_all({"P1P1": 1, "Charge": 2})
    assert counters.remove_key("P1P1") is True
    assert counters.remove_key("P1P1") is False
    counters.clear_map()
    assert counters.value == {}


def test_remove_key_respects_min_size():
    cell = PropertyCell("pool", {"W": 1}, MapDomain(min_size=1))
    with pytest.raises(DomainViolationError):
        cell.remove_key("W")
    assert cell.value == {"W": 1}


def test_map_operations_on_scalar_cell_raise_type_error():
    cell = PropertyCell("life", 20, IntDomain())
    with pytest.raises(TypeError):
        cell.put("x", 1)


def test_copy_is_independent_for_maps(counters):
    counters.put("P1P1", 1)
    clone = counters.copy()
    clone.put("Charge", 1)
    assert counters.value == {"P1P1": 1}
    assert clone.domain is counters.domain
    assert clone == PropertyCell("counters", {"P1P1": 1, "Charge": 1})


def test_cells_are_unhashable():
    with pytest.raises(TypeError):
        hash(PropertyCell("life", 20))
