"""
Map Invariants Test Suite

Each property is checked against a small reference model: a plain dict keyed
by a tagged identity that never conflates values of different types.
"""

import copy

import pytest
from hypothesis import given, settings, strategies as st

from boostmap import EmptyContainer, Map, ValueRejected

scalar_keys = (
    st.none()
    | st.booleans()
    | st.integers(min_value=-5, max_value=20)
    | st.floats(allow_nan=False, allow_infinity=False, width=16)
    | st.text(max_size=3)
    | st.binary(max_size=3)
)

keys = st.recursive(
    scalar_keys,
    lambda children: st.lists(children, max_size=3) | st.dictionaries(st.text(max_size=2), children, max_size=3),
    max_leaves=6,
)

operations = st.lists(st.tuples(keys, st.integers()), max_size=25)


def identity(key):
    """Tagged identity under which two keys are the same map key."""
    if key is None:
        return ("null",)
    if isinstance(key, bool):
        return ("bool", key)
    if isinstance(key, int):
        return ("int", key)
    if isinstance(key, float):
        return ("float", key.hex())
    if isinstance(key, str):
        return ("str", key)
    if isinstance(key, bytes):
        return ("bytes", key)
    if isinstance(key, (list, tuple)):
        return ("seq", tuple(identity(item) for item in key))
    if isinstance(key, dict):
        return ("record", frozenset((identity(k), identity(v)) for k, v in key.items()))
    raise AssertionError(f"unexpected key {key!r}")


def build(ops):
    """Apply (key, value) writes to a Map and to the reference model."""
    sut = Map()
    model = {}
    for key, value in ops:
        sut.set(key, value)
        model[identity(key)] = value
    return sut, model


def snapshot(sut):
    return [(identity(key), value) for key, value in sut.items()]


class TestMapInvariants:
    """Guarantees that hold for any sequence of writes."""

    @given(ops=operations)
    def test_matches_reference_model(self, ops):
        """Key distinctness and insertion order follow the tagged model."""
        sut, model = build(ops)

        assert sut.count() == len(model)
        assert snapshot(sut) == list(model.items())

    @given(ops=operations)
    def test_structurally_equal_keys_find_entries(self, ops):
        """A deep copy of any stored key finds the same value."""
        sut, model = build(ops)

        for key, value in list(sut.items()):
            twin = copy.deepcopy(key)
            assert sut.has(twin)
            assert sut.get(twin) == model[identity(key)]

    @given(ops=operations, probe=keys)
    def test_has_agrees_with_model(self, ops, probe):
        """has() is true exactly for keys the model holds."""
        sut, model = build(ops)

        assert sut.has(probe) == (identity(probe) in model)

    @given(ops=operations, key=keys, value=st.integers())
    def test_reset_keeps_position(self, ops, key, value):
        """Overwriting an existing key leaves it where it was."""
        sut, _ = build(ops + [(key, 0)])
        order_before = [identity(k) for k in sut.keys()]

        sut.set(copy.deepcopy(key), value)

        assert [identity(k) for k in sut.keys()] == order_before
        assert sut.get(key) == value

    @given(ops=operations, rejected=st.lists(st.integers(max_value=-1), min_size=1, max_size=5))
    def test_rejected_writes_change_nothing(self, ops, rejected):
        """A guard rejection is idempotent on state."""
        sut = Map(guard=lambda v: v >= 0)
        for key, value in ops:
            sut.set(key, abs(value))
        before = snapshot(sut)

        for value in rejected:
            with pytest.raises(ValueRejected):
                sut.push(value)
        for (key, _), value in zip(ops, rejected):
            with pytest.raises(ValueRejected):
                sut.set(key, value)

        assert snapshot(sut) == before

    @given(ops=operations, value=st.integers())
    def test_push_then_pop(self, ops, value):
        """pop() undoes push()."""
        sut, _ = build(ops)
        before = snapshot(sut)

        assert sut.push(value).pop() == value
        assert snapshot(sut) == before

    @given(int_keys=st.lists(st.integers(min_value=-10, max_value=50), max_size=10))
    def test_push_index_follows_highest_int_key(self, int_keys):
        """push() uses one past the highest non-negative int key ever stored."""
        sut = Map()
        for key in int_keys:
            sut.set(key, "set")
        sut.push("pushed")

        expected = max([k for k in int_keys if k >= 0], default=-1) + 1
        assert sut.get(expected) == "pushed"
        assert sut.keys()[-1] == expected

    @given(ops=operations)
    def test_pop_drains_in_reverse_order(self, ops):
        """Repeated pop() returns values last to first, then raises."""
        sut, model = build(ops)

        drained = [sut.pop() for _ in range(sut.count())]

        assert drained == list(reversed(list(model.values())))
        with pytest.raises(EmptyContainer):
            sut.pop()

    @given(ops=operations)
    def test_walk_stops_on_false(self, ops):
        """A visitor returning False on the second call sees exactly two entries."""
        sut, _ = build(ops)
        visited = []

        def visitor(value, key):
            visited.append(key)
            if len(visited) == 2:
                return False

        sut.walk(visitor)

        assert len(visited) == min(2, sut.count())

    @given(ops=operations)
    @settings(max_examples=50)
    def test_from_pairs_round_trip(self, ops):
        """Rebuilding from items() gives the same entries in the same order."""
        sut, _ = build(ops)

        rebuilt = Map.from_pairs(sut.items())

        assert snapshot(rebuilt) == snapshot(sut)
