from __future__ import annotations

import pytest
pytest.importorskip("hypothesis")
from hypothesis import given, strategies as st

from growseq import GrowableSequence


_values = st.integers(min_value=-50, max_value=50)

_operations = st.lists(
    st.one_of(
        st.tuples(st.just("push_back"), _values),
        st.tuples(st.just("insert"), st.integers(min_value=0, max_value=40), _values),
        st.tuples(st.just("erase"), st.integers(min_value=0, max_value=40)),
        st.tuples(st.just("pop_back")),
        st.tuples(st.just("resize"), st.integers(min_value=0, max_value=40)),
        st.tuples(st.just("reserve"), st.integers(min_value=0, max_value=40)),
        st.tuples(st.just("clear")),
    ),
    max_size=60,
)


def _apply(seq: GrowableSequence, model: list, op: tuple) -> None:
    name = op[0]
    if name == "push_back":
        seq.push_back(op[1])
        model.append(op[1])
    elif name == "insert":
        position = min(op[1], len(model))
        seq.insert(position, op[2])
        model.insert(position, op[2])
    elif name == "erase" and model:
        position = op[1] % len(model)
        seq.erase(position)
        del model[position]
    elif name == "pop_back" and model:
        seq.pop_back()
        model.pop()
    elif name == "resize":
        seq.resize(op[1])
        if op[1] <= len(model):
            del model[op[1]:]
        else:
            model.extend([0] * (op[1] - len(model)))
    elif name == "reserve":
        seq.reserve(op[1])
    elif name == "clear":
        seq.clear()
        model.clear()


@pytest.mark.property
@given(_operations)
def test_operations_match_list_model_and_keep_size_within_capacity(operations):
    seq: GrowableSequence[int] = GrowableSequence(default_factory=int)
    model: list[int] = []
    for op in operations:
        capacity_before = seq.capacity
        _apply(seq, model, op)
        assert seq.size <= seq.capacity
        assert seq.capacity >= capacity_before
        assert seq.to_list() == model


@pytest.mark.property
@given(st.lists(_values, max_size=20), st.lists(_values, max_size=20))
def test_ordering_matches_builtin_lists(left, right):
    a = GrowableSequence(left)
    b = GrowableSequence(right)
    assert (a < b) == (left < right)
    assert (a <= b) == (left <= right)
    assert (a > b) == (left > right)
    assert (a >= b) == (left >= right)
    assert (a == b) == (left == right)
    assert (a != b) == (left != right)


@pytest.mark.property
@given(st.lists(_values, max_size=30))
def test_copy_is_equal_and_independent(values):
    source = GrowableSequence(values)
    clone = GrowableSequence.copy_of(source)
    assert clone == source
    assert clone.capacity == clone.size
    clone.push_back(1000)
    assert source.to_list() == values
