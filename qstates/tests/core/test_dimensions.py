import itertools

import numpy as np
import pytest
from hypothesis import given

import qstates
from qstates.core.dimensions import Space, to_dims
from qstates.tests import strategies as qst


@pytest.mark.parametrize(["dims", "state", "index"], [
    pytest.param([2, 2, 2], [1, 1, 0], 6, id="qubits"),
    pytest.param([5, 2, 3], [3, 0, 1], 19, id="mixed radix"),
    pytest.param([7], [4], 4, id="single"),
    pytest.param([3, 4], [0, 0], 0, id="first"),
    pytest.param([3, 4], [2, 3], 11, id="last"),
    pytest.param([1, 5, 1], [0, 2, 0], 2, id="trivial subsystems"),
])
def test_state_number_index(dims, state, index):
    assert qstates.state_number_index(dims, state) == index
    assert qstates.state_index_number(dims, index) == tuple(state)


@pytest.mark.parametrize("dims", [[2, 2], [2, 3, 4], [3], [1, 2]])
def test_state_number_enumerate_order(dims):
    states = list(qstates.state_number_enumerate(dims))
    assert states == list(itertools.product(*[range(d) for d in dims]))
    for index, state in enumerate(states):
        assert qstates.state_number_index(dims, state) == index


@given(qst.labelled_dims())
def test_flatten_unflatten(args):
    dims, state = args
    index = qstates.state_number_index(dims, state)
    qst.note(dims=dims, state=state, index=index)
    assert 0 <= index < np.prod(dims)
    assert qstates.state_index_number(dims, index) == tuple(state)


@given(qst.indexed_dims())
def test_unflatten_flatten(args):
    dims, index = args
    state = qstates.state_index_number(dims, index)
    assert qstates.state_number_index(dims, state) == index


def test_step_matches_flat_index():
    space = Space([5, 2, 3])
    assert space.step() == [6, 3, 1]
    assert space.size == 30
    assert len(space) == 3


def test_space_is_interned():
    assert Space([2, 3]) is Space((2, 3))
    assert Space(4) is Space([4])
    assert Space(Space([2, 3])) is Space([2, 3])
    assert Space([2, 3]) != Space([3, 2])


@pytest.mark.parametrize(["dims", "nsub", "expected"], [
    pytest.param(3, None, (3,), id="int"),
    pytest.param(2, 4, (2, 2, 2, 2), id="broadcast"),
    pytest.param([5, 2, 3], 3, (5, 2, 3), id="list"),
    pytest.param(np.array([2, 2]), None, (2, 2), id="array"),
])
def test_to_dims(dims, nsub, expected):
    assert to_dims(dims, nsub) == expected


@pytest.mark.parametrize("dims", [
    pytest.param([], id="empty"),
    pytest.param([2, 0], id="zero"),
    pytest.param([-1], id="negative"),
    pytest.param([1.5], id="fraction"),
    pytest.param([True, 2], id="bool"),
])
def test_to_dims_invalid(dims):
    with pytest.raises(ValueError):
        to_dims(dims)


class TestOutOfRange:
    def test_single_subsystem(self):
        with pytest.raises(qstates.OutOfRangeLevel) as exc:
            qstates.state_number_index([3], [3])
        assert exc.value.level == 3
        assert exc.value.dim == 3
        assert exc.value.subsystem is None
        assert str(exc.value) == "basis level 3 is too large for a 3-d space"

    def test_composite_names_subsystem(self):
        with pytest.raises(qstates.OutOfRangeLevel) as exc:
            qstates.state_number_index([2, 3], [2, 0])
        assert exc.value.subsystem == 0
        assert "(subsystem 0)" in str(exc.value)

    def test_negative(self):
        with pytest.raises(qstates.OutOfRangeLevel) as exc:
            qstates.state_number_index([2, 3], [0, -1])
        assert exc.value.subsystem == 1
        assert "non-negative" in str(exc.value)

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            qstates.state_number_index([4], [7])
        assert issubclass(qstates.OutOfRangeLevel, qstates.QstatesError)


def test_state_number_index_wrong_length():
    with pytest.raises(ValueError) as exc:
        qstates.state_number_index([2, 2], [0, 1, 1])
    assert not isinstance(exc.value, qstates.OutOfRangeLevel)


@pytest.mark.parametrize("state", [[0.5, 0], [True, 0], ["1", 0]])
def test_state_number_index_not_integer(state):
    with pytest.raises(TypeError):
        qstates.state_number_index([2, 2], state)


@pytest.mark.parametrize("index", [-1, 4])
def test_state_index_number_out_of_range(index):
    with pytest.raises(IndexError):
        qstates.state_index_number([2, 2], index)
