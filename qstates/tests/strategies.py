""" Hypothesis strategies for qstates. """

import numpy as np

from hypothesis import strategies as st, note as _note


def note(**kwargs):
    """
    Generate hypothesis notes for each of the supplied arguments.
    """
    for key, value in kwargs.items():
        _note(f"{key}: {value!r}")


def dims(min_subsystems=1, max_subsystems=4, max_dim=6):
    """
    A strategy returning the dimensions of a composite space, as a list of
    positive integers.
    """
    return st.lists(
        st.integers(1, max_dim),
        min_size=min_subsystems,
        max_size=max_subsystems,
    )


@st.composite
def labelled_dims(draw, **kwargs):
    """
    A strategy returning ``(dims, state)`` where ``state`` is a valid basis
    label of the space with dimensions ``dims``.
    """
    space = draw(dims(**kwargs))
    state = [draw(st.integers(0, dim - 1)) for dim in space]
    return space, state


@st.composite
def indexed_dims(draw, **kwargs):
    """
    A strategy returning ``(dims, index)`` where ``index`` is a valid flat
    index of the space with dimensions ``dims``.
    """
    space = draw(dims(**kwargs))
    return space, draw(st.integers(0, int(np.prod(space)) - 1))


def amplitudes(max_magnitude=10):
    """
    A strategy returning finite complex numbers of bounded magnitude.
    """
    return st.complex_numbers(
        max_magnitude=max_magnitude, allow_nan=False, allow_infinity=False,
    )


def assert_allclose(actual, desired, atol=1e-12, rtol=1e-12):
    """ ``np.testing.assert_allclose`` with the qstates default tolerances. """
    np.testing.assert_allclose(actual, desired, atol=atol, rtol=rtol)
