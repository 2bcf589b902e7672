__all__ = ['expect']

from collections.abc import Sequence

import numpy as np

from .qobj import Qobj


def expect(oper, state):
    """
    Calculate the expectation value for operator(s) and state(s).  The
    expectation of state ``k`` on operator ``A`` is defined as
    ``k.dag() @ A @ k``, and for density matrix ``R`` on operator ``A`` it is
    ``trace(A @ R)``.

    Parameters
    ----------
    oper : :class:`.Operator`
        Operator for the expectation value.

    state : :class:`.Qobj` / list of Qobj
        A single or a `list` of quantum states or density matrices.

    Returns
    -------
    expt : float / complex / array
        Expectation value(s).  ``real`` if ``oper`` is Hermitian, ``complex``
        otherwise.

    Examples
    --------
    >>> expect(num(4), basis(4, 3)) == 3 # doctest: +NORMALIZE_WHITESPACE
        True
    """
    if isinstance(state, Qobj):
        return _single_qobj_expect(oper, state)
    elif isinstance(state, Sequence):
        dtype = np.float64 if oper.isherm else np.complex128
        return np.array([_single_qobj_expect(oper, x) for x in state],
                        dtype=dtype)
    raise TypeError('Arguments must be quantum objects')


def _single_qobj_expect(oper, state):
    """
    Private function used by expect to calculate expectation values of Qobjs.
    """
    if not oper.isoper:
        raise TypeError('Operator must be an operator')
    if oper.dims != state.dims:
        raise ValueError(
            f"incompatible dimensions {list(oper.dims)} "
            f"and {list(state.dims)}"
        )
    if state.isket:
        out = state.dag() @ (oper @ state)
    elif state.isbra:
        out = state @ (oper @ state.dag())
    else:
        out = complex((oper @ state).data.diagonal().sum())
    if oper.isherm and (not state.isoper or state.isherm):
        return out.real
    return out
