"""
This module contains functions for generating the ladder operators of a
truncated harmonic oscillator, and the displacement operator built from them.
"""

__all__ = ['destroy', 'create', 'num', 'qeye', 'displace']

import numbers

import numpy as np
import scipy.sparse

from ..logging_utils import get_logger
from .data import sparse_diagonal
from .dimensions import Space
from .qobj import Operator

logger = get_logger('qstates.core.operators')


def _check_N(N):
    if not isinstance(N, numbers.Integral) or N <= 0:
        raise ValueError("Hilbert space dimension must be integer value > 0")
    return int(N)


def destroy(N):
    """Destruction (lowering) operator.

    Parameters
    ----------
    N : int
        Dimension of Hilbert space.

    Returns
    -------
    oper : :class:`.Operator`
        Qobj for lowering operator.

    Examples
    --------
    >>> destroy(4) # doctest: +SKIP
    Quantum object: dims=[4], shape=(4, 4), type='oper', dtype=CSR
    Qobj data =
    [[0.        +0.j 1.        +0.j 0.        +0.j 0.        +0.j]
     [0.        +0.j 0.        +0.j 1.41421356+0.j 0.        +0.j]
     [0.        +0.j 0.        +0.j 0.        +0.j 1.73205081+0.j]
     [0.        +0.j 0.        +0.j 0.        +0.j 0.        +0.j]]
    """
    N = _check_N(N)
    data = scipy.sparse.diags(np.sqrt(np.arange(1, N, dtype=complex)), 1,
                              shape=(N, N), format='csr', dtype=complex)
    return Operator(data, N, copy=False, isherm=(N == 1))


def create(N):
    """Creation (raising) operator.

    Parameters
    ----------
    N : int
        Dimension of Hilbert space.

    Returns
    -------
    oper : :class:`.Operator`
        Qobj for raising operator.
    """
    return destroy(N).dag()


def num(N):
    """Quantum object for number operator.

    Parameters
    ----------
    N : int
        The dimension of the Hilbert space.

    Returns
    -------
    oper: :class:`.Operator`
        Qobj for number operator.
    """
    N = _check_N(N)
    return Operator(sparse_diagonal(N, np.arange(N)), N, copy=False,
                    isherm=True)


def qeye(dimensions):
    """
    Identity operator.

    Parameters
    ----------
    dimensions : int or sequence of ints
        Dimension of Hilbert space.  If a sequence, the identity acts on the
        tensor product of spaces with those dimensions.

    Returns
    -------
    oper : :class:`.Operator`
        Identity operator Qobj.
    """
    space = Space(dimensions)
    return Operator(sparse_diagonal(space.size, np.ones(space.size)), space,
                    copy=False, isherm=True)


def displace(N, alpha):
    """Single-mode displacement operator.

    ``D(alpha) = exp(alpha a^dag - conj(alpha) a)`` with ``a`` the truncated
    lowering operator, computed as a dense matrix exponential.

    Parameters
    ----------
    N : int
        Dimension of Hilbert space.

    alpha : float/complex
        Displacement amplitude.

    Returns
    -------
    oper : :class:`.Operator`
        Displacement operator.

    Examples
    ---------
    >>> displace(4,0.25) # doctest: +SKIP
    Quantum object: dims=[4], shape=(4, 4), type='oper', dtype=Dense
    Qobj data =
    [[ 0.96923323+0.j -0.24230859+0.j  0.04282883+0.j -0.00626025+0.j]
     [ 0.24230859+0.j  0.90866411+0.j -0.33183303+0.j  0.07418172+0.j]
     [ 0.04282883+0.j  0.33183303+0.j  0.84809499+0.j -0.41083747+0.j]
     [ 0.00626025+0.j  0.07418172+0.j  0.41083747+0.j  0.90866411+0.j]]
    """
    a = destroy(N)
    logger.debug("displacement operator: N=%d, alpha=%s", N, alpha)
    return (alpha * a.dag() - np.conj(alpha) * a).expm()
