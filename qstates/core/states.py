__all__ = ['basis', 'fock', 'fock_dm', 'coherent', 'coherent_dm', 'thermal',
           'maxmixed', 'maxentangled', 'ket', 'bra', 'qb', 'ket2dm',
           'zero_ket']

import numbers
from collections.abc import Sequence

import numpy as np

from ..logging_utils import get_logger
from ..settings import settings
from .data import sparse_vector, sparse_diagonal, one_element, dense_vector
from .data import zeros as _zeros
from .dimensions import Space, to_dims
from .operators import displace
from .qobj import Qobj, Ket, Operator

logger = get_logger('qstates.core.states')


def _check_N(N):
    if (
        not isinstance(N, numbers.Integral)
        or isinstance(N, bool)
        or N <= 0
    ):
        raise ValueError("N must be integer N > 0")
    return int(N)


def _dims_and_levels(N, n):
    """
    Normalise the ``(N, n)`` arguments of the Fock-like generators to a list
    of dimensions and a list of levels, ``n=None`` meaning the ground state.
    """
    if isinstance(N, numbers.Integral):
        N = [_check_N(N)]
    else:
        N = list(to_dims(N))
    if n is None:
        n = [0] * len(N)
    elif not isinstance(n, (list, tuple, np.ndarray)):
        n = [n]
    return N, list(n)


def basis(N, n=None):
    """Generates the vector representation of a Fock state.

    Parameters
    ----------
    N : int or list of ints
        Number of basis states in Hilbert space.  If a list, then the
        resultant object will be a tensor product over spaces with those
        dimensions.

    n : int or list of ints, optional
        Integer corresponding to desired number state.  The shape must match
        ``N``: if ``N`` is a list, then ``n`` must be a list of equal length.
        Defaults to the ground state of every subsystem.

    Returns
    -------
    state : :class:`.Ket`
        Sparse ket representing the requested number state ``|n>``.

    Raises
    ------
    OutOfRangeLevel
        If ``n`` is not in ``[0, N)``.

    Examples
    --------
    >>> basis(3, 2) # doctest: +SKIP
    Quantum object: dims=[3], shape=(3, 1), type='ket', dtype=CSC
    Qobj data =
    [[0.+0.j]
     [0.+0.j]
     [1.+0.j]]

    Notes
    -----
    A subtle incompatibility with the quantum optics toolbox: here::

        basis(N, 0) = ground state

    but in the qotoolbox::

        basis(N, 1) = ground state
    """
    N, n = _dims_and_levels(N, n)
    return ket(n, N)


def fock(N, n=None):
    """Bosonic Fock (number) state.

    Same as :func:`basis`.
    """
    return basis(N, n)


def fock_dm(N, n=None):
    """Density matrix representation of a Fock state

    Parameters
    ----------
    N : int or list of ints
        Number of basis states in Hilbert space, or the dimension of each
        subsystem.

    n : int or list of ints, optional
        Desired number state, the ground state of every subsystem by default.

    Returns
    -------
    dm : :class:`.Operator`
        Sparse projector ``|n><n|``, flagged as normalized.
    """
    N, n = _dims_and_levels(N, n)
    space = Space(N)
    idx = space.dims2idx(n)
    return Operator(one_element((space.size, space.size), (idx, idx)), space,
                    copy=False, isherm=True, isnormalized=True)


def coherent(N, alpha, analytic=False):
    """Generates a coherent state with eigenvalue alpha.

    Parameters
    ----------
    N : int
        Number of Fock states in Hilbert space.

    alpha : float/complex
        Eigenvalue of coherent state.

    analytic : bool, default: False
        Use the closed-form Fock-basis coefficients instead of displacing the
        vacuum.

    Returns
    -------
    state : :class:`.Ket`
        Dense ket for the coherent state.

    Examples
    --------
    >>> coherent(5, 0.25j) # doctest: +SKIP
    Quantum object: dims=[5], shape=(5, 1), type='ket', dtype=Dense
    Qobj data =
    [[ 9.69233235e-01+0.j        ]
     [ 0.00000000e+00+0.24230831j]
     [-4.28344935e-02+0.j        ]
     [ 0.00000000e+00-0.00618204j]
     [ 7.80904967e-04+0.j        ]]

    Notes
    -----
    By default the coherent state is the first column of the displacement
    operator :func:`displace` defined in the truncated Hilbert space of size
    ``N``, i.e. the displaced vacuum.  This method guarantees that the
    resulting state is normalized, at the cost of a dense matrix
    exponential.

    With ``analytic=True`` the coefficients are

    .. math::

        e^{-|\\alpha|^2/2} \\frac{\\alpha^n}{\\sqrt{n!}}, \\quad n = 0 .. N-1,

    computed in a single pass.  This does not guarantee that the state is
    normalized if truncated to a small number of Fock states, but gives the
    exact coefficients of the infinite-dimensional state.  Both methods
    converge as ``N`` grows.
    """
    N = _check_N(N)
    if analytic:
        sqrtn = np.sqrt(np.arange(N, dtype=complex))
        sqrtn[0] = 1  # Get rid of divide by zero warning
        data = alpha / sqrtn
        data[0] = np.exp(-abs(alpha)**2 / 2.0)
        np.cumprod(data, out=sqrtn)  # Reuse sqrtn array
        return Ket(dense_vector(sqrtn), N, copy=False)
    # first column of D(alpha), i.e. D(alpha)|0>
    column = displace(N, alpha).data[:, :1]
    return Ket(column, N, copy=True)


def coherent_dm(N, alpha, analytic=False):
    """Density matrix representation of a coherent state.

    Constructed via outer product of :func:`coherent`.

    Parameters
    ----------
    N : int
        Number of basis states in Hilbert space.

    alpha : float/complex
        Eigenvalue for coherent state.

    analytic : bool, default: False
        Method for generating the underlying ket, see :func:`coherent`.

    Returns
    -------
    dm : :class:`.Operator`
        Dense density matrix of the coherent state.  Only the displaced
        vacuum method is flagged as normalized.
    """
    out = ket2dm(coherent(N, alpha, analytic=analytic))
    out.isnormalized = not analytic
    return out


def thermal(N, n):
    """Density matrix for a thermal state of n particles

    The state is the mixture of the number states ``|k>``, ``k < N``, with
    weights proportional to ``exp(-beta k)`` where ``beta = ln(1/n + 1)``,
    normalized to unit trace.

    Parameters
    ----------
    N : int
        Number of basis states in Hilbert space.

    n : float
        Expectation value for number of particles in thermal state.

    Returns
    -------
    dm : :class:`.Operator`
        Sparse diagonal density matrix, flagged as normalized.

    Examples
    --------
    >>> rho = thermal(5, 0.2)
    >>> rho.diag() # doctest: +SKIP
    array([8.33440514e-01, 1.38906752e-01, 2.31511254e-02, 3.85852090e-03,
           6.43086817e-04])
    >>> expect(num(5), rho) # doctest: +SKIP
    0.19935691318327978

    Notes
    -----
    The expectation value of the number operator equals ``n`` only when
    ``N >> n``: truncating the distribution to ``N`` levels and renormalizing
    moves weight to the low levels, so the mean occupation is biased
    downwards.  ``n = 0`` gives the ground state ``|0><0|``.
    """
    N = _check_N(N)
    if not isinstance(n, numbers.Real):
        raise TypeError("the mean occupation n must be a real number")
    if np.isnan(n):
        raise ValueError("the mean occupation n must not be NaN")
    if n < 0:
        raise ValueError("the mean occupation n must be non-negative")
    if n == 0:
        return fock_dm(N, 0)
    beta = np.log(1.0 / float(n) + 1.0)
    # exp(-beta k) as a power series of exp(-beta), finite even for beta=inf
    diags = np.power(np.exp(-beta), np.arange(N))
    diags = diags / np.sum(diags)
    logger.debug("thermal state: N=%d, n=%s, beta=%s", N, n, beta)
    return Operator(sparse_diagonal(N, diags), N, copy=False,
                    isherm=True, isnormalized=True)


def maxmixed(N):
    """
    Returns the maximally mixed density matrix for a Hilbert space of
    dimension N.

    Parameters
    ----------
    N : int or list of ints
        Number of basis states in Hilbert space.  If a list, then the
        resultant object will be a tensor product over spaces with those
        dimensions.

    Returns
    -------
    dm : :class:`.Operator`
        Sparse diagonal density matrix with every entry ``1/N``, flagged as
        normalized.

    Examples
    --------
    >>> maxmixed(4).diag()
    array([0.25, 0.25, 0.25, 0.25])
    """
    space = Space(N)
    size = space.size
    return Operator(sparse_diagonal(size, np.full(size, 1 / size)), space,
                    copy=False, isherm=True, isnormalized=True)


def maxentangled(n, N=2):
    """
    Generate a maximally entangled state between ``n`` subsystems of
    dimension ``N``:

    .. math::

        |\\phi\\rangle = \\sum_{j=0}^{N-1} \\frac{1}{\\sqrt{N}} |j\\rangle^{\\otimes n}

    Tracing out all but one of the subsystems results in the maximally mixed
    state :func:`maxmixed`.

    Parameters
    ----------
    n : int
        Number of subsystems, at least 1.

    N : int, default: 2
        Dimension of each subsystem, at least 2.

    Returns
    -------
    state : :class:`.Ket`
        Sparse ket with ``N`` nonzero entries in a space of size ``N**n``.

    Examples
    --------
    >>> psi = maxentangled(3, 4)
    >>> psi.data.indices
    array([ 0, 21, 42, 63], dtype=int32)
    """
    if not isinstance(n, numbers.Integral) or n < 1:
        raise ValueError("the number of subsystems n must be an integer >= 1")
    if not isinstance(N, numbers.Integral) or N < 2:
        raise ValueError("the subsystem dimension N must be an integer >= 2")
    n, N = int(n), int(N)
    size = N**n
    # |j,j,...,j> sits at j * (1 + N + ... + N**(n-1))
    step = (size - 1) // (N - 1)
    indices = [m * step for m in range(N)]
    logger.debug("maxentangled: %d subsystems of dimension %d, stride %d",
                 n, N, step)
    return Ket(sparse_vector(size, indices, np.full(N, 1 / np.sqrt(N))),
               (N,) * n, copy=False)


_qubit_dict = {
    'g': 0,  # ground state
    'e': 1,  # excited state
    'u': 0,  # spin up
    'd': 1,  # spin down
    'H': 0,  # horizontal polarization
    'V': 1,  # vertical polarization
}


def _character_to_qudit(x):
    """
    Converts a character representing a one-particle state into int.
    """
    return _qubit_dict[x] if x in _qubit_dict else int(x)


def ket(state, dims=2):
    """
    Produces a multiparticle ket state for a list or string, where each
    element stands for state of the respective particle.

    Parameters
    ----------
    state : str / sequence of ints or characters
        Each element defines state of the respective particle.
        (e.g. ``(3, 0, 1)`` or a string ``"1101"``).
        For qubits it is also possible to use the following conventions:

        - 'g'/'e' (ground and excited state)
        - 'u'/'d' (spin up and down)
        - 'H'/'V' (horizontal and vertical polarization)

        Note: for dimension > 9 you need to use a sequence.

    dims : int / sequence of ints, default: 2
        Space dimension for each particle: int if they are the same, sequence
        if they are different.

    Returns
    -------
    ket : :class:`.Ket`
        Sparse ket with a single unit entry.

    Raises
    ------
    OutOfRangeLevel
        If a level is not smaller than the dimension of its particle.

    Examples
    --------
    >>> ket((3, 0, 1), (5, 2, 3)) # doctest: +SKIP
    Quantum object: dims=[5, 2, 3], shape=(30, 1), type='ket', dtype=CSC
    >>> ket((3, 0, 1), (5, 2, 3)).data.indices
    array([19], dtype=int32)
    >>> ket("Hue").data.indices
    array([1], dtype=int32)
    """
    if isinstance(state, str):
        state = [_character_to_qudit(x) for x in state]
    elif not isinstance(state, (Sequence, np.ndarray)):
        raise TypeError("state must be a sequence of basis levels")
    state = list(state)
    dims = to_dims(dims, len(state))
    if len(dims) != len(state):
        raise ValueError("All list inputs must be the same length.")
    space = Space(dims)
    idx = space.dims2idx(state)
    return Ket(sparse_vector(space.size, [idx], [1.]), space, copy=False)


def bra(state, dims=2):
    """
    Produces a multiparticle bra state for a list or string, where each
    element stands for state of the respective particle.

    Same arguments as :func:`ket`.
    """
    return ket(state, dims).dag()


def qb(*levels):
    """
    Generate a qubit state from the given argument list, e.g.
    ``qb(0, 1) - qb(1, 0)``.  Same as :func:`ket` with the levels passed as
    separate arguments and every dimension fixed to 2.
    """
    if not levels:
        raise ValueError("qb needs at least one qubit level")
    return ket(levels, 2)


def ket2dm(Q):
    """
    Takes input ket or bra vector and returns density matrix formed by outer
    product.  This is completely identical to calling ``Q.proj()``.

    Parameters
    ----------
    Q : :class:`.Ket` or :class:`.Bra`
        Ket or bra vector.

    Returns
    -------
    dm : :class:`.Operator`
        Density matrix formed by outer product of `Q`.
    """
    if not isinstance(Q, Qobj) or not (Q.isket or Q.isbra):
        raise TypeError("Input is not a ket or bra vector.")
    out = Q.proj()
    out.isnormalized = abs(Q.norm() - 1) < settings.core['atol']
    return out


def zero_ket(dims):
    """
    Creates the null ket vector with given Hilbert space dimensions.

    Parameters
    ----------
    dims : int or list of ints
        Dimension of each subsystem.

    Returns
    -------
    zero_ket : :class:`.Ket`
        Zero ket, with no stored entries.
    """
    space = Space(dims)
    return Ket(_zeros(space.size), space, copy=False)
