"""
Module for the creation of composite quantum objects via the tensor product,
and for the partial trace back onto subsystems.
"""

__all__ = ['tensor', 'ptrace']

import numbers

import numpy as np
import scipy.sparse

from ..settings import settings
from .qobj import Qobj, Ket, Bra, Operator


def tensor(*args):
    """Calculates the tensor product of input operators or states.

    Parameters
    ----------
    args : array_like
        ``list`` or ``array`` of quantum objects of the same type for tensor
        product.

    Returns
    -------
    obj : :class:`.Qobj`
        A composite quantum object.

    Examples
    --------
    >>> tensor([basis(2, 1), basis(3, 0)]).dims
    (2, 3)
    """
    if not args:
        raise TypeError("Requires at least one input argument")
    if len(args) == 1 and isinstance(args[0], (list, tuple, np.ndarray)):
        # tensor([q1, q2, q3, ...])
        qlist = args[0]
    else:
        # tensor(q1, q2, q3, ...)
        qlist = args
    if not all(isinstance(q, Qobj) for q in qlist):
        raise TypeError("One of inputs is not a quantum object")
    if len(qlist) == 0:
        raise TypeError("Requires at least one input argument")
    if len({q.type for q in qlist}) != 1:
        raise TypeError("Requires all Qobj to be of the same type")

    out = qlist[0]
    if len(qlist) == 1:
        return out.copy()
    sparse = all(q.issparse for q in qlist)
    data = out.data
    dims = list(out.dims)
    for q in qlist[1:]:
        if sparse:
            data = scipy.sparse.kron(data, q.data, format=q.data.format)
        else:
            data = np.kron(_full(data), q.full())
        dims += list(q.dims)

    flags = {}
    if out.isoper:
        flags["isherm"] = all(q._isherm for q in qlist) or None
        flags["isnormalized"] = all(q.isnormalized for q in qlist)
    return type(out)(data, dims, copy=False, **flags)


def _full(data):
    if scipy.sparse.issparse(data):
        return data.toarray()
    return data


def ptrace(Q, sel):
    """
    Partial trace of the quantum object ``Q``, keeping the subsystems listed
    in ``sel`` and tracing out all the others.

    Kets and bras are promoted to density matrices first.  The kept
    subsystems are returned in their original order, whatever the order of
    ``sel``.

    Parameters
    ----------
    Q : :class:`.Qobj`
        Composite quantum object.

    sel : int or sequence of int
        Indices of the subsystems to keep.

    Returns
    -------
    oper : :class:`.Operator`
        Reduced density operator on the kept subsystems.
    """
    if isinstance(sel, numbers.Integral):
        sel = [sel]
    dims = Q.dims
    nsub = len(dims)
    sel = sorted(set(int(i) for i in sel))
    if not sel:
        raise ValueError("at least one subsystem must be kept")
    if sel[0] < 0 or sel[-1] >= nsub:
        raise IndexError(f"Invalid selection {sel} for dims {list(dims)}")
    kept = [dims[i] for i in sel]
    size = int(np.prod(kept))

    letters = [chr(ord('a') + i) for i in range(nsub)]
    primed = [chr(ord('A') + i) if i in sel else letters[i]
              for i in range(nsub)]
    out_idx = ("".join(letters[i] for i in sel)
               + "".join(primed[i] for i in sel))

    if isinstance(Q, (Ket, Bra)):
        psi = Q.full().reshape(dims)
        if isinstance(Q, Bra):
            psi = psi.conj()
        expr = "".join(letters) + "," + "".join(primed) + "->" + out_idx
        rho = np.einsum(expr, psi, psi.conj())
        isnormalized = abs(Q.norm() - 1) < settings.core['atol']
    else:
        rho = Q.full().reshape(tuple(dims) * 2)
        expr = "".join(letters) + "".join(primed) + "->" + out_idx
        rho = np.einsum(expr, rho)
        isnormalized = Q.isnormalized
    return Operator(rho.reshape((size, size)), kept, copy=False,
                    isnormalized=isnormalized)
