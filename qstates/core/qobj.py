"""
The Quantum Object (Qobj) classes, used to wrap the vector or matrix
representation of a state together with the tensor structure of its space.
"""
from __future__ import annotations

import functools
import numbers

import numpy as np
import scipy.linalg
import scipy.sparse

from ..settings import settings
from .dimensions import Space

__all__ = ['Qobj', 'Ket', 'Bra', 'Operator', 'isket', 'isbra', 'isoper']


def _to_storage(arg, copy):
    """
    Return ``arg`` as a complex 2d array or a compressed sparse matrix.
    """
    if scipy.sparse.issparse(arg):
        data = arg.astype(complex, copy=copy)
        if data.format not in ("csr", "csc"):
            data = data.tocsr()
        return data
    if copy:
        data = np.array(arg, dtype=complex)
    else:
        data = np.asarray(arg, dtype=complex)
    if data.ndim == 1:
        data = data.reshape((-1, 1))
    if data.ndim != 2:
        raise ValueError("Qobj data must be a vector or a matrix, got "
                         f"an array of shape {data.shape}")
    return data


def _dense(data):
    if scipy.sparse.issparse(data):
        return data.toarray()
    return data


def _tidyup(data, atol):
    if scipy.sparse.issparse(data):
        data.data[np.abs(data.data) < atol] = 0
        data.eliminate_zeros()
    else:
        data[np.abs(data) < atol] = 0
    return data


def _max_abs(data):
    if scipy.sparse.issparse(data):
        return abs(data).max() if data.nnz else 0.
    return np.max(np.abs(data))


def _require_equal_type(method):
    """
    Decorate a binary Qobj method to ensure both operands are Qobj and of the
    same type and dimensions.  ``0`` is accepted as the additive identity.
    """
    @functools.wraps(method)
    def out(self, other):
        if isinstance(other, Qobj):
            if self.type != other.type or self.dims != other.dims:
                msg = (
                    "incompatible quantum objects: "
                    + f"{self.type} {list(self.dims)} and "
                    + f"{other.type} {list(other.dims)}"
                )
                raise ValueError(msg)
            return method(self, other)
        if isinstance(other, numbers.Number) and other == 0:
            return self.copy()
        return NotImplemented

    return out


class _QobjBuilder(type):
    qobjtype_to_class = {}

    @staticmethod
    def _guess_type(shape):
        if shape[0] == shape[1]:
            return 'oper'
        if shape[1] == 1:
            return 'ket'
        if shape[0] == 1:
            return 'bra'
        raise ValueError(f"Quantum objects of shape {shape} are not "
                         "supported: expected a vector or a square matrix")

    def __call__(
        cls,
        arg=None,
        dims=None,
        copy: bool = True,
        isherm: bool = None,
        isnormalized: bool = None,
    ):
        if arg is None:
            raise TypeError("Qobj needs data to be built")
        if isinstance(arg, Qobj):
            dims = arg.dims if dims is None else dims
            if isherm is None:
                isherm = arg._isherm
            if isnormalized is None:
                isnormalized = getattr(arg, "isnormalized", None)
            arg = arg.data
        data = _to_storage(arg, copy)
        if cls is Qobj:
            cls = _QobjBuilder.qobjtype_to_class[
                _QobjBuilder._guess_type(data.shape)
            ]
        new_qobj = cls.__new__(cls)
        new_qobj.__init__(data, dims, isherm=isherm,
                          isnormalized=isnormalized)
        return new_qobj


class Qobj(metaclass=_QobjBuilder):
    """
    A class for representing quantum objects, such as states and operators.

    ``Qobj(arg, dims)`` returns a :class:`Ket`, :class:`Bra` or
    :class:`Operator` depending on the shape of ``arg``.  The data is kept
    either as a compressed ``scipy.sparse`` matrix or as a 2d ``numpy`` array
    of complex numbers.

    Parameters
    ----------
    arg : array_like, scipy.sparse matrix or :obj:`.Qobj`
        Data for vector/matrix representation of the quantum object.
    dims : int or sequence of ints, optional
        Dimension of each subsystem; their product must match the data.
        Defaults to a single subsystem.
    copy : bool, default: True
        Flag specifying whether Qobj should get a copy of the input data, or
        use the original.
    isherm : bool, optional
        Known hermiticity of an operator, saving the check.
    isnormalized : bool, optional
        Whether an operator is a trace-normalized density matrix.

    Attributes
    ----------
    data : numpy.ndarray or scipy.sparse matrix
        The vector / matrix representation.
    dims : tuple of ints
        Dimension of each subsystem, keeping track of the tensor structure.
    shape : tuple
        Shape of the underlying `data` array.
    type : str
        Type of quantum object: 'bra', 'ket' or 'oper'.
    """
    type = None
    _isherm = None
    # Let numpy scalars defer to the Qobj arithmetic.
    __array_ufunc__ = None

    def __init__(self, data, dims=None, **flags):
        self.data = data
        size = self._size(data.shape)
        space = Space(size if dims is None else dims)
        if space.size != size:
            raise ValueError('Provided dimensions do not match the data: '
                             f"{list(space.dims)} vs {data.shape}")
        self._space = space

    def _size(self, shape):
        raise NotImplementedError

    def _new(self, data, **flags):
        out = type(self).__new__(type(self))
        out.__init__(data, self._space, **flags)
        return out

    @property
    def dims(self) -> tuple[int, ...]:
        return self._space.dims

    @property
    def shape(self) -> tuple[int, int]:
        return self.data.shape

    @property
    def issparse(self) -> bool:
        return scipy.sparse.issparse(self.data)

    @property
    def nnz(self) -> int:
        """ Number of stored nonzero entries. """
        if self.issparse:
            return self.data.count_nonzero()
        return int(np.count_nonzero(self.data))

    @property
    def isket(self) -> bool:
        return False

    @property
    def isbra(self) -> bool:
        return False

    @property
    def isoper(self) -> bool:
        return False

    @property
    def _left(self):
        raise NotImplementedError

    @property
    def _right(self):
        raise NotImplementedError

    def copy(self) -> Qobj:
        """Create identical copy"""
        return type(self)(self, copy=True)

    def full(self) -> np.ndarray:
        """
        Dense array from quantum object.

        Returns
        -------
        data : array
            Array of complex data from quantum objects `data` attribute.
        """
        if self.issparse:
            return self.data.toarray()
        return self.data.copy()

    def to(self, dtype: str) -> Qobj:
        """
        Convert the underlying data store to the requested format.

        Parameters
        ----------
        dtype : str {"dense", "csr", "csc"}
            The storage format of the new object.
        """
        if dtype == "dense":
            data = self.full()
        elif dtype in ("csr", "csc"):
            data = scipy.sparse.csr_matrix(self.data).asformat(dtype)
        else:
            raise TypeError("dtype must be one of 'dense', 'csr', 'csc', "
                            f"not {dtype!r}")
        return self._new(data, **self._flags())

    def _flags(self):
        return {}

    def tidyup(self, atol: float = None) -> Qobj:
        """
        Removes small elements from the quantum object, in place.

        Parameters
        ----------
        atol : float, optional
            Absolute tolerance used by tidyup. Default is set
            via ``settings.core['auto_tidyup_atol']``.
        """
        atol = atol or settings.core['auto_tidyup_atol']
        self.data = _tidyup(self.data, atol)
        return self

    def _auto_tidyup(self, data):
        if settings.core['auto_tidyup']:
            return _tidyup(data, settings.core['auto_tidyup_atol'])
        return data

    def dag(self) -> Qobj:
        """Get the Hermitian adjoint of the quantum object."""
        raise NotImplementedError

    def conj(self) -> Qobj:
        """Get the element-wise conjugation of the quantum object."""
        return self._new(self.data.conj())

    def norm(self) -> float:
        raise NotImplementedError

    def unit(self) -> Qobj:
        """
        State or operator normalized to unity.  Uses norm from Qobj.norm().
        """
        return self / self.norm()

    @_require_equal_type
    def __add__(self, other: Qobj) -> Qobj:
        if self.issparse and other.issparse:
            data = self.data + other.data
        else:
            data = _dense(self.data) + _dense(other.data)
        isherm = (self._isherm and other._isherm) or None
        return self._new(self._auto_tidyup(data), isherm=isherm)

    def __radd__(self, other: Qobj) -> Qobj:
        return self.__add__(other)

    def __sub__(self, other: Qobj) -> Qobj:
        if not isinstance(other, Qobj):
            return self.__add__(other)
        return self.__add__(-other)

    def __rsub__(self, other: Qobj) -> Qobj:
        return (-self).__add__(other)

    def __neg__(self) -> Qobj:
        return self._new(-self.data, isherm=self._isherm)

    def __mul__(self, other):
        if isinstance(other, Qobj):
            return self.__matmul__(other)
        if not isinstance(other, numbers.Number):
            return NotImplemented
        isherm = self._isherm if complex(other).imag == 0 else None
        flags = self._flags() if other == 1 else {}
        flags["isherm"] = isherm
        return self._new(self.data * other, **flags)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __truediv__(self, other):
        if not isinstance(other, numbers.Number):
            return NotImplemented
        return self.__mul__(1 / other)

    def __matmul__(self, other: Qobj):
        if not isinstance(other, Qobj):
            return NotImplemented
        if self._right != other._left:
            raise ValueError(
                "incompatible dimensions for product: "
                + f"{self.type} {list(self.dims)} and "
                + f"{other.type} {list(other.dims)}"
            )
        if self.issparse or not other.issparse:
            data = self.data @ other.data
        else:
            # dense @ sparse, computed without densifying the sparse operand
            data = (other.data.T @ self.data.T).T
        left, right = self._left, other._right
        if left is None and right is None:
            return complex(_dense(data)[0, 0])
        if left is None:
            cls = Bra
        elif right is None:
            cls = Ket
        elif left == right:
            cls = Operator
        else:
            raise ValueError("outer products are only supported between "
                             "states of the same space")
        return cls(self._auto_tidyup(data), left or right, copy=False)

    def __eq__(self, other) -> bool:
        if self is other:
            return True
        if (
            not isinstance(other, Qobj)
            or self.type != other.type
            or self.dims != other.dims
        ):
            return False
        if self.issparse and other.issparse:
            diff = self.data - other.data
        else:
            diff = _dense(self.data) - _dense(other.data)
        scale = max(_max_abs(self.data), _max_abs(other.data))
        tol = settings.core['atol'] + settings.core['rtol'] * scale
        return _max_abs(diff) < tol

    __hash__ = None

    def __repr__(self) -> str:
        return self.__str__()

    def __str__(self) -> str:
        storage = self.data.format.upper() if self.issparse else "Dense"
        header = (
            f"Quantum object: dims={list(self.dims)}, shape={self.shape}, "
            f"type={self.type!r}, dtype={storage}"
        )
        return "\n".join([header, "Qobj data =", str(self.full())])


class _StateQobj(Qobj):
    def dag(self) -> Qobj:
        """Get the Hermitian adjoint of the state."""
        cls = Bra if self.isket else Ket
        return cls(self.data.conj().T, self.dims, copy=False)

    def norm(self) -> float:
        """
        L2 norm of the state vector.
        """
        if self.issparse:
            return float(np.sqrt(np.sum(np.abs(self.data.data)**2)))
        return float(np.linalg.norm(self.data))

    def proj(self) -> Operator:
        """Form the projector from a given ket or bra vector."""
        ket = self if self.isket else self.dag()
        return Operator(ket.data @ ket.data.conj().T, ket.dims,
                        copy=False, isherm=True)

    def ptrace(self, sel) -> Operator:
        """
        Reduced density matrix of the subsystems in ``sel``, all others being
        traced out.  See :func:`qstates.ptrace`.
        """
        from .tensor import ptrace
        return ptrace(self, sel)


class Ket(_StateQobj):
    """
    Column vector of shape ``(N, 1)`` representing a pure state.
    """
    type = 'ket'

    def _size(self, shape):
        if shape[1] != 1:
            raise ValueError(f"a ket must have one column, got {shape}")
        return shape[0]

    @property
    def isket(self) -> bool:
        return True

    @property
    def _left(self):
        return self.dims

    @property
    def _right(self):
        return None

    def overlap(self, other: Qobj) -> complex:
        """
        Overlap ``<self|other>`` between two states of the same space.
        """
        if other.isket:
            return self.dag() @ other
        return other @ self


class Bra(_StateQobj):
    """
    Row vector of shape ``(1, N)``, the adjoint of a :class:`Ket`.
    """
    type = 'bra'

    def _size(self, shape):
        if shape[0] != 1:
            raise ValueError(f"a bra must have one row, got {shape}")
        return shape[1]

    @property
    def isbra(self) -> bool:
        return True

    @property
    def _left(self):
        return None

    @property
    def _right(self):
        return self.dims

    def overlap(self, other: Qobj) -> complex:
        """
        Overlap ``<self|other>`` between two states of the same space.
        """
        if other.isket:
            return self @ other
        return self @ other.dag()


class Operator(Qobj):
    """
    Square matrix of shape ``(N, N)``, such as a density matrix.

    The ``isnormalized`` flag records that the operator is a density matrix
    with unit trace.
    """
    type = 'oper'

    def __init__(self, data, dims=None, isherm=None, isnormalized=None):
        super().__init__(data, dims)
        self._isherm = isherm
        self.isnormalized = bool(isnormalized)

    def _size(self, shape):
        if shape[0] != shape[1]:
            raise ValueError(f"an operator must be square, got {shape}")
        return shape[0]

    def _flags(self):
        return {"isherm": self._isherm, "isnormalized": self.isnormalized}

    @property
    def isoper(self) -> bool:
        return True

    @property
    def _left(self):
        return self.dims

    @property
    def _right(self):
        return self.dims

    @property
    def isherm(self) -> bool:
        if self._isherm is None:
            diff = self.data - self.data.conj().T
            self._isherm = bool(_max_abs(diff) < settings.core['atol'])
        return self._isherm

    def dag(self) -> Operator:
        """Get the Hermitian adjoint of the quantum object."""
        return Operator(self.data.conj().T, self.dims, isherm=self._isherm,
                        isnormalized=self.isnormalized)

    def tr(self) -> float | complex:
        """
        Trace of the operator.  The trace is real for Hermitian operators.
        """
        out = complex(self.data.diagonal().sum())
        return out.real if self.isherm else out

    def diag(self) -> np.ndarray:
        """
        Diagonal elements of the operator, real for Hermitian operators.
        """
        out = np.asarray(self.data.diagonal())
        return out.real if self.isherm else out

    def norm(self) -> float:
        """
        Trace norm of the operator: the sum of its singular values.
        """
        return float(np.sum(scipy.linalg.svdvals(self.full())))

    def expm(self) -> Operator:
        """
        Matrix exponential of the operator, as a dense operator.
        """
        return Operator(scipy.linalg.expm(self.full()), self.dims,
                        copy=False)

    def ptrace(self, sel) -> Operator:
        """
        Partial trace keeping the subsystems in ``sel``.  See
        :func:`qstates.ptrace`.
        """
        from .tensor import ptrace
        return ptrace(self, sel)


_QobjBuilder.qobjtype_to_class.update({
    'ket': Ket,
    'bra': Bra,
    'oper': Operator,
})


def isket(Q: object) -> bool:
    """ Determine if the given object is a :class:`Ket`. """
    return isinstance(Q, Ket)


def isbra(Q: object) -> bool:
    """ Determine if the given object is a :class:`Bra`. """
    return isinstance(Q, Bra)


def isoper(Q: object) -> bool:
    """ Determine if the given object is an :class:`Operator`. """
    return isinstance(Q, Operator)
