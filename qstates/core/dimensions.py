"""
Internal use module for manipulating the dimensions of composite Hilbert
spaces and converting between basis labels and flat indices.
"""
from __future__ import annotations

import numbers
from collections.abc import Iterator

from .errors import OutOfRangeLevel

__all__ = ['Space', 'to_dims', 'state_number_index', 'state_index_number',
           'state_number_enumerate']


def _frozen(*args, **kwargs):
    raise RuntimeError("Dimension cannot be modified.")


def to_dims(dims, nsub: int = None) -> tuple[int, ...]:
    """
    Normalise ``dims`` to a tuple of positive integers.

    Parameters
    ----------
    dims : int or sequence of ints
        Dimension of each subsystem.  A single ``int`` describes one subsystem,
        or ``nsub`` identical subsystems when ``nsub`` is given.

    nsub : int, optional
        Number of subsystems an integer ``dims`` is broadcast over.

    Returns
    -------
    dims : tuple of ints
    """
    if isinstance(dims, numbers.Integral):
        dims = (dims,) * (1 if nsub is None else nsub)
    elif isinstance(dims, Space):
        dims = dims.dims
    else:
        dims = tuple(dims)
    if len(dims) == 0:
        raise ValueError("Empty list can't be used as dims.")
    for dim in dims:
        if (
            not isinstance(dim, numbers.Integral)
            or isinstance(dim, bool)
            or dim <= 0
        ):
            raise ValueError("Dimensions must be integers > 0")
    return tuple(int(dim) for dim in dims)


class MetaSpace(type):
    def __call__(cls, dims) -> "Space":
        """
        Return the stored instance for these dimensions.
        """
        if isinstance(dims, Space):
            return dims
        dims = to_dims(dims)
        if dims not in cls._stored_dims:
            instance = cls.__new__(cls)
            instance.__init__(dims)
            cls._stored_dims[dims] = instance
        return cls._stored_dims[dims]


class Space(metaclass=MetaSpace):
    """
    The tensor-product structure of a Hilbert space.

    The flat index of the basis state ``|s1, s2, ..., sk>`` is the mixed-radix
    number with digits ``s1 ... sk`` and radices ``d1 ... dk``, the first
    subsystem being the most significant.

    Parameters
    ----------
    dims : int or sequence of ints
        Dimension of each subsystem.
    """
    _stored_dims = {}

    def __init__(self, dims):
        self.dims = dims
        self.size = 1
        for dim in dims:
            self.size *= dim
        steps = []
        step = 1
        for dim in dims[::-1]:
            steps.append(step)
            step *= dim
        self._steps = tuple(steps[::-1])
        self.__setitem__ = _frozen

    def __eq__(self, other) -> bool:
        return self is other or (
            type(other) is type(self) and other.dims == self.dims
        )

    def __hash__(self):
        return hash(self.dims)

    def __len__(self) -> int:
        return len(self.dims)

    def __repr__(self) -> str:
        return f"Space({list(self.dims)})"

    def __str__(self) -> str:
        return str(self.as_list())

    def as_list(self) -> list[int]:
        return list(self.dims)

    def step(self) -> list[int]:
        """
        Get the step in the array between for each dimensions index.

        If element ``[i, j, k]`` is ``ket.full()[m, 0]`` then element
        ``[i, j+1, k]`` is ``ket.full()[m + space.step()[1], 0]``.
        """
        return list(self._steps)

    def dims2idx(self, state) -> int:
        """
        Transform a basis label to the flat index of the full array.
        """
        state = tuple(state)
        if len(state) != len(self.dims):
            raise ValueError(
                "Length of supplied state does not match the number of "
                "subspaces."
            )
        single = len(self.dims) == 1
        pos = 0
        for i, (level, dim, step) in enumerate(
            zip(state, self.dims, self._steps)
        ):
            if (
                not isinstance(level, numbers.Integral)
                or isinstance(level, bool)
            ):
                raise TypeError("Basis levels must be integers")
            if not 0 <= level < dim:
                raise OutOfRangeLevel(level, dim, None if single else i)
            pos += int(level) * step
        return pos

    def idx2dims(self, idx: int) -> tuple[int, ...]:
        """
        Transform a flat index of the full array to its basis label.
        """
        if not isinstance(idx, numbers.Integral):
            raise TypeError("Index must be an integer")
        if not 0 <= idx < self.size:
            raise IndexError("Index out of range")
        state = []
        idx = int(idx)
        for dim in self.dims[::-1]:
            idx, level = divmod(idx, dim)
            state.append(level)
        return tuple(state[::-1])


def state_number_index(dims, state) -> int:
    """
    Return the index of a quantum state corresponding to state,
    given a system with dimensions given by dims.

    Example:

        >>> state_number_index([2, 2, 2], [1, 1, 0])
        6

    Parameters
    ----------
    dims : int or sequence of ints
        The dimension of each subsystem.

    state : sequence of ints
        State number array, one basis level per subsystem.

    Returns
    -------
    idx : int
        The index of the state given by `state` in standard enumeration
        ordering.

    Raises
    ------
    OutOfRangeLevel
        If a level is not smaller than the dimension of its subsystem.
    """
    return Space(dims).dims2idx(state)


def state_index_number(dims, index: int) -> tuple[int, ...]:
    """
    Return a quantum number representation given a state index, for a system
    of composite structure defined by dims.

    Example:

        >>> state_index_number([2, 2, 2], 6)
        (1, 1, 0)

    Parameters
    ----------
    dims : int or sequence of ints
        The dimension of each subsystem.

    index : integer
        The index of the state in standard enumeration ordering.

    Returns
    -------
    state : tuple
        The state number tuple corresponding to index `index` in standard
        enumeration ordering.
    """
    return Space(dims).idx2dims(index)


def state_number_enumerate(dims) -> Iterator[tuple[int, ...]]:
    """
    An iterator that enumerates all the state number tuples (quantum numbers
    on the form ``(n1, n2, n3, ...)``) for a system with dimensions given by
    dims, in flat-index order.

    Example:

        >>> for state in state_number_enumerate([2,2]):
        >>>     print(state)
        (0, 0)
        (0, 1)
        (1, 0)
        (1, 1)
    """
    dims = to_dims(dims)
    state = [0] * len(dims)
    while True:
        yield tuple(state)
        for i in range(len(dims) - 1, -1, -1):
            state[i] += 1
            if state[i] < dims[i]:
                break
            state[i] = 0
        else:
            return
