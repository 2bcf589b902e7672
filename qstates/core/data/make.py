"""
Construction of the storage of quantum objects directly from their nonzero
entries.  The compressed index arrays are filled in directly, so no dense
intermediate of the full space is ever allocated.
"""
import numbers

import numpy as np
import scipy.sparse

from ...settings import settings

__all__ = ['sparse_vector', 'sparse_diagonal', 'one_element', 'dense_vector',
           'zeros']


def _check_size(N):
    if (
        not isinstance(N, numbers.Integral)
        or isinstance(N, bool)
        or N <= 0
    ):
        raise ValueError("Dimensions must be integers > 0")
    if N > np.iinfo(np.int64).max:
        raise ValueError(f"space of size {N} is too large to index")
    return int(N)


def _index_dtype(N):
    return np.int32 if N < np.iinfo(np.int32).max else np.int64


def _sparse_format(format):
    format = format or settings.core["sparse_format"]
    if format not in ("csr", "csc"):
        raise TypeError("sparse format must be one of 'csr', 'csc'")
    return format


def sparse_vector(N, indices, amplitudes):
    """
    Create a sparse column vector from its nonzero entries.

    Parameters
    ----------
    N : int
        Size of the vector.

    indices : sequence of int
        Pairwise distinct positions of the entries, in ``[0, N)``.

    amplitudes : sequence of complex
        The value of each entry.

    Returns
    -------
    vec : scipy.sparse.csc_matrix
        Vector of shape ``(N, 1)``, stored as a single compressed column.
    """
    N = _check_size(N)
    idx_dtype = _index_dtype(N)
    indices = np.asarray(indices, dtype=np.int64).ravel()
    amplitudes = np.asarray(amplitudes, dtype=complex).ravel()
    if indices.shape != amplitudes.shape:
        raise ValueError("indices and amplitudes must have the same length: "
                         f"{indices.shape[0]} vs {amplitudes.shape[0]}")
    if indices.size and (indices.min() < 0 or indices.max() >= N):
        raise ValueError("Position of the elements out of bound: "
                         f"{indices.tolist()} in {N}")
    order = np.argsort(indices, kind="stable")
    indices = indices[order]
    if np.any(indices[1:] == indices[:-1]):
        raise ValueError("indices must be pairwise distinct")
    indptr = np.array([0, indices.size], dtype=idx_dtype)
    return scipy.sparse.csc_matrix(
        (amplitudes[order], indices.astype(idx_dtype), indptr),
        shape=(N, 1),
    )


def sparse_diagonal(N, amplitudes, format=None):
    """
    Create a square sparse matrix with ``amplitudes`` on the main diagonal.

    Parameters
    ----------
    N : int
        Number of rows and columns.

    amplitudes : sequence of complex
        The ``N`` diagonal entries.

    format : str {"csr", "csc"}, optional
        Compressed format of the output.  Defaults to
        ``settings.core["sparse_format"]``.
    """
    N = _check_size(N)
    format = _sparse_format(format)
    amplitudes = np.asarray(amplitudes, dtype=complex).ravel()
    if amplitudes.shape[0] != N:
        raise ValueError("a diagonal of size " + str(N) + " needs " + str(N)
                         + " entries, got " + str(amplitudes.shape[0]))
    idx_dtype = _index_dtype(N)
    # Row and column pointers coincide for a diagonal matrix.
    indices = np.arange(N, dtype=idx_dtype)
    indptr = np.arange(N + 1, dtype=idx_dtype)
    matrix = (scipy.sparse.csr_matrix if format == "csr"
              else scipy.sparse.csc_matrix)
    return matrix((amplitudes, indices, indptr), shape=(N, N))


def one_element(shape, position, value=1.0, format=None):
    """
    Create a sparse matrix with only one nonzero element.

    Parameters
    ----------
    shape : tuple
        The shape of the output as (``rows``, ``columns``).

    position : tuple
        The position of the non zero in the matrix as (``rows``, ``columns``).

    value : complex, optional
        The value of the non-null element.

    format : str {"csr", "csc"}, optional
        Compressed format of the output.  Column vectors are always "csc".
    """
    rows, cols = _check_size(shape[0]), _check_size(shape[1])
    if not (0 <= position[0] < rows and 0 <= position[1] < cols):
        raise ValueError("Position of the elements out of bound: " +
                         str(position) + " in " + str(shape))
    if cols == 1:
        return sparse_vector(rows, [position[0]], [value])
    format = _sparse_format(format)
    if format == "csr":
        idx_dtype = _index_dtype(rows)
        indptr = np.zeros(rows + 1, dtype=idx_dtype)
        indptr[position[0] + 1:] = 1
        return scipy.sparse.csr_matrix(
            (np.array([value], dtype=complex),
             np.array([position[1]], dtype=idx_dtype), indptr),
            shape=(rows, cols),
        )
    idx_dtype = _index_dtype(cols)
    indptr = np.zeros(cols + 1, dtype=idx_dtype)
    indptr[position[1] + 1:] = 1
    return scipy.sparse.csc_matrix(
        (np.array([value], dtype=complex),
         np.array([position[0]], dtype=idx_dtype), indptr),
        shape=(rows, cols),
    )


def zeros(N):
    """ Sparse column vector of size ``N`` with no stored entries. """
    return sparse_vector(N, [], [])


def dense_vector(amplitudes):
    """
    Column vector of shape ``(N, 1)`` holding a copy of ``amplitudes``.
    """
    amplitudes = np.array(amplitudes, dtype=complex).ravel()
    if amplitudes.shape[0] == 0:
        raise ValueError("Dimensions must be integers > 0")
    return amplitudes.reshape((-1, 1))
