import numpy as np
import pytest
import scipy.sparse
from hypothesis import given, strategies as st

from qstates.core import data as _data
from qstates.tests import strategies as qst


class TestSparseVector:
    def test_structure(self):
        vec = _data.sparse_vector(64, [42, 0, 21, 63], [4, 1, 2, 3])
        assert scipy.sparse.isspmatrix_csc(vec)
        assert vec.shape == (64, 1)
        assert vec.nnz == 4
        np.testing.assert_array_equal(vec.indices, [0, 21, 42, 63])
        np.testing.assert_array_equal(vec.indptr, [0, 4])
        np.testing.assert_array_equal(vec.data, [1, 2, 4, 3])
        assert vec.has_sorted_indices

    def test_empty(self):
        vec = _data.zeros(5)
        assert vec.shape == (5, 1)
        assert vec.nnz == 0
        np.testing.assert_array_equal(vec.toarray(), np.zeros((5, 1)))

    def test_large_space_no_dense_allocation(self):
        # 2**40 entries could never be allocated densely.
        N = 2**40
        vec = _data.sparse_vector(N, [0, N - 1], [1, 1])
        assert vec.shape == (N, 1)
        assert vec.indices.dtype == np.int64
        assert list(vec.indices) == [0, N - 1]

    @pytest.mark.parametrize(["indices", "amplitudes"], [
        pytest.param([0, 1], [1], id="length mismatch"),
        pytest.param([5], [1], id="too large"),
        pytest.param([-1], [1], id="negative"),
        pytest.param([1, 1], [1, 1], id="duplicate"),
    ])
    def test_invalid(self, indices, amplitudes):
        with pytest.raises(ValueError):
            _data.sparse_vector(5, indices, amplitudes)

    @pytest.mark.parametrize("N", [0, -2, 2.5, 2**63, 4**40])
    def test_invalid_size(self, N):
        with pytest.raises(ValueError):
            _data.sparse_vector(N, [], [])

    @given(st.integers(1, 200).flatmap(
        lambda N: st.tuples(
            st.just(N),
            st.sets(st.integers(0, N - 1), max_size=N),
        )
    ), st.data())
    def test_matches_dense(self, args, data):
        N, positions = args
        positions = list(positions)
        values = [data.draw(qst.amplitudes()) for _ in positions]
        vec = _data.sparse_vector(N, positions, values)
        expected = np.zeros((N, 1), dtype=complex)
        expected[positions, 0] = values
        qst.note(N=N, positions=positions, values=values)
        np.testing.assert_array_equal(vec.toarray(), expected)


class TestSparseDiagonal:
    def test_structure(self, sparse_format):
        diag = _data.sparse_diagonal(4, [1, 2, 3, 4])
        assert diag.format == sparse_format
        assert diag.nnz == 4
        np.testing.assert_array_equal(diag.indices, np.arange(4))
        np.testing.assert_array_equal(diag.indptr, np.arange(5))
        np.testing.assert_array_equal(diag.toarray(), np.diag([1, 2, 3, 4]))

    def test_explicit_format(self):
        assert _data.sparse_diagonal(2, [1, 1], format="csc").format == "csc"

    def test_invalid_format(self):
        with pytest.raises(TypeError):
            _data.sparse_diagonal(2, [1, 1], format="dia")

    def test_wrong_length(self):
        with pytest.raises(ValueError):
            _data.sparse_diagonal(3, [1, 1])


class TestOneElement:
    @pytest.mark.parametrize("position", [(0, 0), (2, 1), (3, 3)])
    def test_operator(self, sparse_format, position):
        out = _data.one_element((4, 4), position, 2j)
        assert out.format == sparse_format
        expected = np.zeros((4, 4), dtype=complex)
        expected[position] = 2j
        np.testing.assert_array_equal(out.toarray(), expected)

    def test_column_is_csc(self):
        out = _data.one_element((4, 1), (2, 0))
        assert out.format == "csc"
        np.testing.assert_array_equal(out.indices, [2])

    def test_out_of_bound(self):
        with pytest.raises(ValueError):
            _data.one_element((3, 3), (3, 0))


def test_dense_vector():
    out = _data.dense_vector([1, 2j, 3])
    assert out.shape == (3, 1)
    assert out.dtype == np.complex128


def test_dense_vector_empty():
    with pytest.raises(ValueError):
        _data.dense_vector([])
