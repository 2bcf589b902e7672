import numpy as np
import pytest

import qstates
from qstates.tests import strategies as qst


def test_destroy():
    a = qstates.destroy(4)
    expected = np.diag(np.sqrt([1, 2, 3]), 1)
    qst.assert_allclose(a.full(), expected)
    assert a.issparse
    assert not a.isherm


def test_create():
    qst.assert_allclose(qstates.create(4).full(),
                        np.diag(np.sqrt([1, 2, 3]), -1))


def test_number_is_create_destroy():
    a = qstates.destroy(6)
    assert a.dag() @ a == qstates.num(6)


def test_num(sparse_format):
    n = qstates.num(5)
    assert n.data.format == sparse_format
    np.testing.assert_array_equal(n.diag(), np.arange(5))
    assert n.isherm


@pytest.mark.parametrize("dims", [3, [2, 3]])
def test_qeye(dims):
    eye = qstates.qeye(dims)
    size = int(np.prod(dims))
    assert eye.dims == qstates.Space(dims).dims
    qst.assert_allclose(eye.full(), np.eye(size))


@pytest.mark.parametrize("function", [qstates.destroy, qstates.num])
@pytest.mark.parametrize("N", [0, -3, 2.5])
def test_invalid_dimension(function, N):
    with pytest.raises(ValueError):
        function(N)


class TestDisplace:
    def test_documented_values(self):
        out = qstates.displace(4, 0.25)
        expected = np.array([
            [0.96923323, -0.24230859, 0.04282883, -0.00626025],
            [0.24230859, 0.90866411, -0.33183303, 0.07418172],
            [0.04282883, 0.33183303, 0.84809499, -0.41083747],
            [0.00626025, 0.07418172, 0.41083747, 0.90866411],
        ])
        qst.assert_allclose(out.full(), expected, atol=1e-8)

    @pytest.mark.parametrize("alpha", [0.3, 1j, -0.7 + 0.2j])
    def test_unitary(self, alpha):
        D = qstates.displace(10, alpha)
        assert D.dag() @ D == qstates.qeye(10).to("dense")

    def test_inverse(self):
        D = qstates.displace(10, 0.5 + 0.5j)
        Dm = qstates.displace(10, -0.5 - 0.5j)
        qst.assert_allclose((D @ Dm).full(), np.eye(10), atol=1e-12)
