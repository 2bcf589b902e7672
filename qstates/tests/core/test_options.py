import pytest

import qstates
from qstates import CoreOptions


def test_default():
    opt = CoreOptions()
    assert opt["atol"] == 1e-12
    assert opt["rtol"] == 1e-12
    assert opt["auto_tidyup"] is True
    assert opt["auto_tidyup_atol"] == 1e-14
    assert opt["sparse_format"] == "csr"
    assert "atol" in opt
    assert "unknown" not in opt


def test_global_default_is_core_options():
    assert isinstance(qstates.settings.core, CoreOptions)


def test_unknown_option():
    with pytest.raises(KeyError):
        CoreOptions(not_an_option=1)
    with pytest.raises(KeyError):
        qstates.settings.core["not_an_option"] = 1
    with pytest.raises(KeyError):
        qstates.settings.core["not_an_option"]


def test_context_restores_previous():
    previous = qstates.settings.core
    with CoreOptions(atol=1e-3) as opt:
        assert qstates.settings.core is opt
        assert qstates.settings.core["atol"] == 1e-3
    assert qstates.settings.core is previous
    assert qstates.settings.core["atol"] == 1e-12


def test_context_restores_after_error():
    previous = qstates.settings.core
    with pytest.raises(RuntimeError):
        with CoreOptions(auto_tidyup=False):
            raise RuntimeError
    assert qstates.settings.core is previous


def test_set_global_item():
    qstates.settings.core["atol"] = 1e-6
    assert qstates.basis(2, 0) == qstates.Qobj([[1 + 1e-8], [0]])


def test_invalid_sparse_format():
    with pytest.raises(ValueError):
        with CoreOptions(sparse_format="coo"):
            pass
    assert qstates.settings.core["sparse_format"] == "csr"
    with pytest.raises(ValueError):
        qstates.settings.core["sparse_format"] = "dia"


def test_sparse_format_drives_generators():
    with CoreOptions(sparse_format="csc"):
        assert qstates.maxmixed(2).data.format == "csc"
        assert qstates.thermal(3, 1).data.format == "csc"
        assert qstates.fock_dm(3, 1).data.format == "csc"
    assert qstates.maxmixed(2).data.format == "csr"


def test_repr():
    text = repr(CoreOptions(atol=1e-3))
    assert text.startswith("<CoreOptions(")
    assert "'atol': 0.001" in text
