import pytest

import qstates


@pytest.fixture(autouse=True)
def restore_core_options():
    """
    Put back the global core options after each test, so that a test which
    sets them without a context manager cannot leak into the others.
    """
    previous = qstates.settings.core
    options = previous.options.copy()
    yield
    previous.options = options
    previous._set_as_global_default()


@pytest.fixture(params=["csr", "csc"])
def sparse_format(request):
    """ Run the test once with each storage format of sparse operators. """
    with qstates.CoreOptions(sparse_format=request.param):
        yield request.param
