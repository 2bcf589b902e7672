from __future__ import annotations

import types
from typing import Any

from ..settings import settings

__all__ = ["CoreOptions"]


class QstatesOptions:
    """
    Class for basic functionality for qstates' options.

    Define basic method to wrap an ``options`` dict.
    Default options are in a class _options dict.

    Options can also act as properties. The ``_properties`` map options keys to
    a function to call when the ``QstatesOptions`` become the default.
    """

    _options: dict[str, Any] = {}
    _properties = {}
    _settings_name = None  # Where the default is in settings

    def __init__(self, **options):
        self.options = self._options.copy()
        for key in set(options) & set(self.options):
            self[key] = options.pop(key)
        if options:
            raise KeyError(f"Options {set(options)} are not supported.")

    def __contains__(self, key: str) -> bool:
        return key in self.options

    def __getitem__(self, key: str) -> Any:
        # Let the dict catch the KeyError
        return self.options[key]

    def __setitem__(self, key: str, value: Any) -> None:
        if key not in self.options:
            raise KeyError(f"Option {key!r} is not supported.")
        if (
            key in self._properties
            and self is getattr(settings, self._settings_name)
        ):
            self._properties[key](value)
        self.options[key] = value

    def __repr__(self, full: bool = True) -> str:
        out = [f"<{self.__class__.__name__}("]
        for key, value in self.options.items():
            if full or value != self._options[key]:
                out += [f"    '{key}': {repr(value)},"]
        out += [")>"]
        if len(out) - 2:
            return "\n".join(out)
        else:
            return "".join(out)

    def __enter__(self):
        self._backup = getattr(settings, self._settings_name)
        self._set_as_global_default()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        exc_traceback: types.TracebackType | None,
    ) -> None:
        self._backup._set_as_global_default()

    def _set_as_global_default(self):
        for key in self._properties:
            self._properties[key](self.options[key])
        setattr(settings, self._settings_name, self)


def _check_sparse_format(new_format):
    if new_format not in ("csr", "csc"):
        raise ValueError("'sparse_format' must be one of 'csr', 'csc'")


class CoreOptions(QstatesOptions):
    """
    Options used by the core of qstates such as the tolerance of
    :obj:`.Qobj` comparison or the sparse format of generated operators.

    Values can be changed in ``qstates.settings.core`` or by using context:

        ``with CoreOptions(atol=1e-6): ...``

    ********
    Options:
    ********

    auto_tidyup : bool {True}
        Whether to tidyup the result of arithmetic between quantum objects.

    atol : float {1e-12}
        General absolute tolerance. Used in :obj:`.Qobj` comparison and
        the normalization checks.

    rtol : float {1e-12}
        General relative tolerance. Used in :obj:`.Qobj` comparison, scaled
        by the largest entry of the operands.

    auto_tidyup_atol : float {1e-14}
        The absolute tolerance used in automatic tidyup (see the
        ``auto_tidyup`` parameter above) and the default value of ``atol``
        used in :meth:`Qobj.tidyup`.

    sparse_format : str {"csr"}
        Compressed format of the sparse operators built by the state
        generators, "csr" or "csc". Sparse kets are always stored as a
        single compressed column.
    """

    _options = {
        # use auto tidyup
        "auto_tidyup": True,
        # general absolute tolerance
        "atol": 1e-12,
        # general relative tolerance
        "rtol": 1e-12,
        # use auto tidyup absolute tolerance
        "auto_tidyup_atol": 1e-14,
        # storage of sparse operators
        "sparse_format": "csr",
    }
    _settings_name = "core"
    _properties = {
        "sparse_format": _check_sparse_format,
    }


# Creating the instance of core options to use everywhere.
CoreOptions()._set_as_global_default()
