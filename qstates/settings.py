"""
This module contains settings for the qstates logging and the core numerical
options.
"""
import os

__all__ = ['settings']


def _get_environment_bool(var, default=False):
    """
    Get a boolean value from the environment variable `var`.  The false-y
    values are '0', 'false', 'none' and empty string, insensitive to case.
    """
    from_env = os.environ.get(var)
    if from_env is None:
        return default
    return from_env.lower() not in {'0', 'false', 'none', ''}


class Settings:
    """
    qstates' settings and options.
    """
    def __init__(self):
        self.core = None  # set in qstates.core.options
        self._debug = _get_environment_bool("QSTATES_DEBUG")
        self._log_handler = os.environ.get("QSTATES_LOG_HANDLER", "default")

    @property
    def ipython(self) -> bool:
        """ Whether qstates is running in ipython. """
        try:
            __IPYTHON__
            return True
        except NameError:
            return False

    @property
    def debug(self) -> bool:
        """
        Debug mode for development. Loggers created while it is set log at
        the DEBUG level.
        """
        return self._debug

    @debug.setter
    def debug(self, value: bool) -> None:
        self._debug = bool(value)

    @property
    def log_handler(self) -> str:
        """
        Define whether log handler should be:
            - default: switch based on IPython detection
            - stream: set up non-propagating StreamHandler
            - basic: call basicConfig
            - null: leave logging to the user
        """
        return self._log_handler

    @log_handler.setter
    def log_handler(self, value: str) -> None:
        if value not in ("default", "stream", "basic", "null"):
            raise ValueError(
                "log_handler must be one of "
                "'default', 'stream', 'basic', 'null'"
            )
        self._log_handler = value

    def __str__(self) -> str:
        lines = ["qstates settings:"]
        for attr in self.__dir__():
            if not attr.startswith('_') and attr != "core":
                lines.append(f"    {attr}: {self.__getattribute__(attr)}")
        lines.append(f"    core: {self.core.__repr__(full=False)}")
        return '\n'.join(lines)

    def __repr__(self) -> str:
        return self.__str__()


settings = Settings()
