"""
Internal-use helpers to create the module loggers of qstates, with handlers
chosen from ``qstates.settings.log_handler``.
"""
import logging

from qstates.settings import settings

__all__ = ['get_logger']

_FORMAT = ('[%(asctime)s] %(name)s[%(process)s]: '
           '%(funcName)s: %(levelname)s: %(message)s')
_DATEFMT = '%Y-%m-%d %H:%M:%S'


def _resolve_policy():
    policy = settings.log_handler
    if policy == 'default':
        # IPython already shows records reaching the root logger.
        policy = 'basic' if settings.ipython else 'stream'
    return policy


def _use_basic_config(logger):
    logging.basicConfig(level=logging.DEBUG if settings.debug else None)


def _use_own_stream(logger):
    if not any(isinstance(handler, logging.StreamHandler)
               for handler in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT, _DATEFMT))
        logger.addHandler(handler)
    logger.propagate = False


def _leave_to_user(logger):
    if not any(isinstance(handler, logging.NullHandler)
               for handler in logger.handlers):
        logger.addHandler(logging.NullHandler())


_POLICIES = {
    'basic': _use_basic_config,
    'stream': _use_own_stream,
    'null': _leave_to_user,
}


def get_logger(name):
    """
    Returns the logger ``name`` with handlers configured in accordance with
    ``qstates.settings``:

    - ``"stream"``: one formatted, non-propagating ``StreamHandler`` on stderr.
    - ``"basic"``: ``logging.basicConfig`` on the root logger.
    - ``"null"``: only a ``NullHandler``, leaving the output to the user.
    - ``"default"``: ``"basic"`` under IPython, ``"stream"`` otherwise.

    The level is ``DEBUG`` when ``settings.debug`` is set, ``WARNING``
    otherwise.

    This function is for internal use only and is not part of the qstates
    API.

    Parameters
    ----------
    name : str
        Name of the logger, usually the dotted name of the calling module.
    """
    logger = logging.getLogger(name)
    _POLICIES[_resolve_policy()](logger)
    logger.setLevel(logging.DEBUG if settings.debug else logging.WARNING)
    return logger
