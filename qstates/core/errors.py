"""
Exception classes for the qstates state generators.
"""

__all__ = ['QstatesError', 'OutOfRangeLevel']


class QstatesError(Exception):
    """Base class for all qstates exceptions"""


class OutOfRangeLevel(QstatesError, ValueError):
    """
    A basis level is not inside ``[0, dim)`` for its subsystem.

    Attributes:
        level: the requested basis level
        dim: the dimension of the subsystem
        subsystem: position of the subsystem in a composite space, or None
            for a single-subsystem call
    """
    def __init__(self, level, dim, subsystem=None):
        self.level = level
        self.dim = dim
        self.subsystem = subsystem
        if level < 0:
            msg = f"basis level {level} must be non-negative"
        else:
            msg = f"basis level {level} is too large for a {dim}-d space"
        if subsystem is not None:
            msg += f" (subsystem {subsystem})"
        super().__init__(msg)
