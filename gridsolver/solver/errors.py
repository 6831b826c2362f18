"""
Errors Module - Exception hierarchy for the grid solver engine.
"""


class GridSolverError(Exception):
    """Base class for all engine errors."""


class InvalidGridError(GridSolverError, ValueError):
    """Grid or box shape is malformed (wrong dimensions, out-of-range values)."""


class UnknownRequestError(GridSolverError, ValueError):
    """Request kind has no registered handler."""


class EngineBusyError(GridSolverError, RuntimeError):
    """A request was submitted while another one is still in flight."""


class GeneratorFailure(GridSolverError, RuntimeError):
    """
    Randomized full-board search failed for a structurally valid shape.

    A completed grid always exists for a valid box decomposition, so this
    signals a configuration defect. It is never retried.
    """
