"""
Messages Module - Requests consumed and responses produced by the engine.

Wire form is a plain dict:
    {"kind": "solve", "grid": [[...]], "N": 9, "boxRows": 3, "boxCols": 3}
    {"kind": "generate", "N": 9, "boxRows": 3, "boxCols": 3}
    {"kind": "progress", "filled": 40, "empty": 41, "total": 81}
    {"kind": "solved", "grid": [[...]], "success": True}
    {"kind": "generated", "grid": [[...]]}

boxRows/boxCols may be omitted from requests, in which case they are
derived from N.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional, Union

from gridsolver.solver import BoxShape, Grid, ProgressUpdate, copy_grid
from gridsolver.solver.errors import InvalidGridError, UnknownRequestError


__all__ = [
    "SolveRequest",
    "GenerateRequest",
    "ProgressResponse",
    "SolvedResponse",
    "GeneratedResponse",
    "Request",
    "Response",
    "parse_request",
]


def _shape_fields(shape: BoxShape) -> Dict[str, int]:
    return {"N": shape.size, "boxRows": shape.box_rows, "boxCols": shape.box_cols}


@dataclass(frozen=True)
class SolveRequest:
    """Solve the given grid."""
    kind: ClassVar[str] = "solve"
    grid: Grid
    shape: BoxShape

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "grid": copy_grid(self.grid), **_shape_fields(self.shape)}


@dataclass(frozen=True)
class GenerateRequest:
    """Generate a new puzzle of the given shape."""
    kind: ClassVar[str] = "generate"
    shape: BoxShape

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, **_shape_fields(self.shape)}


@dataclass(frozen=True)
class ProgressResponse:
    """
    Intermediate fill statistics.

    Attributes:
        filled: Non-empty cells
        empty: Empty cells
        total: All cells
    """
    kind: ClassVar[str] = "progress"
    filled: int
    empty: int
    total: int

    @classmethod
    def from_update(cls, update: ProgressUpdate) -> 'ProgressResponse':
        return cls(filled=update.filled, empty=update.empty, total=update.total)

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "filled": self.filled, "empty": self.empty, "total": self.total}


@dataclass(frozen=True)
class SolvedResponse:
    """Terminal response to a solve request."""
    kind: ClassVar[str] = "solved"
    grid: Grid
    success: bool

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "grid": copy_grid(self.grid), "success": self.success}


@dataclass(frozen=True)
class GeneratedResponse:
    """Terminal response to a generate request. grid is always a puzzle."""
    kind: ClassVar[str] = "generated"
    grid: Grid

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "grid": copy_grid(self.grid)}


Request = Union[SolveRequest, GenerateRequest]
Response = Union[ProgressResponse, SolvedResponse, GeneratedResponse]


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _parse_shape(data: Dict[str, Any]) -> BoxShape:
    size = data.get("N")
    if size is None and data.get("grid") is not None:
        size = len(data["grid"])
    if not _is_int(size):
        raise InvalidGridError(f"Request has no usable grid size: {size!r}")

    box_rows: Optional[int] = data.get("boxRows")
    box_cols: Optional[int] = data.get("boxCols")
    if box_rows is None and box_cols is None:
        return BoxShape.for_size(size)
    if box_rows is None or box_cols is None:
        raise InvalidGridError("boxRows and boxCols must be given together")
    if not (_is_int(box_rows) and _is_int(box_cols)):
        raise InvalidGridError(f"Box dimensions must be integers, got {box_rows!r}x{box_cols!r}")
    return BoxShape(size=size, box_rows=box_rows, box_cols=box_cols)


def parse_request(data: Union[Dict[str, Any], Request]) -> Request:
    """
    Build a request object from its wire dict.

    Request objects are passed through unchanged.

    Args:
        data: Wire dict or request object

    Returns:
        SolveRequest or GenerateRequest

    Raises:
        UnknownRequestError: If kind is missing or not recognised
        InvalidGridError: If the size, box shape or grid is unusable
    """
    if isinstance(data, (SolveRequest, GenerateRequest)):
        return data
    if not isinstance(data, dict):
        raise UnknownRequestError(f"Cannot interpret request of type {type(data).__name__}")

    kind = data.get("kind")
    if kind == SolveRequest.kind:
        grid = data.get("grid")
        if not isinstance(grid, list):
            raise InvalidGridError("Solve request has no grid")
        return SolveRequest(grid=copy_grid(grid), shape=_parse_shape(data))
    if kind == GenerateRequest.kind:
        return GenerateRequest(shape=_parse_shape(data))

    raise UnknownRequestError(f"Unknown request kind: {kind!r}")
