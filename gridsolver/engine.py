"""
Engine Module - Routes requests to the solver and relays its output.

Each request kind maps to a registered handler. A request produces zero or
more progress responses followed by exactly one terminal response. Only one
request may be in flight per Engine at a time.
"""

import logging
import random
from typing import Any, Callable, Dict, List, Optional, Union

from gridsolver.messages import (
    GenerateRequest,
    GeneratedResponse,
    ProgressResponse,
    Request,
    Response,
    SolveRequest,
    SolvedResponse,
    parse_request,
)
from gridsolver.solver import ProgressReporter, ProgressUpdate, generate_puzzle, solve
from gridsolver.solver.errors import EngineBusyError, UnknownRequestError
from gridsolver.solver.generator import PRE_SEED_MIN_SIZE
from gridsolver.solver.progress import DEFAULT_INTERVAL_MS

logger = logging.getLogger(__name__)

Handler = Callable[["Engine", Any, ProgressReporter], Response]
Emit = Callable[[Response], None]

# Global registry of request handlers
_HANDLERS: Dict[str, Handler] = {}


def register_handler(kind: str) -> Callable[[Handler], Handler]:
    """
    Decorator to register the handler for a request kind.

    Usage:
        @register_handler("solve")
        def _handle_solve(engine, request, reporter):
            ...

    Args:
        kind: Request kind the handler serves

    Returns:
        Decorator returning the handler unchanged
    """
    def decorator(func: Handler) -> Handler:
        _HANDLERS[kind] = func
        return func
    return decorator


def get_request_kinds() -> List[str]:
    """List request kinds with a registered handler."""
    return list(_HANDLERS.keys())


class Engine:
    """
    Request dispatcher for the solver.

    Example:
        engine = Engine()
        response = engine.handle({"kind": "generate", "N": 9}, emit=print)
    """

    def __init__(
        self,
        progress_interval_ms: float = DEFAULT_INTERVAL_MS,
        pre_seed_min_size: int = PRE_SEED_MIN_SIZE,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize engine.

        Args:
            progress_interval_ms: Minimum interval between progress responses
            pre_seed_min_size: Generated grids this large start from a random first row
            rng: Random source for generation (fresh Random if None)
        """
        self.progress_interval_ms = progress_interval_ms
        self.pre_seed_min_size = pre_seed_min_size
        self.rng = rng or random.Random()
        self._busy = False

    @property
    def busy(self) -> bool:
        """True while a request is being handled."""
        return self._busy

    def handle(self, request: Union[Dict[str, Any], Request], emit: Optional[Emit] = None) -> Response:
        """
        Run one request to completion.

        Args:
            request: Request object or wire dict
            emit: Receives every progress response and then the terminal response

        Returns:
            The terminal response

        Raises:
            EngineBusyError: If another request is in flight
            UnknownRequestError: If the request kind is not handled
            InvalidGridError: If the request grid or shape is malformed
            GeneratorFailure: If generation fails for the box shape
        """
        if self._busy:
            raise EngineBusyError("A request is already in flight")

        self._busy = True
        try:
            parsed = parse_request(request)
            handler = _HANDLERS.get(parsed.kind)
            if handler is None:
                available = ", ".join(_HANDLERS.keys())
                raise UnknownRequestError(f"No handler for: {parsed.kind}. Available: {available}")

            def on_progress(update: ProgressUpdate):
                if emit:
                    emit(ProgressResponse.from_update(update))

            reporter = ProgressReporter(on_progress, interval_ms=self.progress_interval_ms)
            reporter.reset()

            logger.info(f"Handling {parsed.kind} request ({parsed.shape.size}x{parsed.shape.size})")
            response = handler(self, parsed, reporter)
        finally:
            self._busy = False

        if emit:
            emit(response)
        return response


@register_handler(SolveRequest.kind)
def _handle_solve(engine: Engine, request: SolveRequest, reporter: ProgressReporter) -> SolvedResponse:
    result = solve(request.grid, request.shape, reporter)
    return SolvedResponse(grid=result.grid, success=result.success)


@register_handler(GenerateRequest.kind)
def _handle_generate(engine: Engine, request: GenerateRequest, reporter: ProgressReporter) -> GeneratedResponse:
    result = generate_puzzle(
        request.shape,
        reporter=reporter,
        rng=engine.rng,
        pre_seed_min_size=engine.pre_seed_min_size,
    )
    return GeneratedResponse(grid=result.grid)
