"""
Solver Worker Module for Grid Solver

Provides a background QThread worker that runs one engine request at a time.
Communicates with the caller via Qt signals for thread-safe progress and
result delivery.
"""

import logging
from typing import Any, Dict, Optional, Union

from PyQt5.QtCore import QThread, pyqtSignal

from gridsolver.engine import Engine
from gridsolver.messages import (
    GeneratedResponse,
    ProgressResponse,
    Request,
    Response,
    SolvedResponse,
    parse_request,
)
from gridsolver.solver.errors import EngineBusyError


# Configure module logger
logger = logging.getLogger(__name__)


class SolverWorker(QThread):
    """
    Background worker thread for solve and generate requests.

    Each submitted request yields zero or more progress_changed signals
    followed by exactly one of solved, generated or error_occurred. A
    running search cannot be cancelled.

    Signals:
        progress_changed(int, int, int): (filled, empty, total) during a search
        solved(object): SolvedResponse for a solve request
        generated(object): GeneratedResponse for a generate request
        error_occurred(str): The request failed

    Example:
        worker = SolverWorker()
        worker.progress_changed.connect(ui.set_progress)
        worker.solved.connect(ui.show_solution)
        worker.submit({"kind": "solve", "grid": grid, "N": 9})
    """

    # Signals for caller updates (thread-safe)
    progress_changed = pyqtSignal(int, int, int)  # (filled, empty, total)
    solved = pyqtSignal(object)
    generated = pyqtSignal(object)
    error_occurred = pyqtSignal(str)

    def __init__(self, engine: Optional[Engine] = None):
        """
        Initialize the solver worker.

        Args:
            engine: Engine to run requests on (default Engine() if None)
        """
        super().__init__()
        self._engine = engine or Engine()
        self._request: Optional[Request] = None
        self._in_flight = False

    @property
    def in_flight(self) -> bool:
        """True from submit() until the terminal signal is emitted."""
        return self._in_flight

    def submit(self, request: Union[Dict[str, Any], Request]) -> None:
        """
        Start handling a request on the worker thread.

        The request (and its grid) is copied before the thread starts.

        Args:
            request: Request object or wire dict

        Raises:
            EngineBusyError: If the previous request has not finished
            UnknownRequestError: If the request kind is not recognised
            InvalidGridError: If the request grid or shape is malformed
        """
        if self._in_flight:
            raise EngineBusyError("Worker already has a request in flight")

        parsed = parse_request(request)

        # Previous run already emitted its terminal signal and is unwinding
        if self.isRunning():
            self.wait()

        self._request = parsed
        self._in_flight = True
        logger.info(f"Submitting {parsed.kind} request")
        self.start()

    def run(self):
        """
        Worker body. Called when thread starts.

        Runs the pending request and emits its signals.
        """
        request = self._request
        self._request = None

        try:
            self._engine.handle(request, emit=self._on_response)
        except Exception as e:
            logger.exception("Error handling request")
            self._in_flight = False
            self.error_occurred.emit(str(e))

    def _on_response(self, response: Response) -> None:
        """Translate engine responses into signals."""
        if isinstance(response, ProgressResponse):
            self.progress_changed.emit(response.filled, response.empty, response.total)
            return

        self._in_flight = False
        if isinstance(response, SolvedResponse):
            self.solved.emit(response)
        elif isinstance(response, GeneratedResponse):
            self.generated.emit(response)
        else:
            logger.error(f"Unexpected response type: {type(response).__name__}")
