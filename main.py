"""
Grid Solver - Entry Point

Runs solve and generate requests through the background solver worker and
writes the terminal response as JSON.

Example:
    python main.py generate --size 9
    python main.py solve puzzle.json
    python main.py solve puzzle.json --box-rows 2 --box-cols 3
    cat puzzle.json | python main.py solve -
    python main.py --save-config generate --size 16
"""

import sys
import json
import logging
import argparse
from pathlib import Path
from typing import Any, Dict, Optional

from PyQt5.QtCore import QCoreApplication

from gridsolver.engine import Engine
from gridsolver.solver_worker import SolverWorker
from gridsolver.settings import load_settings, save_settings
from gridsolver.solver import ProgressUpdate


logger = logging.getLogger(__name__)

# Process exit codes
EXIT_OK = 0
EXIT_UNSOLVABLE = 1
EXIT_ERROR = 2


def setup_logging(level: str) -> None:
    """Configure logging - output to both console and file."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=[
            logging.StreamHandler(),  # Console output (stderr)
            logging.FileHandler("solver.log", mode='w', encoding='utf-8')  # File output
        ]
    )


class Application:
    """
    Command line controller.

    Submits one request to the worker thread, reports its progress and
    quits the event loop once the terminal response arrives.
    """

    def __init__(self, app: QCoreApplication, engine: Engine, output: Optional[Path] = None):
        """
        Initialize the application.

        Args:
            app: Running Qt core application
            engine: Engine the worker runs requests on
            output: File to write the response to (stdout if None)
        """
        self.app = app
        self.output = output
        self.exit_code = EXIT_OK

        self.worker = SolverWorker(engine)
        self.worker.progress_changed.connect(self._on_progress)
        self.worker.solved.connect(self._on_solved)
        self.worker.generated.connect(self._on_generated)
        self.worker.error_occurred.connect(self._on_error)

    def submit(self, request: Dict[str, Any]) -> None:
        """Hand a request to the worker."""
        self.worker.submit(request)

    def _on_progress(self, filled: int, empty: int, total: int):
        """Handle progress update from worker."""
        update = ProgressUpdate(filled=filled, empty=empty, total=total)
        logger.info(f"Progress: {filled} filled | {empty} empty | {update.percent:.0%}")

    def _on_solved(self, response):
        """Handle solve result."""
        if response.success:
            logger.info("Puzzle solved")
        else:
            logger.warning("No solution exists for this puzzle")
            self.exit_code = EXIT_UNSOLVABLE
        self._finish(response.to_dict())

    def _on_generated(self, response):
        """Handle generated puzzle."""
        logger.info("New puzzle generated")
        self._finish(response.to_dict())

    def _on_error(self, error_msg: str):
        """Handle worker error."""
        logger.error(f"Worker error: {error_msg}")
        self.exit_code = EXIT_ERROR
        self.worker.wait()
        self.app.exit(self.exit_code)

    def _finish(self, payload: Dict[str, Any]):
        """Write the response and stop the event loop."""
        text = json.dumps(payload)
        if self.output:
            self.output.write_text(text + "\n", encoding='utf-8')
            logger.info(f"Response written to {self.output}")
        else:
            print(text)
        self.worker.wait()
        self.app.exit(self.exit_code)


def read_solve_request(source: str, box_rows: Optional[int], box_cols: Optional[int]) -> Dict[str, Any]:
    """
    Build a solve request from a JSON file.

    The file holds either a bare grid (list of rows) or an object with a
    "grid" key and optional "boxRows"/"boxCols".

    Args:
        source: File path, or "-" for stdin
        box_rows: Box height override
        box_cols: Box width override

    Returns:
        Solve request wire dict
    """
    if source == "-":
        data = json.load(sys.stdin)
    else:
        with open(source, 'r', encoding='utf-8') as f:
            data = json.load(f)

    request: Dict[str, Any] = {"kind": "solve"}
    if isinstance(data, dict):
        request.update({k: v for k, v in data.items() if k in ("grid", "N", "boxRows", "boxCols")})
    else:
        request["grid"] = data

    if box_rows is not None:
        request["boxRows"] = box_rows
    if box_cols is not None:
        request["boxCols"] = box_cols
    return request


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Grid Solver - Sudoku-style solver and puzzle generator"
    )
    parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Write the JSON response to this file instead of stdout"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Settings file (default: config.json)"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug logging (overrides saved setting)"
    )
    parser.add_argument(
        "--save-config",
        action="store_true",
        help="Store the effective settings (size, log level) in the settings file"
    )

    # Box options are accepted after either subcommand
    box_options = argparse.ArgumentParser(add_help=False)
    box_options.add_argument("--box-rows", type=int, help="Box height (derived from size if omitted)")
    box_options.add_argument("--box-cols", type=int, help="Box width (derived from size if omitted)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    solve_parser = subparsers.add_parser(
        "solve", parents=[box_options], help="Solve a puzzle read from a JSON file")
    solve_parser.add_argument("source", help="JSON grid file, or - for stdin")

    generate_parser = subparsers.add_parser(
        "generate", parents=[box_options], help="Generate a new puzzle")
    generate_parser.add_argument(
        "--size", "-n",
        type=int,
        default=None,
        help="Grid size N (default: settings default_size)"
    )

    return parser.parse_args(argv)


def build_request(args, settings: Dict[str, Any]) -> Dict[str, Any]:
    """
    Build the request wire dict for the parsed command line.

    Raises:
        OSError: If the solve source cannot be read
        ValueError: If the solve source is not valid JSON
    """
    if args.command == "solve":
        return read_solve_request(args.source, args.box_rows, args.box_cols)

    request: Dict[str, Any] = {"kind": "generate", "N": args.size or settings["default_size"]}
    if args.box_rows is not None:
        request["boxRows"] = args.box_rows
    if args.box_cols is not None:
        request["boxCols"] = args.box_cols
    return request


def effective_settings(args, settings: Dict[str, Any]) -> Dict[str, Any]:
    """Settings with command line overrides applied."""
    result = dict(settings)
    if args.debug:
        result["log_level"] = "DEBUG"
    if args.command == "generate" and args.size:
        result["default_size"] = args.size
    return result


def main():
    """Initialize and run one solver request."""
    args = parse_args()
    settings = effective_settings(args, load_settings(args.config))

    setup_logging(settings["log_level"])

    if args.save_config:
        save_settings(settings, args.config)

    engine = Engine(
        progress_interval_ms=settings["progress_interval_ms"],
        pre_seed_min_size=settings["pre_seed_min_size"],
    )

    try:
        request = build_request(args, settings)
    except (OSError, ValueError) as e:
        logger.error(f"Could not read request: {e}")
        sys.exit(EXIT_ERROR)

    app = QCoreApplication(sys.argv)
    application = Application(app, engine, output=args.output)

    try:
        application.submit(request)
    except ValueError as e:
        logger.error(f"Invalid request: {e}")
        sys.exit(EXIT_ERROR)

    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
