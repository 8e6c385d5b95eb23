"""
Configuration for the password cracker.
"""

import argparse
from pathlib import Path
import sys
import logging
from typing import Optional

# Run server configuration
SERVER_HOST = "localhost"
SERVER_PORT = 8000
SERVER_URL = f"http://{SERVER_HOST}:{SERVER_PORT}"

# Logger names
CRACKER_LOGGER = "password_cracker"
SERVER_LOGGER = "password_cracker.server"

# Cracking configuration
DEFAULT_HASH_ALGORITHM = "SHA-512"
EXECUTORS = ("process", "thread")
DEFAULT_EXECUTOR = "process"
MAX_POOL_SIZE = 64
LOG_DIR = Path("logs")
LOG_PROGRESS_INTERVAL = 100_000  # for cracking progress

# Client configuration
REQUEST_TIMEOUT = 10
POLL_INTERVAL = 1.0

# Run server keeps at most this many finished runs
MAX_FINISHED_RUNS = 100

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logger(name: str, log_level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Set up a logger with consistent formatting and handlers.

    Args:
        name: The name of the logger
        log_level: The logging level (default: INFO)
        log_file: Optional file name, created under LOG_DIR

    Returns:
        logging.Logger: Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # Calling twice must not duplicate every line
    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        LOG_DIR.mkdir(exist_ok=True)
        file_handler = logging.FileHandler(
            LOG_DIR / log_file,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def _add_log_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('--log-level', type=str, default='info',
                        choices=['debug', 'info',
                                 'warning', 'error', 'critical'],
                        help='Log level to use')
    parser.add_argument('--log-file', type=str, default=None,
                        help=f'Also write the log to this file under {LOG_DIR}/')


def parse_args(description: str, argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description=description)
    _add_log_args(parser)

    if "server" in description.lower():
        parser.add_argument("--host", type=str, default=SERVER_HOST,
                            help='Host to run the server on')
        parser.add_argument("--port", type=int, default=SERVER_PORT,
                            help='Port to run the server on')
    else:
        parser.add_argument("workers", type=int,
                            help='Number of parallel workers (1 or an even number)')
        parser.add_argument("targets", type=str,
                            help='File of "user salt hash" lines')
        parser.add_argument("candidates", type=str,
                            help='File of clear-text candidate passwords, one per line')
        parser.add_argument("--algorithm", type=str, default=DEFAULT_HASH_ALGORITHM,
                            help='Hash algorithm, e.g. SHA-512')
        parser.add_argument("--executor", type=str, default=DEFAULT_EXECUTOR,
                            choices=EXECUTORS,
                            help='Run workers in processes or threads')
        parser.add_argument("--deadline", type=float, default=None,
                            help='Stop waiting for workers after this many seconds')
        parser.add_argument("--sequential", action="store_true",
                            help='Run the single-threaded reference cracker instead')

    args = parser.parse_args(argv)
    args.log_level = getattr(logging, args.log_level.upper())

    return args
