# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Logging interface for crowdbump.

Library modules report progress through this interface instead of printing
directly, so the CLI decides how chatty a run is. The logger can be set
globally or passed to a function for isolation (tests do the latter).

Output levels:

- Step: Always printed (progress through the run)
- Verbose: Printed when verbose mode is enabled
- Debug: Printed when debug mode is enabled (implies verbose)

Example:
    Configure global logger:
        ```python
        from crowdbump.logging import get_logger, set_global_logger

        set_global_logger(get_logger(verbose=True))
        ```

    Use in library code:
        ```python
        from crowdbump.logging import get_global_logger

        logger = get_global_logger()
        logger.step(2, 4, "Resolving release feeds...")
        logger.verbose("FEED", "GET https://...")
        logger.debug("SELECT", "4.3 -> 4.3.2 (2021-03-01)")
        ```

Note:
    The default global logger is silent, so library calls print nothing
    unless the CLI (or the caller) configures one.
"""

from __future__ import annotations

from typing import Protocol


class Logger(Protocol):
    """Protocol for logger implementations."""

    def step(self, step: int, total: int, message: str) -> None:
        """Print a step indicator.

        Args:
            step: Current step number (1-based).
            total: Total number of steps.
            message: Step description.
        """
        ...

    def verbose(self, prefix: str, message: str) -> None:
        """Print a verbose log message.

        Args:
            prefix: Message prefix (e.g., "FEED", "BUILD").
            message: Log message.
        """
        ...

    def debug(self, prefix: str, message: str) -> None:
        """Print a debug log message.

        Args:
            prefix: Message prefix (e.g., "SELECT").
            message: Log message.
        """
        ...


class DefaultLogger:
    """Logger that prints to stdout, honouring verbose and debug flags."""

    def __init__(self, verbose: bool = False, debug: bool = False) -> None:
        self._verbose = verbose or debug
        self._debug = debug

    def step(self, step: int, total: int, message: str) -> None:
        print(f"[{step}/{total}] {message}")

    def verbose(self, prefix: str, message: str) -> None:
        if self._verbose:
            print(f"[{prefix}] {message}")

    def debug(self, prefix: str, message: str) -> None:
        if self._debug:
            print(f"[{prefix}] {message}")


class SilentLogger:
    """Logger that suppresses all output."""

    def step(self, step: int, total: int, message: str) -> None:
        pass

    def verbose(self, prefix: str, message: str) -> None:
        pass

    def debug(self, prefix: str, message: str) -> None:
        pass


_global_logger: Logger = SilentLogger()


def get_logger(verbose: bool = False, debug: bool = False) -> Logger:
    """Get a stdout logger with the given verbosity.

    Args:
        verbose: If True, print verbose messages.
        debug: If True, print debug messages (implies verbose).

    Returns:
        A DefaultLogger configured with the given flags.
    """
    return DefaultLogger(verbose=verbose, debug=debug)


def get_global_logger() -> Logger:
    """Return the process-wide logger (silent unless configured)."""
    return _global_logger


def set_global_logger(logger: Logger) -> None:
    """Replace the process-wide logger.

    Args:
        logger: Logger instance used by library functions that are not
            handed one explicitly.
    """
    global _global_logger
    _global_logger = logger
