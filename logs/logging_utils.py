"""Logging configuration for the sandwich CLI.

Verbosity is a ``-v`` count:

* 0: warnings only (catalog issues)
* 1: INFO (catalog summary, LP runs)
* 2: DEBUG (one summary line per search, candidate weights per step)
* 3+: DEBUG for the CBC solver output as well
"""

import logging

_FORMAT = "%(asctime)s %(levelname).1s %(name)s: %(message)s"
_DATEFMT = "%H:%M:%S"

# Solver chatter stays quiet below -vvv
_SOLVER_LOGGERS = ("pulp",)


def _level_for(
    verbosity: int,
) -> int:
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def setup_logging(
    verbosity: int,
    log_file: str | None = None,
) -> None:
    """Configure the root logger from the ``-v`` count.

    Parameters
    ----------
    verbosity : int
        Count of ``-v`` flags (see module docstring).
    log_file : str or None
        Also append records to this file (UTF-8). Stderr is always used.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    # force=True: main() may run several times in one process (tests)
    logging.basicConfig(
        level=_level_for(verbosity),
        format=_FORMAT,
        datefmt=_DATEFMT,
        handlers=handlers,
        force=True,
    )

    solver_level = logging.DEBUG if verbosity >= 3 else logging.WARNING
    for name in _SOLVER_LOGGERS:
        logging.getLogger(name).setLevel(solver_level)
