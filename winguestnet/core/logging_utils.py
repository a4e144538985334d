# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
"""
Shared logging helpers for winguestnet components.
"""
from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Any, Generator, Optional


def safe_logger(logger: Optional[Any], default_name: str = "winguestnet") -> Any:
    """
    Return the injected logger, or a module logger when none was given.

    Anything with the logging.Logger call surface is accepted, so adapters
    from Log.bind() and test fakes pass straight through.
    """
    if logger is not None:
        return logger
    return logging.getLogger(default_name)


@contextmanager
def log_step(logger: Any, description: str) -> Generator[None, None, None]:
    """
    Log the start of an operation, run the block, then log completion with
    elapsed time. Logs and re-raises on exception.

    Example:
        with log_step(logger, "Building interface map"):
            build()
    """
    t0 = time.monotonic()
    logger.info("%s ...", description)
    try:
        yield
    except Exception as e:
        logger.error("%s failed (%.2fs): %s", description, time.monotonic() - t0, e)
        raise
    logger.info("%s done (%.2fs)", description, time.monotonic() - t0)
