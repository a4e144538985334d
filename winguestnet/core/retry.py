# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
"""
Retry helper with exponential backoff for remote transport calls.

Only communicators retry; the configuration core never does.
"""

from __future__ import annotations

import logging
import random
import time
from typing import Any, Callable, Optional, Tuple, Type, TypeVar, Union

T = TypeVar("T")


def retry_operation(
    operation: Callable[[], T],
    *,
    max_attempts: int = 3,
    base_backoff_s: float = 1.0,
    max_backoff_s: float = 30.0,
    jitter_s: float = 0.5,
    exceptions: Union[Type[BaseException], Tuple[Type[BaseException], ...]] = Exception,
    operation_name: str = "operation",
    logger: Optional[Any] = None,
    log_level: int = logging.WARNING,
    sleep: Optional[Callable[[float], None]] = None,
) -> T:
    """
    Call `operation` until it succeeds or `max_attempts` is exhausted.

    Only exceptions matching `exceptions` are retried; anything else
    propagates immediately. The last matching exception is re-raised once
    attempts run out.

    Example:
        out = retry_operation(
            lambda: session.run_ps(script),
            max_attempts=3,
            exceptions=(ConnectionError,),
            operation_name="winrm run_ps",
            logger=log,
        )
    """
    attempts = max(1, int(max_attempts))

    for attempt in range(1, attempts + 1):
        try:
            return operation()
        except exceptions as e:
            if attempt >= attempts:
                if logger:
                    logger.error("%s failed after %d attempts: %s", operation_name, attempts, e)
                raise

            sleep_time = min(base_backoff_s * (2 ** (attempt - 1)), max_backoff_s)
            if jitter_s > 0:
                sleep_time += random.uniform(0, jitter_s)

            if logger:
                logger.log(
                    log_level,
                    "%s failed (attempt %d/%d): %s. Retrying in %.2fs...",
                    operation_name,
                    attempt,
                    attempts,
                    e,
                    sleep_time,
                )
            (sleep or time.sleep)(sleep_time)

    raise RuntimeError(f"{operation_name} failed with no exception recorded")
