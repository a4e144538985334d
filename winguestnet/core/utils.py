# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# winguestnet/core/utils.py
from __future__ import annotations

import json
import logging
import shlex
import subprocess
from typing import Any, List, Optional


class U:
    @staticmethod
    def json_dump(obj: Any) -> str:
        try:
            return json.dumps(obj, indent=2, sort_keys=True, default=str)
        except (TypeError, ValueError):
            return repr(obj)

    @staticmethod
    def to_text(x: Any) -> str:
        if x is None:
            return ""
        if isinstance(x, bytes):
            return x.decode("utf-8", "replace")
        return str(x)

    @staticmethod
    def _pretty_cmd(cmd: List[str]) -> str:
        return " ".join(shlex.quote(x) for x in cmd)

    @staticmethod
    def run_cmd(
        logger: logging.Logger,
        cmd: List[str],
        *,
        check: bool = True,
        capture: bool = False,
        timeout: Optional[int] = None,
    ) -> subprocess.CompletedProcess:
        """
        Run a local command.

        capture=True uses subprocess.run(capture_output=True, text=True). Failures
        are logged and the subprocess exception is re-raised.
        """
        pretty = U._pretty_cmd(cmd)
        logger.debug("Running: %s", pretty)

        try:
            return subprocess.run(
                cmd,
                check=check,
                capture_output=capture,
                text=True,
                timeout=timeout,
            )

        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            logger.error("Command failed: %s%s", pretty, f"\nstderr:\n{stderr}" if stderr else " (no output)")
            raise

        except subprocess.TimeoutExpired:
            logger.error("Command timed out: %s (timeout=%ss)", pretty, timeout)
            raise
