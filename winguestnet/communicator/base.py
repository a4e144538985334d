# SPDX-License-Identifier: LGPL-3.0-or-later
# winguestnet/communicator/base.py
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from ..core.exceptions import CommunicatorError
from ..core.logger import Log
from .wql import WqlSession

STDOUT = "stdout"
STDERR = "stderr"

LineCallback = Callable[[str, str], None]


@dataclass(frozen=True)
class OutputLine:
    stream: str  # "stdout" | "stderr"
    text: str


def stdout_text(lines: Iterable[OutputLine], sep: str = "") -> str:
    """Concatenate stdout lines; remote output may be split at arbitrary points."""
    return sep.join(ln.text for ln in lines if ln.stream == STDOUT)


def _split_lines(stream: str, text: str) -> List[OutputLine]:
    return [OutputLine(stream, ln) for ln in (text or "").splitlines()]


class Communicator(ABC):
    """
    Runs PowerShell on the guest.

    execute() blocks until the remote command finishes and returns every
    output line tagged with its stream. A line_callback, if given, is invoked
    once per line in output order (stdout first, then stderr).
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self.session = WqlSession(self, logger)

    @abstractmethod
    def _run(self, command: str, options: Dict[str, Any]) -> Tuple[int, str, str]:
        """Run one command; return (exit code, stdout, stderr)."""
        raise NotImplementedError

    def execute(
        self,
        command: str,
        options: Optional[Dict[str, Any]] = None,
        line_callback: Optional[LineCallback] = None,
    ) -> List[OutputLine]:
        opts = dict(options or {})
        self.logger.debug("Executing remote command: %s", command.strip().splitlines()[0] if command.strip() else "")
        Log.trace(self.logger, "Full remote command:\n%s", command)

        rc, out, err = self._run(command, opts)
        lines = _split_lines(STDOUT, out) + _split_lines(STDERR, err)

        if line_callback is not None:
            for ln in lines:
                line_callback(ln.stream, ln.text)

        if rc != 0 and opts.get("error_check", True):
            raise CommunicatorError(msg=f"remote command exited with status {rc}").with_context(
                rc=rc,
                stderr=(err or "").strip()[:400],
                command=command.strip()[:200],
            )
        return lines
