# SPDX-License-Identifier: LGPL-3.0-or-later
# winguestnet/core/exceptions.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


def _safe_int(x: Any, default: int = 1) -> int:
    try:
        return int(x)
    except (TypeError, ValueError):
        return default


def _clamp_exit_code(code: int) -> int:
    # Process exit codes are 0..255.
    if code < 0:
        return 1
    if code > 255:
        return 255
    return code


def _one_line(s: str, limit: int = 600) -> str:
    s = (s or "").strip().replace("\r", " ").replace("\n", " ")
    s = " ".join(s.split())
    return s if len(s) <= limit else (s[: limit - 3] + "...")


_SECRET_KEY_PARTS = (
    "pass",
    "secret",
    "token",
    "apikey",
    "api_key",
    "auth",
    "cookie",
    "private",
)


def _is_secret_key(k: str) -> bool:
    ks = (k or "").lower()
    return any(p in ks for p in _SECRET_KEY_PARTS)


def _format_context_compact(ctx: Dict[str, Any]) -> str:
    parts = []
    for k in sorted(ctx.keys(), key=str):
        if _is_secret_key(str(k)):
            parts.append(f"{k}=<redacted>")
        else:
            parts.append(f"{k}={ctx[k]!r}")
    return ", ".join(parts)


@dataclass(eq=False)
class WinGuestNetError(Exception):
    """
    Base project error with:
      - stable fields for reporting/JSON
      - readable __str__ (what users see)
      - exit code clamped into 0..255
    """
    code: int = 1
    msg: str = "error"
    cause: Optional[BaseException] = None
    context: Optional[Dict[str, Any]] = None

    def __post_init__(self) -> None:
        self.code = _clamp_exit_code(_safe_int(self.code, default=1))
        self.msg = _one_line(self.msg) or self.__class__.__name__
        if self.context is None:
            self.context = {}
        super().__init__(self.msg)
        self.args = (self.msg,)

    def with_context(self, **ctx: Any) -> "WinGuestNetError":
        self.context.update(ctx)
        return self

    def user_message(self, *, include_context: bool = False, include_cause: bool = False) -> str:
        parts = [self.msg or self.__class__.__name__]

        if include_context and self.context:
            parts.append(f"[{_one_line(_format_context_compact(self.context))}]")

        if include_cause and self.cause is not None:
            parts.append(f"(cause: {type(self.cause).__name__}: {_one_line(str(self.cause))})")

        return " ".join(parts)

    def __str__(self) -> str:
        return self.user_message(include_context=False, include_cause=False)

    def to_dict(self, *, include_cause: bool = False) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "type": self.__class__.__name__,
            "code": self.code,
            "message": self.msg,
            "context": dict(self.context or {}),
        }
        if include_cause and self.cause is not None:
            d["cause"] = {"type": type(self.cause).__name__, "message": _one_line(str(self.cause))}
        return d


@dataclass(eq=False)
class ConfigError(WinGuestNetError):
    """Invalid or missing configuration (files, CLI flags, network requests)."""
    code: int = 2
    msg: str = "invalid configuration"


@dataclass(eq=False)
class ProtocolDetectionError(WinGuestNetError):
    """The guest's remote-management version probe did not yield a number."""
    code: int = 10
    msg: str = "could not detect WinRM protocol version"


@dataclass(eq=False)
class AdapterParseError(WinGuestNetError):
    """Serialized adapter inventory from the guest was empty or malformed."""
    code: int = 11
    msg: str = "could not parse guest network adapters"


@dataclass(eq=False)
class UnsupportedProviderError(WinGuestNetError):
    """MAC correlation was requested under a provider that cannot do it."""
    code: int = 12
    msg: str = "provider does not support MAC based interface mapping"


@dataclass(eq=False)
class UnsupportedNetworkTypeError(WinGuestNetError):
    code: int = 13
    msg: str = "network type is not supported, try static or dhcp"


@dataclass(eq=False)
class InterfaceNotFound(WinGuestNetError):
    """No guest adapter resolves for a requested slot. Never leaves the configurator."""
    code: int = 14
    msg: str = "could not find interface for network"


@dataclass(eq=False)
class CommunicatorError(WinGuestNetError):
    """Remote command failed (non-zero exit or transport failure)."""
    code: int = 20
    msg: str = "remote command failed"


@dataclass(eq=False)
class ProviderError(WinGuestNetError):
    """Virtualization driver could not report MAC addresses."""
    code: int = 21
    msg: str = "provider driver failed"


def format_exception_for_cli(e: BaseException, *, verbose: int = 0) -> str:
    """
    One-liner output for CLI.

    verbose=0: just message
    verbose=1: message + compact context (if any)
    verbose>=2: message + context + cause
    """
    if isinstance(e, WinGuestNetError):
        return e.user_message(
            include_context=(verbose >= 1),
            include_cause=(verbose >= 2),
        )

    if verbose >= 2:
        return f"{type(e).__name__}: {_one_line(str(e))}"
    return _one_line(str(e)) or type(e).__name__
