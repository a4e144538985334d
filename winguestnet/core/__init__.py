# SPDX-License-Identifier: LGPL-3.0-or-later
# winguestnet/core/__init__.py
from .exceptions import (
    AdapterParseError,
    CommunicatorError,
    ConfigError,
    InterfaceNotFound,
    ProtocolDetectionError,
    ProviderError,
    UnsupportedNetworkTypeError,
    UnsupportedProviderError,
    WinGuestNetError,
)
from .logger import Log

__all__ = [
    "WinGuestNetError",
    "ConfigError",
    "ProtocolDetectionError",
    "AdapterParseError",
    "UnsupportedProviderError",
    "UnsupportedNetworkTypeError",
    "InterfaceNotFound",
    "CommunicatorError",
    "ProviderError",
    "Log",
]
