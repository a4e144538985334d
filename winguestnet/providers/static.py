# SPDX-License-Identifier: LGPL-3.0-or-later
# winguestnet/providers/static.py
from __future__ import annotations

from typing import Any, Dict, Mapping

from ..core.exceptions import ConfigError
from ..model import normalize_mac
from .base import ProviderDriver


class StaticMacDriver(ProviderDriver):
    """Slot -> MAC mapping taken verbatim from config (`mac_addresses:`)."""

    def __init__(self, mapping: Mapping[Any, Any]):
        macs: Dict[int, str] = {}
        for slot, mac in (mapping or {}).items():
            try:
                key = int(slot)
            except (TypeError, ValueError) as e:
                raise ConfigError(msg=f"mac_addresses slot must be an integer, got {slot!r}", cause=e)
            macs[key] = normalize_mac(mac)
        self._macs = macs

    def read_mac_addresses(self) -> Dict[int, str]:
        return dict(self._macs)
