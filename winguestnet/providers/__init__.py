# SPDX-License-Identifier: LGPL-3.0-or-later
# winguestnet/providers/__init__.py
"""
Virtualization provider drivers.

    - base: Provider / ProviderDriver and the MAC-correlation capability flag
    - libvirt: `virsh domiflist` backed driver
    - static: config supplied slot -> MAC mapping
"""
from __future__ import annotations

import logging
from typing import Any, Dict

from ..core.exceptions import ConfigError
from .base import MAC_CORRELATION_UNSUPPORTED, Provider, ProviderDriver, supports_driver_mac_correlation
from .libvirt import LibvirtDriver
from .static import StaticMacDriver


def build_provider(logger: logging.Logger, name: str, conf: Dict[str, Any]) -> Provider:
    """
    libvirt -> LibvirtDriver (needs libvirt.domain or machine)
    anything else -> StaticMacDriver over conf["mac_addresses"]
    """
    pname = (name or "").strip().lower()
    if not pname:
        raise ConfigError(msg="no provider configured (set 'provider' or --provider)")

    if pname == "libvirt":
        lv = conf.get("libvirt") or {}
        domain = lv.get("domain") or conf.get("machine")
        if not domain:
            raise ConfigError(msg="libvirt provider needs libvirt.domain (or machine)")
        driver: ProviderDriver = LibvirtDriver(logger, str(domain), lv.get("connect_uri"))
    else:
        driver = StaticMacDriver(conf.get("mac_addresses") or {})

    provider = Provider(name=pname, driver=driver)
    logger.debug(
        "Provider %s (driver=%s, mac correlation=%s)",
        provider.name,
        type(driver).__name__,
        provider.supports_driver_mac_correlation,
    )
    return provider


__all__ = [
    "MAC_CORRELATION_UNSUPPORTED",
    "Provider",
    "ProviderDriver",
    "LibvirtDriver",
    "StaticMacDriver",
    "build_provider",
    "supports_driver_mac_correlation",
]
