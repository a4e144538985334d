# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# winguestnet/providers/libvirt.py
"""libvirt driver: NIC slots and MACs from `virsh domiflist`.

Example output:

     Interface   Type      Source    Model    MAC
    -------------------------------------------------------------
     vnet0       network   default   virtio   52:54:00:0b:3a:4e
     -           bridge    br0       e1000    52:54:00:aa:bb:cc

Slots follow the row order of the domain XML, starting at 1, which is also the
order the guest enumerates the PCI NICs in.
"""
from __future__ import annotations

import logging
import re
import subprocess
from typing import Dict, List, Optional

from ..core.exceptions import ProviderError
from ..core.utils import U
from ..model import normalize_mac
from .base import ProviderDriver

_MAC_RE = re.compile(r"^[0-9A-Fa-f]{2}(?::[0-9A-Fa-f]{2}){5}$")


def parse_domiflist(text: str) -> Dict[int, str]:
    macs: Dict[int, str] = {}
    slot = 0
    for raw in (text or "").splitlines():
        parts = raw.split()
        if not parts or not _MAC_RE.match(parts[-1]):
            continue
        slot += 1
        macs[slot] = normalize_mac(parts[-1])
    return macs


class LibvirtDriver(ProviderDriver):
    def __init__(self, logger: logging.Logger, domain: str, connect_uri: Optional[str] = None):
        self.logger = logger
        self.domain = domain
        self.connect_uri = connect_uri

    def _argv(self) -> List[str]:
        argv = ["virsh"]
        if self.connect_uri:
            argv += ["-c", self.connect_uri]
        return argv + ["domiflist", self.domain]

    def read_mac_addresses(self) -> Dict[int, str]:
        try:
            cp = U.run_cmd(self.logger, self._argv(), check=True, capture=True, timeout=30)
        except (subprocess.CalledProcessError, subprocess.TimeoutExpired, OSError) as e:
            raise ProviderError(msg=f"virsh domiflist failed for domain {self.domain}", cause=e).with_context(
                domain=self.domain, connect_uri=self.connect_uri
            )

        macs = parse_domiflist(cp.stdout or "")
        self.logger.debug("libvirt domain %s mac addresses: %s", self.domain, macs)
        return macs
