# SPDX-License-Identifier: LGPL-3.0-or-later
# winguestnet/guest/assets.py
"""Guest-side PowerShell assets shipped in winguestnet/guest/scripts/."""
from __future__ import annotations

from pathlib import Path

SCRIPTS_DIR = Path(__file__).resolve().parent / "scripts"


def load_script(name: str) -> str:
    path = SCRIPTS_DIR / name
    if path.parent != SCRIPTS_DIR or not path.is_file():
        raise FileNotFoundError(f"unknown guest script: {name}")
    return path.read_text(encoding="utf-8")
