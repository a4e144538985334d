# SPDX-License-Identifier: LGPL-3.0-or-later
# winguestnet/cli/__init__.py
from .machine import build_machine, requests_from_conf
from .parser import CLI_BINDINGS, build_parser, parse_args_with_config

__all__ = [
    "CLI_BINDINGS",
    "build_parser",
    "parse_args_with_config",
    "build_machine",
    "requests_from_conf",
]
