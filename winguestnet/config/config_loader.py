# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# winguestnet/config/config_loader.py
from __future__ import annotations

import argparse
import copy
import glob
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence

import yaml

from ..core.exceptions import ConfigError


def _deep_merge(base: Dict[str, Any], over: Mapping[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(base)
    for k, v in over.items():
        if isinstance(v, Mapping) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = copy.deepcopy(v)
    return out


class Config:
    """
    YAML config files.

    Several files may be given; later files deep-merge over earlier ones.
    Dotted keys ("communicator.host") address nested sections.
    """

    @staticmethod
    def expand_configs(logger: logging.Logger, paths: Sequence[str]) -> List[Path]:
        out: List[Path] = []
        for raw in paths:
            pattern = str(Path(raw).expanduser())
            matches = sorted(glob.glob(pattern)) if glob.has_magic(pattern) else [pattern]
            if not matches:
                raise ConfigError(msg=f"config glob matched nothing: {raw}")
            for m in matches:
                p = Path(m)
                if not p.is_file():
                    raise ConfigError(msg=f"config file not found: {p}")
                if p not in out:
                    out.append(p)
        logger.debug("Config files: %s", [str(p) for p in out])
        return out

    @staticmethod
    def load(logger: logging.Logger, path: Path) -> Dict[str, Any]:
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigError(msg=f"invalid YAML in {path}: {e}", cause=e)
        except OSError as e:
            raise ConfigError(msg=f"cannot read config {path}: {e}", cause=e)

        if data is None:
            logger.debug("Config %s is empty", path)
            return {}
        if not isinstance(data, dict):
            raise ConfigError(msg=f"config {path} must be a mapping at the top level")
        return data

    @staticmethod
    def load_many(logger: logging.Logger, paths: Sequence[Path]) -> Dict[str, Any]:
        conf: Dict[str, Any] = {}
        for p in paths:
            conf = _deep_merge(conf, Config.load(logger, p))
        return conf

    @staticmethod
    def get(conf: Mapping[str, Any], dotted: str, default: Any = None) -> Any:
        cur: Any = conf
        for part in dotted.split("."):
            if not isinstance(cur, Mapping) or part not in cur:
                return default
            cur = cur[part]
        return cur

    @staticmethod
    def set(conf: Dict[str, Any], dotted: str, value: Any) -> None:
        parts = dotted.split(".")
        cur = conf
        for part in parts[:-1]:
            nxt = cur.get(part)
            if not isinstance(nxt, dict):
                nxt = {}
                cur[part] = nxt
            cur = nxt
        cur[parts[-1]] = value

    @staticmethod
    def apply_as_defaults(
        logger: logging.Logger,
        parser: argparse.ArgumentParser,
        conf: Mapping[str, Any],
        bindings: Mapping[str, str],
    ) -> None:
        """bindings: dotted config key -> argparse dest"""
        defaults = {}
        for key, dest in bindings.items():
            v = Config.get(conf, key)
            if v is not None:
                defaults[dest] = v
        if defaults:
            logger.debug("Config defaults: %s", sorted(defaults))
            parser.set_defaults(**defaults)

    @staticmethod
    def with_overrides(conf: Mapping[str, Any], args: argparse.Namespace, bindings: Mapping[str, str]) -> Dict[str, Any]:
        """Effective config: conf plus every non-None bound CLI value."""
        out = copy.deepcopy(dict(conf))
        for key, dest in bindings.items():
            v = getattr(args, dest, None)
            if v is not None:
                Config.set(out, key, v)
        return out
