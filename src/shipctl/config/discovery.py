"""Locating and reading ``shipctl.toml``.

The file is looked up the way git looks for ``.git/``: in the start
directory, then in each parent. ``SHIPCTL_CONFIG`` names a file directly
and turns the walk off.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Iterator
from pathlib import Path

from shipctl.config.models import ShipConfig

CONFIG_FILENAME = "shipctl.toml"
CONFIG_ENV_VAR = "SHIPCTL_CONFIG"


def _candidates(start: Path) -> Iterator[Path]:
    for directory in (start, *start.parents):
        yield directory / CONFIG_FILENAME


def find_config(start: Path | None = None) -> Path | None:
    """Path of the config file governing *start* (default: cwd), or None."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override).expanduser()
        return path if path.is_file() else None

    base = (start or Path.cwd()).resolve()
    return next((p for p in _candidates(base) if p.is_file()), None)


def load_config(path: Path | None = None, cwd: Path | None = None) -> ShipConfig:
    """Validated config from *path*, from discovery under *cwd*, or defaults."""
    path = path or find_config(cwd)
    if path is None:
        return ShipConfig()
    with path.open("rb") as fh:
        return ShipConfig.model_validate(tomllib.load(fh))
