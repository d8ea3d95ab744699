"""Low-level INI parsing helpers for viewer settings."""

from __future__ import annotations

import configparser
import os
import sys
from pathlib import Path
from typing import Dict, Optional

SETTINGS_ENV_VAR = "PLANE_VIEWER_SETTINGS"
SETTINGS_FILENAME = "settings.ini"


class ConfigBackend:
    """Encapsulates discovery and parsing of settings.ini."""

    def __init__(self, ini_path: Optional[str] = None) -> None:
        base_dir = os.path.dirname(sys.argv[0])
        resolved = ini_path or os.getenv(SETTINGS_ENV_VAR)
        self._path = Path(resolved or (Path(base_dir) / SETTINGS_FILENAME))

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Dict[str, Dict[str, str]]:
        parser = configparser.ConfigParser(inline_comment_prefixes=(";", "#"))
        parser.read(self._path, encoding="utf-8")
        data: Dict[str, Dict[str, str]] = {}
        for section in parser.sections():
            data[section] = dict(parser.items(section))
        return data

