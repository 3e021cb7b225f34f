import json
import logging
import os
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CONFIG_DIR = Path('~/.termbg/').expanduser()
CONFIG_PATH = CONFIG_DIR / 'config.json'
DEFAULT_CONFIG: dict[str, Any] = {'timeout': 0.1, 'latency_timeout': 1.0}

class BaseConfig:
    _path: Path
    _default: dict[str, Any]
    _data: dict[str, Any] | None = None

    def __init__(self, path: Path, default: dict[str, Any]) -> None:
        self._path = path
        self._default = default

    @property
    def data(self) -> dict[str, Any]:
        if self._data is None:
            self._data = self._default | (json.loads(self._path.read_text() or '{}') if self._path.is_file() else {})
            if timeout := os.getenv('TERMBG_TIMEOUT'):
                try:
                    self._data['timeout'] = float(timeout)
                except ValueError:
                    logger.warning("Ignoring TERMBG_TIMEOUT=%r, it is not a number of seconds", timeout)
        return self._data

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]

Config = BaseConfig(CONFIG_PATH, DEFAULT_CONFIG)
