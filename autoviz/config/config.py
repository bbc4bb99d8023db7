"""
Layered configuration for AutoViz.

Values are looked up with dotted keys such as ``rendering.canvas_width``.
Later layers override earlier ones:

1. built-in defaults
2. ``~/.autoviz/config.json``
3. an explicit config file, or ``./config.json`` when none is given
4. ``AUTOVIZ_<SECTION>__<KEY>`` environment variables
5. ``Config.set`` at runtime (command line overrides)
"""

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..core.logging import get_logger
from ..core.exceptions import ConfigurationError

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "app": {
        "name": "AutoViz",
        "version": "0.1.0",
        "debug": False,
        "log_level": "INFO",
        "log_to_file": False,
    },
    "rendering": {
        "canvas_width": 1000,
        "canvas_height": 600,
        "percent_border": 0.1,
        "background_color": "#272822",
        "antialias": True,
        "placeholder_font_size": 40,
        "font_name": None,
    },
}

ENV_PREFIX = "AUTOVIZ_"
ENV_NESTING = "__"

USER_CONFIG_PATH = Path.home() / ".autoviz" / "config.json"


def merge_into(target: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``overrides`` into ``target`` and return it."""
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            merge_into(target[key], value)
        else:
            target[key] = value
    return target


def parse_env_value(raw: str) -> Any:
    """Interpret an environment string as JSON, then as a yes/no flag, else keep it."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        pass
    flags = {"true": True, "yes": True, "on": True, "false": False, "no": False, "off": False}
    return flags.get(raw.strip().lower(), raw)


class Config:
    """
    Configuration tree built from the layers listed in the module docstring.

    Args:
        config_file: Explicit config file; it must exist
        use_environment: Apply ``AUTOVIZ_*`` environment overrides
    """

    def __init__(self, config_file: Optional[Union[str, Path]] = None,
                 use_environment: bool = True):
        self.logger = get_logger("config")
        self.config_file = Path(config_file) if config_file else None
        self.use_environment = use_environment
        self._values: Dict[str, Any] = {}
        self.loaded_files: List[Path] = []
        self.reload()

    def reload(self) -> None:
        """Rebuild the tree from all layers, dropping runtime overrides."""
        self._values = copy.deepcopy(DEFAULTS)
        self.loaded_files = []

        if USER_CONFIG_PATH.is_file():
            self._merge_file(USER_CONFIG_PATH)

        if self.config_file is not None:
            if not self.config_file.is_file():
                raise ConfigurationError(f"Config file not found: {self.config_file}",
                                         context={"file_path": str(self.config_file)})
            self._merge_file(self.config_file)
        elif Path("config.json").is_file():
            self._merge_file(Path("config.json"))

        if self.use_environment:
            self._merge_environment()

    def _merge_file(self, path: Path) -> None:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            self.logger.warning("Ignoring unreadable config file", extra={
                "file_path": str(path),
                "error": str(e)
            })
            return
        if not isinstance(data, dict):
            self.logger.warning("Ignoring config file without a JSON object", extra={
                "file_path": str(path)
            })
            return
        merge_into(self._values, data)
        self.loaded_files.append(path)

    def _merge_environment(self) -> None:
        for name, raw in os.environ.items():
            if name.startswith(ENV_PREFIX):
                keys = name[len(ENV_PREFIX):].lower().split(ENV_NESTING)
                self._assign(keys, parse_env_value(raw))

    def _assign(self, keys: List[str], value: Any) -> None:
        node = self._values
        for key in keys[:-1]:
            if not isinstance(node.get(key), dict):
                node[key] = {}
            node = node[key]
        node[keys[-1]] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Value at dotted ``key``, or ``default`` when any part is missing."""
        node: Any = self._values
        for part in key.split('.'):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def set(self, key: str, value: Any) -> None:
        """Override the value at dotted ``key``."""
        self._assign(key.split('.'), value)

    def save(self, file_path: Optional[Union[str, Path]] = None) -> Path:
        """Write the current tree as JSON, to the user config file by default."""
        path = Path(file_path) if file_path else USER_CONFIG_PATH
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self._values, f, indent=2)
        return path

    def reset_to_defaults(self) -> None:
        self._values = copy.deepcopy(DEFAULTS)


_config: Optional[Config] = None


def get_config() -> Config:
    """Process-wide Config, created on first use."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def set_config(config: Config) -> None:
    global _config
    _config = config


def reset_config() -> None:
    global _config
    _config = None
