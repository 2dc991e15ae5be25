import os
from pathlib import Path

import yaml

CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "mork_parser.yml"
CONFIG_ENV_VAR = "MORK_PARSER_CONFIG"

DEFAULT_PARSER = {
    "parse_groups": True,
    "default_scope": 0x80,
    "encoding": "utf-8",
    "max_pushback": None,
}


class MPConfig:
    def __init__(self, data):
        self.paths = data.get("paths", {}) or {}
        self.parser = {**DEFAULT_PARSER, **(data.get("parser", {}) or {})}
        self.logging = data.get("logging", {}) or {}
        self.export = data.get("export", {}) or {}
        self.debug = data.get("debug", False)

    @property
    def trace(self) -> bool:
        return bool(self.logging.get("trace", False))


def config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override) if override else CONFIG_PATH


def load_config(path: Path | None = None) -> 'MPConfig':
    path = path or config_path()
    if not path.exists():
        # Installed without the repository config directory
        return MPConfig({})

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return MPConfig(data)

_config_cache = None

def get_config() -> 'MPConfig':
    global _config_cache
    if _config_cache is None:
        _config_cache = load_config()
    return _config_cache


def reset_config() -> None:
    global _config_cache
    _config_cache = None
