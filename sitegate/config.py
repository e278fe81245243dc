"""Settings: defaults from config.yaml, with per-project overrides from the environment.

A ``.env`` in the working directory (the site project being built) is loaded
first, so proxy settings for the font downloader and the overrides below can
live alongside the project.
"""

import os
from pathlib import Path

import yaml
from dotenv import find_dotenv, load_dotenv

load_dotenv(find_dotenv(usecwd=True))

CONFIG_PATH = Path(os.getenv("SITEGATE_CONFIG", Path(__file__).resolve().parent / "config.yaml"))

# Environment variable -> (config key path, type)
ENV_OVERRIDES = {
    "SITEGATE_FINAL_PHASE": (("final_phase",), str),
    "SITEGATE_STUB_MIN_BYTES": (("stub_min_bytes",), int),
    "SITEGATE_HTTP_MAX_RETRIES": (("http_max_retries",), int),
    "SITEGATE_FONTS_TIMEOUT": (("fonts", "timeout"), float),
}


def load_config(path: Path = CONFIG_PATH, environ=None) -> dict:
    """Read ``path`` and apply any SITEGATE_* overrides found in ``environ``."""
    environ = os.environ if environ is None else environ
    config = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    for var, (keys, cast) in ENV_OVERRIDES.items():
        raw = environ.get(var)
        if raw is None or raw == "":
            continue
        try:
            value = cast(raw)
        except ValueError as exc:
            raise ValueError(f"{var}={raw!r} is not a valid {cast.__name__}") from exc
        section = config
        for key in keys[:-1]:
            section = section.setdefault(key, {})
        section[keys[-1]] = value
    return config


_config = load_config()


def get_config() -> dict:
    """Return the loaded config dictionary."""
    return _config
