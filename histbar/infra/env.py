from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping


ENV_OVERRIDE_KEYS: dict[str, str] = {
    "HISTBAR_BIN_WIDTH": "histogram.bin_width",
    "HISTBAR_BAR_LENGTH": "histogram.bar_length",
    "HISTBAR_MAX_BINS": "histogram.max_bins",
    "HISTBAR_FORMAT": "output.format",
    "HISTBAR_LOG_LEVEL": "logging.level",
}


def load_dotenv(path: str | Path = ".env") -> None:
    dotenv_path = Path(path)
    if not dotenv_path.exists():
        return
    for line in dotenv_path.read_text(encoding="utf-8-sig").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        if "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        key = key.strip()
        value = value.strip().strip("'").strip('"')
        if not os.environ.get(key, "").strip():
            os.environ[key] = value


def env_overrides(environ: Mapping[str, str] | None = None) -> list[str]:
    """Translate HISTBAR_* variables into dotted.path=value overrides."""
    environment = os.environ if environ is None else environ
    overrides: list[str] = []
    for env_key, config_path in ENV_OVERRIDE_KEYS.items():
        value = environment.get(env_key, "").strip()
        if value:
            overrides.append(f"{config_path}={value}")
    return overrides
