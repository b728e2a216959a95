"""Configuration — YAML-backed instrument and search-window settings.

All defaults live in ``configs/voicing_defaults.yaml`` inside the package.
No hardcoded fallbacks: if a required key is missing from the YAML, a
``ValidationError`` is raised with a clear message.

Keys:
    tuning        – preset tuning name used when none is given
    string_count  – strings a tuning must have
    finger_count  – fingers available to the fretting hand
    min_fret      – default lowest pressed fret
    max_fret      – highest fret a voicing may use
    max_span      – widest allowed fret stretch within one voicing
    fret_limit    – physical number of frets (upper bound for the above)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from voicelead.errors import ValidationError
from voicelead.theory.tuning import Tuning

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH: Path = Path(__file__).resolve().parent / "configs" / "voicing_defaults.yaml"

_REQUIRED_KEYS: list[str] = [
    "tuning",
    "string_count",
    "finger_count",
    "min_fret",
    "max_fret",
    "max_span",
    "fret_limit",
]


@dataclass(frozen=True)
class VoicingConfig:
    """Validated, immutable engine settings."""

    tuning: str
    string_count: int
    finger_count: int
    min_fret: int
    max_fret: int
    max_span: int
    fret_limit: int

    def __post_init__(self) -> None:
        if self.string_count < 1:
            raise ValidationError(f"string_count must be positive, got {self.string_count}")
        if self.finger_count < 1:
            raise ValidationError(f"finger_count must be positive, got {self.finger_count}")
        if self.max_span < 0:
            raise ValidationError(f"max_span must not be negative, got {self.max_span}")
        if not 0 <= self.min_fret <= self.max_fret <= self.fret_limit:
            raise ValidationError(
                "Expected 0 <= min_fret <= max_fret <= fret_limit, got "
                f"{self.min_fret}, {self.max_fret}, {self.fret_limit}"
            )

    def get_tuning(self) -> Tuning:
        return Tuning.from_name(self.tuning)

    def with_overrides(self, **overrides: Any) -> VoicingConfig:
        """Return a copy with the given fields replaced (and re-validated)."""
        unknown = set(overrides) - set(_REQUIRED_KEYS)
        if unknown:
            raise ValidationError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        return replace(self, **overrides)


def load_config(config_path: str | Path | None = None, **overrides: Any) -> VoicingConfig:
    """Load engine settings from YAML.

    Args:
        config_path: Path to a settings YAML. Defaults to the packaged
            ``configs/voicing_defaults.yaml``.
        **overrides: Individual keys to replace after loading
            (e.g. ``max_span=5``).

    Returns:
        A validated :class:`VoicingConfig`.

    Raises:
        FileNotFoundError: If *config_path* does not exist.
        ValidationError: If a required key is missing or a value is invalid.
    """
    path = DEFAULT_CONFIG_PATH if config_path is None else Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Voicing config not found: {path}")

    with open(path, "r", encoding="utf-8") as fh:
        cfg: dict[str, Any] = yaml.safe_load(fh) or {}

    for key in _REQUIRED_KEYS:
        if key not in cfg:
            raise ValidationError(f"Missing required key '{key}' in voicing config: {path}")

    config = VoicingConfig(
        tuning=str(cfg["tuning"]),
        string_count=int(cfg["string_count"]),
        finger_count=int(cfg["finger_count"]),
        min_fret=int(cfg["min_fret"]),
        max_fret=int(cfg["max_fret"]),
        max_span=int(cfg["max_span"]),
        fret_limit=int(cfg["fret_limit"]),
    )
    logger.debug("Loaded voicing config from %s: %s", path, config)

    if overrides:
        config = config.with_overrides(**overrides)
    return config


@lru_cache(maxsize=1)
def default_config() -> VoicingConfig:
    """The packaged defaults, read once per process."""
    return load_config()
