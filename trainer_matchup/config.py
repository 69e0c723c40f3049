"""Environment-driven settings shared by the CLI and both servers."""

from __future__ import annotations

import os
from dataclasses import replace
from typing import Optional

from dotenv import load_dotenv

from .analysis import ScoringOptions
from .clients import PokeAPIClient
from .data.tables import load_tables

# Load default .env first, then overlay .env.local so user-specific settings win.
load_dotenv()
load_dotenv(".env.local", override=True)

TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in TRUE_VALUES


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


def load_options_from_env(base: Optional[ScoringOptions] = None) -> ScoringOptions:
    base = base or ScoringOptions()
    return replace(
        base,
        enable_fatigue=_env_flag("TRAINER_MATCHUP_FATIGUE", base.enable_fatigue),
        fatigue_penalty=_env_float("TRAINER_MATCHUP_FATIGUE_PENALTY", base.fatigue_penalty),
        fatigue_hp_loss_threshold=_env_float(
            "TRAINER_MATCHUP_FATIGUE_THRESHOLD", base.fatigue_hp_loss_threshold
        ),
        assume_carry_over=_env_flag("TRAINER_MATCHUP_CARRY_OVER", base.assume_carry_over),
    )


def make_tables(path: Optional[str] = None):
    """Tables from ``path`` or ``TRAINER_MATCHUP_TABLES``; PokeAPI when neither is set."""

    path = path or os.getenv("TRAINER_MATCHUP_TABLES")
    if path:
        return load_tables(path)
    return PokeAPIClient()
