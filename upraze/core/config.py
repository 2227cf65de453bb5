import logging
import math

from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from typing import List, Optional


class Settings(BaseSettings):
    # Environment
    ENV: str = "development"
    CONFIG_STRICT: bool = False
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    # Smoothing
    EMA_ALPHA: float = 0.3
    STREAK_DECAY_DAYS: float = 7.0

    # Preprocessing (winsorize + rolling z)
    ZSCORE_WINDOW: int = 60
    WINSOR_LOWER_PCT: float = 0.01
    WINSOR_UPPER_PCT: float = 0.99

    # Momentum score weights (per-user weights in the app settings screen)
    MOMENTUM_WEIGHT_VELOCITY: float = 0.5
    MOMENTUM_WEIGHT_ACCELERATION: float = 0.2
    MOMENTUM_WEIGHT_Z: float = 0.2
    MOMENTUM_WEIGHT_STREAK: float = 0.1

    # Domain aggregation
    AGGREGATOR_MAX_WORKERS: int = 1  # 1 = sequential

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
settings = Settings()


def config_problems(cfg: Settings) -> List[str]:
    """Return human-readable problems with the numeric configuration."""
    problems = []
    if not isinstance(logging.getLevelName(cfg.LOG_LEVEL.upper()), int):
        problems.append(f"LOG_LEVEL must be a logging level name, got {cfg.LOG_LEVEL}")
    if not (0.0 < cfg.EMA_ALPHA <= 1.0):
        problems.append(f"EMA_ALPHA must be in (0, 1], got {cfg.EMA_ALPHA}")
    if not cfg.STREAK_DECAY_DAYS > 0:
        problems.append(f"STREAK_DECAY_DAYS must be positive, got {cfg.STREAK_DECAY_DAYS}")
    if cfg.ZSCORE_WINDOW < 1:
        problems.append(f"ZSCORE_WINDOW must be >= 1, got {cfg.ZSCORE_WINDOW}")
    if not (0.0 <= cfg.WINSOR_LOWER_PCT < cfg.WINSOR_UPPER_PCT <= 1.0):
        problems.append(
            f"winsor bounds must satisfy 0 <= lower < upper <= 1, "
            f"got {cfg.WINSOR_LOWER_PCT}..{cfg.WINSOR_UPPER_PCT}"
        )
    for key in (
        "MOMENTUM_WEIGHT_VELOCITY",
        "MOMENTUM_WEIGHT_ACCELERATION",
        "MOMENTUM_WEIGHT_Z",
        "MOMENTUM_WEIGHT_STREAK",
    ):
        value = getattr(cfg, key)
        if not math.isfinite(value):
            problems.append(f"{key} must be finite, got {value}")
    if cfg.AGGREGATOR_MAX_WORKERS < 1:
        problems.append(f"AGGREGATOR_MAX_WORKERS must be >= 1, got {cfg.AGGREGATOR_MAX_WORKERS}")
    return problems


def validate_config(strict: Optional[bool] = None, settings_obj: Optional[Settings] = None, logger: Optional[logging.Logger] = None) -> bool:
    """Validate pipeline configuration.

    In strict mode raise RuntimeError; otherwise emit warnings only.
    """
    cfg = settings_obj or settings
    log = logger or logging.getLogger("upraze")
    strict_mode = strict if strict is not None else getattr(cfg, "CONFIG_STRICT", False)

    problems = config_problems(cfg)
    if problems:
        message = f"Invalid configuration: {'; '.join(problems)}"
        if strict_mode:
            raise RuntimeError(message)
        log.warning(message)
        return False

    return True
