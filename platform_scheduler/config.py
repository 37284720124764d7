from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from dotenv import load_dotenv

from platform_scheduler.core.models import ScoringWeights

# Load .env early (no error if missing)
load_dotenv()


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    return float(raw) if raw not in (None, "") else default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    return int(raw) if raw not in (None, "") else default


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw in (None, ""):
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class SchedulerConfig:
    weight_idle_gap: float = 1.0
    weight_load: float = 0.3
    weight_delayed_spread: float = 0.5
    window_minutes: int = 240
    # Live delay feed
    tick_seconds: float = 4.0
    delayed_per_tick: int = 2
    min_delay: int = 5
    max_delay: int = 18
    seed: int | None = None
    autostart: bool = False
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        for name in ("weight_idle_gap", "weight_load", "weight_delayed_spread"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be nonnegative, got {getattr(self, name)}")

    @classmethod
    def from_env(cls) -> "SchedulerConfig":
        seed = os.getenv("LIVE_SEED")
        return cls(
            weight_idle_gap=_env_float("PLATFORM_WEIGHT_IDLE_GAP", cls.weight_idle_gap),
            weight_load=_env_float("PLATFORM_WEIGHT_LOAD", cls.weight_load),
            weight_delayed_spread=_env_float("PLATFORM_WEIGHT_DELAYED_SPREAD", cls.weight_delayed_spread),
            window_minutes=_env_int("PLATFORM_WINDOW_MINUTES", cls.window_minutes),
            tick_seconds=_env_float("LIVE_TICK_SECONDS", cls.tick_seconds),
            delayed_per_tick=_env_int("LIVE_DELAYED_PER_TICK", cls.delayed_per_tick),
            min_delay=_env_int("LIVE_MIN_DELAY", cls.min_delay),
            max_delay=_env_int("LIVE_MAX_DELAY", cls.max_delay),
            seed=int(seed) if seed else None,
            autostart=_env_bool("LIVE_AUTOSTART"),
            log_level=os.getenv("LOG_LEVEL", cls.log_level).upper(),
        )

    @property
    def weights(self) -> ScoringWeights:
        return ScoringWeights(
            idle_gap=self.weight_idle_gap,
            load=self.weight_load,
            delayed_spread=self.weight_delayed_spread,
        )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
