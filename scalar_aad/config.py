"""
scalar_aad configuration.

Engine-wide switches live here so the rest of the package has no hardcoded
policy. The active config is process-wide; `use_config` swaps it temporarily.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Optional

POW_GRADIENT_MODES = ("explicit", "log_recovery")


@dataclass(frozen=True)
class EngineConfig:
    """Configuration for the differentiation engine."""

    # "explicit": d(a**k)/da = k * a**(k-1), using the exponent stored on the node.
    # "log_recovery": recover k as log(v)/log(a); nan/inf for a in {0, 1},
    # a < 0 or v <= 0. Kept for parity with older results.
    pow_gradient: str = "explicit"

    # Emit a RuntimeWarning when backward produces nan/inf contributions
    warn_on_nonfinite: bool = True

    # Level applied to the "scalar_aad" logger by configure_logging()
    log_level: str = "WARNING"

    # Decimals shown in DOT labels
    dot_precision: int = 2

    def __post_init__(self):
        if self.pow_gradient not in POW_GRADIENT_MODES:
            raise ValueError(
                f"Unknown pow_gradient {self.pow_gradient!r}. "
                f"Available: {', '.join(POW_GRADIENT_MODES)}"
            )
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown log level {self.log_level!r}")
        if self.dot_precision < 0:
            raise ValueError("dot_precision must be >= 0")


_config = EngineConfig()


def get_config() -> EngineConfig:
    return _config


def set_config(config: EngineConfig) -> None:
    global _config
    if not isinstance(config, EngineConfig):
        raise TypeError(f"expected EngineConfig, got {type(config)}")
    _config = config


@contextmanager
def use_config(**overrides):
    """
    Temporarily override config fields:
        with use_config(pow_gradient="log_recovery"):
            y.backward()
    """
    prev = _config
    set_config(replace(prev, **overrides))
    try:
        yield _config
    finally:
        set_config(prev)


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Set the package logger level; install a root handler if none exists."""
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    logger = logging.getLogger("scalar_aad")
    logger.setLevel((level or _config.log_level).upper())
    return logger
