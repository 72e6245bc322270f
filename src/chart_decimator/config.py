"""
Configuration - Decimator settings resolved once at construction.

The decimation mode can be preset through the CHART_DECIMATOR_MODE
environment variable; everything else comes from the caller. The result
is an explicit DecimatorConfig handed to XYPainter.from_config, never
consulted again afterwards.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional
import logging
import os

from .scaling import ScalingMode

logger = logging.getLogger(__name__)

MODE_ENV_VAR = "CHART_DECIMATOR_MODE"


class DecimationMode(str, Enum):
    FAST = "fast"
    MINMAX = "minmax"

    @classmethod
    def parse(cls, value: Optional[str]) -> "DecimationMode":
        """
        Resolve a mode name, case-insensitively.

        Anything other than "fast" selects minmax; unknown names are logged.
        """
        if value is None:
            return cls.MINMAX
        name = value.strip().lower()
        if name == cls.FAST.value:
            return cls.FAST
        if name != cls.MINMAX.value:
            logger.warning("Unknown decimation mode '%s', using minmax", value)
        return cls.MINMAX


@dataclass(frozen=True)
class DecimatorConfig:
    """Per-painter settings, fixed for the painter's lifetime."""

    mode: DecimationMode = DecimationMode.MINMAX
    line_width: float = 1.0
    max_value_offset: float = 0.0
    scaling: ScalingMode = ScalingMode.ABSOLUTE

    def __post_init__(self) -> None:
        if self.line_width < 0:
            raise ValueError(f"line_width must be >= 0, got {self.line_width}")
        if self.max_value_offset < 0:
            raise ValueError(
                f"max_value_offset must be >= 0, got {self.max_value_offset}"
            )


def load_config(
    environ: Optional[Mapping[str, str]] = None,
    **overrides,
) -> DecimatorConfig:
    """
    Build a DecimatorConfig from the environment plus explicit overrides.

    Args:
        environ: Environment mapping (default: os.environ).
        **overrides: DecimatorConfig fields; a "mode" override given as a
            string is parsed like the environment variable.

    Returns:
        Frozen DecimatorConfig.
    """
    if environ is None:
        environ = os.environ

    mode = overrides.pop("mode", None)
    if mode is None:
        mode = DecimationMode.parse(environ.get(MODE_ENV_VAR))
    elif not isinstance(mode, DecimationMode):
        mode = DecimationMode.parse(mode)

    scaling = overrides.pop("scaling", ScalingMode.ABSOLUTE)
    if not isinstance(scaling, ScalingMode):
        scaling = ScalingMode(str(scaling).lower())

    config = DecimatorConfig(mode=mode, scaling=scaling, **overrides)
    logger.debug("Decimator config: %s", config)
    return config
