"""
engine/
-------
Configuration, playback & recording layer.

    from engine import RunConfig, Recorder, Stepper, compare
"""

from engine.config   import HashConfig, RunConfig, DEFAULT_DATA, SAMPLE_KEYS, validate, generator_kwargs
from engine.logs     import RunLogHandler, get_logger
from engine.stepper  import Stepper, StepperState, SPEED_PRESETS
from engine.recorder import Recorder, RunMetrics, ComparisonResult, compare

__all__ = [
    "HashConfig",
    "RunConfig",
    "DEFAULT_DATA",
    "SAMPLE_KEYS",
    "validate",
    "generator_kwargs",
    "RunLogHandler",
    "get_logger",
    "Stepper",
    "StepperState",
    "SPEED_PRESETS",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "compare",
]
