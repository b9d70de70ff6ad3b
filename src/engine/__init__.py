"""Engine module for evaluating alerts."""

from .alert_engine import AlertEngine, default_evaluators
from .models import EngineResult
from .settings import EngineSettings

__all__ = [
    "AlertEngine",
    "EngineResult",
    "EngineSettings",
    "default_evaluators",
]
