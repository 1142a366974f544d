"""AI package exports."""

from .targeting import TargetingAI, TargetingMode

__all__ = ["TargetingAI", "TargetingMode"]
