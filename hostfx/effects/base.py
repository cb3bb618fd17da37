"""
Base imports for effect modules.

This module contains the common imports used across all effect modules.
"""

from hostfx.types import Effect, EffectBase
from hostfx.utils import create_effect_with_trace

__all__ = ["Effect", "EffectBase", "create_effect_with_trace"]
