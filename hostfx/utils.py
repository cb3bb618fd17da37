"""
Utility functions for the hostfx library.
"""

from __future__ import annotations

import linecache
import os
import sys
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from hostfx.types import EffectBase, EffectCreationContext

E = TypeVar("E", bound="EffectBase")

# Environment variable to control debug mode
DEBUG_EFFECTS = os.environ.get("HOSTFX_DEBUG", "").lower() in ("1", "true", "yes")


_PACKAGE_DIR = os.path.normcase(os.path.dirname(os.path.abspath(__file__))) + os.sep


def _is_hostfx_internal(path: str) -> bool:
    return os.path.normcase(os.path.abspath(path)).startswith(_PACKAGE_DIR)


def capture_creation_context(skip_frames: int = 2) -> EffectCreationContext | None:
    """
    Capture where an effect was built.

    Walks outward from ``skip_frames`` until it leaves hostfx's own modules so
    that the recorded location points at user code.

    Args:
        skip_frames: Number of frames to skip (default 2 to skip this function and caller)

    Returns:
        EffectCreationContext for the first user frame, or None if the stack is too shallow
    """
    from hostfx.types import EffectCreationContext

    try:
        frame = sys._getframe(skip_frames)
    except ValueError:
        return None

    while frame is not None and _is_hostfx_internal(frame.f_code.co_filename):
        frame = frame.f_back
    if frame is None:
        return None

    filename = frame.f_code.co_filename
    line = frame.f_lineno
    code = linecache.getline(filename, line).strip() if DEBUG_EFFECTS else None
    return EffectCreationContext(
        filename=filename,
        line=line,
        function=frame.f_code.co_name,
        code=code or None,
    )


def create_effect_with_trace(effect: E, skip_frames: int = 3) -> E:
    """Attach creation context to an effect."""
    context = capture_creation_context(skip_frames)
    if context is None:
        return effect
    return effect.with_created_at(context)


__all__ = [
    "DEBUG_EFFECTS",
    "capture_creation_context",
    "create_effect_with_trace",
]
