# SPDX-License-Identifier: MIT
"""Keyframe Decimator - Shrink animation clips within a per-component error bound."""

from keyframe_decimator.animation import (
    AnimationClip,
    ClipOptimizer,
    KeyframeTrack,
    TrackKind,
    TrackValidationError,
    decimate_clip,
    decimate_track,
)

__version__ = "0.1.0"
__all__ = [
    "AnimationClip",
    "ClipOptimizer",
    "KeyframeTrack",
    "TrackKind",
    "TrackValidationError",
    "decimate_clip",
    "decimate_track",
]
