# SPDX-License-Identifier: MIT
"""Keyframe track model and decimation."""

from keyframe_decimator.animation.animation_data import (
    AnimationClip,
    KeyframeTrack,
    TrackKind,
    TrackValidationError,
)
from keyframe_decimator.animation.decimator import decimate_track, removable_mask
from keyframe_decimator.animation.optimizer import (
    DEFAULT_TOLERANCE,
    ClipOptimizer,
    DecimationReport,
    count_keyframes,
    decimate_clip,
    summarize,
)
from keyframe_decimator.animation.sampling import (
    create_sub_clip,
    reconstruction_error,
    sample_track,
)

__all__ = [
    "AnimationClip",
    "KeyframeTrack",
    "TrackKind",
    "TrackValidationError",
    "decimate_track",
    "removable_mask",
    "DEFAULT_TOLERANCE",
    "ClipOptimizer",
    "DecimationReport",
    "count_keyframes",
    "decimate_clip",
    "summarize",
    "create_sub_clip",
    "reconstruction_error",
    "sample_track",
]
