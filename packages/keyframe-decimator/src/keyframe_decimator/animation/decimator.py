# SPDX-License-Identifier: MIT
"""Remove keyframes that linear interpolation already reproduces."""

from __future__ import annotations

import logging
import math

import numpy as np

from keyframe_decimator.animation.animation_data import KeyframeTrack

logger = logging.getLogger(__name__)


def check_tolerance(tolerance: float) -> float:
    """Return the effective tolerance, clamping negative values to zero.

    Raises:
        ValueError: if tolerance is NaN or infinite.
    """
    tolerance = float(tolerance)
    if not math.isfinite(tolerance):
        raise ValueError(f"Tolerance must be a finite number, got {tolerance}")
    if tolerance < 0:
        logger.debug("Negative tolerance %s clamped to 0", tolerance)
        return 0.0
    return tolerance


def removable_mask(
    times: np.ndarray,
    samples: np.ndarray,
    tolerance: float,
) -> np.ndarray:
    """Compute which keyframes survive a single forward decimation pass.

    Each interior keyframe is predicted by interpolating between the last
    kept keyframe (the anchor) and its immediate successor in the original
    sequence. It is dropped only if every component lies within
    ``tolerance`` of the prediction; otherwise it is kept and becomes the
    new anchor. The first and last keyframes are always kept.

    Args:
        times: Keyframe times, shape ``(N,)``
        samples: Keyframe values, shape ``(N, stride)``
        tolerance: Maximum per-component absolute deviation

    Returns:
        Boolean array of shape ``(N,)``, True where the keyframe is kept
    """
    count = len(times)
    keep = np.ones(count, dtype=bool)
    if tolerance <= 0 or count <= 2:
        return keep

    anchor = 0
    for i in range(1, count - 1):
        following = i + 1
        span = times[following] - times[anchor]
        if span == 0:
            # Zero-length interval, no prediction possible
            anchor = i
            continue

        alpha = (times[i] - times[anchor]) / span
        predicted = samples[anchor] + (samples[following] - samples[anchor]) * alpha
        if np.any(np.abs(samples[i] - predicted) > tolerance):
            anchor = i
        else:
            keep[i] = False

    return keep


def decimate_track(track: KeyframeTrack, tolerance: float) -> KeyframeTrack:
    """Decimate a single track.

    Args:
        track: Input track, left untouched
        tolerance: Maximum per-component deviation allowed for a dropped
            keyframe. Zero or negative disables decimation.

    Returns:
        A new track of the same kind, path and stride holding the kept
        keyframes in their original order
    """
    tolerance = check_tolerance(tolerance)
    if tolerance == 0 or len(track) <= 2:
        return track.copy()

    keep = removable_mask(track.times, track.samples, tolerance)
    # Boolean indexing allocates fresh arrays
    return track.with_keyframes(track.times[keep], track.samples[keep].ravel())
