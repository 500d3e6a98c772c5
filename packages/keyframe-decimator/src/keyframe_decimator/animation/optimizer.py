# SPDX-License-Identifier: MIT
"""Decimate whole animation clips."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Hashable

from keyframe_decimator.animation.animation_data import AnimationClip
from keyframe_decimator.animation.decimator import check_tolerance, decimate_track

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = 0.01


def decimate_clip(clip: AnimationClip, tolerance: float = DEFAULT_TOLERANCE) -> AnimationClip:
    """Decimate every track of a clip independently.

    Args:
        clip: Clip to decimate, left untouched
        tolerance: Maximum per-component deviation for dropped keyframes
            (0 = no decimation)

    Returns:
        New AnimationClip with the same name, duration and track order

    Raises:
        TrackValidationError: if any track breaks the keyframe invariants
        ValueError: if tolerance is not a finite number
    """
    tolerance = check_tolerance(tolerance)
    clip.validate()

    if tolerance == 0:
        return clip.copy()

    tracks = tuple(decimate_track(track, tolerance) for track in clip.tracks)
    result = AnimationClip(name=clip.name, duration=clip.duration, tracks=tracks)

    logger.debug(
        "Decimated clip '%s' at tolerance %g: %d -> %d keyframes",
        clip.name,
        tolerance,
        clip.keyframe_count,
        result.keyframe_count,
    )
    return result


def count_keyframes(clip: AnimationClip | None) -> int:
    """Count keyframes across all tracks of a clip (0 for None)."""
    if clip is None:
        return 0
    return clip.keyframe_count


@dataclass(frozen=True)
class DecimationReport:
    """Keyframe counts before and after decimation."""

    original_count: int
    decimated_count: int

    @property
    def removed_count(self) -> int:
        return self.original_count - self.decimated_count

    @property
    def reduction(self) -> float:
        """Fraction of keyframes removed, in [0, 1]."""
        if self.original_count == 0:
            return 0.0
        return self.removed_count / self.original_count

    def __str__(self) -> str:
        return (
            f"{self.original_count} -> {self.decimated_count} keyframes "
            f"({self.reduction * 100:.1f}% removed)"
        )


def summarize(original: AnimationClip, decimated: AnimationClip) -> DecimationReport:
    """Compare keyframe counts of a clip and its decimated version."""
    return DecimationReport(
        original_count=count_keyframes(original),
        decimated_count=count_keyframes(decimated),
    )


class ClipOptimizer:
    """Memoizing front end for decimate_clip.

    Results are cached by ``(key_func(clip), tolerance)``. Without a key
    function the clip object itself is the key (clips hash by identity), so a
    result is only reused for the very same clip instance.
    """

    def __init__(self, key_func: Callable[[AnimationClip], Hashable] | None = None):
        self._key_func = key_func
        self._cache: dict[tuple[Hashable, float], AnimationClip] = {}

    def optimize(
        self, clip: AnimationClip | None, tolerance: float = DEFAULT_TOLERANCE
    ) -> AnimationClip | None:
        """Return the decimated clip, computing it only on a cache miss."""
        if clip is None:
            return None

        key = clip if self._key_func is None else self._key_func(clip)
        cache_key = (key, float(tolerance))
        cached = self._cache.get(cache_key)
        if cached is not None:
            return cached

        optimized = decimate_clip(clip, tolerance)
        self._cache[cache_key] = optimized
        return optimized

    def clear_cache(self) -> None:
        self._cache.clear()

    @property
    def cache_size(self) -> int:
        return len(self._cache)
