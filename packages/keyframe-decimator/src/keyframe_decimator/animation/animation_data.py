# SPDX-License-Identifier: MIT
"""Animation data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Sequence

import numpy as np


class TrackValidationError(ValueError):
    """Raised when track or clip data breaks the keyframe invariants."""


class TrackKind(Enum):
    """Kinds of keyframe tracks, named after the Three.js track types."""

    NUMBER = "number"
    VECTOR = "vector"
    QUATERNION = "quaternion"
    COLOR = "color"
    BOOLEAN = "bool"

    @property
    def default_stride(self) -> int:
        """Number of components per sample for this kind."""
        return _DEFAULT_STRIDES[self]

    @classmethod
    def from_name(cls, name: str) -> TrackKind:
        """Infer a track kind from a property path such as ``"Hips.quaternion"``."""
        # Three.js format: "object.property" or ".property"
        if ".quaternion" in name:
            return cls.QUATERNION
        elif ".position" in name or ".scale" in name:
            return cls.VECTOR
        elif ".visible" in name:
            return cls.BOOLEAN
        elif ".color" in name:
            return cls.COLOR
        return cls.NUMBER


_DEFAULT_STRIDES = {
    TrackKind.NUMBER: 1,
    TrackKind.VECTOR: 3,
    TrackKind.QUATERNION: 4,
    TrackKind.COLOR: 3,
    TrackKind.BOOLEAN: 1,
}


def _frozen_array(data: Iterable[float] | np.ndarray, label: str) -> np.ndarray:
    array = np.array(data, dtype=np.float64)
    if array.ndim != 1:
        raise TrackValidationError(
            f"Expected {label} to be one-dimensional, got shape {array.shape}"
        )
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class KeyframeTrack:
    """Keyframes for a single animated property.

    ``values`` is flat: the sample at index ``i`` occupies
    ``values[i * value_stride : (i + 1) * value_stride]``.
    """

    target_path: str
    kind: TrackKind
    times: np.ndarray  # Time in seconds
    values: np.ndarray
    value_stride: int | None = None

    def __post_init__(self) -> None:
        times = _frozen_array(self.times, "times")
        values = _frozen_array(self.values, "values")

        stride = self.value_stride
        if stride is None:
            # Same rule as Three.js KeyframeTrack.getValueSize()
            stride = len(values) // len(times) if len(times) else self.kind.default_stride
        if isinstance(stride, bool) or not isinstance(stride, (int, np.integer)):
            raise TrackValidationError(
                f"value_stride must be an integer, got {type(stride).__name__}"
            )
        if stride <= 0:
            raise TrackValidationError(
                f"value_stride must be positive, got {stride} for '{self.target_path}'"
            )
        if len(values) != len(times) * stride:
            raise TrackValidationError(
                f"Track '{self.target_path}' has {len(values)} values for "
                f"{len(times)} keyframes with stride {stride}"
            )

        object.__setattr__(self, "times", times)
        object.__setattr__(self, "values", values)
        object.__setattr__(self, "value_stride", int(stride))

    def __len__(self) -> int:
        """Return number of keyframes."""
        return len(self.times)

    @property
    def samples(self) -> np.ndarray:
        """Read-only ``(N, value_stride)`` view of the values."""
        return self.values.reshape(len(self.times), self.value_stride)

    @property
    def start_time(self) -> float:
        return float(self.times[0]) if len(self.times) else 0.0

    @property
    def end_time(self) -> float:
        return float(self.times[-1]) if len(self.times) else 0.0

    def get_value_at(self, index: int) -> tuple[float, ...]:
        """Get the value tuple at a given keyframe index."""
        start = index * self.value_stride
        return tuple(float(v) for v in self.values[start : start + self.value_stride])

    def validate(self) -> None:
        """Check the timing and value invariants.

        Raises:
            TrackValidationError: if times or values are not finite, or times
                are not strictly increasing.
        """
        if not np.all(np.isfinite(self.times)):
            raise TrackValidationError(
                f"Track '{self.target_path}' has non-finite keyframe times"
            )
        steps = np.diff(self.times)
        if np.any(steps <= 0):
            bad = int(np.argmax(steps <= 0)) + 1
            raise TrackValidationError(
                f"Track '{self.target_path}' times must be strictly increasing "
                f"(keyframe {bad} at t={self.times[bad]} follows "
                f"t={self.times[bad - 1]})"
            )
        finite = np.isfinite(self.samples).all(axis=1)
        if not np.all(finite):
            bad = int(np.argmin(finite))
            raise TrackValidationError(
                f"Track '{self.target_path}' has non-finite values at keyframe {bad}"
            )

    def with_keyframes(
        self, times: Sequence[float] | np.ndarray, values: Sequence[float] | np.ndarray
    ) -> KeyframeTrack:
        """Build a track of the same kind, path and stride with new keyframes."""
        return KeyframeTrack(
            target_path=self.target_path,
            kind=self.kind,
            times=times,
            values=values,
            value_stride=self.value_stride,
        )

    def copy(self) -> KeyframeTrack:
        """Return an independent, value-equal copy."""
        return self.with_keyframes(self.times, self.values)

    def value_equal(self, other: KeyframeTrack) -> bool:
        """Compare path, kind, stride and keyframe data exactly."""
        return (
            self.target_path == other.target_path
            and self.kind == other.kind
            and self.value_stride == other.value_stride
            and np.array_equal(self.times, other.times)
            and np.array_equal(self.values, other.values)
        )


@dataclass(frozen=True, eq=False)
class AnimationClip:
    """A named, fixed-duration collection of keyframe tracks.

    A negative ``duration`` (Three.js uses ``-1``) is replaced by the latest
    track end time.
    """

    name: str
    duration: float = -1.0
    tracks: tuple[KeyframeTrack, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        tracks = tuple(self.tracks)
        object.__setattr__(self, "tracks", tracks)
        if self.duration < 0:
            duration = max((track.end_time for track in tracks), default=0.0)
            object.__setattr__(self, "duration", duration)
        else:
            object.__setattr__(self, "duration", float(self.duration))

    @property
    def keyframe_count(self) -> int:
        """Total number of keyframes across all tracks."""
        return sum(len(track) for track in self.tracks)

    def get_track(self, target_path: str) -> KeyframeTrack | None:
        """Get track by target path."""
        for track in self.tracks:
            if track.target_path == target_path:
                return track
        return None

    def validate(self) -> None:
        """Validate every track; raises TrackValidationError on the first failure."""
        for track in self.tracks:
            track.validate()

    def copy(self) -> AnimationClip:
        """Return a deep, value-equal copy."""
        return AnimationClip(
            name=self.name,
            duration=self.duration,
            tracks=tuple(track.copy() for track in self.tracks),
        )

    def value_equal(self, other: AnimationClip) -> bool:
        return (
            self.name == other.name
            and self.duration == other.duration
            and len(self.tracks) == len(other.tracks)
            and all(a.value_equal(b) for a, b in zip(self.tracks, other.tracks))
        )
