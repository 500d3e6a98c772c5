# SPDX-License-Identifier: MIT
"""Linear sampling of keyframe tracks, matching what playback does."""

from __future__ import annotations

import numpy as np

from keyframe_decimator.animation.animation_data import AnimationClip, KeyframeTrack

DEFAULT_FPS = 30.0


def sample_track(track: KeyframeTrack, time: float) -> np.ndarray:
    """Evaluate a track at an arbitrary time.

    Components are interpolated linearly and independently. Times outside
    the keyframe range clamp to the first or last keyframe.

    Args:
        track: Track to sample (must have at least one keyframe)
        time: Time in seconds

    Returns:
        Array of ``value_stride`` components
    """
    if len(track) == 0:
        raise ValueError(f"Cannot sample empty track '{track.target_path}'")

    times = track.times
    samples = track.samples
    if time <= times[0]:
        return samples[0].copy()
    if time >= times[-1]:
        return samples[-1].copy()

    right = int(np.searchsorted(times, time, side="right"))
    left = right - 1
    dt = times[right] - times[left]
    alpha = (time - times[left]) / dt if dt != 0 else 0.0
    return samples[left] + (samples[right] - samples[left]) * alpha


def resample_track(track: KeyframeTrack, times: np.ndarray) -> np.ndarray:
    """Sample a track at many times; returns shape ``(len(times), stride)``."""
    times = np.asarray(times, dtype=np.float64)
    columns = [
        np.interp(times, track.times, track.samples[:, k])
        for k in range(track.value_stride)
    ]
    return np.stack(columns, axis=-1) if columns else np.empty((len(times), 0))


def reconstruction_error(original: KeyframeTrack, decimated: KeyframeTrack) -> float:
    """Largest per-component deviation of a decimated track from its source.

    The decimated track is sampled at every original keyframe time and
    compared against the original values.
    """
    if original.value_stride != decimated.value_stride:
        raise ValueError(
            f"Stride mismatch for '{original.target_path}': "
            f"{original.value_stride} != {decimated.value_stride}"
        )
    if len(original) == 0:
        return 0.0
    if len(decimated) == 0:
        raise ValueError(
            f"Cannot rebuild '{original.target_path}' from an empty decimated track"
        )
    rebuilt = resample_track(decimated, original.times)
    return float(np.max(np.abs(rebuilt - original.samples)))


def create_sub_clip(
    clip: AnimationClip,
    name: str,
    start_frame: int,
    end_frame: int,
    fps: float = DEFAULT_FPS,
) -> AnimationClip:
    """Cut a frame range out of a clip.

    Keyframes inside ``[start_frame / fps, end_frame / fps]`` are kept and
    shifted so the new clip starts at 0. Tracks with no keyframes in range
    are left out.

    Args:
        clip: Source clip
        name: Name of the new clip
        start_frame: First frame (inclusive)
        end_frame: Last frame (inclusive)
        fps: Frame rate used to convert frames to seconds

    Returns:
        New AnimationClip lasting ``(end_frame - start_frame) / fps`` seconds

    Raises:
        ValueError: if end_frame is not after start_frame
    """
    start_time = start_frame / fps
    end_time = end_frame / fps
    duration = end_time - start_time
    if duration <= 0:
        raise ValueError(
            f"End frame must be after start frame, got {start_frame}..{end_frame}"
        )

    tracks = []
    for track in clip.tracks:
        in_range = (track.times >= start_time) & (track.times <= end_time)
        if not np.any(in_range):
            continue
        tracks.append(
            track.with_keyframes(
                track.times[in_range] - start_time,
                track.samples[in_range].ravel(),
            )
        )

    return AnimationClip(name=name, duration=duration, tracks=tuple(tracks))
