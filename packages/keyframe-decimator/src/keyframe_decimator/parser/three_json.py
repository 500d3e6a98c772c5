# SPDX-License-Identifier: MIT
"""Build clips from Three.js ``AnimationClip.toJSON()`` data."""

from __future__ import annotations

import logging
from typing import Any

from keyframe_decimator.animation.animation_data import (
    AnimationClip,
    KeyframeTrack,
    TrackKind,
    TrackValidationError,
)
from keyframe_decimator.parser.msgpack_decoder import decode_msgpack

logger = logging.getLogger(__name__)

# Three.js track types that carry discrete, non-numeric values
_SKIPPED_TYPES = {"string"}


def parse_three_js_track(track_data: dict[str, Any]) -> KeyframeTrack | None:
    """Parse a Three.js keyframe track.

    Args:
        track_data: Track dictionary with "name", "times", "values" and
            optionally "type"

    Returns:
        KeyframeTrack, or None for track types that cannot be decimated

    Raises:
        TrackValidationError: if the keyframe data is malformed
    """
    name = track_data.get("name", "")
    type_name = track_data.get("type")

    if type_name in _SKIPPED_TYPES:
        logger.debug("Skipping %s track '%s'", type_name, name)
        return None

    if type_name is None:
        kind = TrackKind.from_name(name)
    else:
        try:
            kind = TrackKind(type_name)
        except ValueError:
            raise TrackValidationError(
                f"Unknown track type '{type_name}' for '{name}'"
            ) from None

    try:
        track = KeyframeTrack(
            target_path=name,
            kind=kind,
            times=track_data.get("times", []),
            values=track_data.get("values", []),
        )
    except TrackValidationError:
        raise
    except (TypeError, ValueError) as e:
        raise TrackValidationError(f"Invalid keyframe data for '{name}': {e}") from e

    track.validate()
    return track


def parse_animation_clip(clip_data: dict[str, Any]) -> AnimationClip:
    """Parse a Three.js animation clip.

    Args:
        clip_data: Clip dictionary with "name", "duration" and "tracks"

    Returns:
        AnimationClip object
    """
    name = clip_data.get("name", "")
    duration = clip_data.get("duration", -1.0)
    tracks_data = clip_data.get("tracks", [])

    tracks = []
    for track_data in tracks_data:
        track = parse_three_js_track(track_data)
        if track is not None:
            tracks.append(track)

    return AnimationClip(name=name, duration=float(duration), tracks=tuple(tracks))


def load_clip_msgpack(data: bytes) -> AnimationClip:
    """Decode a msgpack-encoded clip dictionary."""
    clip_data = decode_msgpack(data)
    if not isinstance(clip_data, dict):
        raise TrackValidationError(
            f"Expected a clip dictionary, got {type(clip_data).__name__}"
        )
    return parse_animation_clip(clip_data)
