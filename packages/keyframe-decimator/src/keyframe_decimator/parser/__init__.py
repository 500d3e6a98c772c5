# SPDX-License-Identifier: MIT
"""Parser module for serialized animation clips."""

from .msgpack_decoder import decode_msgpack, decode_typed_array
from .three_json import load_clip_msgpack, parse_animation_clip, parse_three_js_track

__all__ = [
    "decode_msgpack",
    "decode_typed_array",
    "load_clip_msgpack",
    "parse_animation_clip",
    "parse_three_js_track",
]
