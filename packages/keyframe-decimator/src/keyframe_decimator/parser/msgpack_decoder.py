# SPDX-License-Identifier: MIT
"""Msgpack decoder with support for Three.js typed array extensions."""

from __future__ import annotations

from typing import Any

import msgpack
import numpy as np

# Extension type codes used for Three.js typed arrays
EXT_UINT8_ARRAY = 0x12  # 18
EXT_INT32_ARRAY = 0x15  # 21
EXT_UINT32_ARRAY = 0x16  # 22
EXT_FLOAT32_ARRAY = 0x17  # 23

_EXT_DTYPES = {
    EXT_UINT8_ARRAY: np.uint8,
    EXT_INT32_ARRAY: np.int32,
    EXT_UINT32_ARRAY: np.uint32,
    EXT_FLOAT32_ARRAY: np.float32,
}


def decode_typed_array(code: int, data: bytes) -> Any:
    """Decode a msgpack extension type to a numpy array.

    Unknown extension codes are returned as ``msgpack.ExtType``.
    """
    dtype = _EXT_DTYPES.get(code)
    if dtype is None:
        return msgpack.ExtType(code, data)
    return np.frombuffer(data, dtype=np.dtype(dtype).newbyteorder("<"))


def decode_msgpack(data: bytes) -> Any:
    """Decode msgpack data with support for typed arrays.

    Args:
        data: Raw msgpack bytes

    Returns:
        Decoded Python object (dict, list, etc.)
    """
    return msgpack.unpackb(
        data, ext_hook=decode_typed_array, raw=False, strict_map_key=False
    )
