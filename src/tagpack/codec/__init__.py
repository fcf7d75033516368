"""Binary codec for tagpack.

This module provides encoding and decoding between tagpack values and the
tag-prefixed wire format.
"""

from __future__ import annotations

from .config import DecoderConfig
from .decoder import decode, decode_prefix, load
from .encoder import dump, encode

__all__ = [
    "encode",
    "dump",
    "decode",
    "decode_prefix",
    "load",
    "DecoderConfig",
]
