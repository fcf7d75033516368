"""Decoder resource limits.

Decoding is recursive over container structure, and declared lengths come
straight from the input. These limits bound stack depth and memory when the
input is untrusted.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DecoderConfig:
    """Limits applied while decoding.

    Attributes:
        max_depth: Maximum container nesting depth (default 64). A top-level
            scalar has depth 0; each enclosing array or map adds one.

        max_elements: Maximum total number of values decoded in one call,
            counting every scalar, container, map key and map value
            (default 1,000,000).

        max_str_len: Maximum byte length of a single string, or None for no
            limit beyond the wire format's 4294967295.

    Examples:
        ```python
        from tagpack import DecoderConfig, decode

        # Small, shallow messages from an untrusted peer
        config = DecoderConfig(max_depth=8, max_elements=1000, max_str_len=4096)
        value = decode(data, config)
        ```
    """

    max_depth: int = 64
    max_elements: int = 1_000_000
    max_str_len: int | None = None

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {self.max_depth}")

        if self.max_elements <= 0:
            raise ValueError(f"max_elements must be > 0, got {self.max_elements}")

        if self.max_str_len is not None and self.max_str_len < 0:
            raise ValueError(f"max_str_len must be >= 0, got {self.max_str_len}")


DEFAULT_CONFIG = DecoderConfig()
