"""Prefix/suffix matching and search configuration for vanity address search."""

import os
from dataclasses import dataclass
from typing import Optional

from aptvanity.core import ADDRESS_HEX_LENGTH

HEX_CHARS = frozenset("0123456789abcdef")


def matches(address_hex: str, prefix: Optional[str] = None, suffix: Optional[str] = None) -> bool:
    """Test a lowercase hex address against an optional prefix and suffix.

    Case-sensitive: prefix and suffix must already be normalized with
    validate_hex_pattern(). Empty strings are treated as "not given".
    """
    if prefix and not address_hex.startswith(prefix):
        return False
    if suffix and not address_hex.endswith(suffix):
        return False
    return True


def validate_hex_pattern(pattern: Optional[str]) -> Optional[str]:
    """Validate a pattern contains only valid hex characters.

    Returns the lowercased pattern, or None for an empty pattern.
    Raises ValueError for invalid patterns.
    """
    if pattern is None:
        return None
    cleaned = pattern.lower().strip()
    if not cleaned:
        return None
    if not all(c in HEX_CHARS for c in cleaned):
        raise ValueError(
            f"Pattern '{pattern}' contains non-hex characters. "
            "Only 0-9 and a-f are valid (no leading 0x)."
        )
    if len(cleaned) > ADDRESS_HEX_LENGTH:
        raise ValueError(
            f"Pattern length {len(cleaned)} exceeds maximum address length "
            f"of {ADDRESS_HEX_LENGTH} hex chars."
        )
    return cleaned


def default_thread_count() -> int:
    return os.cpu_count() or 1


@dataclass(frozen=True)
class SearchConfig:
    """Immutable, picklable search specification shared by all workers.

    Build instances with SearchConfig.create(), which normalizes the
    patterns and range-checks the counts.
    """
    prefix: Optional[str] = None
    suffix: Optional[str] = None
    multisig: bool = False
    target_count: int = 1
    thread_count: int = 1

    @classmethod
    def create(
        cls,
        prefix: Optional[str] = None,
        suffix: Optional[str] = None,
        multisig: bool = False,
        target_count: int = 1,
        thread_count: Optional[int] = None,
    ) -> "SearchConfig":
        prefix = validate_hex_pattern(prefix)
        suffix = validate_hex_pattern(suffix)
        match_length = len(prefix or "") + len(suffix or "")
        if match_length > ADDRESS_HEX_LENGTH:
            raise ValueError(
                f"Prefix and suffix together are {match_length} hex chars, "
                f"longer than the {ADDRESS_HEX_LENGTH}-char address."
            )
        if thread_count is None:
            thread_count = default_thread_count()
        if target_count < 1:
            raise ValueError(f"Count must be at least 1, got {target_count}")
        if thread_count < 1:
            raise ValueError(f"Thread count must be at least 1, got {thread_count}")
        return cls(
            prefix=prefix,
            suffix=suffix,
            multisig=bool(multisig),
            target_count=int(target_count),
            thread_count=int(thread_count),
        )
