"""
Character-class heuristic for "random looking" strings.

Shared by the secret scanner (generic key/secret assignments) and the base64
truncation stage of the transformer.
"""

import re
from dataclasses import dataclass

_BASE64_RE = re.compile(r"^[A-Za-z0-9+/]+=*$")


@dataclass(frozen=True)
class EntropyThresholds:
    """
    Minimum variety a string needs before it counts as random.

    Attributes:
        min_classes: How many of {digit, upper, lower, '+' or '/'} must appear
        min_unique_chars: How many distinct characters must appear
    """

    min_classes: int = 3
    min_unique_chars: int = 10


DEFAULT_THRESHOLDS = EntropyThresholds()


def character_classes(value: str) -> int:
    """Count the character classes present in value."""
    classes = [
        any(c.isascii() and c.isdigit() for c in value),
        any(c.isascii() and c.isupper() for c in value),
        any(c.isascii() and c.islower() for c in value),
        any(c in "+/" for c in value),
    ]
    return sum(classes)


def looks_random(value: str, thresholds: EntropyThresholds = DEFAULT_THRESHOLDS) -> bool:
    """Check value against the class and distinct-character thresholds."""
    if len(set(value)) < thresholds.min_unique_chars:
        return False
    return character_classes(value) >= thresholds.min_classes


def is_likely_base64(value: str, thresholds: EntropyThresholds = DEFAULT_THRESHOLDS) -> bool:
    """Like looks_random(), but value must also use only the base64 alphabet."""
    if not _BASE64_RE.match(value):
        return False
    return looks_random(value, thresholds)
