# src/fixer1132/updates/semver.py

from __future__ import annotations

from dataclasses import dataclass

_VERSION_CHARS = frozenset("0123456789.")


def normalize(raw: str) -> str:
    """Trim whitespace and drop exactly one leading 'v' or 'V'."""
    s = raw.strip()
    if s[:1] in ("v", "V"):
        s = s[1:]
    return s


@dataclass(frozen=True, order=True, slots=True)
class SemVer:
    major: int
    minor: int = 0
    patch: int = 0

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def parse(s: str) -> SemVer | None:
    """
    Parse "1.2.3", "v2.0", "1.2.3-beta" and the like.

    Only the leading run of digits and dots is considered, so pre-release and
    build suffixes are ignored. Missing minor/patch default to 0.
    Returns None when nothing usable is left.
    """
    text = normalize(s)

    end = 0
    while end < len(text) and text[end] in _VERSION_CHARS:
        end += 1

    parts = [p for p in text[:end].split(".") if p]
    if not parts:
        return None

    try:
        numbers = [int(p) for p in parts[:3]]
    except ValueError:
        return None

    while len(numbers) < 3:
        numbers.append(0)
    return SemVer(*numbers)


def is_newer(current: str, latest: str) -> bool:
    """True iff `latest` parses and is strictly greater than `current`."""
    cur = parse(current)
    new = parse(latest)
    if cur is None or new is None:
        return False
    return new > cur
