"""Plant Filters — canonical listing predicate from loosely-shaped query parameters.

Invariants:
    - build_plant_filter is PURE: same raw parameters always yield the same PlantFilter
    - category input (string, list, comma-joined, repeated) collapses to one frozenset
    - in_stock: exactly "true" -> in stock; any other present value -> exactly zero stock
    - search text is a literal substring, never a pattern language

Design Decisions:
    - Normalization at the service boundary: store code only ever sees PlantFilter
    - LIKE wildcards escaped here so every store backend gets identical semantics
"""

from collections.abc import Iterable

from plant_store.core.domain_types import PlantFilter

LIKE_ESCAPE_CHAR = "\\"


def normalize_categories(raw: str | Iterable[str] | None) -> frozenset[str]:
    """Split on commas, trim, lowercase, drop blanks, dedupe."""
    if raw is None:
        return frozenset()
    values = [raw] if isinstance(raw, str) else list(raw)
    normalized = set()
    for value in values:
        for part in str(value).split(","):
            part = part.strip().lower()
            if part:
                normalized.add(part)
    return frozenset(normalized)


def parse_in_stock(raw: str | None) -> bool | None:
    """Only the literal "true" selects in-stock plants; anything else selects sold out."""
    if raw is None:
        return None
    return raw == "true"


def build_plant_filter(
    search: str | None = None,
    category: str | Iterable[str] | None = None,
    in_stock: str | None = None,
) -> PlantFilter:
    """Compose the listing predicate from raw query parameters."""
    return PlantFilter(
        search=search or None,
        categories=normalize_categories(category),
        in_stock=parse_in_stock(in_stock),
    )


def escape_like(text: str) -> str:
    """Escape LIKE metacharacters so user text matches literally."""
    return (
        text.replace(LIKE_ESCAPE_CHAR, LIKE_ESCAPE_CHAR * 2)
        .replace("%", LIKE_ESCAPE_CHAR + "%")
        .replace("_", LIKE_ESCAPE_CHAR + "_")
    )


def contains_pattern(text: str) -> str:
    """LIKE pattern matching `text` anywhere in the column."""
    return f"%{escape_like(text)}%"
