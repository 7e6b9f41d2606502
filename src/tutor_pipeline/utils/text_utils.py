"""Small text helpers shared by the loader, merger and builders."""

from typing import Any, Iterable


def first_non_empty(values: Iterable[Any]) -> str:
    """Return the first string value that is not blank, trimmed.

    Non-string values are skipped.

    Examples:
        >>> first_non_empty([None, "  ", " Schritt 1 "])
        'Schritt 1'
        >>> first_non_empty([42, ""])
        ''
    """
    for value in values:
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def clean_str(value: Any) -> str:
    """Trimmed string for str input, empty string otherwise."""
    return value.strip() if isinstance(value, str) else ""


def topic_display_title(topic: str, lang: str) -> str:
    """Derive a display title from a topic slug.

    Underscore separated parts get an upper-cased first character, the rest
    of each part is left as authored.

    Examples:
        >>> topic_display_title("bubble_sort", "de")
        'Bubble Sort (DE)'
        >>> topic_display_title("bfs", "fa")
        'Bfs (FA)'
    """
    if not topic:
        return ""
    words = [part[:1].upper() + part[1:] for part in topic.split("_") if part]
    return f"{' '.join(words)} ({lang.upper()})"
