"""Best-effort pseudocode recovery from legacy per-topic source modules.

Older topics ship their pseudocode only inside a source module with one
generator per language:

    def generate_pseudocode_de():
        return \"\"\"Schritt 1: ...\"\"\"

The module is scanned as plain text with regular expressions; it is never
imported or executed. Callers only see ``extract`` / ``extract_from_text``,
which return an empty string whenever nothing usable is found.
"""

import logging
import re
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from tutor_pipeline.utils.file_io import read_text

logger = logging.getLogger(__name__)

GENERATOR_PREFIX = "generate_pseudocode_"

# Any generator or function header; bounds the search for a return literal.
DEFINITION_PATTERN = re.compile(
    r"^[ \t]*(?:async[ \t]+)?(?:def|function)[ \t]+\w+", re.MULTILINE
)

TRIPLE_RETURN_PATTERN = re.compile(
    r"return[ \t]*\(?\s*[rRuUbBfF]{0,2}(\"\"\"|''')(.*?)\1", re.DOTALL
)

SIMPLE_RETURN_PATTERN = re.compile(
    r"return[ \t]*\(?\s*[rRuUbBfF]{0,2}([\"'`])((?:\\.|(?!\1).)*)\1", re.DOTALL
)

ESCAPE_PATTERN = re.compile(r"\\(r\\n|n|t|\"|'|\\)")

ESCAPES = {
    "r\\n": "\n",
    "n": "\n",
    "t": "\t",
    '"': '"',
    "'": "'",
    "\\": "\\",
}


def decode_escapes(text: str) -> str:
    """Decode common escape sequences and trim.

    Examples:
        >>> decode_escapes("  A\\\\nB\\\\tC  ")
        'A\\nB\\tC'
    """
    text = text.replace("\r\n", "\n")
    decoded = ESCAPE_PATTERN.sub(lambda m: ESCAPES[m.group(1)], text)
    return decoded.strip()


def _header_pattern(lang: str) -> "re.Pattern[str]":
    return re.compile(
        r"^[ \t]*(?:async[ \t]+)?(?:def|function)[ \t]+"
        + re.escape(GENERATOR_PREFIX + lang)
        + r"\b[^\n]*",
        re.MULTILINE,
    )


def extract_from_text(source: str, lang: str) -> str:
    """Extract the pseudocode literal returned by ``generate_pseudocode_<lang>``.

    Args:
        source: Full text of a legacy module
        lang: Language code used in the generator name

    Returns:
        Decoded, trimmed pseudocode, or "" when no generator/literal matches
    """
    header = _header_pattern(lang).search(source)
    if not header:
        return ""

    body_start = header.end()

    for pattern in (TRIPLE_RETURN_PATTERN, SIMPLE_RETURN_PATTERN):
        match = pattern.search(source, body_start)
        if not match:
            continue
        # The literal must belong to this generator, not a later definition.
        if DEFINITION_PATTERN.search(source, body_start, match.start()):
            continue
        return decode_escapes(match.group(2))

    return ""


class LegacyPseudocodeExtractor:
    """Locates a topic's legacy module and scrapes per-language pseudocode."""

    def __init__(self, legacy_dir: Optional[Union[str, Path]] = None):
        self.legacy_dir = Path(legacy_dir) if legacy_dir else None

    def candidate_paths(self, topic: str, topic_dir: Path) -> List[Path]:
        """Module locations in lookup order."""
        candidates = [topic_dir / "legacy.py", topic_dir / f"{topic}.py"]
        if self.legacy_dir:
            candidates.append(self.legacy_dir / f"{topic}.py")
        return candidates

    def find_module(self, topic: str, topic_dir: Path) -> Optional[Path]:
        for path in self.candidate_paths(topic, topic_dir):
            if path.is_file():
                return path
        return None

    def extract(
        self, topic: str, topic_dir: Union[str, Path], languages: Iterable[str]
    ) -> Dict[str, str]:
        """Pseudocode per language from the topic's legacy module.

        Never raises; languages without a match map to "".
        """
        languages = list(languages)
        result = {lang: "" for lang in languages}

        path = self.find_module(topic, Path(topic_dir))
        if path is None:
            return result

        try:
            source = read_text(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Unreadable legacy module {path}: {e}")
            return result

        for lang in languages:
            result[lang] = extract_from_text(source, lang)

        found = [lang for lang, text in result.items() if text]
        logger.debug(
            f"Legacy module {path.name} for {topic}: pseudocode found for {found or 'no languages'}",
            extra={"topic": topic, "legacy_module": str(path)},
        )
        return result
