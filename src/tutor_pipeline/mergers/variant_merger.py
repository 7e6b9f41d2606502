"""Identity-keyed merge of per-language variant lists.

Each language's ``variants.<lang>.v1.json`` is authored independently. Records
are matched by ``id``; the first language list is scanned completely before the
next one, and a record keeps the position where its id was first seen.

Per-language fields may be authored either as an object keyed by language
(``{"de": "...", "fa": "..."}``) or as a plain string, which then belongs to
the language of the list it was read from. A value read from a language's own
list takes precedence over the same language's value found in another list.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

from tutor_pipeline.utils.text_utils import clean_str, first_non_empty

logger = logging.getLogger(__name__)

LOCALIZED_FIELDS = ("label", "pseudocode", "explain_variant")

# Alternative source keys per merged field, in priority order.
SOURCE_KEYS = {
    "label": ("label", "title"),
    "pseudocode": ("pseudocode",),
    "explain_variant": ("explain_variant",),
}


@dataclass
class MergedVariant:
    """One variant with a text slot per language for every localized field."""

    id: str
    is_default: bool = False
    label: Dict[str, str] = field(default_factory=dict)
    pseudocode: Dict[str, str] = field(default_factory=dict)
    explain_variant: Dict[str, str] = field(default_factory=dict)
    _own_slots: Set[Tuple[str, str]] = field(default_factory=set, repr=False, compare=False)

    def authored(self, field_name: str, lang: str) -> str:
        return getattr(self, field_name).get(lang, "")

    def fill(self, field_name: str, lang: str, text: str, own_list: bool) -> None:
        """Store text for a slot unless a higher-priority value is already there."""
        if not text or (field_name, lang) in self._own_slots:
            return
        if own_list:
            getattr(self, field_name)[lang] = text
            self._own_slots.add((field_name, lang))
        elif not self.authored(field_name, lang):
            getattr(self, field_name)[lang] = text

    def resolve(
        self,
        field_name: str,
        lang: str,
        languages: Sequence[str],
        fallback: Optional[Mapping[str, str]] = None,
    ) -> str:
        """Resolve a localized field through the fallback chain.

        Order: authored value for ``lang``, authored values of the other
        languages, then ``fallback`` (legacy pseudocode) for ``lang`` and the
        other languages.
        """
        order = fallback_order(lang, languages)
        candidates = [self.authored(field_name, code) for code in order]
        if fallback:
            candidates.extend(fallback.get(code, "") for code in order)
        return first_non_empty(candidates)


def fallback_order(lang: str, languages: Sequence[str]) -> List[str]:
    """``lang`` first, then the remaining languages in configured order."""
    return [lang] + [code for code in languages if code != lang]


def localized_value(
    item: Mapping[str, Any], field_name: str, lang: str, list_lang: str
) -> str:
    """Text for ``lang`` in one raw variant item read from ``list_lang``'s list."""
    for key in SOURCE_KEYS[field_name]:
        value = item.get(key)
        if isinstance(value, Mapping):
            text = clean_str(value.get(lang))
        elif lang == list_lang:
            text = clean_str(value)
        else:
            text = ""
        if text:
            return text
    return ""


def merge_variants(
    lists_by_lang: Mapping[str, Iterable[Any]], languages: Sequence[str]
) -> List[MergedVariant]:
    """Merge raw per-language variant lists into one ordered list.

    Args:
        lists_by_lang: Raw variant list per language code
        languages: Scan order (and slot set) of languages

    Returns:
        Merged variants in first-seen order, unique by id
    """
    merged: Dict[str, MergedVariant] = {}
    dropped = 0

    for list_lang in languages:
        for item in lists_by_lang.get(list_lang) or []:
            if not isinstance(item, Mapping):
                dropped += 1
                continue
            variant_id = clean_str(item.get("id"))
            if not variant_id:
                dropped += 1
                continue

            record = merged.get(variant_id)
            if record is None:
                record = MergedVariant(id=variant_id)
                merged[variant_id] = record

            for field_name in LOCALIZED_FIELDS:
                for lang in languages:
                    text = localized_value(item, field_name, lang, list_lang)
                    record.fill(field_name, lang, text, own_list=lang == list_lang)

            if item.get("is_default") is True:
                record.is_default = True

    if dropped:
        logger.debug(f"Dropped {dropped} variant items without a usable id")

    return list(merged.values())
