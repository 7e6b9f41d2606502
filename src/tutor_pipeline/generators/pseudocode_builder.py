"""Pseudocode asset builder.

Every merged variant is resolved for the target language through the fallback
chain (target language, other languages, legacy module text). Variants that
still have no pseudocode are dropped. When none remain, a single synthetic
``default`` variant carries the legacy text; without legacy text the asset is
not produced.
"""

import logging
from typing import List, Mapping, Optional, Sequence

from tutor_pipeline import SUPPORTED_LANGUAGES
from tutor_pipeline.generators.base import BaseAssetBuilder, BuildContext
from tutor_pipeline.mergers.variant_merger import MergedVariant, fallback_order
from tutor_pipeline.utils.text_utils import first_non_empty
from tutor_pipeline.validators.schema import (
    LanguageText,
    Mode,
    PseudocodeAsset,
    PseudocodeVariant,
)

logger = logging.getLogger(__name__)

SYNTHETIC_VARIANT_ID = "default"
NO_SOURCE_REASON = "no pseudocode source"


def _resolved_text(
    variant: MergedVariant, field_name: str, languages: Sequence[str]
) -> LanguageText:
    return LanguageText(
        **{
            code: variant.resolve(field_name, code, languages)
            for code in SUPPORTED_LANGUAGES
            if code in languages
        }
    )


class PseudocodeAssetBuilder(BaseAssetBuilder):
    mode = Mode.PSEUDOCODE.value

    def build(
        self,
        context: BuildContext,
        variants: Sequence[MergedVariant],
        fallback: Optional[Mapping[str, str]] = None,
    ) -> Optional[PseudocodeAsset]:
        """Build the pseudocode asset, or None when no pseudocode exists.

        Args:
            context: Topic, language and title of the asset
            variants: Merged variants in first-seen order
            fallback: Legacy pseudocode per language

        Returns:
            PseudocodeAsset or None
        """
        fallback = fallback or {}
        languages = context.languages
        entries: List[PseudocodeVariant] = []

        for variant in variants:
            text = variant.resolve("pseudocode", context.lang, languages, fallback)
            if not text:
                continue
            entries.append(
                PseudocodeVariant(
                    id=variant.id,
                    title=variant.resolve("label", context.lang, languages) or variant.id,
                    labels=_resolved_text(variant, "label", languages),
                    is_default=variant.is_default,
                    pseudocode=text,
                    explain_variant=_resolved_text(variant, "explain_variant", languages),
                )
            )

        if not entries:
            text = first_non_empty(
                fallback.get(code, "") for code in fallback_order(context.lang, languages)
            )
            if not text:
                logger.debug(f"No pseudocode for {self.asset_key(context)}")
                return None
            entries.append(
                PseudocodeVariant(
                    id=SYNTHETIC_VARIANT_ID,
                    title=SYNTHETIC_VARIANT_ID,
                    labels=LanguageText(),
                    is_default=True,
                    pseudocode=text,
                    explain_variant=LanguageText(),
                )
            )

        selected = next((entry for entry in entries if entry.is_default), entries[0])

        return PseudocodeAsset(
            **context.identity(),
            selected_variant=selected.id,
            pseudocode=selected.pseudocode,
            variants=entries,
        )
