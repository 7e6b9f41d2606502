"""Merging of independently authored per-language records."""

from tutor_pipeline.mergers.variant_merger import MergedVariant, merge_variants

__all__ = ["MergedVariant", "merge_variants"]
