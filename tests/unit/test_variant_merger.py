"""Tests for identity-keyed variant merging and fallback resolution."""

from tutor_pipeline.mergers.variant_merger import fallback_order, merge_variants

LANGS = ["de", "fa"]


class TestMergeVariants:
    def test_every_id_appears_once(self):
        lists = {
            "de": [{"id": "basic"}, {"id": "optimized"}, {"id": "basic"}],
            "fa": [{"id": "optimized"}, {"id": "recursive"}],
        }

        merged = merge_variants(lists, LANGS)

        assert [v.id for v in merged] == ["basic", "optimized", "recursive"]

    def test_first_language_scanned_before_second(self):
        lists = {
            "de": [{"id": "b"}],
            "fa": [{"id": "a"}, {"id": "b"}, {"id": "c"}],
        }

        merged = merge_variants(lists, LANGS)

        assert [v.id for v in merged] == ["b", "a", "c"]

    def test_language_slots_filled_from_each_list(self):
        lists = {
            "de": [{"id": "basic", "label": {"de": "Einfach"}, "pseudocode": {"de": "Schritt 1"}}],
            "fa": [{"id": "basic", "label": {"fa": "ساده"}, "pseudocode": {"fa": "گام ۱"}}],
        }

        (variant,) = merge_variants(lists, LANGS)

        assert variant.label == {"de": "Einfach", "fa": "ساده"}
        assert variant.pseudocode == {"de": "Schritt 1", "fa": "گام ۱"}

    def test_plain_string_belongs_to_list_language(self):
        lists = {"fa": [{"id": "basic", "pseudocode": "گام ۱", "title": "ساده"}]}

        (variant,) = merge_variants(lists, LANGS)

        assert variant.pseudocode == {"fa": "گام ۱"}
        assert variant.label == {"fa": "ساده"}

    def test_own_list_value_wins_over_foreign_list(self):
        lists = {
            "de": [{"id": "basic", "pseudocode": {"de": "Schritt 1", "fa": "old"}}],
            "fa": [{"id": "basic", "pseudocode": {"fa": "گام ۱"}}],
        }

        (variant,) = merge_variants(lists, LANGS)

        assert variant.pseudocode["fa"] == "گام ۱"

    def test_items_without_id_dropped(self):
        lists = {"de": [{"id": "  "}, {"label": "x"}, "junk", None, {"id": " basic "}]}

        merged = merge_variants(lists, LANGS)

        assert [v.id for v in merged] == ["basic"]

    def test_is_default_from_either_language(self):
        lists = {
            "de": [{"id": "basic", "is_default": False}],
            "fa": [{"id": "basic", "is_default": True}],
        }

        (variant,) = merge_variants(lists, LANGS)

        assert variant.is_default is True

    def test_variant_only_in_one_language_kept(self):
        lists = {"de": [], "fa": [{"id": "fa_only", "pseudocode": {"fa": "گام"}}]}

        (variant,) = merge_variants(lists, LANGS)

        assert variant.authored("pseudocode", "de") == ""
        assert variant.authored("pseudocode", "fa") == "گام"


class TestResolve:
    def test_fallback_order(self):
        assert fallback_order("fa", LANGS) == ["fa", "de"]
        assert fallback_order("de", LANGS) == ["de", "fa"]

    def test_prefers_requested_language(self):
        (variant,) = merge_variants(
            {"de": [{"id": "v", "pseudocode": {"de": "DE", "fa": "FA"}}]}, LANGS
        )

        assert variant.resolve("pseudocode", "fa", LANGS) == "FA"

    def test_falls_back_to_other_language(self):
        lists = {
            "de": [{"id": "v", "pseudocode": {"de": ""}}],
            "fa": [{"id": "v", "pseudocode": {"fa": "گام ۱"}}],
        }
        (variant,) = merge_variants(lists, LANGS)

        assert variant.resolve("pseudocode", "de", LANGS) == "گام ۱"

    def test_falls_back_to_legacy_requested_then_other(self):
        (variant,) = merge_variants({"de": [{"id": "v"}]}, LANGS)

        assert variant.resolve("pseudocode", "fa", LANGS, {"de": "L-DE", "fa": "L-FA"}) == "L-FA"
        assert variant.resolve("pseudocode", "fa", LANGS, {"de": "L-DE", "fa": ""}) == "L-DE"

    def test_authored_beats_legacy(self):
        (variant,) = merge_variants({"de": [{"id": "v", "pseudocode": {"de": "DE"}}]}, LANGS)

        assert variant.resolve("pseudocode", "fa", LANGS, {"fa": "L-FA"}) == "DE"

    def test_nothing_available(self):
        (variant,) = merge_variants({"de": [{"id": "v"}]}, LANGS)

        assert variant.resolve("pseudocode", "de", LANGS, {"de": "", "fa": ""}) == ""
