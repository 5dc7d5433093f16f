"""Tests for contentsync.content.merger: filling stored documents from defaults."""

from __future__ import annotations

import pytest

from contentsync.content.merger import merge
from contentsync.content.schema import SCHEMAS, defaults_for, is_registered
from contentsync.domain.exceptions import PageNotFound

DEFAULTS = {
    "hero": {"title": "Default title", "image": None, "carousel": ["a.jpg", "b.jpg"]},
    "faq": [{"question": "A?", "answer": "A"}, {"question": "B?", "answer": "B"}],
    "timeline": {"headline": "How to apply", "steps": [{"id": 1, "title": "Apply"}]},
}


def _assert_complete(merged: dict, defaults: dict) -> None:
    for key, value in defaults.items():
        assert key in merged
        if isinstance(value, dict) and isinstance(merged[key], dict):
            _assert_complete(merged[key], value)


class TestCompleteness:
    """Every key of the defaults is present after a merge."""

    @pytest.mark.parametrize("stored", [None, {}, {"hero": {}}, {"faq": []}, {"timeline": {"headline": "X"}}])
    def test_partial_documents_are_completed(self, stored) -> None:
        _assert_complete(merge(stored, DEFAULTS), DEFAULTS)

    @pytest.mark.parametrize("slug", sorted(SCHEMAS))
    def test_registered_schemas_complete_an_empty_document(self, slug: str) -> None:
        defaults = defaults_for(slug)
        assert merge({}, defaults) == defaults

    def test_none_returns_equal_copy_not_the_defaults(self) -> None:
        merged = merge(None, DEFAULTS)
        assert merged == DEFAULTS
        assert merged is not DEFAULTS

        merged["hero"]["title"] = "changed"
        merged["faq"].append({"question": "C?", "answer": "C"})
        assert DEFAULTS["hero"]["title"] == "Default title"
        assert len(DEFAULTS["faq"]) == 2

    def test_empty_document_is_treated_as_missing(self) -> None:
        assert merge({}, DEFAULTS) == merge(None, DEFAULTS)


class TestFieldMerging:
    """Mappings merge key by key; stored values win."""

    def test_stored_scalar_overrides_default(self) -> None:
        merged = merge({"hero": {"title": "Stored"}}, DEFAULTS)
        assert merged["hero"]["title"] == "Stored"
        assert merged["hero"]["carousel"] == ["a.jpg", "b.jpg"]

    def test_null_field_falls_back_to_default(self) -> None:
        merged = merge({"hero": {"title": None}}, DEFAULTS)
        assert merged["hero"]["title"] == "Default title"

    def test_nested_section_merges_recursively(self) -> None:
        merged = merge({"timeline": {"headline": "Steps"}}, DEFAULTS)
        assert merged["timeline"] == {"headline": "Steps", "steps": [{"id": 1, "title": "Apply"}]}

    def test_unknown_keys_are_kept(self) -> None:
        merged = merge({"hero": {"subtitle": "new field"}, "legacy": {"x": 1}}, DEFAULTS)
        assert merged["hero"]["subtitle"] == "new field"
        assert merged["legacy"] == {"x": 1}

    def test_result_does_not_alias_stored_document(self) -> None:
        stored = {"faq": [{"question": "X?", "answer": "X"}]}
        merged = merge(stored, DEFAULTS)
        merged["faq"][0]["answer"] = "changed"
        assert stored["faq"][0]["answer"] == "X"


class TestListReplacement:
    """Lists are replaced wholesale, never merged element-wise."""

    def test_non_empty_stored_list_replaces_default(self) -> None:
        merged = merge({"faq": [{"question": "X?", "answer": "X"}]}, DEFAULTS)
        assert merged["faq"] == [{"question": "X?", "answer": "X"}]

    def test_empty_stored_list_falls_back_to_default(self) -> None:
        merged = merge({"faq": []}, DEFAULTS)
        assert merged["faq"] == DEFAULTS["faq"]

    def test_nested_list_replaced(self) -> None:
        merged = merge({"hero": {"carousel": ["only.jpg"]}}, DEFAULTS)
        assert merged["hero"]["carousel"] == ["only.jpg"]


class TestMalformedInput:
    """Wrong types pass through; the merger fills structure, not types."""

    def test_wrong_type_for_section_passes_through(self) -> None:
        merged = merge({"hero": "not a mapping"}, DEFAULTS)
        assert merged["hero"] == "not a mapping"
        assert merged["faq"] == DEFAULTS["faq"]

    def test_wrong_type_for_list_passes_through(self) -> None:
        merged = merge({"faq": {"question": "?"}}, DEFAULTS)
        assert merged["faq"] == {"question": "?"}

    def test_non_mapping_document_uses_defaults(self) -> None:
        assert merge(["not", "a", "document"], DEFAULTS) == DEFAULTS


class TestSchemaRegistry:
    @pytest.mark.parametrize("slug", sorted(SCHEMAS))
    def test_known_slugs_are_registered(self, slug: str) -> None:
        assert is_registered(slug)

    def test_unknown_slug(self) -> None:
        assert not is_registered("press-kit")
        with pytest.raises(PageNotFound, match="press-kit"):
            defaults_for("press-kit")
