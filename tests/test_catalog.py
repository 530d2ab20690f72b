"""
Tests for the prompt catalogs
"""
import pytest

from archivist.ui.catalog import CATALOGS, PromptCatalog, PromptKey, get_catalog


class TestCatalogs:
    @pytest.mark.parametrize("language", ["en", "zh"])
    def test_every_key_present(self, language):
        catalog = get_catalog(language)
        for key in PromptKey:
            assert isinstance(catalog[key], str)

    def test_language_is_case_insensitive(self):
        assert get_catalog("EN") is CATALOGS["en"]

    def test_unsupported_language(self):
        with pytest.raises(ValueError):
            get_catalog("fr")

    def test_missing_keys_rejected(self):
        with pytest.raises(ValueError, match="EXIT"):
            PromptCatalog("partial", {key: "x" for key in PromptKey if key is not PromptKey.EXIT})

    def test_entries_are_read_only(self):
        catalog = get_catalog("en")
        with pytest.raises(TypeError):
            catalog._entries[PromptKey.EXIT] = "changed"
