"""
Tests for ProductSearchRanker.suggest autocomplete.
"""

import pytest

from catalog_search.search_engine import get_search_suggestions


def test_prefix_beats_substring_and_orders_by_score(ranker, make_product):
	catalog = [make_product(1, "Banarasi Silk Saree", fabric="Silk", occasions=["Festival"], colors=["Red"])]
	assert ranker.suggest(catalog, "sa") == ["Banarasi Silk Saree", "Sarees"]
	assert ranker.suggest(catalog, "sil") == ["Banarasi Silk Saree", "Silk"]
	assert ranker.suggest(catalog, "sil", limit=1) == ["Banarasi Silk Saree"]


def test_scores_accumulate_across_products(ranker, make_product):
	catalog = [
		make_product(1, "Banarasi Silk Saree"),
		make_product(2, "Kanjivaram Saree"),
	]
	assert ranker.suggest(catalog, "sar") == ["Sarees", "Banarasi Silk Saree", "Kanjivaram Saree"]


def test_suggestions_contain_the_partial_query(ranker, catalog):
	suggestions = ranker.suggest(catalog, "sa", 5)
	assert 0 < len(suggestions) <= 5
	assert len(suggestions) == len(set(suggestions))
	assert all("sa" in s.lower() for s in suggestions)


def test_attribute_values_are_suggested(ranker, catalog):
	assert "Wedding" in ranker.suggest(catalog, "wed")
	assert "Chiffon" in ranker.suggest(catalog, "chif", limit=10)


def test_multi_word_partial_query(ranker, catalog):
	assert ranker.suggest(catalog, "silk sa") == ["Banarasi Silk Saree"]


@pytest.mark.parametrize("query,limit", [("", 5), ("   ", 5), ("sa", 0), ("sa", -1)])
def test_empty_suggestions(ranker, catalog, query, limit):
	assert ranker.suggest(catalog, query, limit) == []


def test_module_level_suggestions(catalog):
	assert get_search_suggestions(catalog, "lehen") == ["Bridal Lehenga Choli", "Lehengas"]


def test_suggest_rejects_non_catalog(ranker):
	with pytest.raises(TypeError):
		ranker.suggest(None, "sa")
