"""
Tests for ProductSearchRanker.search: browse-all, ranking order, fuzzy and
synonym matching, result ordering, and argument validation.
"""

import pytest

from catalog_search.models import SearchConfig
from catalog_search.search_engine import (
	ProductSearchRanker,
	build_highlights,
	get_popular_searches,
	search_products,
)


def ids(results):
	return [r.product.id for r in results]


@pytest.fixture
def two_product_catalog(make_product):
	return [
		make_product(1, "Silk Saree", category="Sarees", in_stock=True, rating=4.8),
		make_product(2, "Cotton Kurta", category="Kurtis & Kurtas", in_stock=False, rating=3.0),
	]


def test_query_matches_only_relevant_product(ranker, two_product_catalog):
	results = ranker.search(two_product_catalog, "saree")
	assert ids(results) == [1]
	assert "name" in results[0].matched_fields
	assert "category" in results[0].matched_fields
	assert "Name: Silk Saree" in results[0].highlights


def test_blank_query_returns_everything_in_order(ranker, catalog):
	for query in ("", "   ", "\t\n"):
		results = ranker.search(catalog, query)
		assert ids(results) == [p.id for p in catalog]
		assert all(r.score == 1 for r in results)
		assert all(r.highlights == [] and r.matched_fields == [] for r in results)


def test_blank_query_ignores_max_results(ranker, catalog):
	results = ranker.search(catalog, "", SearchConfig(max_results=2))
	assert len(results) == len(catalog)


def test_hindi_query_reaches_english_catalog(ranker, catalog):
	results = ranker.search(catalog, "साड़ी")
	assert results
	assert results[0].product.id == 1


def test_alternate_spelling_with_fuzzy_and_synonyms(ranker, make_product):
	catalog = [
		make_product(1, "Banarasi Silk Saree"),
		make_product(2, "Royal Sherwani Set", category="Sherwanis", subcategory="Men's Bridal Wear"),
	]
	assert 1 in ids(ranker.search(catalog, "sari"))
	# "sari" expands to "saree" through the synonym table even without fuzzy matching
	assert 1 in ids(ranker.search(catalog, "sari", SearchConfig(fuzzy_match=False)))


def test_alternate_spelling_without_help(plain_ranker, make_product):
	catalog = [make_product(1, "Banarasi Silk Saree")]
	assert plain_ranker.search(catalog, "sari", SearchConfig(fuzzy_match=False)) == []


def test_typo_needs_fuzzy_matching(plain_ranker, make_product):
	catalog = [make_product(1, "Banarasi Silk Saree")]
	assert plain_ranker.search(catalog, "banarsi", SearchConfig(fuzzy_match=False)) == []
	assert ids(plain_ranker.search(catalog, "banarsi")) == [1]


def test_exact_name_outranks_fuzzy_match(plain_ranker, make_product):
	fuzzy_only = make_product(2, "Sarre", category="Apparel", subcategory="Womenswear", rating=4.0, reviews=10)
	exact = make_product(1, "Saree", category="Apparel", subcategory="Womenswear", rating=4.0, reviews=10)
	results = plain_ranker.search([fuzzy_only, exact], "saree")
	assert ids(results) == [1, 2]
	assert results[0].score > results[1].score


def test_out_of_stock_is_demoted(ranker, make_product):
	sold_out = make_product(1, "Silk Saree", in_stock=False, rating=4.5)
	available = make_product(2, "Silk Saree", in_stock=True, rating=4.5)
	results = ranker.search([sold_out, available], "silk")
	assert ids(results) == [2, 1]
	assert results[1].score < results[0].score


def test_ties_break_on_rating_then_reviews(plain_ranker, make_product):
	catalog = [
		make_product(1, "Silk Saree", rating=4.6, reviews=10),
		make_product(2, "Silk Saree", rating=4.8, reviews=10),
		make_product(3, "Silk Saree", rating=4.8, reviews=90),
	]
	results = plain_ranker.search(catalog, "silk")
	assert len({r.score for r in results}) == 1
	assert ids(results) == [3, 2, 1]


@pytest.mark.parametrize("k", [0, 1, 2, 3, 10])
def test_max_results_caps_output(ranker, catalog, k):
	results = ranker.search(catalog, "wedding festival silk", SearchConfig(max_results=k))
	assert len(results) <= k


def test_min_score_filters(ranker, catalog):
	assert ranker.search(catalog, "saree", SearchConfig(min_score=1000)) == []


@pytest.mark.parametrize("query", ["saree", "wedding", "silk red", "party gown", "xyzzy", "कॉटन"])
def test_results_are_unique_sorted_subset(ranker, catalog, query):
	results = ranker.search(catalog + [catalog[0]], query)
	result_ids = ids(results)
	assert len(result_ids) == len(set(result_ids))
	assert all(any(r.product is p for p in catalog) for r in results)
	scores = [r.score for r in results]
	assert scores == sorted(scores, reverse=True)
	assert all(len(r.highlights) <= 3 for r in results)


def test_unknown_text_yields_no_results(ranker, catalog):
	assert ranker.search(catalog, "qqqqqqqq") == []


def test_missing_optional_fields_never_fail(ranker, make_product):
	bare = make_product(1, "Plain Dupatta", category="Dupattas & Stoles", subcategory="Accessories")
	assert ids(ranker.search([bare], "dupatta")) == [1]
	assert ranker.search([bare], "velvet") == []


def test_blank_field_values_never_match(ranker, make_product):
	assert ranker.search([make_product(1, "Silk Saree", description="")], "xyzzy") == []
	assert ranker.search([make_product(2, "Silk Saree", colors=[""])], "velvet") == []
	assert ranker.search([make_product(3, "Silk Saree", fabric="  ", occasions=[" "])], "velvet") == []


@pytest.mark.parametrize("bad", [None, 42, "not a catalog", [1, 2]])
def test_non_catalog_input_fails_fast(ranker, bad):
	with pytest.raises(TypeError):
		ranker.search(bad, "saree")


def test_non_string_query_fails_fast(ranker, catalog):
	with pytest.raises(TypeError):
		ranker.search(catalog, None)


def test_accepts_any_iterable(ranker, catalog):
	assert ids(ranker.search(iter(catalog), "")) == [p.id for p in catalog]


def test_highlights_truncate_description(make_product):
	description = "Handwoven zari work " * 8
	product = make_product(1, "Silk Saree", description=description)
	assert build_highlights(product, ["zari"]) == [f"Description: {description[:100]}..."]


def test_highlights_are_distinct_and_capped(make_product):
	product = make_product(1, "Silk Saree", description="Silk saree")
	assert build_highlights(product, ["saree"]) == ["Name: Silk Saree", "Description: Silk saree", "Category: Sarees"]
	assert len(build_highlights(product, ["silk", "saree", "sarees"])) == 3


def test_module_level_helpers(catalog):
	assert search_products(catalog, "saree")[0].product.id == 1
	assert "saree" in get_popular_searches()
	assert len(get_popular_searches()) == 15


def test_config_defaults_come_from_constructor(make_product):
	catalog = [make_product(1, "Banarasi Silk Saree")]
	strict = ProductSearchRanker(config=SearchConfig(fuzzy_match=False))
	assert strict.search(catalog, "banarsi") == []


def test_invalid_config_rejected():
	with pytest.raises(ValueError):
		SearchConfig(max_results=-1)
	with pytest.raises(ValueError):
		SearchConfig(fuzzy_threshold=1.5)
