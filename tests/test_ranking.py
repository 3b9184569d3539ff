"""
Unit tests for the Ranker scoring rules.
"""

import pytest

from catalog_search.ranking import FieldWeights, QualityBoosts, Ranker


@pytest.fixture
def silk_saree(make_product):
	return make_product(1, "Silk Saree", fabric="Silk", rating=4.8, reviews=150, is_new=True, discount=10)


def test_field_weight_rule_counts_distinct_fields(silk_saree):
	ranker = Ranker()
	assert ranker.field_weight_rule(silk_saree, ["silk"], ["name", "fabric"]) == 26
	assert ranker.field_weight_rule(silk_saree, ["silk"], ["name", "name", "fabric"]) == 26


def test_match_quality_rule(silk_saree):
	ranker = Ranker()
	# name prefix 30 + name word prefix 15 + fabric exact 12
	assert ranker.match_quality_rule(silk_saree, ["silk"], ["name", "fabric"]) == 57
	# name exact only: no single word starts with the two-word term
	assert ranker.match_quality_rule(silk_saree, ["silk saree"], ["name"]) == 50
	# category exact only
	assert ranker.match_quality_rule(silk_saree, ["sarees"], ["category"]) == 25


def test_quality_boost_rule(silk_saree, make_product):
	ranker = Ranker()
	# new 5 + top rating 12 + discount 3 + popular 2 + in stock 2
	assert ranker.quality_boost_rule(silk_saree, [], []) == 24
	plain = make_product(2, "Saree", rating=4.2)
	assert ranker.quality_boost_rule(plain, [], []) == 6
	unrated = make_product(3, "Saree", in_stock=False)
	assert ranker.quality_boost_rule(unrated, [], []) == 0


def test_compute_score_sums_rules(silk_saree):
	ranker = Ranker()
	assert ranker.compute_score(silk_saree, ["silk"], ["name", "fabric"]) == pytest.approx(107)


def test_out_of_stock_is_halved(make_product):
	ranker = Ranker()
	in_stock = make_product(1, "Silk Saree", fabric="Silk", rating=4.8)
	sold_out = make_product(2, "Silk Saree", fabric="Silk", rating=4.8, in_stock=False)
	a = ranker.compute_score(in_stock, ["silk"], ["name", "fabric"])
	b = ranker.compute_score(sold_out, ["silk"], ["name", "fabric"])
	assert b < a
	assert b == pytest.approx((a - 2) * 0.5)


def test_explain_lists_each_rule(silk_saree):
	parts = Ranker().explain(silk_saree, ["silk"], ["name", "fabric"])
	assert parts == {"field_weight": 26, "match_quality": 57, "quality_boost": 24}


def test_weights_are_overridable(silk_saree):
	ranker = Ranker(field_weights=FieldWeights(name=100), quality_boosts=QualityBoosts(is_new=0))
	assert ranker.field_weight_rule(silk_saree, [], ["name"]) == 100
	assert ranker.quality_boost_rule(silk_saree, [], []) == 19
