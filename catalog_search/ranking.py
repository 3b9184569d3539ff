"""
Ranking module.
Scores a matched product as the sum of independent scoring rules, then applies
the out-of-stock demotion.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from loguru import logger

from .models import Product

# (product, expanded terms, matched fields) -> score delta
ScoringRule = Callable[[Product, Sequence[str], Sequence[str]], float]


@dataclass
class FieldWeights:
	"""Flat weight added once per distinct matched field."""
	name: float = 20.0
	category: float = 15.0
	subcategory: float = 12.0
	description: float = 8.0
	fabric: float = 6.0
	occasion: float = 5.0
	colors: float = 3.0
	sku: float = 2.0

	def get(self, field_name: str) -> float:
		return getattr(self, field_name, 1.0)


@dataclass
class MatchBonuses:
	"""Per-term bonuses by match quality: (exact, prefix, contains)."""
	name: Tuple[float, float, float] = (50.0, 30.0, 20.0)
	name_word_prefix: float = 15.0
	category: Tuple[float, float, float] = (25.0, 20.0, 15.0)
	subcategory: Tuple[float, float, float] = (20.0, 15.0, 10.0)
	description: float = 8.0
	fabric: Tuple[float, float] = (12.0, 6.0)  # exact, contains
	occasion: Tuple[float, float] = (10.0, 5.0)
	colors: Tuple[float, float] = (8.0, 4.0)


@dataclass
class QualityBoosts:
	"""Product-level boosts independent of the query."""
	is_new: float = 5.0
	top_rating: float = 12.0  # rating >= top_rating_min
	top_rating_min: float = 4.5
	good_rating: float = 4.0  # rating >= good_rating_min
	good_rating_min: float = 4.0
	discount: float = 3.0
	popular: float = 2.0  # reviews > popular_min_reviews
	popular_min_reviews: int = 100
	in_stock: float = 2.0
	out_of_stock_factor: float = 0.5


def _graded(value: str, term: str, grades: Tuple[float, float, float]) -> float:
	"""Exact, prefix, or substring bonus for one field value."""
	exact, prefix, contains = grades
	if value == term:
		return exact
	if value.startswith(term):
		return prefix
	if term in value:
		return contains
	return 0.0


def _best_in_list(values: Sequence[str], term: str, grades: Tuple[float, float]) -> float:
	exact, contains = grades
	lowered = [v.lower() for v in values]
	if any(v == term for v in lowered):
		return exact
	if any(term in v for v in lowered):
		return contains
	return 0.0


class Ranker:
	"""
	Computes relevance scores from an ordered list of additive rules:
	- field weight: fixed weight per distinct matched field
	- match quality: exact / prefix / substring bonuses per term
	- quality boost: new, rating, discount, popularity, stock signals
	The stock penalty then halves the score of out-of-stock products.
	"""

	def __init__(
		self,
		field_weights: Optional[FieldWeights] = None,
		match_bonuses: Optional[MatchBonuses] = None,
		quality_boosts: Optional[QualityBoosts] = None,
	):
		self.field_weights = field_weights or FieldWeights()
		self.match_bonuses = match_bonuses or MatchBonuses()
		self.quality_boosts = quality_boosts or QualityBoosts()
		self.rules: List[Tuple[str, ScoringRule]] = [
			("field_weight", self.field_weight_rule),
			("match_quality", self.match_quality_rule),
			("quality_boost", self.quality_boost_rule),
		]

	def field_weight_rule(self, product: Product, terms: Sequence[str], matched_fields: Sequence[str]) -> float:
		return sum(self.field_weights.get(f) for f in set(matched_fields))

	def match_quality_rule(self, product: Product, terms: Sequence[str], matched_fields: Sequence[str]) -> float:
		b = self.match_bonuses
		name = product.name.lower()
		name_words = name.split()
		category = product.category.lower()
		subcategory = product.subcategory.lower()

		score = 0.0
		for term in terms:
			score += _graded(name, term, b.name)
			if any(w.startswith(term) for w in name_words):
				score += b.name_word_prefix
			score += _graded(category, term, b.category)
			score += _graded(subcategory, term, b.subcategory)

			if product.description is not None and term in product.description.lower():
				score += b.description
			if product.fabric is not None:
				fabric = product.fabric.lower()
				if fabric == term:
					score += b.fabric[0]
				elif term in fabric:
					score += b.fabric[1]
			score += _best_in_list(product.occasions, term, b.occasion)
			score += _best_in_list(product.colors, term, b.colors)
		return score

	def quality_boost_rule(self, product: Product, terms: Sequence[str], matched_fields: Sequence[str]) -> float:
		q = self.quality_boosts
		score = 0.0
		if product.is_new is True:
			score += q.is_new
		if product.rating is not None:
			if product.rating >= q.top_rating_min:
				score += q.top_rating
			elif product.rating >= q.good_rating_min:
				score += q.good_rating
		if product.discount is not None and product.discount > 0:
			score += q.discount
		if product.reviews is not None and product.reviews > q.popular_min_reviews:
			score += q.popular
		if product.in_stock:
			score += q.in_stock
		return score

	def stock_penalty(self, product: Product, score: float) -> float:
		"""Out-of-stock products are demoted, not removed."""
		if product.in_stock:
			return score
		return score * self.quality_boosts.out_of_stock_factor

	def explain(self, product: Product, terms: Sequence[str], matched_fields: Sequence[str]) -> Dict[str, float]:
		"""Per-rule contributions, useful when tuning weights."""
		return {name: rule(product, terms, matched_fields) for name, rule in self.rules}

	def compute_score(self, product: Product, terms: Sequence[str], matched_fields: Sequence[str]) -> float:
		"""Sum every rule, then apply the stock penalty."""
		parts = self.explain(product, terms, matched_fields)
		score = self.stock_penalty(product, sum(parts.values()))
		logger.debug(f"[Ranker] product={product.id} parts={parts} final={score:.2f}")
		return score
