"""
Search engine module.
Ranks an in-memory product catalog against a free-text query and builds
autocomplete suggestions. Pure functions over the input: nothing is cached or mutated.
"""

from collections.abc import Iterable  # runtime check for the product collection
from typing import Dict, List, Optional, Sequence  # type annotations for clarity

# Import project modules for data structures and components
from .models import Product, SearchConfig, SearchResult  # core data classes
from .matching import FieldMatcher, fuzzy_match  # field matching with typo tolerance
from .query_parser import QueryParser, is_blank  # query understanding
from .ranking import Ranker  # additive scoring rules
from .synonyms import SynonymTable  # cross-script equivalents

# Import loguru for console logging
from loguru import logger  # simple structured logger

MAX_HIGHLIGHTS = 3  # highlights kept per result
DESCRIPTION_EXCERPT_LENGTH = 100  # characters of description shown in a highlight
SUGGESTION_FUZZY_THRESHOLD = 0.6  # looser than search: suggestions are a hint, not a filter

POPULAR_SEARCHES = (
	"saree",
	"lehenga",
	"kurta",
	"wedding",
	"festival",
	"party",
	"silk",
	"cotton",
	"red",
	"blue",
	"gold",
	"bridal",
	"anarkali",
	"sherwani",
	"jewelry",
)


def _as_product_list(products) -> List[Product]:
	"""Materialize the catalog, rejecting anything that is not a collection of products."""
	if products is None or isinstance(products, (str, bytes)) or not isinstance(products, Iterable):
		raise TypeError(f"products must be an iterable of Product, got {type(products).__name__}")
	items = list(products)
	for i, item in enumerate(items):
		if not isinstance(item, Product):
			raise TypeError(f"products[{i}] must be a Product, got {type(item).__name__}")
	return items


def _rank_key(result: SearchResult):
	# Missing rating / reviews compare as zero
	p = result.product
	return (
		-result.score,
		-(p.rating if p.rating is not None else 0.0),
		-(p.reviews if p.reviews is not None else 0),
	)


def build_highlights(product: Product, terms: Sequence[str], limit: int = MAX_HIGHLIGHTS) -> List[str]:
	"""Short "<Field>: <value>" strings explaining why a product matched."""
	highlights: List[str] = []
	name = product.name.lower()
	category = product.category.lower()
	description = product.description.lower() if product.description is not None else None

	for term in terms:
		candidates = []
		if term in name:
			candidates.append(f"Name: {product.name}")
		if description is not None and term in description:
			excerpt = product.description[:DESCRIPTION_EXCERPT_LENGTH]
			if len(product.description) > DESCRIPTION_EXCERPT_LENGTH:
				excerpt += "..."
			candidates.append(f"Description: {excerpt}")
		if term in category:
			candidates.append(f"Category: {product.category}")
		for c in candidates:
			if c not in highlights:
				highlights.append(c)
			if len(highlights) >= limit:
				return highlights
	return highlights


class ProductSearchRanker:
	"""
	High-level search API combining query parsing, field matching, and ranking.
	The synonym table and scoring ranker are injected so either can be swapped in tests.
	"""

	def __init__(
		self,
		synonyms: Optional[SynonymTable] = None,  # cross-script lookup table
		ranker: Optional[Ranker] = None,  # scoring rules
		config: Optional[SearchConfig] = None,  # defaults for every call
	):
		self.synonyms = synonyms if synonyms is not None else SynonymTable.default()
		self.parser = QueryParser(self.synonyms)  # parser sharing the same table
		self.ranker = ranker or Ranker()  # ranker instance
		self.config = config or SearchConfig()
		logger.debug(f"[Search] Ranker ready | synonyms={len(self.synonyms)} | config={self.config}")

	def search(self, products: Iterable, query: str, config: Optional[SearchConfig] = None) -> List[SearchResult]:
		"""Rank products against the query and return the top matches."""
		catalog = _as_product_list(products)
		if query is None or not isinstance(query, str):
			raise TypeError(f"query must be a string, got {type(query).__name__}")
		cfg = config or self.config

		# Browse-all: no filtering, no ranking, input order
		if is_blank(query):
			logger.debug(f"[Search] Blank query, returning all {len(catalog)} products")
			return [SearchResult(product=p, score=1.0) for p in catalog]

		parsed = self.parser.parse(query, include_synonyms=cfg.include_synonyms)
		matcher = FieldMatcher(fuzzy=cfg.fuzzy_match, threshold=cfg.fuzzy_threshold)

		results: List[SearchResult] = []
		seen_ids = set()
		for product in catalog:
			if product.id in seen_ids:  # duplicate records in the input are ranked once
				logger.debug(f"[Search] Skipping duplicate product id={product.id}")
				continue
			seen_ids.add(product.id)

			matched_fields = matcher.match(product, parsed.expanded_terms, parsed.phrase)
			if not matched_fields:
				continue

			score = self.ranker.compute_score(product, parsed.expanded_terms, matched_fields)
			if score < cfg.min_score:
				logger.debug(f"[Search] Below min_score | product={product.id} | score={score:.2f}")
				continue

			results.append(SearchResult(
				product=product,
				score=score,
				matched_fields=matched_fields,
				highlights=build_highlights(product, parsed.expanded_terms),
			))

		results.sort(key=_rank_key)
		logger.info(f"[Search] '{query}' -> returning {min(cfg.max_results, len(results))} of {len(results)} ranked results")
		return results[:cfg.max_results]

	def suggest(self, products: Iterable, partial_query: str, limit: int = 5) -> List[str]:
		"""Autocomplete strings drawn from product names and attributes."""
		catalog = _as_product_list(products)
		if is_blank(partial_query) or limit <= 0:
			return []
		term = partial_query.strip().lower()

		scores: Dict[str, float] = {}

		def bump(value: Optional[str], prefix: float, contains: float = 0.0):
			if value is None:
				return
			v = value.lower()
			if v.startswith(term):
				scores[value] = scores.get(value, 0.0) + prefix
			elif contains and term in v:
				scores[value] = scores.get(value, 0.0) + contains

		for product in catalog:
			# Names score per word so "silk" ranks "Banarasi Silk Saree" by its word
			if " " in term:
				bump(product.name, 10, 5)
			else:
				for word in product.name.lower().split():
					if word.startswith(term):
						scores[product.name] = scores.get(product.name, 0.0) + 10
					elif term in word:
						scores[product.name] = scores.get(product.name, 0.0) + 5
			bump(product.category, 8, 4)
			bump(product.subcategory, 6, 3)
			bump(product.fabric, 5, 2)
			for occ in product.occasions:
				bump(occ, 4, 2)
			for color in product.colors:
				bump(color, 3, 1)
			# Typo-tolerant boost only for names that already qualified
			if product.name in scores and fuzzy_match(product.name, term, SUGGESTION_FUZZY_THRESHOLD):
				scores[product.name] += 2

		ranked = sorted(scores.items(), key=lambda kv: kv[1], reverse=True)
		suggestions = [s for s, _ in ranked[:limit]]
		logger.debug(f"[Search] Suggestions for '{partial_query}': {suggestions}")
		return suggestions


_default_ranker: Optional[ProductSearchRanker] = None


def get_default_ranker() -> ProductSearchRanker:
	"""Shared ranker with the default synonym table and weights."""
	global _default_ranker
	if _default_ranker is None:
		_default_ranker = ProductSearchRanker()
	return _default_ranker


def search_products(products: Iterable, query: str, config: Optional[SearchConfig] = None) -> List[SearchResult]:
	return get_default_ranker().search(products, query, config)


def get_search_suggestions(products: Iterable, query: str, limit: int = 5) -> List[str]:
	return get_default_ranker().suggest(products, query, limit)


def get_popular_searches() -> List[str]:
	return list(POPULAR_SEARCHES)


def track_search(query: str, results_count: int) -> None:
	"""Record an executed search."""
	logger.info(f"[Search] Search: '{query}' returned {results_count} results")
