"""
Field matching module.
Decides which product fields a set of query terms hits, using substring checks
first and rapidfuzz edit-distance similarity as a fallback for typos.
"""

from typing import List, Optional, Sequence

from rapidfuzz.distance import Levenshtein  # edit distance utilities

from .models import Product

# Order in which matched fields are reported
FIELD_ORDER = ("name", "description", "category", "subcategory", "fabric", "occasion", "colors", "sku")

# Whole-string similarity is only attempted for strings up to this length
MAX_FULL_FUZZY_LENGTH = 20
# Word-level similarity ignores words shorter than this
MIN_FUZZY_WORD_LENGTH = 3


def similarity(a: str, b: str) -> float:
	"""
	Similarity ratio in [0..1]: 1 - edit distance / length of the longer string.
	Two empty strings are identical.
	"""
	return Levenshtein.normalized_similarity(a, b)


def fuzzy_match(text: str, term: str, threshold: float = 0.7) -> bool:
	"""
	Check whether term loosely matches text.
	Cheapest checks first: equality, containment, word-by-word, then full string
	similarity for short strings only.
	"""
	s1 = text.lower().strip()
	s2 = term.lower().strip()

	if not s1 or not s2:  # an empty string is a substring of everything
		return False
	if s1 == s2:
		return True
	if s1 in s2 or s2 in s1:
		return True

	for w1 in s1.split():
		for w2 in s2.split():
			if w1 == w2:
				return True
			# Short words like "a" or "&" would otherwise contain-match almost anything
			if len(w1) < MIN_FUZZY_WORD_LENGTH or len(w2) < MIN_FUZZY_WORD_LENGTH:
				continue
			if w1 in w2 or w2 in w1 or similarity(w1, w2) >= threshold:
				return True

	if len(s1) <= MAX_FULL_FUZZY_LENGTH and len(s2) <= MAX_FULL_FUZZY_LENGTH:
		return similarity(s1, s2) >= threshold
	return False


class FieldMatcher:
	"""Finds the product fields hit by a list of query terms."""

	def __init__(self, fuzzy: bool = True, threshold: float = 0.7):
		self.fuzzy = fuzzy
		self.threshold = threshold

	def _hits(self, value: Optional[str], term: str) -> bool:
		if value is None or not value.strip():  # absent or blank field never matches
			return False
		if term in value.lower():
			return True
		return self.fuzzy and fuzzy_match(value, term, self.threshold)

	def _hits_any(self, values: Sequence[str], term: str) -> bool:
		return any(self._hits(v, term) for v in values)

	def match(self, product: Product, terms: Sequence[str], phrase: Optional[str] = None) -> List[str]:
		"""Return the distinct matched field names in FIELD_ORDER."""
		matched = set()
		for term in terms:
			if self._hits(product.name, term):
				matched.add("name")
			if self._hits(product.description, term):
				matched.add("description")
			if self._hits(product.category, term):
				matched.add("category")
			if self._hits(product.subcategory, term):
				matched.add("subcategory")
			if self._hits(product.fabric, term):
				matched.add("fabric")
			if self._hits_any(product.occasions, term):
				matched.add("occasion")
			if self._hits_any(product.colors, term):
				matched.add("colors")
			# SKU is matched literally, never fuzzily
			if product.sku is not None and term in product.sku.lower():
				matched.add("sku")

		# Multi-word phrase found verbatim
		if phrase:
			if phrase in product.name.lower():
				matched.add("name")
			# Reported against the field that holds it, not folded into name
			if product.description is not None and phrase in product.description.lower():
				matched.add("description")

		return [f for f in FIELD_ORDER if f in matched]
