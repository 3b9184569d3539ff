"""
Query parsing module.
Turns raw search text into lower-cased terms and expands them through the synonym table.
Never fails on unusual text: unknown words simply stay as plain terms.
"""

from typing import List, Optional  # type annotations

from loguru import logger  # console logging

from .models import ParsedQuery  # structured query representation
from .synonyms import SynonymTable  # cross-script equivalents


def is_blank(query: Optional[str]) -> bool:
	"""True for None, empty, or whitespace-only queries."""
	return query is None or not query.strip()


class QueryParser:
	"""
	Parses free-text queries into a ParsedQuery.
	Terms are whitespace-delimited and lower-cased; synonym expansion runs both ways.
	"""

	def __init__(self, synonyms: Optional[SynonymTable] = None):
		# Fall back to the storefront vocabulary when no table is injected
		self.synonyms = synonyms if synonyms is not None else SynonymTable.default()
		logger.debug(f"[Parser] Initialized with {len(self.synonyms)} synonym entries")

	def tokenize(self, query: str) -> List[str]:
		"""Lower-case and split on any run of whitespace."""
		if is_blank(query):
			return []
		return query.strip().lower().split()

	def parse(self, query: str, include_synonyms: bool = True) -> ParsedQuery:
		"""Main entry: produce a ParsedQuery from a raw string."""
		terms = self.tokenize(query)
		logger.debug(f"[Parser] Input query: '{query}' -> terms: {terms}")

		expanded: List[str] = []
		seen = set()
		for term in terms:
			candidates = [term]
			if include_synonyms:
				candidates.extend(self.synonyms.expand(term))
			for cand in candidates:
				if cand not in seen:
					seen.add(cand)
					expanded.append(cand)

		parsed = ParsedQuery(
			raw_query=query,
			terms=terms,
			expanded_terms=expanded,
			phrase=" ".join(terms) if len(terms) > 1 else None,
		)
		logger.debug(f"[Parser] Expanded terms: {parsed.expanded_terms} | phrase={parsed.phrase}")
		return parsed
