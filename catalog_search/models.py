"""
Data models for the boutique catalog search.
Defines the product record, parsed queries, search configuration, and results.
"""

# Import dataclass to define simple "record-like" classes without boilerplate
from dataclasses import dataclass, field  # auto-generates __init__, __repr__, etc.
# Import typing helpers for precise and self-documenting types
from typing import List, Optional, Tuple  # lists, optional values, and fixed-size tuples


@dataclass(frozen=True)
class Product:
	"""
	Represents a single catalog product as the storefront knows it.
	Every non-essential attribute is optional and read paths must check for None.
	"""
	id: int  # unique product identifier
	name: str  # display name, e.g. "Banarasi Silk Saree"
	category: str  # e.g. "Sarees", "Kurtis & Kurtas"
	subcategory: str  # e.g. "Ethnic Wear", "Bridal Wear"
	price: float  # list price in rupees
	in_stock: bool  # whether the product can be ordered right now
	description: Optional[str] = None  # free-text description
	fabric: Optional[str] = None  # e.g. "Silk", "Georgette"
	occasions: List[str] = field(default_factory=list)  # occasion tags ("Wedding", "Party")
	colors: List[str] = field(default_factory=list)  # color names
	sizes: List[str] = field(default_factory=list)  # available sizes
	rating: Optional[float] = None  # average rating on a 0-5 scale
	reviews: Optional[int] = None  # number of reviews
	sku: Optional[str] = None  # stock keeping unit
	is_new: Optional[bool] = None  # "new arrival" flag
	discount: Optional[float] = None  # discount percentage


@dataclass
class ParsedQuery:
	"""
	Represents what we extract from the raw search text.
	Terms keep the user's order; expanded terms add synonym equivalents.
	"""
	raw_query: str  # the original text the user typed
	terms: List[str]  # lower-cased whitespace tokens
	expanded_terms: List[str]  # terms plus synonyms, de-duplicated in first-seen order
	phrase: Optional[str] = None  # multi-word query joined by single spaces

	@property
	def is_empty(self) -> bool:
		return not self.terms


@dataclass
class SearchConfig:
	"""Per-call overrides for the search behaviour."""
	fuzzy_match: bool = True  # accept near-miss spellings after substring checks fail
	include_synonyms: bool = True  # expand terms through the synonym table
	min_score: float = 0.3  # drop results scoring below this
	max_results: int = 50  # cap on returned results
	fuzzy_threshold: float = 0.7  # minimum similarity ratio for a fuzzy match

	def __post_init__(self):
		if self.max_results < 0:
			raise ValueError(f"max_results must be >= 0, got {self.max_results}")
		if self.min_score < 0:
			raise ValueError(f"min_score must be >= 0, got {self.min_score}")
		if not 0.0 <= self.fuzzy_threshold <= 1.0:
			raise ValueError(f"fuzzy_threshold must be within [0, 1], got {self.fuzzy_threshold}")


@dataclass
class SearchResult:
	product: Product  # matched product
	score: float  # relevance score
	matched_fields: List[str] = field(default_factory=list)  # distinct field names that matched
	highlights: List[str] = field(default_factory=list)  # up to three "<Field>: <value>" strings


@dataclass
class ProductFilter:
	"""
	Attribute filters applied on top of search results.
	Empty lists and None flags mean "no constraint".
	"""
	categories: List[str] = field(default_factory=list)
	subcategories: List[str] = field(default_factory=list)
	occasions: List[str] = field(default_factory=list)
	fabrics: List[str] = field(default_factory=list)
	price_range: Tuple[float, float] = (0.0, 20000.0)
	sizes: List[str] = field(default_factory=list)
	colors: List[str] = field(default_factory=list)
	in_stock: Optional[bool] = None
	is_new: Optional[bool] = None
	has_discount: Optional[bool] = None
