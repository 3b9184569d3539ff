"""
Boutique catalog search.
In-memory product search with synonym expansion, typo-tolerant matching and
weighted relevance ranking, plus filtering, sorting and pagination helpers.
"""

from .models import Product, ParsedQuery, SearchConfig, SearchResult, ProductFilter
from .synonyms import SynonymTable, DEFAULT_SYNONYMS
from .query_parser import QueryParser
from .matching import FieldMatcher, fuzzy_match, similarity
from .ranking import Ranker, FieldWeights, MatchBonuses, QualityBoosts
from .search_engine import (
	ProductSearchRanker,
	search_products,
	get_search_suggestions,
	get_popular_searches,
	track_search,
)
from .filters import filter_products, sort_products, paginate, Page, SORT_OPTIONS, SORT_LABELS
from .data_loader import DataLoader

__version__ = "1.0.0"

__all__ = [
	"Product",
	"ParsedQuery",
	"SearchConfig",
	"SearchResult",
	"ProductFilter",
	"SynonymTable",
	"DEFAULT_SYNONYMS",
	"QueryParser",
	"FieldMatcher",
	"fuzzy_match",
	"similarity",
	"Ranker",
	"FieldWeights",
	"MatchBonuses",
	"QualityBoosts",
	"ProductSearchRanker",
	"search_products",
	"get_search_suggestions",
	"get_popular_searches",
	"track_search",
	"filter_products",
	"sort_products",
	"paginate",
	"Page",
	"SORT_OPTIONS",
	"SORT_LABELS",
	"DataLoader",
]
