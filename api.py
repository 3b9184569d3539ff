"""
FastAPI server exposing the catalog search API.
Endpoints:
- GET /health: basic health check
- GET /search?q=...&max_results=50: ranked results with scores, matched fields and highlights
- GET /suggest?q=...&limit=5: autocomplete suggestions
- GET /popular: popular search terms
- GET /sort-options: sort keys with their display labels
- GET /products?q=...&category=...&sort=...&page=1: search, filter, sort and paginate

Startup loads the product catalog from CATALOG_PATH (default data/products.jsonl).
"""

# Import standard libraries for environment settings and timing
import os  # env-based settings
import time  # measure startup and request latencies
from typing import List, Optional  # precise typing for clarity

# Import FastAPI for building the web API and Pydantic for response models
from fastapi import FastAPI, HTTPException, Query  # FastAPI primitives
from pydantic import BaseModel  # response schema definitions

# Import our internal modules for data loading and search
from catalog_search.data_loader import DataLoader  # loads and normalizes products
from catalog_search.filters import SORT_LABELS, filter_products, paginate, sort_products  # browsing helpers
from catalog_search.models import Product, ProductFilter, SearchConfig  # core data classes
from catalog_search.search_engine import ProductSearchRanker, get_popular_searches, track_search  # search service

# Import loguru for simple, structured console logging
from loguru import logger  # convenient console logger

# Where the catalog lives; override with the CATALOG_PATH environment variable
CATALOG_PATH = os.environ.get("CATALOG_PATH", "data/products.jsonl")
MIN_SUGGEST_LENGTH = 2  # shorter inputs get no suggestions

# Instantiate the FastAPI application with metadata
app = FastAPI(title="Boutique Catalog Search API", version="1.0.0")  # web app

# Globals that hold the catalog, the ranker, and measured startup time
PRODUCTS: List[Product] = []  # loaded catalog
RANKER: Optional[ProductSearchRanker] = None  # will point to the initialized ranker
STARTUP_TIME_S: float = 0.0  # measures how long startup took


# Pydantic model that describes the shape of a single product in responses
class ProductOut(BaseModel):
	id: int
	name: str
	category: str
	subcategory: str
	price: float
	in_stock: bool
	description: Optional[str] = None  # truncated description
	fabric: Optional[str] = None
	occasions: List[str] = []
	colors: List[str] = []
	rating: Optional[float] = None
	reviews: Optional[int] = None
	sku: Optional[str] = None
	is_new: Optional[bool] = None
	discount: Optional[float] = None


# Pydantic model for a single ranked search item
class SearchResponseItem(BaseModel):
	product: ProductOut  # product data
	score: float  # relevance score
	matched_fields: List[str]  # fields that matched the query
	highlights: List[str]  # why it matched


# Pydantic model for the complete search response payload
class SearchResponse(BaseModel):
	query: str  # original query string
	total: int  # number of results returned
	elapsed_ms: float  # server-side search time in ms
	results: List[SearchResponseItem]  # ranked items


class SuggestResponse(BaseModel):
	query: str
	suggestions: List[str]


class ProductPageResponse(BaseModel):
	query: str
	sort: str
	page: int
	per_page: int
	total_items: int
	total_pages: int
	has_next: bool
	has_prev: bool
	items: List[ProductOut]


def to_product_out(p: Product) -> ProductOut:
	"""Convert a Product into its response schema."""
	return ProductOut(
		id=p.id,
		name=p.name,
		category=p.category,
		subcategory=p.subcategory,
		price=p.price,
		in_stock=p.in_stock,
		description=p.description[:350] if p.description else None,
		fabric=p.fabric,
		occasions=list(p.occasions),
		colors=list(p.colors),
		rating=p.rating,
		reviews=p.reviews,
		sku=p.sku,
		is_new=p.is_new,
		discount=p.discount,
	)


def init_catalog(products: List[Product], ranker: Optional[ProductSearchRanker] = None) -> None:
	"""Install a catalog and ranker; used at startup and by tests."""
	global PRODUCTS, RANKER
	PRODUCTS = list(products)
	RANKER = ranker or ProductSearchRanker()


# FastAPI startup hook to load the catalog once
@app.on_event("startup")
async def startup_event():
	"""Load the catalog and build the ranker."""
	global STARTUP_TIME_S  # refer to module-level globals
	if RANKER is not None:  # already initialized (e.g. by tests)
		return
	start = time.time()  # start timer for startup latency

	logger.info(f"[API] Startup: loading catalog from {CATALOG_PATH}...")  # log intent
	loader = DataLoader()  # create loader instance
	init_catalog(loader.load_products_from_jsonl(CATALOG_PATH))  # read dataset

	STARTUP_TIME_S = time.time() - start  # elapsed seconds
	logger.info(f"[API] Startup complete in {STARTUP_TIME_S:.2f}s with {len(PRODUCTS)} products.")  # summary log


# Simple health endpoint for readiness checks
@app.get("/health")
async def health():
	"""Return minimal health info for liveness/readiness probes."""
	return {
		"status": "ok",  # constant indicator
		"engine_ready": RANKER is not None,  # True if ranker initialized
		"products": len(PRODUCTS),  # catalog size
		"startup_seconds": round(STARTUP_TIME_S, 2)  # startup latency
	}


# Main search endpoint that accepts a free-text query
@app.get("/search", response_model=SearchResponse)
async def search(
	q: str = Query("", description="Free-text product query"),
	max_results: int = Query(50, ge=0, le=500),
	fuzzy: bool = Query(True, description="Accept near-miss spellings"),
):
	"""Execute a search and return ranked results."""
	if RANKER is None:  # ranker must be ready to serve
		logger.warning("[API] Search requested but ranker not initialized")  # guard log
		return SearchResponse(query=q, total=0, elapsed_ms=0.0, results=[])  # return empty

	start = time.time()  # start timer
	logger.debug(f"[API] /search q='{q}' max_results={max_results} fuzzy={fuzzy}")  # debug log of input

	results = RANKER.search(PRODUCTS, q, SearchConfig(fuzzy_match=fuzzy, max_results=max_results))  # run search
	elapsed_ms = (time.time() - start) * 1000  # compute ms
	track_search(q, len(results))  # record the search

	items = [
		SearchResponseItem(
			product=to_product_out(r.product),
			score=round(r.score, 3),
			matched_fields=r.matched_fields,
			highlights=r.highlights,
		)
		for r in results
	]
	return SearchResponse(query=q, total=len(items), elapsed_ms=round(elapsed_ms, 2), results=items)


@app.get("/suggest", response_model=SuggestResponse)
async def suggest(q: str = Query(""), limit: int = Query(5, ge=0, le=20)):
	"""Autocomplete suggestions for a partial query."""
	if RANKER is None or len(q.strip()) < MIN_SUGGEST_LENGTH:
		return SuggestResponse(query=q, suggestions=[])
	return SuggestResponse(query=q, suggestions=RANKER.suggest(PRODUCTS, q, limit))


@app.get("/popular")
async def popular():
	"""Popular search terms for an empty search box."""
	return {"searches": get_popular_searches()}


@app.get("/sort-options")
async def sort_options():
	"""Sort keys accepted by /products, with their display labels."""
	return {"options": [{"value": key, "label": label} for key, label in SORT_LABELS.items()]}


@app.get("/products", response_model=ProductPageResponse)
async def products(
	q: str = Query(""),
	category: List[str] = Query([]),
	occasion: List[str] = Query([]),
	fabric: List[str] = Query([]),
	min_price: float = Query(0.0, ge=0),
	max_price: float = Query(20000.0, ge=0),
	in_stock: Optional[bool] = None,
	is_new: Optional[bool] = None,
	has_discount: Optional[bool] = None,
	sort: str = Query("featured"),
	page: int = Query(1, ge=1),
	per_page: int = Query(12, ge=1, le=100),
):
	"""Search, then filter, sort and paginate the matching products."""
	if RANKER is None:
		raise HTTPException(status_code=503, detail="Catalog not loaded")

	results = RANKER.search(PRODUCTS, q)
	product_filter = ProductFilter(
		categories=category,
		occasions=occasion,
		fabrics=fabric,
		price_range=(min_price, max_price),
		in_stock=in_stock,
		is_new=is_new,
		has_discount=has_discount,
	)
	filtered = filter_products([r.product for r in results], product_filter)
	try:
		ordered = sort_products(filtered, sort)
	except ValueError as e:
		logger.warning(f"[API] Bad sort option: {e}")
		raise HTTPException(status_code=400, detail=str(e))

	pg = paginate(ordered, page=page, per_page=per_page)
	return ProductPageResponse(
		query=q,
		sort=sort,
		page=pg.page,
		per_page=pg.per_page,
		total_items=pg.total_items,
		total_pages=pg.total_pages,
		has_next=pg.has_next,
		has_prev=pg.has_prev,
		items=[to_product_out(p) for p in pg.items],
	)
