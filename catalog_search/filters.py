"""
Catalog browsing helpers: attribute filters, sort options, and pagination
applied to a product list after search.
"""

import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence, TypeVar

from loguru import logger

from .models import Product, ProductFilter

T = TypeVar("T")


def _matches(product: Product, f: ProductFilter) -> bool:
	if f.categories and product.category not in f.categories:
		return False
	if f.subcategories and product.subcategory not in f.subcategories:
		return False
	if f.occasions and not any(o in f.occasions for o in product.occasions):
		return False
	# Products without a fabric are not excluded by a fabric filter
	if f.fabrics and product.fabric is not None and product.fabric not in f.fabrics:
		return False
	low, high = f.price_range
	if product.price < low or product.price > high:
		return False
	if f.sizes and not any(s in f.sizes for s in product.sizes):
		return False
	if f.colors and not any(c in f.colors for c in product.colors):
		return False
	if f.in_stock is not None and product.in_stock != f.in_stock:
		return False
	if f.is_new is not None and bool(product.is_new) != f.is_new:
		return False
	if f.has_discount is not None:
		has_discount = product.discount is not None and product.discount > 0
		if has_discount != f.has_discount:
			return False
	return True


def filter_products(products: Sequence[Product], product_filter: ProductFilter) -> List[Product]:
	"""Keep products satisfying every active constraint, preserving order."""
	kept = [p for p in products if _matches(p, product_filter)]
	logger.debug(f"[Filters] Kept {len(kept)} of {len(products)} products")
	return kept


def _newest_first(products: Sequence[Product]) -> List[Product]:
	return sorted(products, key=lambda p: not p.is_new)


SORT_OPTIONS: Dict[str, Callable[[Sequence[Product]], List[Product]]] = {
	"featured": _newest_first,
	"price-low": lambda ps: sorted(ps, key=lambda p: p.price),
	"price-high": lambda ps: sorted(ps, key=lambda p: p.price, reverse=True),
	"newest": _newest_first,
	"popular": lambda ps: sorted(ps, key=lambda p: p.reviews or 0, reverse=True),
	"rating": lambda ps: sorted(ps, key=lambda p: p.rating or 0.0, reverse=True),
}

SORT_LABELS = {
	"featured": "Featured",
	"price-low": "Price: Low to High",
	"price-high": "Price: High to Low",
	"newest": "Newest",
	"popular": "Most Popular",
	"rating": "Highest Rated",
}


def sort_products(products: Sequence[Product], sort_by: str = "featured") -> List[Product]:
	"""Return a new list ordered by one of SORT_OPTIONS. Sorting is stable."""
	if sort_by not in SORT_OPTIONS:
		raise ValueError(f"Unknown sort option '{sort_by}'. Expected one of {sorted(SORT_OPTIONS)}")
	return SORT_OPTIONS[sort_by](products)


@dataclass
class Page:
	items: List  # items on this page
	page: int  # 1-based page number
	per_page: int
	total_items: int
	total_pages: int
	start_index: int  # 1-based index of the first item, 0 when empty
	end_index: int  # 1-based index of the last item, 0 when empty

	@property
	def has_next(self) -> bool:
		return self.page < self.total_pages

	@property
	def has_prev(self) -> bool:
		return self.page > 1


def paginate(items: Sequence[T], page: int = 1, per_page: int = 12) -> Page:
	"""Slice items into a page; out-of-range page numbers clamp to the valid range."""
	if per_page <= 0:
		raise ValueError(f"per_page must be > 0, got {per_page}")
	total_items = len(items)
	total_pages = math.ceil(total_items / per_page)
	page = max(1, min(page, max(total_pages, 1)))

	start = (page - 1) * per_page
	chunk = list(items[start:start + per_page])
	return Page(
		items=chunk,
		page=page,
		per_page=per_page,
		total_items=total_items,
		total_pages=total_pages,
		start_index=start + 1 if chunk else 0,
		end_index=start + len(chunk),
	)
