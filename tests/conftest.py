"""
Shared fixtures: a product factory and a small boutique catalog.
"""

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
	sys.path.insert(0, str(ROOT))

from catalog_search.models import Product
from catalog_search.search_engine import ProductSearchRanker
from catalog_search.synonyms import SynonymTable


def _make_product(id, name, category="Sarees", subcategory="Ethnic Wear", price=1000.0, in_stock=True, **kwargs):
	return Product(
		id=id,
		name=name,
		category=category,
		subcategory=subcategory,
		price=price,
		in_stock=in_stock,
		**kwargs,
	)


@pytest.fixture
def make_product():
	return _make_product


@pytest.fixture
def catalog():
	return [
		_make_product(1, "Banarasi Silk Saree", price=8999, fabric="Silk", colors=["Red", "Gold"],
			occasions=["Wedding", "Festival"], rating=4.8, reviews=124, is_new=True, sku="SAR-BAN-001",
			description="Handwoven Banarasi silk saree with intricate zari work, perfect for weddings and festive occasions."),
		_make_product(2, "Bridal Lehenga Choli", category="Lehengas", subcategory="Bridal Wear", price=18999,
			fabric="Velvet", colors=["Maroon", "Pink"], occasions=["Wedding"], rating=4.9, reviews=86, discount=15,
			sku="LEH-BRI-002"),
		_make_product(3, "Cotton Anarkali Kurta", category="Kurtis & Kurtas", price=1899, fabric="Cotton",
			colors=["Blue", "White"], occasions=["Casual", "Office"], sizes=["S", "M", "L"], rating=4.3, reviews=210,
			sku="KUR-ANA-003"),
		_make_product(4, "Georgette Party Gown", category="Gowns", subcategory="Indo-Western", price=5499,
			in_stock=False, fabric="Georgette", colors=["Black", "Silver"], occasions=["Party"], rating=4.1,
			reviews=37, is_new=True),
		_make_product(5, "Chiffon Printed Dupatta", category="Dupattas & Stoles", subcategory="Accessories",
			price=999, fabric="Chiffon", colors=["Green"], occasions=["Casual", "Festival"], rating=3.9, reviews=15,
			discount=20),
	]


@pytest.fixture
def ranker():
	return ProductSearchRanker()


@pytest.fixture
def plain_ranker():
	"""Ranker without synonym expansion entries."""
	return ProductSearchRanker(synonyms=SynonymTable.empty())
