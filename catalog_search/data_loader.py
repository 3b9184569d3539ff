"""
Data loading and preprocessing module.
Handles loading products from JSONL and cleaning/normalizing the records.
"""

# Standard libs for JSON parsing, typing, and paths
import json  # read JSON lines
from typing import Any, Dict, List, Optional  # type hints
from pathlib import Path  # filesystem-safe paths

# Import our Product data class used across the project
from .models import Product  # structured product record

# Console logging
from loguru import logger  # console logger


class DataLoader:
	"""
	Handles loading and preprocessing of catalog data.
	Accepts the storefront's camelCase keys as well as snake_case ones.
	"""

	# Storefront key -> Product attribute
	KEY_ALIASES = {
		'inStock': 'in_stock',
		'isNew': 'is_new',
		'occasion': 'occasions',
	}

	TRUE_STRINGS = ('true', 'yes', '1')
	FALSE_STRINGS = ('false', 'no', '0')

	def load_products_from_jsonl(self, filepath: str) -> List[Product]:
		"""
		Load products from a JSON Lines (JSONL) file where each line is one JSON object.
		Returns a list of Product objects.
		"""
		products = []  # accumulator for parsed Product objects
		filepath = Path(filepath)  # normalize path

		# Validate the file presence early to give clear error messages
		if not filepath.exists():
			raise FileNotFoundError(f"Product data file not found: {filepath}")

		logger.info(f"[DataLoader] Loading products from {filepath}...")  # log action

		# Read line-by-line so a bad record only costs that line
		with open(filepath, 'r', encoding='utf-8') as f:
			for line_num, line in enumerate(f, 1):  # keep track of line number for diagnostics
				if not line.strip():  # blank lines are allowed
					continue
				try:
					data = json.loads(line)  # parse JSON object per line
					products.append(self.parse_product(data))  # convert dict -> Product
				except json.JSONDecodeError as e:
					logger.warning(f"[DataLoader] Skipping invalid JSON at line {line_num}: {e}")  # malformed line
				except (KeyError, TypeError, ValueError) as e:
					logger.warning(f"[DataLoader] Error parsing product at line {line_num}: {e}")  # bad fields

		logger.info(f"[DataLoader] Successfully loaded {len(products)} products.")  # summary
		return products  # return list

	def parse_product(self, data: Dict[str, Any]) -> Product:
		"""
		Convert a raw dictionary into a Product.
		id, name, category, subcategory and price are required; everything else is optional.
		"""
		if not isinstance(data, dict):
			raise TypeError(f"expected a JSON object, got {type(data).__name__}")
		data = {self.KEY_ALIASES.get(k, k): v for k, v in data.items()}  # unify key style

		for key in ('id', 'name', 'category', 'subcategory', 'price'):
			if data.get(key) in (None, ''):
				raise KeyError(f"missing required field '{key}'")

		in_stock = data.get('in_stock')
		if in_stock is None:  # storefront treats an unknown stock state as unavailable
			logger.debug(f"[DataLoader] Product {data['id']} has no stock flag, treating as out of stock")

		return Product(
			id=int(data['id']),
			name=self._clean_text(data['name']),
			category=self._clean_text(data['category']),
			subcategory=self._clean_text(data['subcategory']),
			price=float(data['price']),
			in_stock=self._parse_bool(in_stock, default=False),
			description=self._optional_text(data.get('description')),
			fabric=self._optional_text(data.get('fabric')),
			occasions=self._parse_comma_separated(data.get('occasions')),
			colors=self._parse_comma_separated(data.get('colors')),
			sizes=self._parse_comma_separated(data.get('sizes')),
			rating=self._optional_number(data.get('rating'), float),
			reviews=self._optional_number(data.get('reviews'), int),
			sku=self._optional_text(data.get('sku')),
			is_new=self._parse_bool(data.get('is_new')),
			discount=self._optional_number(data.get('discount'), float),
		)

	def _parse_comma_separated(self, value) -> List[str]:
		"""
		Normalize a value that may be None, a list, or a comma-separated string
		into a list of clean strings.
		"""
		if value is None:  # missing field
			return []  # treat as empty list
		if isinstance(value, list):  # already a list
			return [str(item).strip() for item in value if item]  # clean each
		if isinstance(value, str):  # comma-separated string
			return [item.strip() for item in value.split(',') if item.strip()]  # split/trim
		return []  # any other type becomes empty

	def _clean_text(self, text) -> str:
		"""Trim whitespace; display casing is kept, matching lower-cases on the fly."""
		return str(text).strip()

	def _optional_text(self, text) -> Optional[str]:
		if text is None:
			return None
		text = str(text).strip()
		return text or None  # empty strings count as absent

	def _parse_bool(self, value, default: Optional[bool] = None) -> Optional[bool]:
		"""
		Accept JSON booleans, 0/1, and the strings true/false/yes/no/1/0.
		Anything else raises ValueError so the record is skipped.
		"""
		if value is None or value == '':
			return default
		if isinstance(value, bool):
			return value
		if isinstance(value, int) and value in (0, 1):
			return bool(value)
		if isinstance(value, str):
			text = value.strip().lower()
			if text in self.TRUE_STRINGS:
				return True
			if text in self.FALSE_STRINGS:
				return False
		raise ValueError(f"not a boolean: {value!r}")

	def _optional_number(self, value, cast):
		if value is None or value == '':
			return None
		return cast(value)

	def get_all_categories(self, products: List[Product]) -> List[str]:
		"""Return a sorted list of all unique categories in the catalog."""
		return sorted({p.category for p in products})

	def get_all_occasions(self, products: List[Product]) -> List[str]:
		"""Return a sorted list of all unique occasion tags."""
		occasions = set()
		for product in products:
			occasions.update(product.occasions)
		return sorted(occasions)

	def get_all_fabrics(self, products: List[Product]) -> List[str]:
		return sorted({p.fabric for p in products if p.fabric is not None})

	def get_all_colors(self, products: List[Product]) -> List[str]:
		colors = set()
		for product in products:
			colors.update(product.colors)
		return sorted(colors)
