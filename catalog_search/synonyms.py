"""
Synonym table module.
Maps Hindi (Devanagari) shopping terms to their English equivalents so a query
in either script reaches the same products.
"""

from types import MappingProxyType  # read-only view over the internal dict
from typing import Dict, Iterable, List, Mapping, Tuple

from loguru import logger  # console logger


# Hindi to English mapping used by the storefront search box
DEFAULT_SYNONYMS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
	"साड़ी": ("saree", "sari"),
	"लेहंगा": ("lehenga", "lehenga choli"),
	"कुर्ता": ("kurta", "kurti"),
	"सलवार": ("salwar", "salwar suit"),
	"अनारकली": ("anarkali", "anarkali suit"),
	"शेरवानी": ("sherwani",),
	"दुपट्टा": ("dupatta", "stole"),
	"गाउन": ("gown", "dress"),
	"ज्वेलरी": ("jewelry", "jewellery"),
	"बैग": ("bag", "clutch"),
	"शादी": ("wedding", "bridal"),
	"त्योहार": ("festival", "celebration"),
	"पार्टी": ("party",),
	"ऑफिस": ("office", "formal"),
	"कैजुअल": ("casual",),
	"रेशम": ("silk",),
	"कॉटन": ("cotton",),
	"जॉर्जेट": ("georgette",),
	"चिफॉन": ("chiffon",),
	"लाल": ("red",),
	"नीला": ("blue",),
	"हरा": ("green",),
	"गुलाबी": ("pink",),
	"सफेद": ("white",),
	"काला": ("black",),
	"सोना": ("gold", "golden"),
	"चांदी": ("silver",),
})


class SynonymTable:
	"""
	Read-only cross-script lookup table.
	Built once from a mapping and injected wherever query terms are expanded.
	"""

	def __init__(self, mapping: Mapping[str, Iterable[str]]):
		entries: Dict[str, Tuple[str, ...]] = {}
		for key, values in mapping.items():
			if isinstance(values, str):  # a single equivalent given as a bare string
				values = (values,)
			entries[key.strip().lower()] = tuple(v.strip().lower() for v in values if v and v.strip())
		self._entries = MappingProxyType(entries)

		# Reverse index: english term -> hindi keys whose list contains it
		reverse: Dict[str, List[str]] = {}
		for key, values in self._entries.items():
			for value in values:
				reverse.setdefault(value, []).append(key)
		self._reverse = MappingProxyType({k: tuple(v) for k, v in reverse.items()})
		logger.debug(f"[Synonyms] Table built with {len(self._entries)} entries")

	@classmethod
	def default(cls) -> "SynonymTable":
		"""Table with the storefront's Hindi/English shopping vocabulary."""
		return cls(DEFAULT_SYNONYMS)

	@classmethod
	def empty(cls) -> "SynonymTable":
		return cls({})

	def __len__(self) -> int:
		return len(self._entries)

	def __contains__(self, term: str) -> bool:
		return term in self._entries or term in self._reverse

	def expand(self, term: str) -> List[str]:
		"""
		Return the equivalents of a term in both directions, without the term itself.
		A Hindi key yields its English list; an English term yields every Hindi key
		listing it plus all English terms of those lists.
		"""
		out: List[str] = []
		for value in self._entries.get(term, ()):
			out.append(value)
		for key in self._reverse.get(term, ()):
			out.append(key)
			out.extend(self._entries[key])
		# De-duplicate while preserving order, drop the input term
		seen = {term}
		uniq = []
		for t in out:
			if t not in seen:
				seen.add(t)
				uniq.append(t)
		return uniq
