"""
Gesture classification from finger-state signatures.
Exact-match lookup against a replaceable rule table.
"""
import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Dict, Iterator, Optional, Union

from .finger_state import FingerSignature

logger = logging.getLogger(__name__)

SENTINEL = "-"

# Signature (thumb, index, middle, ring, pinky) -> symbol
DEFAULT_RULES: Dict[str, str] = {
    "00000": "A",
    "01111": "B",
    "01000": "D",
    "01100": "L",
    "01110": "W",
    "11111": "5",
}

SignatureLike = Union[str, FingerSignature, tuple, list]


def to_signature(value: SignatureLike) -> FingerSignature:
    """Normalise a key string, bit sequence or FingerSignature. Raises ValueError."""
    if isinstance(value, FingerSignature):
        return value
    if isinstance(value, str):
        return FingerSignature.parse(value)
    try:
        return FingerSignature(value)
    except TypeError as e:
        raise ValueError(f"invalid signature {value!r}") from e


class GestureRuleTable(Mapping):
    """
    Immutable signature -> symbol mapping.

    Keys are normalised to FingerSignature; lookups accept anything
    `to_signature` accepts. Invalid rules raise ValueError at construction.
    """

    def __init__(self, rules: Optional[Mapping] = None, sentinel: str = SENTINEL):
        if rules is None:
            rules = DEFAULT_RULES
        table: Dict[FingerSignature, str] = {}
        for key, symbol in rules.items():
            signature = to_signature(key)
            if not isinstance(symbol, str) or not symbol:
                raise ValueError(f"symbol for {signature.key} must be a non-empty string")
            if symbol == sentinel:
                raise ValueError(f"symbol for {signature.key} collides with the sentinel {sentinel!r}")
            if signature in table:
                raise ValueError(f"duplicate rule for signature {signature.key}")
            table[signature] = symbol
        self._rules = MappingProxyType(table)
        self._sentinel = sentinel

    def __getitem__(self, key: SignatureLike) -> str:
        try:
            signature = to_signature(key)
        except ValueError:
            raise KeyError(key) from None
        return self._rules[signature]

    def __iter__(self) -> Iterator[FingerSignature]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        entries = ", ".join(f"{s.key}: {v!r}" for s, v in self._rules.items())
        return f"GestureRuleTable({{{entries}}})"

    def lookup(self, signature: SignatureLike) -> Optional[str]:
        """Symbol for an exact signature match, or None."""
        try:
            return self[signature]
        except KeyError:
            return None

    def extended(self, extra: Mapping) -> "GestureRuleTable":
        """New table with extra rules added. Redefining an existing signature raises ValueError."""
        merged = {s.key: v for s, v in self._rules.items()}
        for key, symbol in extra.items():
            signature = to_signature(key)
            if signature.key in merged:
                raise ValueError(f"duplicate rule for signature {signature.key}")
            merged[signature.key] = symbol
        return GestureRuleTable(merged, sentinel=self._sentinel)

    @property
    def symbols(self) -> frozenset:
        return frozenset(self._rules.values())

    @property
    def sentinel(self) -> str:
        return self._sentinel


class GestureClassifier:
    """
    Maps finger signatures to symbols.

    Stateless: every call depends only on its argument. Anything that is not
    an exact table match, including None and malformed signatures,
    resolves to the sentinel.
    """

    def __init__(self, table: Optional[GestureRuleTable] = None, sentinel: Optional[str] = None):
        self._table = table if table is not None else GestureRuleTable()
        self._sentinel = sentinel if sentinel is not None else self._table.sentinel

    @property
    def table(self) -> GestureRuleTable:
        return self._table

    @property
    def sentinel(self) -> str:
        return self._sentinel

    def classify(self, signature: Optional[SignatureLike]) -> str:
        """Return the symbol for signature, or the sentinel."""
        if signature is None:
            return self._sentinel
        try:
            symbol = self._table.lookup(signature)
        except (TypeError, ValueError) as e:
            logger.debug(f"Unclassifiable signature {signature!r}: {e}")
            return self._sentinel
        return symbol if symbol is not None else self._sentinel

    def recognizes(self, symbol: str) -> bool:
        return symbol in self._table.symbols
