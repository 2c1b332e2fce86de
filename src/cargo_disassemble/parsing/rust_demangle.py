"""
Rust symbol demangling for the legacy (`_ZN...E`) scheme rustc emits,
via the rust_demangler package.

try_demangle() never raises on bad input: anything that is not a mangled
symbol comes back as NOT_A_SYMBOL, which is what the vast majority of
assembly lines and operands are.
"""
import logging
import re
from dataclasses import dataclass
from typing import Optional, Union

from rust_demangler import demangle
from rust_demangler.rust import TypeNotFoundError
from rust_demangler.rust_legacy import UnableToLegacyDemangle

logger = logging.getLogger(__name__)

# Rust appends ::h<16 hex digits> hash suffix to mangled symbol names
RE_RUST_HASH = re.compile(r"::(h[0-9a-fA-F]{16})(\..*)?$")

LEGACY_PREFIXES = ("_ZN", "ZN", "__ZN")

# rust_demangler walks the mangled text by index and looks escapes up in a
# dict, so malformed input surfaces as these besides its own exceptions.
_DEMANGLE_MISSES = (
    TypeNotFoundError,
    UnableToLegacyDemangle,
    IndexError,
    KeyError,
    ValueError,
    OverflowError,
)


@dataclass(frozen=True)
class DemangledSymbol:
    canonical: str

    @property
    def hash(self) -> Optional[str]:
        m = RE_RUST_HASH.search(self.canonical)
        return m.group(1) if m else None

    @property
    def display(self) -> str:
        """Human-facing name with the trailing `::h<hash>` removed."""
        m = RE_RUST_HASH.search(self.canonical)
        if not m:
            # Nothing to cut at; show the name as is.
            logger.debug("no hash segment in %s, rendering unchanged", self.canonical)
            return self.canonical
        return self.canonical[:m.start()]

    def __str__(self) -> str:
        return self.canonical


class NotASymbol:
    """Outcome of demangling text that is not a mangled symbol."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_A_SYMBOL"


NOT_A_SYMBOL = NotASymbol()

DemangleResult = Union[DemangledSymbol, NotASymbol]


def is_rust_hash(element: str) -> bool:
    return RE_RUST_HASH.fullmatch("::" + element) is not None


def try_demangle(token: str) -> DemangleResult:
    """
    Demangle a legacy Rust symbol.
    Returns a DemangledSymbol on success, NOT_A_SYMBOL otherwise.
    """
    if not token.startswith(LEGACY_PREFIXES):
        return NOT_A_SYMBOL
    try:
        name = demangle(token)
    except _DEMANGLE_MISSES:
        return NOT_A_SYMBOL
    if not name:
        return NOT_A_SYMBOL
    return DemangledSymbol(name)


def display_name(token: str) -> Optional[str]:
    """Truncated demangled name for `token`, or None if it is not a symbol."""
    result = try_demangle(token)
    if isinstance(result, DemangledSymbol):
        return result.display
    return None
