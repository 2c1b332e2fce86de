import re
from dataclasses import dataclass
from typing import Optional, Pattern

from ..errors import InvalidPatternError
from .rust_demangle import DemangledSymbol


def normalize_package_name(name: str) -> str:
    """Cargo package names may use hyphens; symbol paths never do."""
    return name.replace("-", "_")


@dataclass(frozen=True)
class FilterCriteria:
    """
    Which functions to print.

    A function passes if it belongs to the crate (its canonical name starts
    with ownership_prefix) or include_foreign is set, and name_pattern,
    when given, matches somewhere in the canonical name.
    """
    ownership_prefix: str
    name_pattern: Optional[Pattern] = None
    include_foreign: bool = False

    @classmethod
    def build(cls, ownership_prefix: str, pattern: Optional[str] = None,
              include_foreign: bool = False) -> "FilterCriteria":
        compiled = None
        if pattern is not None:
            try:
                compiled = re.compile(pattern)
            except re.error as e:
                raise InvalidPatternError(pattern, str(e)) from e
        return cls(ownership_prefix, compiled, include_foreign)

    def accepts_name(self, name: str) -> bool:
        if not (self.include_foreign or name.startswith(self.ownership_prefix)):
            return False
        return self.name_pattern is None or self.name_pattern.search(name) is not None

    def accepts(self, symbol: DemangledSymbol) -> bool:
        return self.accepts_name(symbol.canonical)
