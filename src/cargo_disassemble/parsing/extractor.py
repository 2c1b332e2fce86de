"""
Function extraction over a stream of rustc assembly lines.

Each symbol declaration opens a function block and decides, once, whether the
block is printed. Printed blocks run until their first `ret*` instruction.
Calls inside printed blocks get their target demangled.
"""
import logging
from enum import Enum
from typing import Iterable, Iterator, Optional

from .filters import FilterCriteria
from .lexer import LineKind, classify_line
from .rust_demangle import display_name

logger = logging.getLogger(__name__)


class ExtractorState(str, Enum):
    IDLE = "idle"
    EMITTING = "emitting"


def rewrite_call(line: str) -> str:
    """
    Replace the mangled target of a call instruction with its display name.
    Targets that do not demangle (registers, PLT stubs, C symbols) are kept.
    """
    target = line.split("\t")[-1]
    name = display_name(target)
    if name is None:
        return line
    mnemonic = line.split()[0]
    return f"\t{mnemonic}\t{name}"


class FunctionExtractor:
    def __init__(self, criteria: FilterCriteria):
        self.criteria = criteria
        self.state = ExtractorState.IDLE
        self.current_function: Optional[str] = None

    def feed(self, raw: str) -> Optional[str]:
        """Consume one input line and return the output line, if any."""
        line = classify_line(raw)

        if line.kind == LineKind.SYMBOL:
            if self.criteria.accepts(line.symbol):
                self.state = ExtractorState.EMITTING
                self.current_function = line.symbol.display
                return self.current_function
            if self.state == ExtractorState.EMITTING:
                logger.debug("block %s ended without ret", self.current_function)
            self.state = ExtractorState.IDLE
            self.current_function = None
            return None

        if self.state != ExtractorState.EMITTING:
            return None
        if line.kind not in (LineKind.BLOCK_LABEL, LineKind.INSTRUCTION):
            return None

        out = rewrite_call(raw) if line.stripped.startswith("call") else raw
        if line.stripped.startswith("ret"):
            self.state = ExtractorState.IDLE
            self.current_function = None
        return out


def extract_functions(lines: Iterable[str], criteria: FilterCriteria) -> Iterator[str]:
    """Yield the output lines for `lines`, one pass, in input order."""
    extractor = FunctionExtractor(criteria)
    for raw in lines:
        out = extractor.feed(raw)
        if out is not None:
            yield out
