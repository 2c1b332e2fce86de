from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .rust_demangle import DemangledSymbol, try_demangle

# Linux/ELF basic block labels: .LBB0_1, .LBB12_3
BLOCK_LABEL_PREFIX = ".LBB"


class LineKind(str, Enum):
    SYMBOL = "symbol"
    BLOCK_LABEL = "block_label"
    INSTRUCTION = "instruction"
    OTHER = "other"


@dataclass(frozen=True)
class AssemblyLine:
    text: str
    kind: LineKind
    symbol: Optional[DemangledSymbol] = None

    @property
    def stripped(self) -> str:
        return self.text.lstrip()


def is_branch_label(line: str) -> bool:
    return line.startswith(BLOCK_LABEL_PREFIX)


def is_instruction(line: str) -> bool:
    return line.startswith((" ", "\t")) and not line.lstrip().startswith(".")


def classify_line(line: str) -> AssemblyLine:
    """
    Tag one raw line of rustc assembly.

    Symbol declarations are recognised by demangling the line without its
    trailing `:`; the remaining kinds are purely lexical.
    """
    symbol = try_demangle(line[:-1])
    if isinstance(symbol, DemangledSymbol):
        return AssemblyLine(line, LineKind.SYMBOL, symbol)
    if is_branch_label(line):
        return AssemblyLine(line, LineKind.BLOCK_LABEL)
    if is_instruction(line):
        return AssemblyLine(line, LineKind.INSTRUCTION)
    return AssemblyLine(line, LineKind.OTHER)
