import re

from rich.text import Text

# Accepts both AT&T (%rax) and Intel (rax) spellings
REGISTERS = re.compile(
    r"%?\b("
    r"r[abcd]x|r[sd]i|r[bs]p|rip|r(?:8|9|1[0-5])[dwb]?"
    r"|e[abcd]x|e[sd]i|e[bs]p"
    r"|[abcd][hl]|[abcd]x|[sd]il?|[bs]pl?"
    r"|xmm[0-9]+|ymm[0-9]+|zmm[0-9]+"
    r")\b",
    re.IGNORECASE,
)

SIZE_KEYWORDS = re.compile(
    r"\b(DWORD|QWORD|WORD|BYTE|XMMWORD|PTR)\b",
    re.IGNORECASE,
)

NUMBERS = re.compile(
    r"\$?-?\b(0x[0-9a-fA-F]+|[0-9]+)\b",
)

MNEMONIC = re.compile(r"^\s+([a-z][a-z0-9.]*)")

BLOCK_LABEL = re.compile(r"^(\.LBB\w*:)")


def highlight_line(line: str, header: bool = False) -> Text:
    """
    Apply syntax highlighting to one line of extracted assembly.

      - Function headers -> GREEN / bold
      - Block labels (.LBB0_1:) -> YELLOW / bold
      - Mnemonics (movq, callq, retq) -> BLUE
      - Size keywords (DWORD, PTR, etc.) -> MAGENTA
      - Numeric literals ($42, 0xff) -> CYAN
      - Registers (%rax, rbx, ...) -> RED / bold

    Returns a Rich Text renderable for a single line.
    """
    text = Text(line)
    if header:
        text.stylize("bold green")
        return text

    label_match = BLOCK_LABEL.match(line)
    if label_match:
        text.stylize("bold yellow", 0, label_match.end())
        return text

    mnemonic = MNEMONIC.match(line)
    if mnemonic:
        text.stylize("blue", mnemonic.start(1), mnemonic.end(1))
        # Demangled call targets are left plain; they are not operands to color.
        if mnemonic.group(1).startswith("call"):
            return text

    for m in SIZE_KEYWORDS.finditer(line):
        text.stylize("magenta", m.start(), m.end())

    for m in NUMBERS.finditer(line):
        text.stylize("cyan", m.start(), m.end())

    for m in REGISTERS.finditer(line):
        text.stylize("bold red", m.start(), m.end())

    return text
