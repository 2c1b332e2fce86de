import re
from dataclasses import dataclass
from typing import List, Optional

RE_HEADER = re.compile(r"^(error|warning)(?:\[(E\d{4})\])?:\s+(.*)$")
RE_LOCATION = re.compile(r"^\s*-->\s+(.+?):(\d+):(\d+)\s*$")


@dataclass
class Diagnostic:
    severity: str # 'error' or 'warning'
    message: str
    code: Optional[str] = None
    file: Optional[str] = None
    line: int = 0
    column: int = 0

    def __str__(self) -> str:
        where = f"{self.file}:{self.line}:{self.column}: " if self.file else ""
        code = f"[{self.code}]" if self.code else ""
        return f"{where}{self.severity}{code}: {self.message}"


def parse_diagnostics(stderr: str) -> List[Diagnostic]:
    """
    Parses rustc/cargo error output into structured objects.
    Example:
        error[E0425]: cannot find value `x` in this scope
         --> src/main.rs:2:5
    """
    diagnostics = []
    current = None

    for line in stderr.splitlines():
        header = RE_HEADER.match(line)
        if header:
            current = Diagnostic(
                severity=header.group(1),
                code=header.group(2),
                message=header.group(3).strip(),
            )
            diagnostics.append(current)
            continue

        location = RE_LOCATION.match(line)
        if location and current is not None and current.file is None:
            current.file = location.group(1)
            current.line = int(location.group(2))
            current.column = int(location.group(3))

    return diagnostics


def errors_only(diagnostics: List[Diagnostic]) -> List[Diagnostic]:
    return [d for d in diagnostics if d.severity == "error"]
