"""
Error types for cargo-disassemble.

Every error raised on purpose derives from DisassembleError and says whether
it ends the pass. Demangle misses and names without a hash segment are not
errors at all; they are ordinary results handled per line.
"""
from typing import List, Optional


class DisassembleError(Exception):
    fatal = True

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidPatternError(DisassembleError):
    """The function-name pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str):
        super().__init__(f"'{pattern}' isn't a valid regex: {reason}")
        self.pattern = pattern


class SourceUnavailableError(DisassembleError):
    """An assembly segment could not be listed, opened or read."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Failed to read {path}: {reason}")
        self.path = path


class ManifestNotFoundError(DisassembleError):
    def __init__(self, start_dir: str):
        super().__init__(f"could not find Cargo.toml in {start_dir} or any parent directory")
        self.start_dir = start_dir


class ManifestError(DisassembleError):
    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path


class BuildError(DisassembleError):
    """cargo is missing or the build failed."""

    def __init__(self, message: str, diagnostics: Optional[List] = None, stderr: str = ""):
        super().__init__(message)
        self.diagnostics = diagnostics or []
        self.stderr = stderr
