"""
The assembly corpus of one build: every `.s` file rustc left in
target/<profile>/deps, read back as a single ordered stream of lines.
"""
import logging
from pathlib import Path
from typing import Iterator, List

from ..errors import SourceUnavailableError

logger = logging.getLogger(__name__)


class AssemblySource:
    def __init__(self, deps_dir: Path):
        self.deps_dir = Path(deps_dir)
        self.consumed: List[Path] = []

    @classmethod
    def for_profile(cls, crate_dir: str, profile: str) -> "AssemblySource":
        return cls(Path(crate_dir) / "target" / profile / "deps")

    def segments(self) -> List[Path]:
        """
        Assembly files in name order. Each function block lives inside one
        file, so the order only affects the order functions are printed in.
        """
        if not self.deps_dir.is_dir():
            raise SourceUnavailableError(str(self.deps_dir), "no such directory")
        try:
            return sorted(p for p in self.deps_dir.glob("*.s") if p.is_file())
        except OSError as e:
            raise SourceUnavailableError(str(self.deps_dir), e.strerror or str(e)) from e

    def lines(self) -> Iterator[str]:
        """Yield every line of every segment without its line terminator."""
        segments = self.segments()
        if not segments:
            logger.warning("no assembly files found in %s", self.deps_dir)
        for path in segments:
            logger.debug("reading %s", path)
            try:
                with open(path, "r", encoding="utf-8", errors="replace") as f:
                    for line in f:
                        yield line.rstrip("\r\n")
            except OSError as e:
                raise SourceUnavailableError(str(path), e.strerror or str(e)) from e
            self.consumed.append(path)

    def cleanup(self) -> None:
        """Delete the segments already read so the next build starts clean."""
        for path in self.consumed:
            try:
                path.unlink()
            except FileNotFoundError:
                pass
            except OSError as e:
                logger.warning("Failed to remove %s: %s", path, e)
        self.consumed = []
