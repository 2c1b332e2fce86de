"""
Cargo driver: cleans the crate and rebuilds it with rustc asm emission.
Subprocess handling follows the same shape as a plain compiler driver;
only the command lines are cargo specific.
"""
import logging
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from ..errors import BuildError
from ..parsing.diagnostics import errors_only, parse_diagnostics

logger = logging.getLogger(__name__)


@dataclass
class BuildOptions:
    release: bool = False
    intel: bool = False
    optimize: bool = False
    features: List[str] = field(default_factory=list)
    all_features: bool = False
    no_default_features: bool = False

    @property
    def profile(self) -> str:
        return "release" if self.release else "debug"


def parse_feature_list(text: str) -> List[str]:
    """`--features "a b"` takes a whitespace separated list."""
    return text.split()


class CargoDriver:
    """Handles cargo invocations for one crate directory."""

    def __init__(self, crate_dir: str, cargo: str = "cargo"):
        self.crate_dir = Path(crate_dir)
        self.cargo: Optional[str] = self._discover_cargo(cargo)

    @staticmethod
    def _discover_cargo(cargo: str) -> Optional[str]:
        """Find cargo on the system."""
        path = shutil.which(cargo)
        if path:
            return path
        # Default rustup install location
        candidate = Path.home() / ".cargo" / "bin" / "cargo"
        if candidate.exists():
            return str(candidate)
        return None

    @staticmethod
    def rustc_args(options: BuildOptions) -> List[str]:
        """Arguments passed through to rustc after `--`."""
        args = ["--emit", "asm", "-C", "debuginfo=2"]
        if options.optimize:
            args.extend(["-C", "target-cpu=native", "-C", "opt-level=3"])
        if options.intel:
            args.append("-Cllvm-args=--x86-asm-syntax=intel")
        return args

    def clean_command(self, package: str, options: BuildOptions) -> List[str]:
        command = [self.cargo, "clean"]
        if options.release:
            command.append("--release")
        command.extend(["-p", package])
        return command

    def build_command(self, options: BuildOptions) -> List[str]:
        command = [self.cargo, "rustc"]
        if options.release:
            command.append("--release")
        if options.features:
            command.extend(["--features", ",".join(options.features)])
        if options.all_features:
            command.append("--all-features")
        if options.no_default_features:
            command.append("--no-default-features")
        command.append("--")
        command.extend(self.rustc_args(options))
        return command

    def _run(self, command: List[str]) -> Tuple[int, str]:
        logger.debug("running %s", " ".join(command))
        try:
            result = subprocess.run(
                command, cwd=self.crate_dir, capture_output=True, text=True, check=False
            )
        except OSError as e:
            raise BuildError(f"Failed to execute {command[0]}: {e}") from e
        return result.returncode, result.stderr

    def clean(self, package: str, options: BuildOptions) -> None:
        """
        Removes the crate's previous artifacts so rustc re-emits its assembly.
        A failing clean is not fatal; the build that follows decides.
        """
        self._require_cargo()
        returncode, stderr = self._run(self.clean_command(package, options))
        if returncode != 0:
            logger.warning("cargo clean exited with %d", returncode)
            logger.debug(stderr)

    def build(self, options: BuildOptions) -> str:
        """
        Compiles the crate, emitting `.s` files into target/<profile>/deps.
        Returns cargo's stderr (warnings); raises BuildError on failure.
        """
        self._require_cargo()
        returncode, stderr = self._run(self.build_command(options))
        diagnostics = parse_diagnostics(stderr)
        if returncode != 0:
            errors = errors_only(diagnostics)
            summary = str(errors[0]) if errors else f"cargo rustc exited with {returncode}"
            raise BuildError(f"Build failed: {summary}", diagnostics=diagnostics, stderr=stderr)

        warnings = len(diagnostics) - len(errors_only(diagnostics))
        if warnings:
            logger.info("build finished with %d warning(s)", warnings)
        return stderr

    def _require_cargo(self) -> None:
        if not self.cargo:
            raise BuildError("Error: cargo not found. Install via https://rustup.rs/")
