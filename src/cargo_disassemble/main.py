import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

from .compiler import BuildOptions, parse_feature_list
from .engine import DisassembleEngine, RunOptions
from .errors import BuildError, DisassembleError
from .utils.config import ConfigManager

logger = logging.getLogger(__name__)

stderr_console = Console(stderr=True)


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=stderr_console, show_path=False)],
        force=True,
    )


def _build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="cargo-disassemble",
        description="Easy disassembly of Rust code.",
    )
    parser.add_argument("function", nargs="?", help="The name of the function to be decompiled (a regex)")
    parser.add_argument("--everything", action="store_true", help="Include functions not defined by the current crate")
    parser.add_argument("--release", action="store_true", help="Compile in release mode")
    parser.add_argument("--intel", action="store_true", help="Emit intel-flavored x86 ASM")
    parser.add_argument("--optimize", action="store_true", help="Optimize the binary as much as possible")
    parser.add_argument("--features", type=parse_feature_list, default=None, help="Features to enable, if any")
    parser.add_argument("--all-features", action="store_true", help="Enable all features")
    parser.add_argument("--no-default-features", action="store_true", help="Enable no_default features")
    parser.add_argument("--manifest-dir", default=None, help="Directory to start searching for Cargo.toml from")
    parser.add_argument("--color", choices=["auto", "always", "never"], default=None, help="Highlight the output")
    parser.add_argument("--watch", action="store_true", help="Rebuild and print again whenever a source file changes")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    return parser


def _strip_cargo_subcommand(argv: List[str]) -> List[str]:
    """`cargo disassemble ...` runs us as `cargo-disassemble disassemble ...`."""
    if argv and argv[0] == "disassemble":
        return argv[1:]
    return argv


def build_run_options(args: argparse.Namespace, config: ConfigManager) -> RunOptions:
    """CLI switches turn options on; the config file provides the defaults."""
    build = BuildOptions(
        release=args.release or bool(config.get("release", False)),
        intel=args.intel or bool(config.get("intel", False)),
        optimize=args.optimize or bool(config.get("optimize", False)),
        features=args.features or [],
        all_features=args.all_features,
        no_default_features=args.no_default_features,
    )
    return RunOptions(
        function=args.function,
        everything=args.everything or bool(config.get("everything", False)),
        build=build,
        manifest_dir=args.manifest_dir,
        cargo=config.get("cargo", "cargo"),
        color=args.color or config.get("color", "auto"),
    )


def _report(error: DisassembleError) -> None:
    logger.error("cargo-disassemble: %s", error)
    if isinstance(error, BuildError):
        for diagnostic in error.diagnostics:
            logger.error("%s", diagnostic)


def run(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(_strip_cargo_subcommand(sys.argv[1:] if argv is None else argv))
    configure_logging(args.verbose, args.quiet)

    engine = DisassembleEngine(build_run_options(args, ConfigManager()))

    if args.watch:
        try:
            engine.watch()
            return 0
        except KeyboardInterrupt:
            return 0
        except (DisassembleError, FileNotFoundError) as e:
            logger.error("cargo-disassemble: %s", e)
            return 1

    result = engine.run()
    if not result.ok:
        _report(result.error)
        return 1
    return 0


def main():
    sys.exit(run())


if __name__ == "__main__":
    main()
