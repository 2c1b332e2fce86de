import logging
import threading
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Optional

from .compiler import AssemblySource, BuildOptions, CargoDriver, find_manifest, ownership_prefix, read_package_name
from .errors import DisassembleError
from .parsing import FilterCriteria, extract_functions
from .utils.emitter import is_header, make_emitter
from .utils.watcher import FileWatcher

logger = logging.getLogger(__name__)


@dataclass
class RunOptions:
    function: Optional[str] = None
    everything: bool = False
    build: BuildOptions = field(default_factory=BuildOptions)
    manifest_dir: Optional[str] = None
    cargo: str = "cargo"
    color: str = "auto"


@dataclass
class RunResult:
    ok: bool
    functions: int = 0
    lines: int = 0
    error: Optional[DisassembleError] = None


def emit_functions(lines: Iterable[str], criteria: FilterCriteria, emitter) -> RunResult:
    """Run the extractor over `lines` and hand every output line to `emitter`."""
    result = RunResult(ok=True)
    for out in extract_functions(lines, criteria):
        emitter.emit(out)
        result.lines += 1
        if is_header(out):
            result.functions += 1
    emitter.flush()
    return result


class DisassembleEngine:
    """
    One cargo-disassemble pass: locate the crate, rebuild it with asm
    emission, and print the selected functions.
    """

    def __init__(self, options: RunOptions, emitter_factory: Optional[Callable] = None):
        self.options = options
        self.emitter_factory = emitter_factory or (lambda: make_emitter(options.color))
        self._lock = threading.Lock()

    def run(self) -> RunResult:
        """Never raises DisassembleError; failures come back in the result."""
        with self._lock:
            try:
                return self._run()
            except DisassembleError as e:
                logger.debug("pass aborted: %r", e)
                return RunResult(ok=False, error=e)

    def _run(self) -> RunResult:
        opts = self.options
        manifest = find_manifest(opts.manifest_dir)
        crate_dir = manifest.parent
        package = read_package_name(manifest)

        # Bad patterns fail here, before anything is built or printed.
        criteria = FilterCriteria.build(ownership_prefix(manifest), opts.function, opts.everything)

        driver = CargoDriver(str(crate_dir), opts.cargo)
        logger.info("building %s (%s)", package, opts.build.profile)
        driver.clean(package, opts.build)
        driver.build(opts.build)

        source = AssemblySource.for_profile(str(crate_dir), opts.build.profile)
        try:
            result = emit_functions(source.lines(), criteria, self.emitter_factory())
        finally:
            source.cleanup()

        if result.functions == 0:
            logger.warning("no functions matched")
        return result

    def crate_dir(self) -> Path:
        return find_manifest(self.options.manifest_dir).parent

    def watch(self, on_result: Optional[Callable[[RunResult], None]] = None) -> None:
        """
        Run once, then again every time a .rs file under src/ changes.
        Blocks until interrupted.
        """
        def refresh(path: Optional[str] = None):
            if path:
                logger.info("%s changed, rebuilding", path)
            result = self.run()
            if not result.ok:
                logger.error("%s", result.error)
            if on_result:
                on_result(result)

        refresh()
        watcher = FileWatcher()
        watcher.start_watching(str(self.crate_dir() / "src"), refresh)
        try:
            while True:
                time.sleep(1)
        finally:
            watcher.stop_watching()
