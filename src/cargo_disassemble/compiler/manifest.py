import logging
import tomllib
from pathlib import Path
from typing import Optional

from ..errors import ManifestError, ManifestNotFoundError
from ..parsing.filters import normalize_package_name

logger = logging.getLogger(__name__)

MANIFEST_NAME = "Cargo.toml"


def find_manifest(start_dir: Optional[str] = None) -> Path:
    """
    Searches start_dir and its parents for Cargo.toml.
    """
    start = Path(start_dir or ".").resolve()
    for directory in (start, *start.parents):
        candidate = directory / MANIFEST_NAME
        if candidate.is_file():
            logger.debug("using manifest %s", candidate)
            return candidate
    raise ManifestNotFoundError(str(start))


def read_package_name(manifest: Path) -> str:
    """Returns [package].name exactly as written in the manifest."""
    try:
        with open(manifest, "rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        raise ManifestError(str(manifest), f"failed to open: {e.strerror}") from e
    except tomllib.TOMLDecodeError as e:
        raise ManifestError(str(manifest), f"failed to parse: {e}") from e

    package = data.get("package")
    name = package.get("name") if isinstance(package, dict) else None
    if not isinstance(name, str) or not name:
        raise ManifestError(str(manifest), "could not parse package name")
    return name


def ownership_prefix(manifest: Path) -> str:
    """Symbol path prefix shared by every function the crate defines."""
    return normalize_package_name(read_package_name(manifest))
