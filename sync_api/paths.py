"""
Bookmark Sync - Upload Path Safety

Containment checks for files handled during import.
"""

import logging
import os
import stat
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def is_contained(candidate: PathLike, root: PathLike) -> bool:
    """
    Check that candidate lies strictly inside root.

    Both paths are resolved to absolute real paths (symlinks followed)
    before comparing, so "../" traversal, absolute paths and symlinks
    pointing out of root are all rejected. Anything that fails to
    resolve counts as not contained.

    Args:
        candidate: Path to check
        root: Directory the path must be inside

    Returns:
        True if the resolved candidate is inside the resolved root
    """
    try:
        root_real = Path(root).resolve(strict=True)
        candidate_real = Path(candidate).resolve(strict=True)
        relative = os.path.relpath(candidate_real, root_real)
    except (OSError, RuntimeError, ValueError) as e:
        logger.debug(f"Could not resolve {candidate} against {root}: {e}")
        return False

    if relative == os.curdir or os.path.isabs(relative):
        return False
    return relative != os.pardir and not relative.startswith(os.pardir + os.sep)


def ensure_upload_dir(upload_dir: PathLike) -> Path:
    """
    Create the upload directory if needed and return its resolved path.

    Warns when the directory is world-writable.
    """
    path = Path(upload_dir)
    if not path.exists():
        path.mkdir(mode=0o755, parents=True)
        logger.info(f"Created uploads directory {path}")

    mode = path.stat().st_mode
    if mode & stat.S_IWOTH:
        logger.warning(f"Uploads directory {path} is world-writable")

    return path.resolve()
