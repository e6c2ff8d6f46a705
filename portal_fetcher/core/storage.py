"""
File storage helpers – streaming downloads to disk.
"""

from pathlib import Path
from typing import Iterable

from tqdm import tqdm

from portal_fetcher.utils.log import log


def ensure_dir(path: Path) -> Path:
    """Create *path* (and parents) if it does not exist yet."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def stream_to_file(
    local_path: Path,
    chunks: Iterable[bytes],
    total: int | None = None,
) -> int:
    """Write streaming *chunks* to *local_path*.

    Returns the total number of bytes written.  Creates parent
    directories as needed.  A progress bar is shown when *total* (the
    expected size in bytes) is known.
    """
    ensure_dir(local_path.parent)
    written = 0
    with local_path.open("wb") as fh, tqdm(
        total=total,
        desc=local_path.name[:40],
        unit="B",
        unit_scale=True,
        dynamic_ncols=True,
        disable=total is None,
        leave=False,
    ) as bar:
        for chunk in chunks:
            if chunk:
                fh.write(chunk)
                written += len(chunk)
                bar.update(len(chunk))
    log.debug("Streamed → %s (%d bytes)", local_path, written)
    return written
