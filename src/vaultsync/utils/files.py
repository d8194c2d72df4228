"""Owner-only file helpers."""

import os
import tempfile
from pathlib import Path
from typing import Union

PRIVATE_FILE_MODE = 0o600
PRIVATE_DIR_MODE = 0o700


def ensure_private_dir(path: Union[str, Path]) -> Path:
    """Create ``path`` if needed and restrict it to the owner."""
    path = Path(path)
    path.mkdir(mode=PRIVATE_DIR_MODE, parents=True, exist_ok=True)
    os.chmod(path, PRIVATE_DIR_MODE)
    return path


def write_private_file(path: Union[str, Path], data: bytes) -> None:
    """Atomically replace ``path`` with ``data``, readable by the owner only.

    The content goes to a hidden temp file in the same directory which is
    then renamed over the target, so readers never see a partial write and a
    failed write leaves the previous content intact.
    """
    path = Path(path)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_name, PRIVATE_FILE_MODE)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise
