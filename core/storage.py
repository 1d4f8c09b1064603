import logging
import os
import shutil
import time
from pathlib import Path
from typing import BinaryIO
from urllib.parse import quote

from core.errors import StorageError

logger = logging.getLogger("storage")

# same-millisecond uploads fall back to <ms>-1<ext>, <ms>-2<ext>, ...
MAX_NAME_ATTEMPTS = 1000


def original_extension(filename: str | None) -> str:
    """Final suffix of the uploaded file's basename, "" when it has none."""
    if not filename:
        return ""
    # browsers on Windows may send full paths
    base = filename.replace("\\", "/").rsplit("/", 1)[-1]
    return os.path.splitext(base)[1]


def now_ms() -> int:
    return time.time_ns() // 1_000_000


class FileStore:
    """Flat directory of uploaded images, served under ``url_prefix``."""

    def __init__(self, root: str | Path, url_prefix: str = "/uploads"):
        self.root = Path(root)
        self.url_prefix = "/" + url_prefix.strip("/")

    def ensure_root(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def path_for(self, name: str) -> Path:
        return self.root / name

    def url_for(self, name: str) -> str:
        # extensions are taken verbatim and may hold "#", "?", "%" or spaces
        return f"{self.url_prefix}/{quote(name)}"

    def save(self, src: BinaryIO, original_name: str | None) -> str:
        """
        Copy ``src`` into the store under a generated ``<ms><ext>`` name.

        The file is opened with exclusive create, so an existing upload is
        never overwritten. Returns the generated name.

        Raises:
            StorageError: if the file cannot be written
        """
        ext = original_extension(original_name)
        stamp = now_ms()

        for attempt in range(MAX_NAME_ATTEMPTS):
            name = f"{stamp}{ext}" if attempt == 0 else f"{stamp}-{attempt}{ext}"
            path = self.path_for(name)
            try:
                with open(path, "xb") as fh:
                    try:
                        shutil.copyfileobj(src, fh)
                    except OSError:
                        fh.close()
                        path.unlink(missing_ok=True)
                        raise
            except FileExistsError:
                continue
            except OSError as e:
                raise StorageError(
                    "Could not store uploaded file",
                    details={"name": name, "error": str(e)},
                ) from e

            logger.info("Stored upload %s (%d bytes)", name, path.stat().st_size)
            return name

        raise StorageError(
            "Could not allocate a unique file name",
            details={"stamp": stamp, "ext": ext},
        )
