"""Course image storage on the local filesystem."""

import uuid
from pathlib import Path, PurePosixPath
from typing import BinaryIO, Iterable, Optional

from korelium.core.logging import get_logger

logger = get_logger(__name__)

CHUNK_SIZE = 64 * 1024


class ImageRejected(Exception):
    """Upload refused; nothing is left on disk."""

    def __init__(self, reason: str, message: str):
        super().__init__(message)
        self.reason = reason
        self.message = message


class LocalImageStorage:
    """
    Stores uploaded images under `root` and hands back the public path
    `<url_prefix>/<name>`, which is what gets saved on the course row and
    what the static mount serves.
    """

    def __init__(
        self,
        root: str | Path,
        url_prefix: str = "uploads",
        max_size_bytes: int = 5 * 1024 * 1024,
        allowed_extensions: Iterable[str] = ("jpg", "jpeg", "png", "gif", "webp"),
    ):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)
        self.url_prefix = url_prefix.strip("/")
        self.max_size_bytes = max_size_bytes
        self.allowed_extensions = {ext.lower().lstrip(".") for ext in allowed_extensions}

    def _extension(self, filename: Optional[str]) -> str:
        suffix = PurePosixPath(filename or "").suffix.lower().lstrip(".")
        if suffix not in self.allowed_extensions:
            raise ImageRejected(
                "extension",
                f"Image type '.{suffix}' is not allowed" if suffix else "Image file has no extension",
            )
        return suffix

    def save(self, stream: BinaryIO, filename: Optional[str]) -> str:
        """Write an upload to disk and return its public path.

        The stream is copied in chunks and abandoned as soon as it passes
        max_size_bytes. A partial file never survives a failed save.
        """
        extension = self._extension(filename)
        name = f"{uuid.uuid4().hex}.{extension}"
        destination = self.root / name

        size = 0
        try:
            with open(destination, "wb") as out:
                while True:
                    chunk = stream.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    size += len(chunk)
                    if size > self.max_size_bytes:
                        raise ImageRejected(
                            "size",
                            f"Image exceeds maximum size of {self.max_size_bytes} bytes",
                        )
                    out.write(chunk)
        except BaseException:
            destination.unlink(missing_ok=True)
            raise

        logger.info("image stored", path=str(destination), size_bytes=size)
        return f"{self.url_prefix}/{name}"

    def resolve(self, public_path: Optional[str]) -> Optional[Path]:
        """Map a stored public path back to a file under root.

        External URLs and anything that would escape root map to None.
        """
        if not public_path or "://" in public_path:
            return None
        path = PurePosixPath(public_path.replace("\\", "/").lstrip("/"))
        if not path.parts or path.parts[0] != self.url_prefix or len(path.parts) != 2:
            return None
        name = path.parts[1]
        if name in ("", ".", ".."):
            return None
        return self.root / name

    def delete(self, public_path: Optional[str]) -> bool:
        """Best-effort removal. Returns True when a file was removed."""
        target = self.resolve(public_path)
        if target is None:
            return False
        try:
            target.unlink()
        except FileNotFoundError:
            return False
        except OSError:
            logger.warning("image delete failed", path=str(target), exc_info=True)
            return False
        logger.info("image deleted", path=str(target))
        return True
