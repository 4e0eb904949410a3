from functools import lru_cache

from korelium.core.config import settings
from korelium.integrations.storage.local import ImageRejected, LocalImageStorage


@lru_cache
def get_image_storage() -> LocalImageStorage:
    """Configured storage; also used as a FastAPI dependency."""
    return LocalImageStorage(
        root=settings.UPLOAD_DIR,
        url_prefix=settings.UPLOAD_URL_PREFIX,
        max_size_bytes=settings.MAX_IMAGE_SIZE_BYTES,
        allowed_extensions=settings.ALLOWED_IMAGE_EXTENSIONS,
    )


__all__ = ["ImageRejected", "LocalImageStorage", "get_image_storage"]
