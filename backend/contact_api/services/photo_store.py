"""
Contact API — Photo Store
===========================

What:  Persists and serves the single current photo of each contact.
Why:   Keeps every file system concern (naming, directory provisioning,
       overwrite, reads) in one place, independent of HTTP and the database.
How:   Derives the filename from the contact id plus the uploaded file's
       extension, writes it under a configured directory, and builds the
       public retrieval URL.
Who:   Called by ContactService.update_photo (write path) and by the image
       routes (read path).

Naming Scheme:
    photos/
    ├── 0b6f...-4c1e.png      ← contact 0b6f...-4c1e, uploaded "me.png"
    └── 9a3d...-77f0.jpg      ← contact 9a3d...-77f0, uploaded "pic.jpg"

    The filename is a pure function of (contact id, original extension), so a
    re-upload with the same extension lands on the same path and simply
    replaces the old bytes. No delete-then-write step is needed.

    Known gap: re-uploading under a different extension writes a new file and
    leaves the old one on disk, unreferenced.
"""

import logging
import tempfile
from functools import lru_cache
from pathlib import Path
from typing import Optional

import aiofiles

from contact_api.config import settings
from contact_api.exceptions import NotFoundError, StorageError

logger = logging.getLogger(__name__)

# What: Extension used when the uploaded filename contains no dot at all
DEFAULT_EXTENSION = ".png"

# What: Path segment placed between the server base URL and the filename
PHOTO_URL_PREFIX = "/contacts/images/"

# What: Media types declared by the image routes
# Anything that is not a JPEG extension is served as PNG (the first declared type)
JPEG_EXTENSIONS = {".jpg", ".jpeg"}


class PhotoStore:
    """
    Filesystem-backed store holding at most one photo per contact.

    Args:
        photo_directory: Directory the photos are written to. Injected by the
                         caller; created lazily (including parents) on store().
        public_base_url: Optional fixed base URL for photo links. When empty,
                         the per-request base URL passed to store() is used.
    """

    def __init__(self, photo_directory: str, public_base_url: str = ""):
        self.photo_directory = Path(photo_directory).expanduser().resolve()
        self.public_base_url = public_base_url
        logger.debug("PhotoStore initialized with photo_directory=%s", self.photo_directory)

    @staticmethod
    def extension_of(original_filename: Optional[str]) -> str:
        """
        Return the substring from (and including) the last "." in the filename.

        "photo.jpg" → ".jpg", "a.tar.gz" → ".gz", ".hidden" → ".hidden",
        "dotfile." → ".", "noext" → ".png".

        The only guard is "contains a dot"; an empty suffix after the dot is
        returned as-is. A missing filename counts as having no dot.
        """
        if not original_filename or "." not in original_filename:
            return DEFAULT_EXTENSION
        return original_filename[original_filename.rindex("."):]

    def filename_for(self, contact_id: str, original_filename: Optional[str]) -> str:
        """Stored filename for a contact's photo: `<contactId><extension>`."""
        return contact_id + self.extension_of(original_filename)

    @staticmethod
    def media_type_for(filename: str) -> str:
        """Response media type for a stored photo (image/jpeg or image/png)."""
        suffix = filename[filename.rfind("."):].lower() if "." in filename else ""
        if suffix in JPEG_EXTENSIONS:
            return "image/jpeg"
        return "image/png"

    def build_url(self, filename: str, base_url: str) -> str:
        """Public retrieval URL: `<base>/contacts/images/<filename>`."""
        base = (self.public_base_url or base_url).rstrip("/")
        return f"{base}{PHOTO_URL_PREFIX}{filename}"

    async def store(
        self,
        contact_id: str,
        content: bytes,
        original_filename: Optional[str],
        base_url: str,
    ) -> str:
        """
        Write a contact's photo, replacing any previous file at the same path.

        Steps:
            1. Derive `<contactId><extension>`
            2. Ensure the photo directory exists (parents=True, exist_ok=True)
            3. Open with "wb" (truncates an existing file, no backup kept)
            4. Return the public retrieval URL

        Raises:
            StorageError: Directory creation or the write failed
                          (permission denied, disk full, invalid path).
        """
        filename = self.filename_for(contact_id, original_filename)
        target = self.photo_directory / filename

        try:
            self.photo_directory.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(target, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.error("Failed to store photo at %s: %s", target, str(e))
            raise StorageError(
                message="Failed to save the uploaded photo. Please try again.",
                context={"path": str(target), "os_error": str(e)},
            ) from e

        logger.info("Photo stored: %s (%d bytes)", filename, len(content))
        return self.build_url(filename, base_url)

    async def retrieve(self, filename: str) -> bytes:
        """
        Read a stored photo verbatim.

        Raises:
            NotFoundError: No such file, or the name points outside the photo
                           directory (e.g. "../secret").
            StorageError:  The file exists but could not be read.
        """
        path = (self.photo_directory / filename).resolve()

        # Photos are stored flat; anything resolving elsewhere was never stored here
        if path.parent != self.photo_directory:
            raise NotFoundError(resource="photo", resource_id=filename)

        try:
            async with aiofiles.open(path, "rb") as f:
                return await f.read()
        except FileNotFoundError as e:
            raise NotFoundError(resource="photo", resource_id=filename) from e
        except OSError as e:
            logger.error("Failed to read photo %s: %s", path, str(e))
            raise StorageError(
                message="Failed to read the requested photo.",
                context={"path": str(path), "os_error": str(e)},
            ) from e

    def is_writable(self) -> bool:
        """
        Health check: can a photo be written right now?

        Creates the directory if needed, then opens (and discards) an anonymous
        temporary file inside it. Permission bits alone are not trusted: root
        passes os.access() on read-only mounts and pseudo filesystems.
        """
        try:
            self.photo_directory.mkdir(parents=True, exist_ok=True)
            with tempfile.TemporaryFile(dir=self.photo_directory):
                pass
        except OSError as e:
            logger.warning("Photo directory %s is not writable: %s", self.photo_directory, e)
            return False
        return True


@lru_cache
def get_photo_store() -> PhotoStore:
    """
    FastAPI dependency returning the process-wide PhotoStore.

    The directory comes from settings here, at the composition root, and is
    handed to the store explicitly. Tests override this dependency with a
    store rooted in a temporary directory.
    """
    return PhotoStore(settings.photo_directory, public_base_url=settings.public_base_url)
