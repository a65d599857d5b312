"""Local-disk storage for card attachments."""

import asyncio
import secrets
import time
from dataclasses import dataclass
from pathlib import Path, PurePath

from src.kanban.core.config import Settings
from src.kanban.core.exceptions import PayloadTooLargeError, UnsupportedMediaTypeError
from src.kanban.core.logging import get_logger

logger = get_logger(__name__)

# Extension -> MIME types accepted for it
MIME_TYPES: dict[str, frozenset[str]] = {
    "jpeg": frozenset({"image/jpeg"}),
    "jpg": frozenset({"image/jpeg"}),
    "png": frozenset({"image/png"}),
    "gif": frozenset({"image/gif"}),
    "pdf": frozenset({"application/pdf"}),
    "doc": frozenset({"application/msword"}),
    "docx": frozenset(
        {"application/vnd.openxmlformats-officedocument.wordprocessingml.document"}
    ),
    "txt": frozenset({"text/plain"}),
}


@dataclass(frozen=True)
class StoredFile:
    filename: str
    original_name: str
    mime_type: str
    size: int
    url: str


class AttachmentStorage:
    """Validates uploads against the allow-list and writes them under one directory.

    Stored files get a generated name (`file-<millis>-<random>.<ext>`) and are
    served from `<url_prefix>/<filename>`.
    """

    def __init__(
        self,
        directory: Path,
        url_prefix: str,
        max_bytes: int,
        allowed_extensions: list[str],
    ):
        self.directory = directory
        self.url_prefix = url_prefix.rstrip("/")
        self.max_bytes = max_bytes
        self.allowed_extensions = frozenset(allowed_extensions)

    @classmethod
    def from_settings(cls, settings: Settings) -> "AttachmentStorage":
        return cls(
            directory=Path(settings.upload_dir),
            url_prefix=settings.upload_url_prefix,
            max_bytes=settings.upload_max_bytes,
            allowed_extensions=settings.upload_allowed_extensions,
        )

    def validate_type(self, original_name: str, content_type: str | None) -> tuple[str, str]:
        """Check extension and MIME type together.

        Returns:
            Tuple of (extension, mime_type), both normalized.

        Raises:
            UnsupportedMediaTypeError: If either is outside the allow-list or they disagree.
        """
        extension = PurePath(original_name).suffix.lower().lstrip(".")
        if extension not in self.allowed_extensions or extension not in MIME_TYPES:
            raise UnsupportedMediaTypeError(
                f"File type '.{extension}' is not allowed" if extension else "File has no extension"
            )
        mime_type = (content_type or "").split(";", 1)[0].strip().lower()
        if mime_type not in MIME_TYPES[extension]:
            raise UnsupportedMediaTypeError(
                f"Content type '{mime_type or 'unknown'}' does not match '.{extension}'"
            )
        return extension, mime_type

    def check_size(self, size: int) -> None:
        if size > self.max_bytes:
            raise PayloadTooLargeError(f"File exceeds the {self.max_bytes} byte limit")

    def generate_filename(self, extension: str) -> str:
        millis = int(time.time() * 1000)
        return f"file-{millis}-{secrets.randbelow(10**9)}.{extension}"

    async def save(self, original_name: str, content_type: str | None, content: bytes) -> StoredFile:
        """Validate and write an upload. Nothing is written if validation fails."""
        extension, mime_type = self.validate_type(original_name, content_type)
        self.check_size(len(content))

        filename = self.generate_filename(extension)
        await asyncio.to_thread(self._write, filename, content)
        logger.info(
            "Attachment stored",
            filename=filename,
            mime_type=mime_type,
            size=len(content),
        )
        return StoredFile(
            filename=filename,
            original_name=PurePath(original_name).name,
            mime_type=mime_type,
            size=len(content),
            url=f"{self.url_prefix}/{filename}",
        )

    async def remove(self, filenames: list[str]) -> None:
        """Delete stored files. Missing files are ignored; other failures are logged."""
        for filename in filenames:
            try:
                await asyncio.to_thread(self._unlink, filename)
            except OSError as e:
                logger.warning("Failed to remove attachment file", filename=filename, error=str(e))

    def _write(self, filename: str, content: bytes) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        (self.directory / filename).write_bytes(content)

    def _unlink(self, filename: str) -> None:
        (self.directory / PurePath(filename).name).unlink(missing_ok=True)
