import logging
import time
import uuid
from dataclasses import dataclass
from pathlib import Path

from fastapi import UploadFile

from leaderboard.config import settings
from leaderboard.errors import UploadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MediaType:
    label: str
    mime_types: frozenset[str]
    extensions: frozenset[str]
    size_setting: str  # name of the Settings attribute holding the byte limit


IMAGE = MediaType(
    label="image",
    mime_types=frozenset(
        {"image/jpeg", "image/png", "image/gif", "image/webp", "image/svg+xml"}
    ),
    extensions=frozenset({".jpg", ".jpeg", ".png", ".gif", ".webp", ".svg"}),
    size_setting="max_image_bytes",
)

VIDEO = MediaType(
    label="video",
    mime_types=frozenset({"video/mp4", "video/webm", "video/quicktime"}),
    extensions=frozenset({".mp4", ".webm", ".mov"}),
    size_setting="max_video_bytes",
)

UPLOAD_KINDS: dict[str, MediaType] = {
    "marquee": IMAGE,
    "overlay": IMAGE,
    "logo": IMAGE,
    "score": IMAGE,
    "animated-logo": VIDEO,
}


class UploadService:
    """Validates uploaded media and stores it under the public uploads directory."""

    CHUNK_SIZE = 1024 * 1024

    def __init__(self, upload_dir: str | Path | None = None, url_path: str | None = None) -> None:
        self.upload_dir = Path(upload_dir or settings.upload_dir)
        self.url_path = (url_path or settings.uploads_url_path).rstrip("/")

    def url_for(self, filename: str) -> str:
        return f"{self.url_path}/{filename}"

    def filename_for_url(self, url: str | None) -> str | None:
        """Filename behind one of our upload URLs, or None for anything else."""
        if not url or not url.startswith(self.url_path + "/"):
            return None
        name = url[len(self.url_path) + 1 :]
        if not name or "/" in name or name.startswith("."):
            return None
        return name

    def _validate(self, file: UploadFile, kind: str) -> tuple[MediaType, str]:
        media = UPLOAD_KINDS.get(kind)
        if media is None:
            raise UploadError(f"Unknown upload type: {kind}")

        if file is None or not file.filename:
            raise UploadError("No file uploaded")

        extension = Path(file.filename).suffix.lower()
        content_type = (file.content_type or "").split(";")[0].strip().lower()
        if content_type not in media.mime_types or extension not in media.extensions:
            logger.warning(
                "Rejected %s upload '%s' (content_type=%s)", kind, file.filename, content_type
            )
            raise UploadError(f"Only {media.label} files are allowed")
        return media, extension

    async def save(self, file: UploadFile, kind: str) -> str:
        """Store ``file`` and return its public URL.

        Nothing is left on disk if validation fails part way through.
        """
        media, extension = self._validate(file, kind)
        max_bytes = getattr(settings, media.size_setting)

        self.upload_dir.mkdir(parents=True, exist_ok=True)
        filename = f"{kind}-{uuid.uuid4().hex}{extension}"
        path = self.upload_dir / filename

        written = 0
        try:
            with open(path, "wb") as out:
                while chunk := await file.read(self.CHUNK_SIZE):
                    written += len(chunk)
                    if written > max_bytes:
                        raise UploadError(
                            f"File too large (limit {max_bytes // (1024 * 1024)} MB)"
                        )
                    out.write(chunk)
            if written == 0:
                raise UploadError("Uploaded file is empty")
        except UploadError:
            path.unlink(missing_ok=True)
            logger.warning("Rejected %s upload '%s' after %d bytes", kind, file.filename, written)
            raise
        except OSError as exc:
            path.unlink(missing_ok=True)
            logger.exception("Failed writing upload %s", path)
            raise UploadError("Failed to store uploaded file") from exc

        logger.info("Stored %s upload %s (%d bytes)", kind, filename, written)
        return self.url_for(filename)

    def sweep_orphans(self, referenced_urls: set[str], min_age_seconds: int = 3600) -> int:
        """Delete stored files no URL refers to and older than ``min_age_seconds``."""
        if not self.upload_dir.is_dir():
            return 0

        keep = {self.filename_for_url(u) for u in referenced_urls} - {None}
        cutoff = time.time() - min_age_seconds
        removed = 0
        for path in self.upload_dir.iterdir():
            if not path.is_file() or path.name in keep:
                continue
            if path.stat().st_mtime > cutoff:
                continue
            path.unlink(missing_ok=True)
            removed += 1
        if removed:
            logger.info("Swept %d orphaned uploads from %s", removed, self.upload_dir)
        return removed

    def clear(self) -> int:
        """Delete every stored upload. Returns the number of files removed."""
        if not self.upload_dir.is_dir():
            return 0
        removed = 0
        for path in self.upload_dir.iterdir():
            if path.is_file():
                path.unlink(missing_ok=True)
                removed += 1
        logger.info("Deleted %d uploaded files", removed)
        return removed
