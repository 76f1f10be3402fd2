"""Inline image upload for the markdown editor.

Dropping or pasting files replaces the caret's line with one placeholder per
file. Each file uploads on its own; whichever finishes first swaps its
placeholder for an ``<img>`` tag, and a failed upload clears its placeholder
and reports the reason to the user.
"""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from html import escape

from beam_stage.editor.storage import ImageFile, ImageStorage, UploadedImage
from beam_stage.editor.surface import EditingSurface
from beam_stage.services.errors import UploadError

logger = logging.getLogger(__name__)

# Images at or above this density are shown at half their pixel width.
HIGH_DENSITY_DPI = 144


def placeholder_for(filename: str) -> str:
    """Return the markdown placeholder shown while ``filename`` uploads."""
    return f"![Uploading {filename}...]()"


def image_tag(image: UploadedImage) -> str:
    """Return the ``<img>`` markup that replaces a finished upload's placeholder."""
    width = image.width
    if image.dpi is not None and image.dpi >= HIGH_DENSITY_DPI:
        width = (image.width + 1) // 2
    return (
        f'<img width="{width}" alt="{escape(image.original_filename)}" '
        f'src="{escape(image.url)}">'
    )


@dataclass(frozen=True)
class UploadOutcome:
    """Result of one file's upload."""

    filename: str
    placeholder: str
    image: UploadedImage | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.image is not None


def _log_notification(message: str) -> None:
    logger.warning(message)


class ImageUploader:
    """Runs editor image uploads against one storage provider.

    Args:
        storage: Provider selected at startup.
        notify_error: Shows a transient message to the user when an upload
            fails. Defaults to logging the message.
    """

    def __init__(
        self,
        storage: ImageStorage,
        notify_error: Callable[[str], None] | None = None,
    ) -> None:
        self.storage = storage
        self._notify_error = notify_error or _log_notification
        # Placeholders currently in some surface, awaiting their upload.
        self._in_flight: set[str] = set()

    def _reserve_placeholder(self, filename: str, existing_text: str) -> str:
        # Unique against uploads in flight and against text already in the document.
        placeholder = placeholder_for(filename)
        copy = 1
        while placeholder in self._in_flight or placeholder in existing_text:
            copy += 1
            placeholder = placeholder_for(f"{filename} ({copy})")
        self._in_flight.add(placeholder)
        return placeholder

    def insert_placeholders(self, surface: EditingSurface, files: Sequence[ImageFile]) -> list[str]:
        """Replace the caret's line with one unique placeholder per file."""
        line_number = surface.get_caret().line_number
        existing_text = surface.get_value()
        placeholders = [self._reserve_placeholder(file.name, existing_text) for file in files]
        surface.replace_line(line_number, "\n".join(placeholders))
        return placeholders

    def _replace_placeholder(self, surface: EditingSurface, placeholder: str, text: str) -> None:
        if not surface.attached:
            logger.info("Editing surface closed before %s finished; dropping result", placeholder)
            return
        value = surface.get_value()
        if placeholder not in value:
            return
        surface.set_value(value.replace(placeholder, text, 1))

    async def _upload_one(
        self,
        surface: EditingSurface,
        file: ImageFile,
        placeholder: str,
    ) -> UploadOutcome:
        try:
            try:
                image = await self.storage.upload(file)
            except UploadError as exc:
                logger.warning("Image upload of %s failed: %s", file.name, exc.message)
                return self._fail(surface, file, placeholder, exc.message)
            except Exception as exc:
                # Any provider failure must still clear its placeholder.
                logger.exception("Image upload of %s failed unexpectedly", file.name)
                return self._fail(surface, file, placeholder, str(exc) or type(exc).__name__)

            self._replace_placeholder(surface, placeholder, image_tag(image))
            return UploadOutcome(filename=file.name, placeholder=placeholder, image=image)
        finally:
            self._in_flight.discard(placeholder)

    def _fail(
        self,
        surface: EditingSurface,
        file: ImageFile,
        placeholder: str,
        reason: str,
    ) -> UploadOutcome:
        self._replace_placeholder(surface, placeholder, "")
        self._notify_error(f"Error uploading image: {reason}")
        return UploadOutcome(filename=file.name, placeholder=placeholder, error=reason)

    async def upload_images(
        self,
        surface: EditingSurface,
        files: Sequence[ImageFile],
    ) -> list[UploadOutcome]:
        """Insert placeholders, then upload every file concurrently.

        Placeholders are in the surface before the first upload starts.
        Outcomes are returned in the order of ``files``.
        """
        if not files:
            return []
        placeholders = self.insert_placeholders(surface, files)
        return list(
            await asyncio.gather(
                *(
                    self._upload_one(surface, file, placeholder)
                    for file, placeholder in zip(files, placeholders, strict=True)
                )
            )
        )
