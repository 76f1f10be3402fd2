# src/beam_stage/editor/__init__.py
"""Text utilities backing the markdown editor.

These helpers run beside the editing surface, not inside the API: they detect
autocomplete triggers and manage placeholders while images upload.
"""

from .storage import ImageFile, ImageStorage, UploadedImage, get_image_storage
from .suggestions import SuggestionData, get_suggestion_data
from .surface import CaretPosition, EditingSurface, TextBuffer
from .uploads import ImageUploader, UploadOutcome, image_tag, placeholder_for

__all__ = [
    "CaretPosition", "EditingSurface", "TextBuffer",
    "ImageFile", "ImageStorage", "UploadedImage", "get_image_storage",
    "ImageUploader", "UploadOutcome", "image_tag", "placeholder_for",
    "SuggestionData", "get_suggestion_data",
]
