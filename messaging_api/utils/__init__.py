"""Small helpers shared by the message builders and clients."""

from .case import camelcase, camelcase_keys
from .image import detect_image_mime

__all__ = [
    "camelcase",
    "camelcase_keys",
    "detect_image_mime",
]
