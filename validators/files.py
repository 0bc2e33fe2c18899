"""
Image intake checks for the banner and logo slots.

Type and size are checked before a file is staged. Pixel dimensions are read
afterwards and only produce an advisory; they never reject a file.
"""

import io
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from PIL import Image, UnidentifiedImageError

from form.errors import FileValidationError
from models.enums import FileSlot, Severity
from models.schema import StagedFile, MAX_FILE_SIZE_MB

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES = ("image/png", "image/jpg", "image/jpeg", "image/webp")
MAX_FILE_SIZE_BYTES = MAX_FILE_SIZE_MB * 1024 * 1024

# Quality floors, not format requirements
MIN_FILE_SIZE_BYTES = {
    FileSlot.BANNER: 50000,
    FileSlot.LOGO: 10000,
}


@dataclass
class ImageAdvisory:
    """Non-blocking feedback about an accepted image's dimensions."""
    width: int
    height: int
    recommendation: str = ""
    severity: Severity = Severity.INFO

    @property
    def is_optimal(self) -> bool:
        return not self.recommendation


def accept_file(name: str, content: bytes, mime_type: str, slot: FileSlot) -> StagedFile:
    """
    Validate a selected file and stage it for its slot.

    Raises:
        FileValidationError: wrong type, too large, or below the quality floor
    """
    slot = FileSlot(slot)
    size = len(content)

    if mime_type not in ALLOWED_MIME_TYPES:
        raise FileValidationError(
            slot,
            f"Invalid file type for {slot.value}. "
            "Please upload PNG, JPG, JPEG, or WEBP files only.",
        )

    if size > MAX_FILE_SIZE_BYTES:
        raise FileValidationError(
            slot,
            f"{slot.label} file size too large. "
            f"Please upload files smaller than {MAX_FILE_SIZE_MB}MB.",
        )

    if size < MIN_FILE_SIZE_BYTES[slot]:
        floor_kb = MIN_FILE_SIZE_BYTES[slot] // 1000
        raise FileValidationError(
            slot,
            f"{slot.label} image seems too small. "
            f"Please upload a higher quality image (at least {floor_kb}KB).",
        )

    return StagedFile(
        slot=slot,
        name=name,
        content=content,
        mime_type=mime_type,
        size=size,
    )


def read_dimensions(content: bytes) -> Optional[Tuple[int, int]]:
    """Pixel size of an encoded image, or None if Pillow cannot read it."""
    try:
        with Image.open(io.BytesIO(content)) as img:
            return img.size
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        logger.warning("Could not decode image dimensions: %s", e)
        return None


def dimension_advisory(slot: FileSlot, width: int, height: int) -> ImageAdvisory:
    """
    Recommendation for an image of the given size.

    Banner: at least 1000x300 with an aspect ratio between 3:1 and 4:1.
    Logo: at least 100x100 and nearly square (within 20% of the short side).
    A later check overrides the message of an earlier one.
    """
    advisory = ImageAdvisory(width=width, height=height)

    if slot == FileSlot.BANNER:
        if width < 1000 or height < 300:
            advisory.recommendation = (
                f"Banner dimensions ({width}×{height}px) are smaller than recommended "
                "(1230×350px). It may appear blurry on larger screens."
            )
            advisory.severity = Severity.WARNING
        ratio = width / height if height else 0
        if ratio < 3 or ratio > 4:
            advisory.recommendation = (
                "Banner aspect ratio should be approximately 3.5:1 for optimal "
                "display across different screen sizes."
            )
    else:
        if width < 100 or height < 100:
            advisory.recommendation = (
                f"Logo dimensions ({width}×{height}px) are smaller than recommended "
                "(140×140px). It may appear blurry."
            )
            advisory.severity = Severity.WARNING
        shorter = min(width, height)
        deviation = abs(width - height) / shorter if shorter else float("inf")
        if deviation > 0.2:
            advisory.recommendation = (
                "Logo should be square or nearly square for consistent display "
                "across the platform."
            )

    return advisory


def measure_dimensions(staged: StagedFile) -> Tuple[StagedFile, ImageAdvisory]:
    """Decode a staged image's size and attach it, with an advisory."""
    size = read_dimensions(staged.content)
    if size is None:
        return staged, ImageAdvisory(
            width=0,
            height=0,
            recommendation="Could not read image dimensions",
            severity=Severity.WARNING,
        )
    width, height = size
    measured = staged.model_copy(update={"width": width, "height": height})
    return measured, dimension_advisory(staged.slot, width, height)


def format_file_size(size: int) -> str:
    """Human-readable size: 0 Bytes, 1.5 KB, 2 MB."""
    if size == 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    value = float(size)
    idx = 0
    while value >= 1024 and idx < len(units) - 1:
        value /= 1024
        idx += 1
    return f"{round(value, 2):g} {units[idx]}"
