"""
Tests for banner/logo intake checks and dimension advisories.
"""

import struct
import zlib

import pytest

from conftest import make_png
from form.errors import FileValidationError
from models.enums import FileSlot, Severity
from validators.files import (
    MAX_FILE_SIZE_BYTES,
    accept_file,
    dimension_advisory,
    format_file_size,
    measure_dimensions,
)


FORTY_KB = b"\x89PNG\r\n\x1a\n" + b"\x00" * (40 * 1024 - 8)


class TestAcceptFile:
    """Type, size ceiling and per-slot quality floor."""

    def test_forty_kb_rejected_as_banner(self):
        with pytest.raises(FileValidationError) as exc:
            accept_file("small.png", FORTY_KB, "image/png", FileSlot.BANNER)
        assert exc.value.slot == FileSlot.BANNER
        assert exc.value.message == (
            "Banner image seems too small. "
            "Please upload a higher quality image (at least 50KB)."
        )

    def test_forty_kb_accepted_as_logo(self):
        staged = accept_file("small.png", FORTY_KB, "image/png", FileSlot.LOGO)
        assert staged.slot == FileSlot.LOGO
        assert staged.size == 40 * 1024
        assert staged.name == "small.png"
        assert staged.width is None

    def test_logo_floor(self):
        with pytest.raises(FileValidationError, match="at least 10KB"):
            accept_file("tiny.png", b"\x00" * 9999, "image/png", FileSlot.LOGO)

    @pytest.mark.parametrize("mime_type", ["image/gif", "image/svg+xml", "application/pdf", ""])
    def test_wrong_type(self, mime_type):
        with pytest.raises(FileValidationError) as exc:
            accept_file("file", b"\x00" * 60000, mime_type, FileSlot.BANNER)
        assert exc.value.message == (
            "Invalid file type for banner. "
            "Please upload PNG, JPG, JPEG, or WEBP files only."
        )

    @pytest.mark.parametrize("mime_type", ["image/png", "image/jpg", "image/jpeg", "image/webp"])
    def test_allowed_types(self, mime_type):
        staged = accept_file("file", b"\x00" * 60000, mime_type, FileSlot.BANNER)
        assert staged.mime_type == mime_type

    def test_too_large(self):
        content = b"\x00" * (MAX_FILE_SIZE_BYTES + 1)
        with pytest.raises(FileValidationError) as exc:
            accept_file("huge.png", content, "image/png", FileSlot.LOGO)
        assert exc.value.message == (
            "Logo file size too large. Please upload files smaller than 8MB."
        )

    def test_exactly_max_size_accepted(self):
        content = b"\x00" * MAX_FILE_SIZE_BYTES
        assert accept_file("big.png", content, "image/png", FileSlot.BANNER).size == MAX_FILE_SIZE_BYTES

    def test_type_checked_before_size(self):
        with pytest.raises(FileValidationError, match="Invalid file type"):
            accept_file("tiny.gif", b"\x00", "image/gif", FileSlot.BANNER)


# ===================================================================
# Dimension advisories
# ===================================================================


def test_banner_recommended_size_is_optimal():
    advisory = dimension_advisory(FileSlot.BANNER, 1230, 350)
    assert advisory.is_optimal


def test_banner_too_small_is_warning():
    advisory = dimension_advisory(FileSlot.BANNER, 800, 250)
    assert advisory.severity == Severity.WARNING
    assert "(800×250px) are smaller than recommended" in advisory.recommendation


def test_banner_bad_ratio_is_info():
    advisory = dimension_advisory(FileSlot.BANNER, 1200, 1200)
    assert advisory.severity == Severity.INFO
    assert "aspect ratio" in advisory.recommendation


def test_banner_ratio_message_wins_over_size():
    """A small square banner fails both checks; the ratio message is kept."""
    advisory = dimension_advisory(FileSlot.BANNER, 300, 300)
    assert "aspect ratio" in advisory.recommendation
    assert advisory.severity == Severity.WARNING


def test_logo_checks():
    assert dimension_advisory(FileSlot.LOGO, 140, 140).is_optimal
    assert dimension_advisory(FileSlot.LOGO, 160, 140).is_optimal

    small = dimension_advisory(FileSlot.LOGO, 50, 50)
    assert small.severity == Severity.WARNING
    assert "smaller than recommended" in small.recommendation

    wide = dimension_advisory(FileSlot.LOGO, 200, 100)
    assert "square" in wide.recommendation


def test_measure_dimensions_reads_real_image():
    """Test Pillow decodes the staged bytes and the size is attached."""
    content = make_png(800, 250)
    staged = accept_file("banner.png", content, "image/png", FileSlot.BANNER)

    measured, advisory = measure_dimensions(staged)

    assert (measured.width, measured.height) == (800, 250)
    assert staged.width is None
    assert advisory.severity == Severity.WARNING
    assert not advisory.is_optimal


def test_measure_dimensions_optimal_logo():
    staged = accept_file("logo.png", make_png(140, 140), "image/png", FileSlot.LOGO)
    measured, advisory = measure_dimensions(staged)
    assert (measured.width, measured.height) == (140, 140)
    assert advisory.is_optimal


def test_undecodable_image_warns_but_stays_staged():
    """Test an unreadable image keeps its slot and reports a warning."""
    staged = accept_file("logo.png", b"not an image " * 1000, "image/png", FileSlot.LOGO)

    measured, advisory = measure_dimensions(staged)

    assert measured is staged
    assert advisory.severity == Severity.WARNING
    assert advisory.recommendation == "Could not read image dimensions"


def _png_header_only(width, height, padding=60000):
    """PNG with a valid IHDR declaring the given size and no real pixel data."""
    def chunk(cid, data):
        crc = zlib.crc32(cid + data) & 0xFFFFFFFF
        return struct.pack(">I", len(data)) + cid + data + struct.pack(">I", crc)

    ihdr = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    return b"\x89PNG\r\n\x1a\n" + chunk(b"IHDR", ihdr) + chunk(b"IDAT", b"\x00" * padding)


def test_oversized_pixel_count_warns_but_stays_staged():
    """Test an image declaring 20000x20000 pixels is still accepted with a warning."""
    content = _png_header_only(20000, 20000)
    staged = accept_file("big.png", content, "image/png", FileSlot.BANNER)

    measured, advisory = measure_dimensions(staged)

    assert measured is staged
    assert advisory.severity == Severity.WARNING
    assert advisory.recommendation == "Could not read image dimensions"


@pytest.mark.parametrize("size,expected", [
    (0, "0 Bytes"),
    (500, "500 Bytes"),
    (1536, "1.5 KB"),
    (2 * 1024 * 1024, "2 MB"),
])
def test_format_file_size(size, expected):
    assert format_file_size(size) == expected
