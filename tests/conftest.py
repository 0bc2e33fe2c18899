"""
Shared fixtures for the store form tests.
"""

import io
import random
from datetime import datetime, timezone

import pytest
from PIL import Image

from form.session import new_session, set_field, stage_file
from models.enums import FileSlot
from models.schema import StagedFile


def make_png(width: int, height: int, seed: int = 7) -> bytes:
    """Noise PNG; noise keeps the encoded size close to the raw pixel size."""
    rng = random.Random(seed)
    raw = bytes(rng.getrandbits(8) for _ in range(width * height * 3))
    img = Image.frombytes("RGB", (width, height), raw)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def make_staged(slot: FileSlot, name: str = None, size: int = 60000) -> StagedFile:
    return StagedFile(
        slot=slot,
        name=name or f"{slot.value}.png",
        content=b"\x00" * size,
        mime_type="image/png",
        size=size,
    )


@pytest.fixture
def fixed_now():
    return datetime(2024, 3, 15, 10, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def session():
    return new_session()


@pytest.fixture
def filled_session():
    """Every required field filled in and both images staged, on step 4."""
    s = new_session()
    for field_id, value in [
        ("store_name", "Corner Bakery"),
        ("store_category", "food-beverage"),
        ("slogan", "Fresh every morning"),
        ("contact_email", "hello@cornerbakery.com"),
        ("contact_phone", "+1 555 0100"),
        ("address", "12 Market Street, Springfield"),
        ("media_instagram", "https://instagram.com/cornerbakery"),
    ]:
        s = set_field(s, field_id, value)
    s = stage_file(s, make_staged(FileSlot.BANNER, "banner.png"))
    s = stage_file(s, make_staged(FileSlot.LOGO, "logo.png", size=20000))
    return s.with_step(4)
