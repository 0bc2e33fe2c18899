"""
Models package initialization.
"""

from .enums import (
    FileSlot,
    Severity,
    SocialPlatform,
    StoreCategory,
    OpeningHoursStatus,
)
from .schema import (
    ImageAsset,
    OpeningHours,
    ContactInfo,
    SocialMedia,
    StoreFormData,
    FileMetadata,
    StagedFile,
    DraftRecord,
)

__all__ = [
    "FileSlot",
    "Severity",
    "SocialPlatform",
    "StoreCategory",
    "OpeningHoursStatus",
    "ImageAsset",
    "OpeningHours",
    "ContactInfo",
    "SocialMedia",
    "StoreFormData",
    "FileMetadata",
    "StagedFile",
    "DraftRecord",
]
