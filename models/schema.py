"""
Pydantic data models for the store registration payload and draft record.
"""

from typing import Optional, List, Dict
from pydantic import BaseModel, ConfigDict, Field
from .enums import FileSlot


ALLOWED_IMAGE_TYPES = ["png", "jpg", "jpeg", "webp"]
MAX_FILE_SIZE_MB = 8
SUBMISSION_SOURCE = "clasima-dashboard"
FORM_VERSION = "1.0"


class ImageAsset(BaseModel):
    """Hosted image reference plus the constraints it was collected under."""
    image_url: str = Field("", description="Hosted image URL (empty until uploaded)")
    recommended_size: str = Field(..., description="Recommended pixel size")
    max_file_size_mb: int = Field(MAX_FILE_SIZE_MB, description="Upload size limit in MB")
    allowed_types: List[str] = Field(
        default_factory=lambda: list(ALLOWED_IMAGE_TYPES),
        description="Accepted file extensions"
    )

    @classmethod
    def banner(cls, image_url: str = "") -> "ImageAsset":
        return cls(image_url=image_url, recommended_size="1230x350px")

    @classmethod
    def logo(cls, image_url: str = "") -> "ImageAsset":
        return cls(image_url=image_url, recommended_size="140x140px")


class OpeningHours(BaseModel):
    """Opening hours selection."""
    status: str = ""


class ContactInfo(BaseModel):
    """Store contact details."""
    email: str = ""
    phone: str = ""
    whatsapp: str = ""
    website: str = ""


class SocialMedia(BaseModel):
    """Social media profile links, all optional."""
    facebook: str = ""
    twitter: str = ""
    youtube: str = ""
    instagram: str = ""
    linkedin: str = ""
    pinterest: str = ""
    reddit: str = ""
    tiktok: str = ""


class StoreFormData(BaseModel):
    """
    Snapshot of the form in submission-payload shape.

    The same model is posted to the automation webhook (with hosted image
    URLs filled in) and persisted inside drafts (with empty URLs).
    """
    store_banner: ImageAsset = Field(default_factory=ImageAsset.banner)
    store_logo: ImageAsset = Field(default_factory=ImageAsset.logo)
    opening_hours: OpeningHours = Field(default_factory=OpeningHours)
    store_name: str = ""
    store_slug: str = ""
    slogan: str = ""
    store_category: str = ""
    contact: ContactInfo = Field(default_factory=ContactInfo)
    address: str = ""
    details: str = ""
    media: SocialMedia = Field(default_factory=SocialMedia)
    submission_timestamp: str = Field(..., description="ISO-8601 timestamp")
    submission_source: str = SUBMISSION_SOURCE
    form_version: str = FORM_VERSION
    current_step_completed: int = Field(1, ge=1, le=4)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "store_banner": {
                    "image_url": "https://res.cloudinary.com/demo/image/upload/banner.png",
                    "recommended_size": "1230x350px",
                    "max_file_size_mb": 8,
                    "allowed_types": ["png", "jpg", "jpeg", "webp"]
                },
                "store_name": "Corner Bakery",
                "store_slug": "corner-bakery",
                "store_category": "food-beverage",
                "contact": {"email": "hello@cornerbakery.com"},
                "address": "12 Market Street, Springfield",
                "submission_timestamp": "2024-03-15T10:30:00.000Z",
                "submission_source": "clasima-dashboard",
                "form_version": "1.0",
                "current_step_completed": 4
            }
        }
    )


class FileMetadata(BaseModel):
    """What survives of a staged file in a draft: no bytes."""
    name: str
    size: int = Field(..., ge=0)
    type: str


class StagedFile(BaseModel):
    """An accepted image held in memory until it is uploaded."""
    slot: FileSlot
    name: str
    content: bytes = Field(..., repr=False)
    mime_type: str
    size: int = Field(..., ge=0)
    width: Optional[int] = None
    height: Optional[int] = None

    def metadata(self) -> FileMetadata:
        return FileMetadata(name=self.name, size=self.size, type=self.mime_type)


class DraftRecord(BaseModel):
    """Locally persisted snapshot of in-progress form state."""
    model_config = ConfigDict(populate_by_name=True)

    data: StoreFormData
    current_step: int = Field(1, alias="currentStep")
    uploaded_files: Dict[FileSlot, Optional[FileMetadata]] = Field(
        default_factory=lambda: {FileSlot.BANNER: None, FileSlot.LOGO: None},
        alias="uploadedFiles",
    )
    timestamp: int = Field(..., description="Epoch milliseconds when saved")

    def to_dict(self) -> Dict:
        """Convert to the stored JSON shape."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_dict(cls, data: Dict) -> "DraftRecord":
        return cls.model_validate(data)
