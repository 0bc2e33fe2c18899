"""
Enumerations for store registration data models.
"""

from enum import Enum


class FileSlot(str, Enum):
    """Image slot a staged file belongs to."""
    BANNER = "banner"
    LOGO = "logo"

    @property
    def label(self) -> str:
        return "Banner" if self is FileSlot.BANNER else "Logo"


class Severity(str, Enum):
    """Severity tag of a user-visible notification."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    SUCCESS = "success"


class SocialPlatform(str, Enum):
    """Social media platforms collected on the last step."""
    FACEBOOK = "facebook"
    TWITTER = "twitter"
    YOUTUBE = "youtube"
    INSTAGRAM = "instagram"
    LINKEDIN = "linkedin"
    PINTEREST = "pinterest"
    REDDIT = "reddit"
    TIKTOK = "tiktok"

    @property
    def field_id(self) -> str:
        return f"media_{self.value}"


class StoreCategory(str, Enum):
    """Store categories offered in the category selector."""
    FASHION = "fashion"
    ELECTRONICS = "electronics"
    HOME_GARDEN = "home-garden"
    BEAUTY = "beauty"
    FOOD_BEVERAGE = "food-beverage"
    SPORTS = "sports"
    BOOKS = "books"
    TOYS = "toys"
    AUTOMOTIVE = "automotive"
    SERVICES = "services"
    OTHER = "other"


class OpeningHoursStatus(str, Enum):
    """Opening hours options."""
    ALWAYS_OPEN = "always-open"
    BUSINESS_HOURS = "business-hours"
    WEEKDAYS_ONLY = "weekdays-only"
    BY_APPOINTMENT = "by-appointment"
    TEMPORARILY_CLOSED = "temporarily-closed"
