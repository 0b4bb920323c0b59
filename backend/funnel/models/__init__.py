from .user import User
from .profile import Profile
from .profile_member import ProfileMember
from .platform_settings import PlatformSettings
from .form_field import FormField
from .gallery_item import GalleryItem
from .review import Review
from .lead import Lead
from .audit_log import AuditLog

__all__ = [
    "User",
    "Profile",
    "ProfileMember",
    "PlatformSettings",
    "FormField",
    "GalleryItem",
    "Review",
    "Lead",
    "AuditLog",
]
