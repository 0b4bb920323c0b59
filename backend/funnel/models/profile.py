from funnel.extensions import db
from .base import BaseModel

PROFILE_STATUSES = ("pending", "active", "rejected")
THEMES = ("dark", "light")

class Profile(BaseModel):
    __tablename__ = "profiles"

    slug = db.Column(db.String(40), unique=True, nullable=False, index=True)
    display_name = db.Column(db.String(80), nullable=False)
    status = db.Column(db.String(20), nullable=False, default="pending", index=True)

    owner_user_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False, index=True)

    # Public page branding
    theme = db.Column(db.String(10), nullable=False, default="dark")
    accent_color = db.Column(db.String(20), nullable=False, default="#27c26a")
    hero_headline = db.Column(db.String(200), nullable=True)
    hero_subtext = db.Column(db.Text, nullable=True)
    packages = db.Column(db.JSON, nullable=False, default=list)  # [{name, price, description}]

    # Contact / relay
    whatsapp_number = db.Column(db.String(40), nullable=True)
    notification_emails = db.Column(db.JSON, nullable=False, default=list)

    # Approval trail
    approved_at = db.Column(db.DateTime, nullable=True)
    approved_by = db.Column(db.String(36), nullable=True)
    rejection_reason = db.Column(db.Text, nullable=True)

    members = db.relationship(
        "ProfileMember",
        back_populates="profile",
        cascade="all, delete-orphan"
    )

    @property
    def is_active(self) -> bool:
        return self.status == "active"

    def has_member(self, user_id: str) -> bool:
        return any(m.user_id == user_id for m in self.members)
