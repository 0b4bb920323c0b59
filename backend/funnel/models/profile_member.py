from funnel.extensions import db
from .base import BaseModel
from .profile_mixin import ProfileScopedMixin

class ProfileMember(BaseModel, ProfileScopedMixin):
    __tablename__ = "profile_members"

    user_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False, index=True)
    role = db.Column(db.String(20), nullable=False, default="owner")

    profile = db.relationship("Profile", back_populates="members")

    __table_args__ = (
        db.UniqueConstraint("profile_id", "user_id", name="uq_profile_member"),
    )
