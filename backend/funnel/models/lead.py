from funnel.extensions import db
from .base import BaseModel
from .profile_mixin import ProfileScopedMixin

LEAD_STATUSES = ("new", "contacted", "booked")

class Lead(BaseModel, ProfileScopedMixin):
    __tablename__ = "leads"

    __table_args__ = (
        db.Index("ix_lead_cursor", "profile_id", "created_at", "id"),
    )

    form_data = db.Column(db.JSON, nullable=False, default=dict)

    # Denormalized for inbox filtering
    phone = db.Column(db.String(40), nullable=True, index=True)
    email = db.Column(db.String(200), nullable=True, index=True)

    status = db.Column(db.String(20), nullable=False, default="new", index=True)
    contacted_at = db.Column(db.DateTime, nullable=True)
    booked_at = db.Column(db.DateTime, nullable=True)
