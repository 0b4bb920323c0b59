from funnel.extensions import db
from .base import BaseModel
from .profile_mixin import OrderedMixin

class FormField(BaseModel, OrderedMixin):
    __tablename__ = "form_fields"

    label = db.Column(db.String(200), nullable=False)
    field_key = db.Column(db.String(100), nullable=False)
    type = db.Column(db.String(20), nullable=False, default="text")  # text, email, phone, date, select, textarea
    required = db.Column(db.Boolean, nullable=False, default=False)
    options = db.Column(db.JSON, nullable=False, default=list)

    __table_args__ = (
        db.UniqueConstraint("profile_id", "field_key", name="uq_form_field_key_per_profile"),
        db.Index("idx_form_field_profile_order", "profile_id", "order_index"),
    )
