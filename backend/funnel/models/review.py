from funnel.extensions import db
from .base import BaseModel
from .profile_mixin import OrderedMixin

class Review(BaseModel, OrderedMixin):
    __tablename__ = "reviews"

    type = db.Column(db.String(10), nullable=False)  # image, text
    image_url = db.Column(db.String(512), nullable=True)
    source = db.Column(db.String(100), nullable=True)
    name = db.Column(db.String(120), nullable=True)
    rating = db.Column(db.Integer, nullable=True)
    event = db.Column(db.String(120), nullable=True)
    quote = db.Column(db.Text, nullable=True)

    __table_args__ = (
        db.Index("idx_review_profile_order", "profile_id", "order_index"),
    )
