from funnel.extensions import db
from .base import BaseModel
from .profile_mixin import OrderedMixin

class GalleryItem(BaseModel, OrderedMixin):
    __tablename__ = "gallery_items"

    kind = db.Column(db.String(20), nullable=False)  # image, youtube, mp4
    title = db.Column(db.String(200), nullable=True)
    image_url = db.Column(db.String(512), nullable=True)
    youtube_url = db.Column(db.String(512), nullable=True)
    mp4_url = db.Column(db.String(512), nullable=True)
    poster_url = db.Column(db.String(512), nullable=True)

    __table_args__ = (
        db.Index("idx_gallery_profile_order", "profile_id", "order_index"),
    )
