from sqlalchemy.orm import declared_attr
from funnel.extensions import db

class ProfileScopedMixin:
    @declared_attr
    def profile_id(cls):
        return db.Column(
            db.String(36),
            db.ForeignKey("profiles.id"),
            nullable=False,
            index=True
        )


class OrderedMixin(ProfileScopedMixin):
    order_index = db.Column(db.Integer, nullable=False, default=0)
