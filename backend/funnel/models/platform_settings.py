from funnel.extensions import db

PROFILE_CREATION_MODES = ("self_serve", "admin_only")

class PlatformSettings(db.Model):
    """Singleton row (id=1) holding platform-wide signup policy."""
    __tablename__ = "platform_settings"

    id = db.Column(db.Integer, primary_key=True)
    profile_creation_mode = db.Column(db.String(20), nullable=False, default="self_serve")
    require_approval = db.Column(db.Boolean, nullable=False, default=True)

    @classmethod
    def current(cls) -> "PlatformSettings":
        settings = db.session.get(cls, 1)
        if settings is None:
            # Unsaved defaults; persisted on first update
            settings = cls(id=1, profile_creation_mode="self_serve", require_approval=True)
        return settings
