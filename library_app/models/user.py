from datetime import datetime
from library_app.extensions import db

ROLE_USER = "user"
ROLE_ADMIN = "admin"
ROLES = (ROLE_USER, ROLE_ADMIN)


def normalize_role(role) -> str:
    """'ADMIN', ' Admin ' gibi değerleri tek biçime indirger."""
    return (role or "").strip().lower()


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)

    role = db.Column(db.String(20), nullable=False, default=ROLE_USER)  # user/admin

    profile_image_url = db.Column(db.Text, nullable=True)

    # Geçerli refresh token'ın jti değeri; logout ile temizlenir
    refresh_token_jti = db.Column(db.String(64), nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
