from functools import wraps
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
import jwt

from flask import Blueprint, request, jsonify, current_app

from staff_directory.errors import ApiError, Forbidden, InvalidCredentials, InvalidToken, Unauthenticated
from staff_directory.models import User

auth_bp = Blueprint("auth", __name__)

ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class Identity:
    """Verified token claims, handed to the view that needs them."""
    subject: str
    username: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE

    def to_dict(self) -> dict:
        return {"id": self.subject, "username": self.username, "role": self.role}


# ---------------- JWT helpers ---------------- #
def _jwt_secret() -> str:
    secret = current_app.config.get("JWT_SECRET") or current_app.config.get("SECRET_KEY")
    if not secret or not isinstance(secret, str):
        return "dev_secret_key_change_me"
    return secret


def create_jwt_token(user_id: str, role: str, username: str = "", expires_in_seconds: int = None) -> str:
    expires_in = expires_in_seconds or current_app.config.get("JWT_EXP_DELTA_SECONDS", 60 * 60 * 2)
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "username": username,
        "role": role,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(seconds=expires_in)).timestamp()),
    }
    return jwt.encode(payload, _jwt_secret(), algorithm=current_app.config.get("JWT_ALGORITHM", "HS256"))


def decode_jwt_token(token: str) -> dict:
    try:
        return jwt.decode(token, _jwt_secret(), algorithms=[current_app.config.get("JWT_ALGORITHM", "HS256")])
    except jwt.ExpiredSignatureError:
        raise InvalidToken("Token expired")
    except jwt.InvalidTokenError as exc:
        current_app.logger.debug("Rejected token: %s", exc)
        raise InvalidToken()


# ---------------- Pipeline stages ---------------- #
def verify_credentials(auth_header) -> Identity:
    """Authorization header -> Identity, or Unauthenticated / InvalidToken."""
    parts = (auth_header or "").split()
    if len(parts) < 2:
        raise Unauthenticated()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise InvalidToken()

    payload = decode_jwt_token(parts[1])
    return Identity(
        subject=str(payload.get("sub", "")),
        username=str(payload.get("username", "")),
        role=str(payload.get("role", "")),
    )


def require_admin(identity: Identity) -> Identity:
    if not identity.is_admin:
        raise Forbidden()
    return identity


# ---------------- Decorators ---------------- #
def jwt_required(f):
    """Verify the bearer token and pass the result to the view as ``identity``."""
    @wraps(f)
    def decorated(*args, **kwargs):
        identity = verify_credentials(request.headers.get("Authorization"))
        return f(*args, identity=identity, **kwargs)
    return decorated


def admin_required(f):
    @wraps(f)
    def decorated(*args, **kwargs):
        identity = verify_credentials(request.headers.get("Authorization"))
        require_admin(identity)
        return f(*args, identity=identity, **kwargs)
    return decorated


# ---------------- Routes ---------------- #
@auth_bp.route("/login", methods=["POST"])
def login():
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        raise ApiError("Username and password required")
    login_name = str(data.get("username") or data.get("email") or "").strip()
    password = str(data.get("password") or "")
    if not login_name or not password:
        raise ApiError("Username and password required")

    user = User.query.filter(
        (User.username == login_name) | (User.email == login_name.lower())
    ).first()
    if not user or not user.check_password(password):
        current_app.logger.warning("Failed login for %s", login_name)
        raise InvalidCredentials()

    token = create_jwt_token(str(user.id), user.role, user.username)
    current_app.logger.info("User logged in: %s", user.username)
    return jsonify({"token": token, "user": user.to_dict()}), 200


@auth_bp.route("/me", methods=["GET"])
@jwt_required
def me(identity: Identity):
    return jsonify(identity.to_dict()), 200
