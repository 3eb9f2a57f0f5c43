# models.py
import math
import uuid
from datetime import datetime, timezone
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import validates
from sqlalchemy.types import TypeDecorator, String
from sqlalchemy import CheckConstraint
from staff_directory.database import db, bcrypt
from staff_directory.errors import ValidationError


def utcnow():
    return datetime.now(timezone.utc)


def _isoformat(value):
    return value.isoformat() if value else None


# ---------- UUID Support for SQLite ----------
class GUID(TypeDecorator):
    """
    Platform-independent GUID/UUID type.
    Uses PostgreSQL UUID type, otherwise stores as string.
    """
    impl = String
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            return dialect.type_descriptor(UUID(as_uuid=True))
        else:
            return dialect.type_descriptor(String(36))

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        if not isinstance(value, uuid.UUID):
            value = uuid.UUID(value)
        if dialect.name == "postgresql":
            return value
        return str(value)

    def process_result_value(self, value, dialect):
        if value is None or isinstance(value, uuid.UUID):
            return value
        return uuid.UUID(value)


# ---------- Users Table ----------
class User(db.Model):
    """Login account; only used to mint API tokens."""
    __tablename__ = "users"

    id = db.Column(GUID(), primary_key=True, default=uuid.uuid4)
    username = db.Column(db.String(150), unique=True, nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(50), nullable=False, default="viewer")
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    __table_args__ = (
        CheckConstraint(role.in_(["admin", "viewer"]), name="check_user_role"),
    )

    # Password helpers
    def set_password(self, password: str):
        self.password_hash = bcrypt.generate_password_hash(password).decode("utf-8")

    def check_password(self, password: str) -> bool:
        return bcrypt.check_password_hash(self.password_hash, password)

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "username": self.username,
            "email": self.email,
            "role": self.role,
        }


# ---------- Employees Table ----------
class Employee(db.Model):
    __tablename__ = "employees"

    id = db.Column(GUID(), primary_key=True, default=uuid.uuid4)
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(50), nullable=False)
    department = db.Column(db.String(255), nullable=False)
    position = db.Column(db.String(255), nullable=False)
    salary = db.Column(db.Float, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    __table_args__ = (
        db.UniqueConstraint("email", name="unique_employee_email"),
        CheckConstraint("salary >= 0", name="check_salary_non_negative"),
    )

    # Second line of defence behind staff_directory.validation: the row
    # itself refuses blank text and negative salaries.
    @validates("name", "phone", "department", "position")
    def _validate_text(self, key, value):
        if not isinstance(value, str) or not value.strip():
            raise ValidationError({key: f"{key} must not be empty"})
        return value.strip()

    @validates("email")
    def _validate_email(self, key, value):
        if not isinstance(value, str) or not value.strip():
            raise ValidationError({key: "email must not be empty"})
        return value.strip().lower()

    @validates("salary")
    def _validate_salary(self, key, value):
        if (isinstance(value, bool) or not isinstance(value, (int, float))
                or not math.isfinite(value) or value < 0):
            raise ValidationError({key: "salary must be a non-negative number"})
        return value

    def to_dict(self) -> dict:
        return {
            "_id": str(self.id),
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "department": self.department,
            "position": self.position,
            "salary": self.salary,
            "createdAt": _isoformat(self.created_at),
            "updatedAt": _isoformat(self.updated_at),
        }
