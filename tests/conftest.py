import pytest

from staff_directory import create_app
from staff_directory.database import db
from staff_directory.models import Employee, User
from staff_directory.routes.auth import create_jwt_token

TEST_CONFIG = {
    "TESTING": True,
    "SQLALCHEMY_DATABASE_URI": "sqlite://",
    "SECRET_KEY": "test-secret",
    "JWT_SECRET": "test-jwt-secret",
    "BCRYPT_LOG_ROUNDS": 4,
}

ADA = {
    "name": "Ada",
    "email": "ADA@X.COM",
    "phone": "1234567890",
    "department": "Eng",
    "position": "Dev",
    "salary": 1000,
}


@pytest.fixture
def app():
    app = create_app(dict(TEST_CONFIG))
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def app_ctx(app):
    with app.app_context():
        yield app


@pytest.fixture
def repository(app_ctx):
    return app_ctx.extensions["employee_repository"]


@pytest.fixture
def admin_token(app):
    with app.app_context():
        return create_jwt_token("admin-1", "admin", "boss")


@pytest.fixture
def viewer_token(app):
    with app.app_context():
        return create_jwt_token("viewer-1", "viewer", "reader")


@pytest.fixture
def admin_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def viewer_headers(viewer_token):
    return {"Authorization": f"Bearer {viewer_token}"}


@pytest.fixture
def employee_count(app):
    def count():
        with app.app_context():
            return db.session.query(Employee).count()
    return count


@pytest.fixture
def make_user(app):
    def make(username, email, password, role="viewer"):
        with app.app_context():
            user = User(username=username, email=email, role=role)
            user.set_password(password)
            db.session.add(user)
            db.session.commit()
            return str(user.id)
    return make
