import os
from flask import Flask, jsonify
from flask_cors import CORS

# Local imports
from staff_directory.database import init_db, db
from staff_directory.errors import register_error_handlers
from staff_directory.services.employee_repository import EmployeeRepository


def create_app(test_config: dict = None):
    app = Flask(__name__, instance_relative_config=False)

    # --- Secrets ---
    secret = os.environ.get("SECRET_KEY", "dev_secret_key_change_me")
    app.config["SECRET_KEY"] = secret
    app.config["JWT_SECRET"] = os.environ.get("JWT_SECRET", secret)
    app.config["JWT_ALGORITHM"] = os.environ.get("JWT_ALGORITHM", "HS256")
    app.config["JWT_EXP_DELTA_SECONDS"] = int(os.environ.get("JWT_EXP_DELTA_SECONDS", 60 * 60 * 2))

    # --- Database configuration ---
    app.config.setdefault(
        "SQLALCHEMY_DATABASE_URI",
        os.environ.get("DATABASE_URL", "sqlite:///staff_directory.db")
    )
    app.config.setdefault("SQLALCHEMY_TRACK_MODIFICATIONS", False)
    app.config["CORS_ORIGINS"] = os.environ.get("CORS_ORIGINS", "http://localhost:3000")
    app.config["LOG_LEVEL"] = os.environ.get("LOG_LEVEL", "INFO")

    # --- Apply test configuration if provided ---
    if test_config:
        app.config.update(test_config)

    app.logger.setLevel(app.config["LOG_LEVEL"].upper())

    # --- Apply CORS ---
    CORS(
        app,
        origins=[o.strip() for o in app.config["CORS_ORIGINS"].split(",") if o.strip()],
        supports_credentials=True,
        methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )

    # --- Initialize database and the employee store handed to the routes ---
    init_db(app)
    app.extensions["employee_repository"] = EmployeeRepository(db.session)

    register_error_handlers(app)

    # --- Import and register blueprints ---
    from staff_directory.routes.auth import auth_bp
    from staff_directory.routes.employees import employees_bp

    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(employees_bp, url_prefix="/api/employees")

    # --- Health check route ---
    @app.route("/api/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok", "app": "staff-directory-backend"})

    return app
