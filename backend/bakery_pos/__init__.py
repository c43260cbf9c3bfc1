# backend/bakery_pos/__init__.py
from __future__ import annotations

from flask import Flask, request

from .config import Config
from .extensions import db, migrate


def create_app(test_config: dict | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(Config)
    app.config.setdefault("POS_AUTO_CREATE_SCHEMA", True)
    if test_config:
        app.config.update(test_config)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)

    # Import models so Alembic can discover metadata reliably
    from . import models  # noqa: F401

    # One container per app: store + managers
    from .core import EXTENSION_KEY, PosCore
    core = PosCore.from_config(app.config)
    app.extensions[EXTENSION_KEY] = core

    # Register blueprints
    from .routes.system import system_bp
    from .routes.products import products_bp
    from .routes.cart import cart_bp
    from .routes.shifts import shifts_bp
    from .routes.sales import sales_bp

    app.register_blueprint(system_bp)
    app.register_blueprint(products_bp)
    app.register_blueprint(cart_bp)
    app.register_blueprint(shifts_bp)
    app.register_blueprint(sales_bp)

    @app.after_request
    def add_cors_headers(response):
        origin = request.headers.get("Origin")
        allowed_origins = {
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:4173",
            "http://127.0.0.1:4173",
        }
        if origin in allowed_origins:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Vary"] = "Origin"
            response.headers["Access-Control-Allow-Headers"] = "Content-Type"
            response.headers["Access-Control-Allow-Methods"] = "GET,POST,PUT,DELETE,PATCH,OPTIONS"
        return response

    # Register CLI commands
    from .cli import register_commands
    register_commands(app)

    # Schema + one-time sample seed (set POS_AUTO_CREATE_SCHEMA=False when using migrations)
    if app.config["POS_AUTO_CREATE_SCHEMA"]:
        from .services.seed_service import initialize_sample_data
        with app.app_context():
            db.create_all()
            if app.config.get("POS_SEED_SAMPLE_DATA"):
                initialize_sample_data(core.store, core.ids)

    return app
