import os

from flask import Flask
from flask.logging import default_handler
from flask_cors import CORS

from screentime_api.extensions import db, migrate, init_db
from screentime_api.common.errors import register_error_handlers
from screentime_api.models import load_all

__version__ = "0.1.0"


def create_app(config_object: str | None = None, **overrides):
    app = Flask(__name__)

    # Basic inline config (defaults)
    app.config["SQLALCHEMY_DATABASE_URI"] = os.getenv(
        "DATABASE_URL",
        "sqlite:///screentime.db",
    )
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
    app.config["LOG_LEVEL"] = os.getenv("LOG_LEVEL", "INFO").upper()

    # 🔑 Try loading external config, but don't crash if missing
    if config_object:
        try:
            app.config.from_object(config_object)
        except Exception as e:
            # Just log and continue with defaults
            app.logger.warning("Could not import config object %r: %s", config_object, e)

    # explicit overrides (tests) win over env and config objects
    app.config.update(overrides)

    # app.logger is the "screentime_api" logger; services log under it, to stderr
    app.logger.setLevel(app.config["LOG_LEVEL"])
    if default_handler not in app.logger.handlers:
        app.logger.addHandler(default_handler)

    CORS(app, resources={r"/*": {"origins": "*"}})

    # Extensions
    init_db(app)
    register_error_handlers(app)
    migrate.init_app(app, db)

    # Ensure models are loaded so metadata is complete
    with app.app_context():
        load_all()

    # Blueprints
    from screentime_api.blueprints.health import bp as health_bp
    from screentime_api.blueprints.adjustment_types import bp as adjustment_types_bp
    from screentime_api.blueprints.adjustments import bp as adjustments_bp
    from screentime_api.blueprints.time_entries import bp as time_entries_bp
    from screentime_api.blueprints.adjusted_time import bp as adjusted_time_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(adjustment_types_bp)
    app.register_blueprint(adjustments_bp)
    app.register_blueprint(time_entries_bp)
    app.register_blueprint(adjusted_time_bp)

    # CLI commands
    from screentime_api.cli import register_commands
    register_commands(app)

    return app
