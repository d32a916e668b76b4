# weapon_clash/app.py
import logging

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO

from . import init_clash
from .config import Config, validate_config
from .sockets import start_idle_reaper

logger = logging.getLogger("weapon_clash")

socketio = SocketIO(async_mode=None)


def configure_logging(level="INFO") -> None:
    """Single stderr handler on the package logger."""
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(level)


def _security_headers(response):
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["X-XSS-Protection"] = "1; mode=block"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    return response


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    validate_config(flask_app.config)
    configure_logging(flask_app.config["LOG_LEVEL"])

    origins = flask_app.config["CORS_ORIGINS"]
    CORS(flask_app, supports_credentials=True, origins=origins)
    socketio.init_app(flask_app, cors_allowed_origins=origins)

    if flask_app.config.get("IS_PRODUCTION"):
        flask_app.after_request(_security_headers)

    # init_app builds a fresh server, so handlers are bound on every call
    init_clash(flask_app, socketio)

    if flask_app.config.get("ENABLE_VERBOSE_LOGS") or flask_app.config["APP_ENV"] == "development":
        logger.info(
            "Backend configuration: env=%s host=%s port=%s version=%s cors=%s",
            flask_app.config["APP_ENV"], flask_app.config["HOST"], flask_app.config["PORT"],
            flask_app.config["APP_VERSION"], origins,
        )
    return flask_app


def main():
    app = create_app()
    start_idle_reaper(socketio, app)
    logger.info("Server running on %s:%s", app.config["HOST"], app.config["PORT"])
    socketio.run(app, host=app.config["HOST"], port=app.config["PORT"],
                 allow_unsafe_werkzeug=not app.config["IS_PRODUCTION"])


if __name__ == "__main__":
    main()
