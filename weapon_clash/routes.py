# weapon_clash/routes.py
import time
from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify, render_template, request

from . import resolver, state
from .models import UNIVERSES
from .weapons import all_weapons, weapons_for

clash_bp = Blueprint("clash", __name__)

_STARTED_AT = time.time()
_ENDPOINTS = ["/health", "/api/info", "/api/games", "/api/weapons", "/"]


@clash_bp.route("/")
def index():
    cfg = current_app.config
    return render_template(
        "index.html",
        app_name=cfg["APP_NAME"],
        version=cfg["APP_VERSION"],
        environment=cfg["APP_ENV"],
        active_games=len(state.active_games),
        connected_players=len(state.connected),
    )


@clash_bp.route("/health")
def health():
    cfg = current_app.config
    return jsonify({
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": cfg["APP_VERSION"],
        "environment": cfg["APP_ENV"],
        "active_games": len(state.active_games),
        "connected_players": len(state.connected),
        "uptime": round(time.time() - _STARTED_AT, 3),
    })


@clash_bp.route("/api/info")
def info():
    cfg = current_app.config
    return jsonify({
        "name": cfg["APP_NAME"],
        "version": cfg["APP_VERSION"],
        "environment": cfg["APP_ENV"],
        "endpoints": {"health": "/health", "games": "/api/games", "websocket": "/socket.io"},
    })


@clash_bp.route("/api/games")
def list_games():
    return jsonify([resolver.summary(m) for m in list(state.active_games.values())])


@clash_bp.route("/api/games/<game_id>")
def get_game(game_id):
    with state.locked_game(game_id) as match:
        if not match:
            return jsonify({"error": "Game not found"}), 404
        return jsonify(resolver.public_state(match))


@clash_bp.route("/api/weapons")
def list_weapons():
    universe = request.args.get("universe")
    if universe is None:
        return jsonify([w.to_dict() for w in all_weapons()])
    if universe not in UNIVERSES:
        return jsonify({"error": f"Unknown universe '{universe}'"}), 400
    return jsonify([w.to_dict() for w in weapons_for(universe)])


@clash_bp.app_errorhandler(404)
def not_found(_err):
    return jsonify({
        "error": "Not Found",
        "message": "The requested resource was not found",
        "available_endpoints": _ENDPOINTS,
    }), 404


@clash_bp.app_errorhandler(500)
def server_error(err):
    current_app.logger.error("Server Error: %s", err)
    if current_app.config.get("IS_PRODUCTION"):
        return jsonify({"error": "Internal Server Error", "message": "Something went wrong on our end"}), 500
    original = getattr(err, "original_exception", None) or err
    return jsonify({"error": "Internal Server Error", "message": str(original)}), 500
