# weapon_clash/sockets.py
import logging
import threading

from flask import current_app, request
from flask_socketio import emit, join_room

from . import resolver, state
from .models import GAME_OVER, ROUND_END

logger = logging.getLogger(__name__)

# find-or-create plus join must not interleave between two newcomers
_matchmaking = threading.Lock()


def _verbose(msg, *args):
    if current_app.config.get("ENABLE_VERBOSE_LOGS"):
        logger.info(msg, *args)
    else:
        logger.debug(msg, *args)


def _payload(data):
    return data if isinstance(data, dict) else {}


def broadcast_state(socketio, match):
    socketio.emit("game_updated", resolver.public_state(match), to=match.id)


def broadcast_result(socketio, match):
    payload = resolver.round_result_payload(resolver.round_result(match))
    socketio.emit("round_ended", payload, to=match.id)


def reap_once(socketio, timeout_sec, now=None):
    """Destroys idle matches and tells their rooms why."""
    reaped = state.reap_idle(timeout_sec, now)
    for game_id in reaped:
        logger.info("Cleaning up inactive game: %s", game_id)
        socketio.emit("game_timeout", {"message": "Game timed out due to inactivity"}, to=game_id)
        socketio.close_room(game_id)
    return reaped


def start_idle_reaper(socketio, app):
    interval = app.config["HEALTH_CHECK_INTERVAL_SEC"]
    timeout = app.config["GAME_TIMEOUT_SEC"]

    def _sweep():
        while True:
            socketio.sleep(interval)
            try:
                reap_once(socketio, timeout)
            except Exception:
                logger.exception("idle sweep failed")

    return socketio.start_background_task(_sweep)


def register_clash_socket_handlers(socketio):
    @socketio.on("connect")
    def clash_connect():
        state.connected.add(request.sid)
        _verbose("Player connected: %s", request.sid)

    @socketio.on("get_available_universes")
    def get_available_universes():
        emit("available_universes", {"universes": state.available_universes()})

    @socketio.on("join_game")
    def join_game(data):
        sid = request.sid
        payload = _payload(data)
        name = str(payload.get("player_name") or "").strip()
        universe = payload.get("universe")
        if not name or not universe:
            emit("error", {"message": "player_name and universe are required"})
            return

        try:
            if state.get_game_by_sid(sid):
                emit("error", {"message": "You are already in a game"})
                return

            cfg = current_app.config
            with _matchmaking:
                match = state.find_open_match()
                created = False
                if match is None:
                    if len(state.active_games) >= cfg["MAX_ACTIVE_GAMES"]:
                        emit("error", {"message": "Server is at capacity. Please try again later."})
                        return
                    match = state.create_match(max_rounds=cfg["MAX_ROUNDS"])
                    created = True
                    _verbose("New game created: %s", match.id)

                with state.locked_game(match.id):
                    ok, reason = resolver.join(match, sid, name, universe)
                    if not ok:
                        if created:
                            state.cleanup_match(match.id)
                        emit("error", {"message": reason or "Failed to join game"})
                        return
                    join_room(match.id)
                    state.bind(sid, match.id)
                    emit("game_joined", {"player_id": sid, "game_state": resolver.public_state(match)})
                    broadcast_state(socketio, match)

            _verbose("Player %s (%s) joined game %s", name, sid, match.id)
        except Exception:
            logger.exception("Error in join_game")
            emit("error", {"message": "Failed to join game"})

    @socketio.on("select_weapon")
    def select_weapon(data):
        payload = _payload(data)
        game_id = payload.get("game_id")
        with state.locked_game(game_id) as match:
            if not match:
                emit("error", {"message": "Game not found"})
                return
            if not resolver.select_weapon(match, request.sid, payload.get("weapon_id")):
                emit("error", {"message": "Failed to select weapon"})
                return
            broadcast_state(socketio, match)

    @socketio.on("make_move")
    def make_move(data):
        payload = _payload(data)
        game_id = payload.get("game_id")
        with state.locked_game(game_id) as match:
            if not match:
                emit("error", {"message": "Game not found"})
                return
            if not resolver.make_move(match, request.sid, payload.get("row"), payload.get("col")):
                emit("error", {"message": "Invalid move"})
                return
            broadcast_state(socketio, match)
            if match.phase == ROUND_END:
                broadcast_result(socketio, match)

    @socketio.on("next_round")
    def next_round(data):
        payload = _payload(data)
        game_id = payload.get("game_id")
        with state.locked_game(game_id) as match:
            if not match:
                emit("error", {"message": "Game not found"})
                return
            if not match.player_by_id(request.sid):
                emit("error", {"message": "You are not part of this game"})
                return
            resolver.next_round(match)
            if match.phase == GAME_OVER:
                broadcast_result(socketio, match)
            broadcast_state(socketio, match)

    @socketio.on("disconnect")
    def clash_disconnect(*args):
        sid = request.sid
        state.connected.discard(sid)
        _verbose("Player disconnected: %s", sid)

        game_id = state.sid_to_game.get(sid)
        match = state.remove_player(sid)
        if match is None:
            if game_id:
                _verbose("Cleaning up empty game: %s", game_id)
            return
        with state.locked_game(match.id):
            socketio.emit("player_disconnected", {"player_id": sid}, to=match.id)
            broadcast_state(socketio, match)
