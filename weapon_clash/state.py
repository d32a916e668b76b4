# weapon_clash/state.py
import logging
import threading
import time
import uuid
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional, Set

from . import resolver
from .balance import DEFAULTS
from .models import UNIVERSES, WAITING_FOR_PLAYERS, MatchState

logger = logging.getLogger(__name__)

active_games: Dict[str, MatchState] = {}
sid_to_game: Dict[str, str] = {}
connected: Set[str] = set()

_locks: Dict[str, threading.RLock] = {}
_registry_lock = threading.RLock()


def new_game_id() -> str:
    return f"game-{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}"


def lock_for(game_id: str) -> Optional[threading.RLock]:
    """Lock of a live match, None once the match is gone."""
    if not isinstance(game_id, str):
        return None
    with _registry_lock:
        if game_id not in active_games:
            return None
        return _locks.get(game_id)


@contextmanager
def locked_game(game_id: str) -> Iterator[Optional[MatchState]]:
    """Yields the match (or None) while holding its lock."""
    lock = lock_for(game_id)
    if lock is None:
        yield None
        return
    with lock:
        yield active_games.get(game_id)


def get_game(game_id: str) -> Optional[MatchState]:
    return active_games.get(game_id)


def get_game_by_sid(sid: str) -> Optional[MatchState]:
    game_id = sid_to_game.get(sid)
    if not game_id:
        return None
    return active_games.get(game_id)


def find_open_match() -> Optional[MatchState]:
    with _registry_lock:
        for match in active_games.values():
            if match.phase == WAITING_FOR_PLAYERS and len(match.players) < 2:
                return match
    return None


def available_universes() -> List[str]:
    match = find_open_match()
    if match and match.players:
        taken = {p.universe for p in match.players}
        return [u for u in UNIVERSES if u not in taken]
    return list(UNIVERSES)


def create_match(max_rounds: int = DEFAULTS["max_rounds"]) -> MatchState:
    match = MatchState(id=new_game_id(), max_rounds=max_rounds)
    with _registry_lock:
        active_games[match.id] = match
        _locks[match.id] = threading.RLock()
    return match


def bind(sid: str, game_id: str) -> None:
    with _registry_lock:
        sid_to_game[sid] = game_id


def cleanup_match(game_id: str) -> Optional[MatchState]:
    with _registry_lock:
        match = active_games.pop(game_id, None)
        _locks.pop(game_id, None)
        for sid in [s for s, g in sid_to_game.items() if g == game_id]:
            sid_to_game.pop(sid, None)
    return match


def remove_player(sid: str) -> Optional[MatchState]:
    """
    Removes a disconnected client from its match. Returns the match when it
    still has players, None when the client had no match or the match was
    destroyed because it became empty.
    """
    with _registry_lock:
        game_id = sid_to_game.pop(sid, None)
    if not game_id:
        return None

    with locked_game(game_id) as match:
        if not match:
            return None
        resolver.leave(match, sid)
        if not match.players:
            cleanup_match(game_id)
            logger.debug("removed empty game %s", game_id)
            return None
        return match


def reap_idle(timeout_sec: float, now: Optional[float] = None) -> List[str]:
    """
    Destroys matches idle for longer than timeout_sec. Matches whose lock is
    held by a command in flight are skipped until the next sweep.
    """
    now = time.time() if now is None else now
    reaped: List[str] = []
    with _registry_lock:
        candidates = [
            game_id for game_id, match in active_games.items()
            if now - resolver.get_last_activity(match) > timeout_sec
        ]
    for game_id in candidates:
        lock = lock_for(game_id)
        if lock is None or not lock.acquire(blocking=False):
            continue
        try:
            match = active_games.get(game_id)
            if match and now - resolver.get_last_activity(match) > timeout_sec:
                cleanup_match(game_id)
                reaped.append(game_id)
        finally:
            lock.release()
    return reaped


def reset() -> None:
    with _registry_lock:
        active_games.clear()
        sid_to_game.clear()
        connected.clear()
        _locks.clear()
