import threading

from weapon_clash import resolver, state
from weapon_clash.models import DC, MARVEL, WEAPON_SELECTION


def _join(match, sid, universe):
    ok, _ = resolver.join(match, sid, sid.upper(), universe)
    assert ok
    state.bind(sid, match.id)


def test_create_match_registers_it():
    match = state.create_match(max_rounds=7)
    assert match.id.startswith("game-")
    assert state.get_game(match.id) is match
    assert match.max_rounds == 7


def test_game_ids_are_unique():
    ids = {state.create_match().id for _ in range(20)}
    assert len(ids) == 20


def test_find_open_match_skips_full_and_started():
    full = state.create_match()
    _join(full, "a", MARVEL)
    _join(full, "b", DC)
    assert full.phase == WEAPON_SELECTION
    assert state.find_open_match() is None

    waiting = state.create_match()
    _join(waiting, "c", DC)
    assert state.find_open_match() is waiting


def test_available_universes():
    assert state.available_universes() == [MARVEL, DC]
    match = state.create_match()
    _join(match, "a", DC)
    assert state.available_universes() == [MARVEL]


def test_get_game_by_sid():
    match = state.create_match()
    _join(match, "a", MARVEL)
    assert state.get_game_by_sid("a") is match
    assert state.get_game_by_sid("nobody") is None


def test_remove_player_keeps_match_with_remaining_player():
    match = state.create_match()
    _join(match, "a", MARVEL)
    _join(match, "b", DC)
    assert state.remove_player("a") is match
    assert [p.id for p in match.players] == ["b"]
    assert "a" not in state.sid_to_game
    assert state.get_game(match.id) is match


def test_remove_last_player_destroys_match():
    match = state.create_match()
    _join(match, "a", MARVEL)
    assert state.remove_player("a") is None
    assert state.get_game(match.id) is None
    assert state.remove_player("a") is None


def test_cleanup_match_unbinds_all_sids():
    match = state.create_match()
    _join(match, "a", MARVEL)
    _join(match, "b", DC)
    state.cleanup_match(match.id)
    assert state.sid_to_game == {}
    assert state.active_games == {}


def test_locked_game_unknown_id_yields_none():
    with state.locked_game("missing") as match:
        assert match is None
    with state.locked_game(None) as match:
        assert match is None


def test_reap_idle_removes_only_stale_matches():
    stale = state.create_match()
    fresh = state.create_match()
    stale.last_activity = 100.0
    fresh.last_activity = 1000.0
    assert state.reap_idle(timeout_sec=300, now=1100.0) == [stale.id]
    assert state.get_game(stale.id) is None
    assert state.get_game(fresh.id) is fresh


def test_reap_idle_skips_match_in_flight():
    busy = state.create_match()
    busy.last_activity = 0.0
    holding, release = threading.Event(), threading.Event()

    def _command():
        with state.locked_game(busy.id):
            holding.set()
            release.wait(5)

    worker = threading.Thread(target=_command)
    worker.start()
    holding.wait(5)
    try:
        assert state.reap_idle(timeout_sec=1, now=10.0) == []
        assert state.get_game(busy.id) is busy
    finally:
        release.set()
        worker.join(5)
    assert state.reap_idle(timeout_sec=1, now=10.0) == [busy.id]


def test_locks_live_and_die_with_their_match():
    match = state.create_match()
    assert state.lock_for(match.id) is not None
    state.cleanup_match(match.id)
    assert state.lock_for(match.id) is None
    with state.locked_game(match.id) as gone:
        assert gone is None
    with state.locked_game("missing"):
        pass
    assert state._locks == {}


def test_reap_idle_drops_the_lock():
    match = state.create_match()
    match.last_activity = 0.0
    assert state.reap_idle(timeout_sec=1, now=10.0) == [match.id]
    assert match.id not in state._locks
