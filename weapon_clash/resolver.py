# weapon_clash/resolver.py
"""
Match engine: join, weapon selection, board moves, round resolution and
match termination for a single MatchState.

Every operation is synchronous and reports domain failures through its
return value; callers serialize access per match (see state.locked_game).
"""
import logging
import time
from typing import Any, Dict, List, Optional, Tuple

from .balance import DEFAULTS, FIRST_MOVER_EVEN, FIRST_MOVER_ODD, SYMBOLS, UNIVERSE_NAMES
from .models import (
    EMPTY,
    GAME_OVER,
    PLAYING,
    ROUND_END,
    UNIVERSES,
    WAITING_FOR_PLAYERS,
    WEAPON_SELECTION,
    Board,
    MatchState,
    Player,
    RoundResult,
    Weapon,
)
from .rules import empty_board, in_bounds, is_full, winning_line
from .weapons import CATALOG, catalog_size, weapon_by_id

logger = logging.getLogger(__name__)


def _catalog(match: MatchState) -> Dict[str, List[Weapon]]:
    return match.catalog if match.catalog is not None else CATALOG


def touch_activity(match: MatchState) -> None:
    match.last_activity = time.time()


def get_last_activity(match: MatchState) -> float:
    return match.last_activity


# ---------------------------------------------------------------- join / leave

def join(match: MatchState, player_id: str, name: str, universe: str) -> Tuple[bool, Optional[str]]:
    """
    Admits a player. The two players of a match must come from different
    universes. Returns (ok, reason).
    """
    if match.phase == GAME_OVER:
        return False, "Game is over"
    if len(match.players) >= DEFAULTS["players_per_match"]:
        return False, "Game is full"
    if match.phase != WAITING_FOR_PLAYERS:
        return False, "Game already in progress"
    if universe not in UNIVERSES:
        return False, f"Unknown universe '{universe}'"
    if match.player_by_id(player_id):
        return False, "Already joined this game"

    if match.players:
        taken = match.players[0].universe
        if taken == universe:
            remaining = next(u for u in UNIVERSES if u != taken)
            return False, f"Universe already taken! Please choose {UNIVERSE_NAMES[remaining]} instead."

    match.players.append(Player(
        id=player_id,
        name=name,
        universe=universe,
        symbol=SYMBOLS.get(universe, ""),
    ))
    touch_activity(match)

    if len(match.players) == DEFAULTS["players_per_match"]:
        match.phase = WEAPON_SELECTION
    return True, None


def leave(match: MatchState, player_id: str) -> bool:
    """Drops a roster member. Phase is left untouched."""
    player = match.player_by_id(player_id)
    if not player:
        return False
    match.players.remove(player)
    touch_activity(match)
    return True


# ---------------------------------------------------------------- weapon selection

def available_weapons(match: MatchState, player_id: str) -> List[Weapon]:
    player = match.player_by_id(player_id)
    if not player:
        return []
    return [w for w in _catalog(match).get(player.universe, []) if w.id not in player.used_weapons]


def select_weapon(match: MatchState, player_id: str, weapon_id: str) -> bool:
    player = match.player_by_id(player_id)
    if not player or match.phase != WEAPON_SELECTION:
        return False

    weapon = weapon_by_id(weapon_id, player.universe, _catalog(match))
    if weapon is None or weapon.id in player.used_weapons:
        return False

    player.selected_weapon = weapon
    player.is_ready = True
    touch_activity(match)

    if len(match.players) == DEFAULTS["players_per_match"] and all(p.is_ready for p in match.players):
        start_round(match)
    return True


def start_round(match: MatchState) -> None:
    """Installs a fresh board and picks the opening player for this round."""
    match.phase = PLAYING
    match.board = empty_board()

    opener = FIRST_MOVER_ODD if match.round_number % 2 == 1 else FIRST_MOVER_EVEN
    number = next((i + 1 for i, p in enumerate(match.players) if p.universe == opener), 0)
    match.current_player = number or 1
    logger.debug("match %s round %d starts with player %d", match.id, match.round_number, match.current_player)


# ---------------------------------------------------------------- moves

def make_move(match: MatchState, player_id: str, row: int, col: int) -> bool:
    # a board abandoned mid-round stays frozen
    if match.phase != PLAYING or len(match.players) != DEFAULTS["players_per_match"]:
        return False
    number = match.player_number(player_id)
    if not number or number != match.current_player:
        return False
    if not in_bounds(row, col):
        return False

    cells = match.board.cells
    if cells[row][col] != EMPTY:
        return False

    cells[row][col] = number
    touch_activity(match)

    line = winning_line(cells)
    if line:
        match.board.winner, match.board.winning_cells = line
        end_round(match)
    elif is_full(cells):
        match.board.is_draw = True
        end_round(match)
    else:
        match.current_player = 2 if match.current_player == 1 else 1
    return True


# ---------------------------------------------------------------- round resolution

def _transfer_weapon(loser: Player, winner: Player, weapon: Weapon) -> None:
    # single step: the weapon leaves the loser's collection and lands with the winner
    loser.weapons = [w for w in loser.weapons if w.id != weapon.id]
    winner.weapons.append(weapon)


def end_round(match: MatchState) -> RoundResult:
    """Enters ROUND_END and resolves the round exactly once."""
    match.phase = ROUND_END
    if match.last_result is not None:
        return match.last_result

    winner = loser = None
    if match.board.winner:
        idx = match.board.winner - 1
        if idx < len(match.players):
            winner = match.players[idx]
        if len(match.players) == 2:
            loser = match.players[1 - idx]

    transferred = None
    if winner:
        winner.round_wins += 1
    if winner and loser and loser.selected_weapon:
        transferred = loser.selected_weapon
        _transfer_weapon(loser, winner, transferred)

    match.last_result = RoundResult(winner=winner, loser=loser, transferred_weapon=transferred)
    logger.debug(
        "match %s round %d resolved: winner=%s transferred=%s",
        match.id, match.round_number,
        winner.id if winner else None,
        transferred.id if transferred else None,
    )
    return match.last_result


def round_result(match: MatchState) -> Optional[RoundResult]:
    """Cached result of the current round (or the final match result)."""
    return match.last_result


def weapons_exhausted(match: MatchState) -> bool:
    if len(match.players) != DEFAULTS["players_per_match"]:
        return False
    catalog = _catalog(match)
    return all(len(p.used_weapons) >= catalog_size(p.universe, catalog) for p in match.players)


def next_round(match: MatchState) -> None:
    if match.phase != ROUND_END:
        return

    for p in match.players:
        if p.selected_weapon and p.selected_weapon.id not in p.used_weapons:
            p.used_weapons.append(p.selected_weapon.id)
        p.is_ready = False
        p.selected_weapon = None

    match.last_result = None
    touch_activity(match)

    if weapons_exhausted(match):
        p1, p2 = match.players
        game_winner = None
        if p1.round_wins > p2.round_wins:
            game_winner = p1
        elif p2.round_wins > p1.round_wins:
            game_winner = p2
        match.last_result = RoundResult(is_game_over=True, game_winner=game_winner)
        match.phase = GAME_OVER
        logger.debug("match %s over after round %d, winner=%s",
                     match.id, match.round_number, game_winner.id if game_winner else None)
        return

    match.round_number += 1
    match.phase = WEAPON_SELECTION


# ---------------------------------------------------------------- snapshots

def _player_view(p: Player) -> Dict[str, Any]:
    return {
        "id": p.id,
        "name": p.name,
        "universe": p.universe,
        "symbol": p.symbol,
        "weapons": [w.to_dict() for w in p.weapons],
        "selected_weapon": p.selected_weapon.to_dict() if p.selected_weapon else None,
        "is_ready": p.is_ready,
        "used_weapons": list(p.used_weapons),
        "round_wins": p.round_wins,
    }


def _board_view(board: Board) -> Dict[str, Any]:
    return {
        "cells": [list(row) for row in board.cells],
        "winner": board.winner,
        "is_draw": board.is_draw,
        "winning_cells": [list(c) for c in board.winning_cells],
    }


def public_state(match: MatchState) -> Dict[str, Any]:
    return {
        "id": match.id,
        "state": match.phase,
        "players": [_player_view(p) for p in match.players],
        "board": _board_view(match.board),
        "current_player": match.current_player,
        "round_number": match.round_number,
        "max_rounds": match.max_rounds,
    }


def round_result_payload(result: Optional[RoundResult]) -> Optional[Dict[str, Any]]:
    if result is None:
        return None
    return {
        "winner": _player_view(result.winner) if result.winner else None,
        "loser": _player_view(result.loser) if result.loser else None,
        "transferred_weapon": result.transferred_weapon.to_dict() if result.transferred_weapon else None,
        "is_game_over": result.is_game_over,
        "game_winner": _player_view(result.game_winner) if result.game_winner else None,
    }


def summary(match: MatchState) -> Dict[str, Any]:
    return {
        "id": match.id,
        "state": match.phase,
        "player_count": len(match.players),
        "round_number": match.round_number,
        "created_at": match.created_at.isoformat(),
    }
