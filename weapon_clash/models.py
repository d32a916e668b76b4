# weapon_clash/models.py
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional
import time

# match phases
WAITING_FOR_PLAYERS = "waiting_for_players"
WEAPON_SELECTION = "weapon_selection"
PLAYING = "playing"
ROUND_END = "round_end"
GAME_OVER = "game_over"

# universes
MARVEL = "marvel"
DC = "dc"
UNIVERSES = (MARVEL, DC)

# board cells
EMPTY = 0
PLAYER1 = 1
PLAYER2 = 2


@dataclass(frozen=True)
class Weapon:
    id: str
    name: str
    universe: str                           # "marvel" | "dc"
    power: int
    rarity: str                             # "common" | "rare" | "epic" | "legendary"
    image_url: str = ""

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "universe": self.universe,
            "power": self.power,
            "rarity": self.rarity,
            "image_url": self.image_url,
        }


@dataclass
class Player:
    id: str                                 # transport-assigned (socket sid)
    name: str
    universe: str
    symbol: str = ""
    weapons: List[Weapon] = field(default_factory=list)       # won from the opponent
    selected_weapon: Optional[Weapon] = None
    is_ready: bool = False
    used_weapons: List[str] = field(default_factory=list)     # weapon ids, never reselectable
    round_wins: int = 0


@dataclass
class Board:
    cells: List[List[int]] = field(default_factory=lambda: [[EMPTY] * 3 for _ in range(3)])
    winner: Optional[int] = None            # 1 | 2
    is_draw: bool = False
    winning_cells: List[List[int]] = field(default_factory=list)


@dataclass
class RoundResult:
    winner: Optional[Player] = None
    loser: Optional[Player] = None
    transferred_weapon: Optional[Weapon] = None
    is_game_over: bool = False
    game_winner: Optional[Player] = None


@dataclass
class MatchState:
    id: str
    phase: str = WAITING_FOR_PLAYERS
    players: List[Player] = field(default_factory=list)       # [player 1, player 2]
    board: Board = field(default_factory=Board)
    current_player: int = 1                 # 1 | 2, index into players + 1
    round_number: int = 1
    max_rounds: int = 10                    # advisory, exhaustion ends the match
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    last_activity: float = field(default_factory=time.time)
    last_result: Optional[RoundResult] = None
    catalog: Optional[Dict[str, List[Weapon]]] = None         # None -> weapons.CATALOG

    def player_by_id(self, player_id: str) -> Optional[Player]:
        for p in self.players:
            if p.id == player_id:
                return p
        return None

    def player_number(self, player_id: str) -> int:
        """1-based roster position, 0 when the id is not in the match."""
        for i, p in enumerate(self.players):
            if p.id == player_id:
                return i + 1
        return 0
