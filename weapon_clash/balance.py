# weapon_clash/balance.py
DEFAULTS = {
    "max_rounds": 10,
    "players_per_match": 2,
}

SYMBOLS = {
    "marvel": "\U0001F9B8\u200d\u2642\ufe0f",
    "dc": "\U0001F9B8\u200d\u2640\ufe0f",
}

UNIVERSE_NAMES = {
    "marvel": "Marvel",
    "dc": "DC",
}

# odd rounds open with FIRST_MOVER_ODD, even rounds with FIRST_MOVER_EVEN
FIRST_MOVER_ODD = "marvel"
FIRST_MOVER_EVEN = "dc"
