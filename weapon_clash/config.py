# weapon_clash/config.py
import os


DEFAULT_SECRET_KEY = 'you-will-never-guess'


def _flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or DEFAULT_SECRET_KEY
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '3001'))
    APP_ENV = os.environ.get('APP_ENV', 'development')
    IS_PRODUCTION = APP_ENV == 'production'
    CORS_ORIGINS = [o.strip() for o in os.environ.get(
        'CORS_ORIGINS', 'http://localhost:3000,http://127.0.0.1:3000').split(',') if o.strip()]
    # Idle matches are destroyed after this many seconds without activity
    GAME_TIMEOUT_SEC = int(os.environ.get('GAME_TIMEOUT_SEC', '300'))
    MAX_ACTIVE_GAMES = int(os.environ.get('MAX_ACTIVE_GAMES', '100'))
    MAX_ROUNDS = int(os.environ.get('MAX_ROUNDS', '10'))
    # Idle sweep interval (seconds)
    HEALTH_CHECK_INTERVAL_SEC = int(os.environ.get('HEALTH_CHECK_INTERVAL_SEC', '30'))
    ENABLE_VERBOSE_LOGS = _flag('ENABLE_VERBOSE_LOGS')
    LOG_LEVEL = os.environ.get('LOG_LEVEL') or ('WARNING' if IS_PRODUCTION else 'INFO')
    APP_VERSION = os.environ.get('APP_VERSION', '1.0.0')
    APP_NAME = 'Tic-Tac-Toe Weapon Collection'


def validate_config(config) -> None:
    """Raises ValueError for settings the server cannot run with."""
    port = config.get('PORT')
    if not isinstance(port, int) or not 1 <= port <= 65535:
        raise ValueError(f"Invalid port number: {port}")
    for key in ('GAME_TIMEOUT_SEC', 'MAX_ACTIVE_GAMES', 'HEALTH_CHECK_INTERVAL_SEC', 'MAX_ROUNDS'):
        value = config.get(key)
        if not isinstance(value, int) or value <= 0:
            raise ValueError(f"{key} must be a positive integer, got {value!r}")
    if config.get('IS_PRODUCTION') and config.get('SECRET_KEY') in (None, '', DEFAULT_SECRET_KEY):
        raise ValueError("SECRET_KEY must be set in production")
