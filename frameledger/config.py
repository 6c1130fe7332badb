# frameledger/config.py
import os
from dataclasses import dataclass, field
from typing import List, Optional


def _env_truthy(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


DEFAULT_DATABASE_URL = "sqlite:///./data.db"

# Schémas Postgres des hébergeurs -> pilote psycopg 3
_PG_PREFIXES = ("postgres://", "postgresql://")


def _normalize_database_url(url: str) -> str:
    url = (url or "").strip()
    if not url:
        return DEFAULT_DATABASE_URL
    for prefix in _PG_PREFIXES:
        if url.startswith(prefix):
            return "postgresql+psycopg://" + url[len(prefix):]
    return url


def _split_origins(raw: str) -> List[str]:
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or ["*"]


@dataclass(frozen=True)
class Settings:
    database_url: str
    db_pool_size: int = 5
    db_max_overflow: int = 10
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    # Politique de stock: une vente peut faire passer la quantité sous zéro
    allow_negative_stock: bool = True
    # Politique d'import CSV: rafraîchir prix/description des montures existantes
    refresh_existing_frames: bool = False
    log_level: str = "INFO"


def load_settings() -> Settings:
    return Settings(
        database_url=_normalize_database_url(os.getenv("DATABASE_URL", "")),
        db_pool_size=int(os.getenv("DB_POOL_SIZE", "5")),
        db_max_overflow=int(os.getenv("DB_MAX_OVERFLOW", "10")),
        cors_origins=_split_origins(os.getenv("CORS_ORIGINS", "")),
        allow_negative_stock=_env_truthy("ALLOW_NEGATIVE_STOCK", True),
        refresh_existing_frames=_env_truthy("CSV_REFRESH_EXISTING_FRAMES", False),
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
    )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Retourne la configuration (lue une seule fois depuis l'environnement)."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def reload_settings() -> Settings:
    """Relit l'environnement (utile pour les tests)."""
    global _settings
    _settings = load_settings()
    return _settings
