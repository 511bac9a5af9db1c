# passport_connectors/core/config.py

from dotenv import load_dotenv
import os

load_dotenv()

DEFAULT_TIMEOUT_MS = 2000


def get_passport_api_key() -> str:
    key = os.getenv("PASSPORT_API_KEY")
    if not key:
        raise RuntimeError("PASSPORT_API_KEY manquante. Définir la var d'environnement ou passer la clé au client.")
    return key


def get_passport_base_url() -> str:
    url = os.getenv("PASSPORT_BASE_URL")
    if not url:
        raise RuntimeError("PASSPORT_BASE_URL manquante. Exemple: https://passport.example.com")
    return url.rstrip("/")


def get_timeout_ms(name: str, default: int = DEFAULT_TIMEOUT_MS) -> int:
    """Lit un timeout (en millisecondes) depuis l'environnement."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} invalide : '{raw}' (entier en millisecondes attendu).")


def get_connect_timeout() -> int:
    return get_timeout_ms("PASSPORT_CONNECT_TIMEOUT")


def get_read_timeout() -> int:
    return get_timeout_ms("PASSPORT_READ_TIMEOUT")


def get_application_id() -> str:
    # Utilisé uniquement par la démo de login
    return os.getenv("PASSPORT_APPLICATION_ID", "")
