# runtime settings, read once from the environment

import os
from dataclasses import dataclass
from typing import Optional

from store.models import Role

DEFAULT_API_URL = "http://localhost:5000/api"
DEFAULT_ADMIN_PASSCODE = "200230"
DEFAULT_CHAT_MODEL = "gemini-2.5-flash"


@dataclass(frozen=True)
class Settings:
    api_url: str = DEFAULT_API_URL
    api_timeout: float = 5.0
    admin_passcode: str = DEFAULT_ADMIN_PASSCODE
    chat_api_key: Optional[str] = None
    chat_model: str = DEFAULT_CHAT_MODEL
    default_role: Role = Role.CUSTOMER


def _to_float(val: Optional[str], default: float) -> float:
    try:
        return float(val)
    except (TypeError, ValueError):
        return default


def _to_role(val: Optional[str]) -> Role:
    # admin can only be reached through the passcode check
    if val and val.strip().upper() == Role.GUEST.value:
        return Role.GUEST
    return Role.CUSTOMER


def load_settings() -> Settings:
    return Settings(
        api_url=os.getenv("STORE_API_URL", DEFAULT_API_URL).rstrip("/"),
        api_timeout=_to_float(os.getenv("STORE_API_TIMEOUT"), 5.0),
        admin_passcode=os.getenv("STORE_ADMIN_PASSCODE", DEFAULT_ADMIN_PASSCODE),
        chat_api_key=os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY") or None,
        chat_model=os.getenv("STORE_CHAT_MODEL", DEFAULT_CHAT_MODEL),
        default_role=_to_role(os.getenv("STORE_DEFAULT_ROLE")),
    )
