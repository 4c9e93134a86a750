"""Caller identity supplied by the mini-app host.

Use Case:
- Telegram WebApp passes `initData` (a query string) to the embedded app
- The `user` field holds JSON with the Telegram user id
- Without an id, booking is disabled

Pattern: same trust level as the WebApp's `initDataUnsafe`; the signature is not checked.
"""
import json
import os
from enum import Enum
from typing import Optional, Dict, Any
from urllib.parse import parse_qs


class Host(str, Enum):
    """Where the identity came from."""
    TELEGRAM = "telegram"
    EXPLICIT = "explicit"
    NONE = "none"


class HostIdentity:
    """Resolved caller identity."""

    def __init__(self, user_id: Optional[str] = None, host: Host = Host.NONE,
                 user: Optional[Dict[str, Any]] = None):
        self.user_id = user_id
        self.host = host
        self.user = user or {}

    @property
    def can_book(self) -> bool:
        return bool(self.user_id)

    @property
    def display_name(self) -> Optional[str]:
        return self.user.get("first_name") or self.user.get("username")

    @staticmethod
    def parse_init_data(init_data: str) -> Dict[str, Any]:
        """
        Extract the `user` object from Telegram initData.

        Args:
            init_data: Raw query string, e.g. "query_id=..&user=%7B%22id%22%3A42%7D&hash=.."

        Returns:
            User dict, empty if absent or malformed
        """
        if not init_data:
            return {}

        params = parse_qs(init_data, keep_blank_values=True)
        raw_user = params.get("user", [""])[0]
        if not raw_user:
            return {}

        try:
            user = json.loads(raw_user)
        except json.JSONDecodeError:
            return {}

        return user if isinstance(user, dict) else {}

    @classmethod
    def resolve(cls, user_id: Optional[str] = None, init_data: Optional[str] = None,
                environ: Optional[Dict[str, str]] = None) -> "HostIdentity":
        """
        Resolve identity from an explicit id, Telegram initData, or the environment.

        Priority: explicit user_id > init_data > SLOTBOOK_USER_ID > TELEGRAM_INIT_DATA.
        """
        environ = os.environ if environ is None else environ

        if user_id:
            return cls(str(user_id), Host.EXPLICIT)

        init_data = init_data or None
        if init_data is not None:
            return cls._from_init_data(init_data)

        env_user = environ.get("SLOTBOOK_USER_ID")
        if env_user:
            return cls(env_user, Host.EXPLICIT)

        env_init = environ.get("TELEGRAM_INIT_DATA")
        if env_init:
            return cls._from_init_data(env_init)

        return cls()

    @classmethod
    def _from_init_data(cls, init_data: str) -> "HostIdentity":
        user = cls.parse_init_data(init_data)
        tg_id = user.get("id")
        if not tg_id:
            return cls()
        return cls(str(tg_id), Host.TELEGRAM, user)
