"""Single-use request tokens for the import/export endpoints.

A token is issued for one action (``export_settings`` or
``import_settings``), embedded in the rendered form and verified exactly
once when the request comes back.
"""

from __future__ import annotations

import secrets
from typing import Protocol, runtime_checkable

from settingsform.logging import get_logger

__all__ = [
    "EXPORT_ACTION",
    "IMPORT_ACTION",
    "TokenService",
    "SingleUseTokenService",
]

logger = get_logger(__name__)

EXPORT_ACTION = "export_settings"
IMPORT_ACTION = "import_settings"


@runtime_checkable
class TokenService(Protocol):
    """Issues and verifies request tokens scoped to an action."""

    def issue(self, action: str) -> str: ...

    def verify(self, token: str | None, action: str) -> bool: ...


class SingleUseTokenService:
    """In-memory token service; every token verifies at most once.

    Example:
        ```python
        tokens = SingleUseTokenService()
        token = tokens.issue("import_settings")
        tokens.verify(token, "import_settings")  # True
        tokens.verify(token, "import_settings")  # False, already consumed
        ```
    """

    def __init__(self, nbytes: int = 16) -> None:
        self._nbytes = nbytes
        self._issued: dict[str, str] = {}

    def issue(self, action: str) -> str:
        token = secrets.token_urlsafe(self._nbytes)
        self._issued[token] = action
        return token

    def verify(self, token: str | None, action: str) -> bool:
        """Consume ``token`` if it was issued for ``action``.

        A token presented for the wrong action is not consumed.
        """
        if not token or self._issued.get(token) != action:
            logger.info("token_rejected", action=action)
            return False
        del self._issued[token]
        return True

    def __len__(self) -> int:
        return len(self._issued)
