"""Import and export of a whole settings group as one JSON document.

Export writes the raw persisted blob, without schema validation, as
canonical JSON (sorted keys, UTF-8). Import replaces the blob in a single
write; keys the schema does not know are kept.

The ``handle_*_request`` methods are the endpoint side: they check the group,
then verify the single-use token and delegate. The import endpoint reports
success or failure through ``ImportResult`` instead of raising.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from settingsform.exceptions import ForbiddenError, InvalidFormatError
from settingsform.logging import get_logger, request_context
from settingsform.schema.keys import option_name
from settingsform.store.settings_store import SettingsStore
from settingsform.tokens import (
    EXPORT_ACTION,
    IMPORT_ACTION,
    SingleUseTokenService,
    TokenService,
)

__all__ = [
    "EXPORT_CONTENT_TYPE",
    "DEFAULT_FILENAME_PREFIX",
    "ExportDocument",
    "ImportResult",
    "SettingsTransfer",
    "export_filename",
]

logger = get_logger(__name__)

EXPORT_CONTENT_TYPE = "text/json; charset=utf-8"
DEFAULT_FILENAME_PREFIX = "wpsf-settings-"


def export_filename(group_id: str, prefix: str = DEFAULT_FILENAME_PREFIX) -> str:
    """Download name of an export, e.g. ``wpsf-settings-my_plugin.json``."""
    return f"{prefix}{group_id}.json"


@dataclass(frozen=True, slots=True)
class ExportDocument:
    """An export ready to be sent as a file download.

    Attributes:
        group_id: Exported settings group.
        body: Canonical JSON bytes.
        filename: Suggested download file name.
        content_type: HTTP content type of ``body``.
    """

    group_id: str
    body: bytes
    filename: str
    content_type: str = EXPORT_CONTENT_TYPE

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Content-Type": self.content_type,
            "Content-Disposition": f"attachment; filename={self.filename}",
        }


@dataclass(frozen=True, slots=True)
class ImportResult:
    """Outcome of an import request.

    Attributes:
        success: Whether the blob was replaced.
        group_id: Group the request targeted.
        keys: Number of keys written (0 on failure).
        error: Reason of a rejected import.
    """

    success: bool
    group_id: str
    keys: int = 0
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "group_id": self.group_id,
            "keys": self.keys,
            "error": self.error,
        }


class SettingsTransfer:
    """Export/import pipeline bound to one settings store.

    Attributes:
        store: The store whose group is exported and imported.
        tokens: Token service guarding the request handlers.
        filename_prefix: Prefix of export file names.

    Example:
        ```python
        transfer = SettingsTransfer(store)
        document = transfer.export_document("my_plugin")
        other.import_settings("my_plugin", document.body)
        ```
    """

    def __init__(
        self,
        store: SettingsStore,
        tokens: TokenService | None = None,
        filename_prefix: str = DEFAULT_FILENAME_PREFIX,
    ) -> None:
        self.store = store
        self.tokens = tokens if tokens is not None else SingleUseTokenService()
        self.filename_prefix = filename_prefix

    @property
    def group_id(self) -> str:
        return self.store.group_id

    def _check_group(self, group_id: str | None) -> str:
        if not group_id:
            raise ForbiddenError("No option group specified", group_id=group_id)
        if group_id != self.group_id:
            raise ForbiddenError(
                f"Option group '{group_id}' does not match '{self.group_id}'",
                group_id=group_id,
            )
        return group_id

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    def export_settings(self, group_id: str) -> bytes:
        """Canonical JSON of the persisted blob, ``{}`` when nothing is stored.

        Raises:
            ForbiddenError: If ``group_id`` is not the store's group.
        """
        self._check_group(group_id)
        stored = self.store.backend.get(option_name(group_id))
        body = json.dumps(
            stored if stored is not None else {},
            sort_keys=True,
            ensure_ascii=False,
            separators=(",", ":"),
        ).encode("utf-8")
        logger.info("settings_exported", group_id=group_id, size=len(body))
        return body

    def export_document(self, group_id: str) -> ExportDocument:
        return ExportDocument(
            group_id=group_id,
            body=self.export_settings(group_id),
            filename=export_filename(group_id, self.filename_prefix),
        )

    # -------------------------------------------------------------------------
    # Import
    # -------------------------------------------------------------------------

    def import_settings(
        self, group_id: str, document: str | bytes | Mapping[str, Any]
    ) -> ImportResult:
        """Replace the stored blob with ``document``.

        Args:
            group_id: Group the document is meant for.
            document: JSON text (or an already decoded mapping).

        Returns:
            A successful ImportResult.

        Raises:
            ForbiddenError: If ``group_id`` is not the store's group.
            InvalidFormatError: If the document is not a JSON object.
        """
        self._check_group(group_id)
        values = _decode_document(document)
        self.store.replace(values)
        logger.info("settings_imported", group_id=group_id, keys=len(values))
        return ImportResult(success=True, group_id=group_id, keys=len(values))

    # -------------------------------------------------------------------------
    # Request handlers
    # -------------------------------------------------------------------------

    def handle_export_request(self, params: Mapping[str, Any]) -> ExportDocument:
        """Serve an export request carrying ``token`` and ``group_id``.

        The group is checked before the token, so a request for a foreign
        group leaves the token unused.

        Raises:
            ForbiddenError: If the token is invalid or the group is foreign.
        """
        group_id = params.get("group_id") or ""
        with request_context(group_id=group_id, action=EXPORT_ACTION):
            try:
                self._check_group(group_id)
            except ForbiddenError as e:
                logger.warning("export_rejected", reason="forbidden", error=e.message)
                raise
            if not self.tokens.verify(params.get("token"), EXPORT_ACTION):
                logger.warning("export_rejected", reason="invalid_token")
                raise ForbiddenError("Action failed", group_id=group_id)
            return self.export_document(group_id)

    def handle_import_request(self, form: Mapping[str, Any]) -> ImportResult:
        """Serve an import request carrying ``token``, ``group_id``, ``settings``.

        Never raises for a rejected request; the result says what happened.
        """
        group_id = form.get("group_id") or ""
        with request_context(group_id=group_id, action=IMPORT_ACTION):
            try:
                self._check_group(group_id)
                if not self.tokens.verify(form.get("token"), IMPORT_ACTION):
                    raise ForbiddenError("Action failed", group_id=group_id)
                return self.import_settings(group_id, form.get("settings"))
            except (ForbiddenError, InvalidFormatError) as e:
                logger.warning(
                    "import_rejected", reason=type(e).__name__, error=e.message
                )
                return ImportResult(success=False, group_id=group_id, error=e.message)


def _decode_document(document: Any) -> dict[str, Any]:
    if isinstance(document, Mapping):
        return dict(document)
    if isinstance(document, bytes):
        try:
            document = document.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidFormatError("Settings document is not UTF-8", e) from e
    if not isinstance(document, str):
        raise InvalidFormatError("Settings document must be a JSON string")
    try:
        decoded = json.loads(document)
    except json.JSONDecodeError as e:
        raise InvalidFormatError(f"Settings document is not valid JSON: {e}", e) from e
    if not isinstance(decoded, dict):
        raise InvalidFormatError("Settings document must be a JSON object")
    return decoded
