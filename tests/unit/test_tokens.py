"""Unit tests for single-use request tokens."""

from __future__ import annotations

from settingsform.tokens import (
    EXPORT_ACTION,
    IMPORT_ACTION,
    SingleUseTokenService,
    TokenService,
)


class TestSingleUseTokenService:
    """Tests for SingleUseTokenService."""

    def test_issue_unique(self) -> None:
        """Test every issued token is distinct."""
        tokens = SingleUseTokenService()

        issued = {tokens.issue(EXPORT_ACTION) for _ in range(20)}

        assert len(issued) == 20
        assert len(tokens) == 20

    def test_verify_once(self) -> None:
        """Test a token verifies exactly once."""
        tokens = SingleUseTokenService()
        token = tokens.issue(IMPORT_ACTION)

        assert tokens.verify(token, IMPORT_ACTION) is True
        assert tokens.verify(token, IMPORT_ACTION) is False
        assert len(tokens) == 0

    def test_wrong_action_not_consumed(self) -> None:
        """Test a token presented for another action stays valid."""
        tokens = SingleUseTokenService()
        token = tokens.issue(IMPORT_ACTION)

        assert tokens.verify(token, EXPORT_ACTION) is False
        assert tokens.verify(token, IMPORT_ACTION) is True

    def test_missing_or_unknown_token(self) -> None:
        """Test empty and unknown tokens are rejected."""
        tokens = SingleUseTokenService()

        assert tokens.verify(None, EXPORT_ACTION) is False
        assert tokens.verify("", EXPORT_ACTION) is False
        assert tokens.verify("forged", EXPORT_ACTION) is False

    def test_satisfies_protocol(self) -> None:
        """Test the service is a TokenService."""
        assert isinstance(SingleUseTokenService(), TokenService)
