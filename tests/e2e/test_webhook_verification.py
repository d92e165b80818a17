"""End-to-end tests for webhook verification."""

import pytest
from hypothesis import HealthCheck, given, settings, strategies as st

from src.config import Settings, get_settings
from src.main import app


class TestWebhookVerification:
    """Test WhatsApp webhook verification endpoint."""

    def test_webhook_verification_success(self, test_client):
        """Test webhook verification with correct token."""
        response = test_client.get(
            "/webhook",
            params={
                "hub.mode": "subscribe",
                "hub.verify_token": "test-verify-token",
                "hub.challenge": "challenge-123",
            },
        )

        assert response.status_code == 200
        assert response.text == "challenge-123"
        # Should be plain text, not JSON
        assert response.headers["content-type"] == "text/plain; charset=utf-8"

    def test_webhook_verification_fails_invalid_token(self, test_client):
        response = test_client.get(
            "/webhook",
            params={
                "hub.mode": "subscribe",
                "hub.verify_token": "wrong-token",
                "hub.challenge": "challenge-123",
            },
        )

        assert response.status_code == 403
        assert response.text == "Forbidden"
        assert "challenge-123" not in response.text

    def test_webhook_verification_fails_wrong_mode(self, test_client):
        response = test_client.get(
            "/webhook",
            params={
                "hub.mode": "unsubscribe",
                "hub.verify_token": "test-verify-token",
                "hub.challenge": "challenge-123",
            },
        )

        assert response.status_code == 403

    def test_webhook_verification_no_params(self, test_client):
        assert test_client.get("/webhook").status_code == 403

    def test_webhook_verification_missing_challenge(self, test_client):
        """A verified handshake without challenge echoes an empty body."""
        response = test_client.get(
            "/webhook",
            params={"hub.mode": "subscribe", "hub.verify_token": "test-verify-token"},
        )

        assert response.status_code == 200
        assert response.text == ""

    @pytest.mark.parametrize(
        "params",
        [
            {"hub.mode": "subscribe", "hub.verify_token": "", "hub.challenge": "c"},
            {"hub.mode": "subscribe", "hub.challenge": "c"},
        ],
    )
    def test_unset_verify_token_matches_empty_token(self, test_client, params):
        app.dependency_overrides[get_settings] = lambda: Settings(
            _env_file=None, webhook_verify_token=""
        )

        response = test_client.get("/webhook", params=params)

        assert response.status_code == 200
        assert response.text == "c"

    def test_unset_verify_token_rejects_non_empty_token(self, test_client):
        app.dependency_overrides[get_settings] = lambda: Settings(
            _env_file=None, webhook_verify_token=""
        )

        response = test_client.get(
            "/webhook",
            params={"hub.mode": "subscribe", "hub.verify_token": "x", "hub.challenge": "c"},
        )

        assert response.status_code == 403

    @settings(suppress_health_check=[HealthCheck.function_scoped_fixture], max_examples=50)
    @given(
        mode=st.sampled_from(["subscribe", "unsubscribe", "SUBSCRIBE", ""]),
        token=st.sampled_from(["test-verify-token", "wrong", "", "test-verify-token "]),
        challenge=st.text(
            alphabet=st.characters(min_codepoint=33, max_codepoint=126), max_size=40
        ),
    )
    def test_verification_contract(self, test_client, mode, token, challenge):
        """Property: 200 with the challenge iff mode and token match, else 403."""
        response = test_client.get(
            "/webhook",
            params={
                "hub.mode": mode,
                "hub.verify_token": token,
                "hub.challenge": challenge,
            },
        )

        if mode == "subscribe" and token == "test-verify-token":
            assert response.status_code == 200
            assert response.text == challenge
        else:
            assert response.status_code == 403
            assert response.text == "Forbidden"
