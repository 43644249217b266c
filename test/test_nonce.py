"""
Tests for anti-forgery tokens.
"""

from app.utils.nonce import create_nonce, nonce_scope, verify_nonce


class TestNonce:
    def test_scope_uses_namespace_and_type(self):
        assert nonce_scope("post") == "update-meta-post"
        assert nonce_scope(None) == "update-meta-"

    def test_valid_nonce(self):
        token = create_nonce("update-meta-post", 7)
        assert verify_nonce(token, "update-meta-post", 7)

    def test_nonces_are_not_reused(self):
        assert create_nonce("update-meta-post", 7) != create_nonce("update-meta-post", 7)

    def test_other_scope_rejected(self):
        token = create_nonce("update-meta-post", 7)
        assert not verify_nonce(token, "update-meta-user", 7)

    def test_other_user_rejected(self):
        token = create_nonce("update-meta-post", 7)
        assert not verify_nonce(token, "update-meta-post", 8)

    def test_other_secret_rejected(self):
        token = create_nonce("update-meta-post", 7, secret_key="another-secret")
        assert not verify_nonce(token, "update-meta-post", 7)

    def test_expired_nonce_rejected(self):
        token = create_nonce("update-meta-post", 7)
        assert not verify_nonce(token, "update-meta-post", 7, max_age=-1)

    def test_tampered_nonce_rejected(self):
        token = create_nonce("update-meta-post", 7)
        assert not verify_nonce(token[:-2] + "xx", "update-meta-post", 7)

    def test_missing_or_non_string_rejected(self):
        assert not verify_nonce(None, "update-meta-post", 7)
        assert not verify_nonce("", "update-meta-post", 7)
        assert not verify_nonce(object(), "update-meta-post", 7)
