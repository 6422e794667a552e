"""Webhook signature verification."""

import hashlib
import hmac

from src.config import settings
from src.core.exceptions import SignatureVerificationError
from src.core.logging import get_logger

logger = get_logger("security")


def verify_github_signature(payload: bytes, signature: str) -> bool:
    """Verify GitHub webhook signature using HMAC-SHA256.

    Args:
        payload: Raw request body bytes
        signature: X-Hub-Signature-256 header value

    Returns:
        True if valid, False otherwise
    """
    if not settings.github_webhook_secret:
        logger.warning("No GitHub webhook secret configured, skipping verification")
        return True

    expected = hmac.new(
        settings.github_webhook_secret.encode(),
        payload,
        hashlib.sha256,
    ).hexdigest()

    expected_signature = f"sha256={expected}"
    return hmac.compare_digest(expected_signature, signature or "")


def require_github_signature(payload: bytes, signature: str) -> None:
    """Verify GitHub signature or raise exception.

    Raises:
        SignatureVerificationError: If signature is invalid
    """
    if not verify_github_signature(payload, signature):
        logger.warning("Invalid GitHub webhook signature")
        raise SignatureVerificationError("GitHub webhook")
