"""
Access gate for secret-protected assessments.

An assessment may carry an operator-chosen secret. Candidates must present it
before the question content is released. How the secret is stored and compared
is a SecretPolicy so the plain shared-secret check can be swapped for a hashed
one without touching callers.
"""
import hashlib
import hmac
import logging
import secrets
from typing import Optional

from assessment_platform.core.config import settings
from assessment_platform.core.exceptions import AuthRequired
from assessment_platform.models.assessment import Assessment

logger = logging.getLogger(__name__)


class SecretPolicy:
    """Stores and compares assessment secrets."""

    name = "base"

    def prepare(self, secret: str) -> str:
        """Transform a secret before it is persisted."""
        raise NotImplementedError

    def matches(self, stored: str, supplied: str) -> bool:
        raise NotImplementedError


class PlainSecretPolicy(SecretPolicy):
    """Secret stored as given and compared by exact string equality."""

    name = "plain"

    def prepare(self, secret: str) -> str:
        return secret

    def matches(self, stored: str, supplied: str) -> bool:
        return hmac.compare_digest(stored.encode("utf-8"), supplied.encode("utf-8"))


class HashedSecretPolicy(SecretPolicy):
    """Secret stored as a salted PBKDF2-SHA256 digest.

    Stored values look like ``pbkdf2_sha256$<iterations>$<salt>$<digest>``.
    Values without that prefix were written under the plain policy and are
    compared as plain strings.
    """

    name = "hashed"
    prefix = "pbkdf2_sha256"

    def __init__(self, iterations: int = 120_000):
        self.iterations = iterations

    def _derive(self, secret: str, salt: str, iterations: int) -> str:
        digest = hashlib.pbkdf2_hmac("sha256", secret.encode("utf-8"), salt.encode("utf-8"), iterations)
        return digest.hex()

    def prepare(self, secret: str) -> str:
        salt = secrets.token_hex(16)
        digest = self._derive(secret, salt, self.iterations)
        return f"{self.prefix}${self.iterations}${salt}${digest}"

    def matches(self, stored: str, supplied: str) -> bool:
        parts = stored.split("$")
        if len(parts) != 4 or parts[0] != self.prefix:
            return PlainSecretPolicy().matches(stored, supplied)
        _, iterations, salt, digest = parts
        try:
            candidate = self._derive(supplied, salt, int(iterations))
        except ValueError:
            logger.error("Stored assessment secret has an unreadable iteration count")
            return False
        return hmac.compare_digest(candidate, digest)


def get_secret_policy(name: Optional[str] = None) -> SecretPolicy:
    """Policy selected by name, defaulting to the SECRET_POLICY setting."""
    name = name or settings.SECRET_POLICY
    if name == "hashed":
        return HashedSecretPolicy(iterations=settings.HASH_ITERATIONS)
    if name == "plain":
        return PlainSecretPolicy()
    raise ValueError(f"Unknown secret policy: {name}")


class AccessGate:
    """Decides whether a candidate may see an assessment's questions."""

    def __init__(self, policy: Optional[SecretPolicy] = None):
        self.policy = policy or get_secret_policy()

    def check(self, assessment: Assessment, credential: Optional[str]) -> None:
        """Return silently when access is granted, raise AuthRequired otherwise."""
        if not assessment.is_gated:
            return

        if not credential:
            logger.info(f"Secret required for assessment {assessment.id}")
            raise AuthRequired("Secret required", missing=True)

        if not self.policy.matches(assessment.secret, credential):
            logger.warning(f"Invalid secret supplied for assessment {assessment.id}")
            raise AuthRequired("Invalid secret", missing=False)

    def is_allowed(self, assessment: Assessment, credential: Optional[str]) -> bool:
        try:
            self.check(assessment, credential)
        except AuthRequired:
            return False
        return True
