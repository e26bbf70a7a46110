"""Signing credentials and the signing backend interface."""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import logging
from typing import Protocol, runtime_checkable

from enterprise_build.errors import InvalidSigningCredentialError
from enterprise_build.publication import Artifact, Signature

logger = logging.getLogger(__name__)

__all__ = ["SigningBackend", "HmacSigningBackend", "decode_signing_key"]


@runtime_checkable
class SigningBackend(Protocol):
    """Produces detached signatures over publication artifacts."""

    def sign(self, key: str, passphrase: str, artifacts: list[Artifact]) -> list[Signature]: ...


class HmacSigningBackend:
    """HMAC-SHA256 signer keyed by the decoded key material and passphrase.

    Deterministic for identical inputs. The signature covers each artifact's
    identity (file name and classifier) only, not its bytes; signing file
    contents is left to an external backend such as an in-memory PGP signer,
    plugged in through ``Build(signer=...)``.
    """

    algorithm = "HMAC-SHA256"

    def sign(self, key: str, passphrase: str, artifacts: list[Artifact]) -> list[Signature]:
        secret = hashlib.sha256(key.encode("utf-8") + b"\0" + passphrase.encode("utf-8")).digest()
        signatures: list[Signature] = []
        for artifact in artifacts:
            message = f"{artifact.file_name}\0{artifact.classifier or ''}".encode("utf-8")
            signatures.append(
                Signature(
                    artifact=artifact.file_name,
                    file_name=f"{artifact.file_name}.asc",
                    algorithm=self.algorithm,
                    value=hmac.new(secret, message, hashlib.sha256).hexdigest(),
                )
            )
        logger.debug("Signed %d artifacts", len(signatures))
        return signatures


def decode_signing_key(payload: str | None, property_name: str = "base64SigningKey") -> str:
    """Decode base64-encoded in-memory key material to text.

    Raises:
        InvalidSigningCredentialError: If the payload is missing, not strict
            base64, empty, or not UTF-8 text.
    """
    if payload is None or not str(payload).strip():
        raise InvalidSigningCredentialError(
            reason=f"property '{property_name}' is required when a signing passphrase is set",
            property_name=property_name,
        )
    try:
        raw = base64.b64decode(str(payload).strip(), validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidSigningCredentialError(
            reason=f"property '{property_name}' is not valid base64",
            property_name=property_name,
            cause=e,
        ) from e
    try:
        key = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidSigningCredentialError(
            reason=f"property '{property_name}' does not decode to UTF-8 text",
            property_name=property_name,
            cause=e,
        ) from e
    if not key.strip():
        raise InvalidSigningCredentialError(
            reason=f"property '{property_name}' decodes to empty key material",
            property_name=property_name,
        )
    return key
