from __future__ import annotations

import jwt
from jwt import PyJWKClient

from messaging_service.application.dto.principal import Principal
from messaging_service.infrastructure.auth.claims import principal_from_claims


class JWKSVerifier:
    """Verify JWTs issued by the portal identity provider via its JWKS endpoint."""

    def __init__(self, jwks_url: str) -> None:
        self._jwk_client = PyJWKClient(jwks_url)

    async def verify(self, token: str) -> Principal:
        signing_key = self._jwk_client.get_signing_key_from_jwt(token)
        payload = jwt.decode(
            token,
            signing_key.key,
            algorithms=["RS256", "ES256"],
        )
        return principal_from_claims(payload)
