"""Google ID token verification via the tokeninfo endpoint."""

from dataclasses import dataclass

import httpx

from virtual_fridge.domain.users import GoogleUserInfo
from virtual_fridge.errors import AuthenticationError
from virtual_fridge.services.auth import GoogleTokenVerifier

GOOGLE_TOKENINFO_URL = "https://oauth2.googleapis.com/tokeninfo"


@dataclass
class HttpxGoogleTokenVerifier(GoogleTokenVerifier):
    """Verifies ID tokens with Google and checks the audience."""

    client_id: str
    http_client: httpx.AsyncClient
    tokeninfo_url: str = GOOGLE_TOKENINFO_URL

    @classmethod
    def create(cls, client_id: str) -> "HttpxGoogleTokenVerifier":
        """Create a verifier with a managed httpx session."""
        return cls(client_id=client_id, http_client=httpx.AsyncClient())

    async def verify(self, id_token: str) -> GoogleUserInfo:
        """Return the identity claims of a valid token."""
        response = await self.http_client.get(
            self.tokeninfo_url, params={"id_token": id_token}, timeout=10
        )
        if response.status_code != httpx.codes.OK:
            raise AuthenticationError("Invalid Google token")
        claims = response.json()
        if claims.get("aud") != self.client_id:
            raise AuthenticationError("Invalid Google token")
        if not claims.get("sub") or not claims.get("email") or not claims.get("name"):
            raise AuthenticationError("Invalid Google token")
        return GoogleUserInfo(
            google_id=claims["sub"],
            email=claims["email"],
            name=claims["name"],
            profile_picture=claims.get("picture"),
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
