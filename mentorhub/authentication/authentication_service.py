import os
import jwt
import requests
from typing import Any
from starlette.datastructures import Headers
from mentorhub.common.environment_constants import (
    AUTH_JWKS_URL,
    AUTH_JWT_SECRET,
    AUTH_JWT_AUDIENCE,
    AUTH_JWT_ISSUER,
)
from mentorhub.common.errors import UnauthorizedError
from mentorhub.dto.user_context_dto import UserContextDto

DEFAULT_AUDIENCE = "authenticated"
SHARED_SECRET_ALGORITHMS = ("HS256",)
ASYMMETRIC_ALGORITHMS = ("RS256", "ES256")


class AuthenticationService:
    """
    Service responsible for authenticating HTTP requests carrying auth-provider JWTs.

    Supports:
        1. Asymmetrically signed tokens (RS256 / ES256) verified against the
           provider's JWKS endpoint.
        2. HS256 tokens verified with the project's shared JWT secret.

    The resulting user context carries the token subject, email and the
    provider role claim. Application roles come from the caller's profile.
    """

    def __init__(
        self,
        logger,
        jwks_url: str | None = None,
        jwt_secret: str | None = None,
        audience: str | None = None,
        issuer: str | None = None,
    ):
        """
        Initialize the AuthenticationService.

        Args:
            logger: A logger instance.
            jwks_url (str | None): JWKS endpoint; read from AUTH_JWKS_URL when omitted.
            jwt_secret (str | None): HS256 secret; read from AUTH_JWT_SECRET when omitted.
            audience (str | None): Expected `aud` claim, defaults to "authenticated".
            issuer (str | None): Expected `iss` claim; not checked when unset.
        """
        self.logger = logger
        self.jwks_url = jwks_url or os.getenv(AUTH_JWKS_URL)
        self.jwt_secret = jwt_secret or os.getenv(AUTH_JWT_SECRET)
        self.audience = audience or os.getenv(AUTH_JWT_AUDIENCE, DEFAULT_AUDIENCE)
        self.issuer = issuer or os.getenv(AUTH_JWT_ISSUER)
        self._JWKS_CACHE = {}

    def authenticate_request(self, headers: Headers) -> UserContextDto:
        """
        Authenticate an incoming request from its bearer token.

        Args:
            headers (Headers): The request headers containing authentication information.

        Returns:
            UserContextDto: Contains the user's sub, primary_email, and roles.

        Raises:
            UnauthorizedError: If the token is missing or fails verification.
        """
        auth_header = headers.get("Authorization")
        if not auth_header or not auth_header.startswith("Bearer "):
            raise UnauthorizedError("Missing authentication credentials")

        token = auth_header.split(" ", 1)[1].strip()
        if not token:
            raise UnauthorizedError("Missing authentication credentials")

        return self._verify_token(token)

    def _verify_token(self, token: str) -> UserContextDto:
        """
        Verify a JWT with the key that matches its signing algorithm.

        Args:
            token (str): The bearer token.

        Returns:
            UserContextDto: User information built from the verified claims.
        """
        try:
            header = jwt.get_unverified_header(token)
        except jwt.PyJWTError:
            raise UnauthorizedError("Invalid JWT Header")

        algorithm = header.get("alg")
        if algorithm in SHARED_SECRET_ALGORITHMS:
            if not self.jwt_secret:
                raise UnauthorizedError("Shared-secret tokens are not accepted")
            key = self.jwt_secret
        elif algorithm in ASYMMETRIC_ALGORITHMS:
            key = self._get_signing_key(header)
        else:
            raise UnauthorizedError(f"Unsupported token algorithm: {algorithm}")

        try:
            payload = jwt.decode(
                token,
                key=key,
                algorithms=[algorithm],
                audience=self.audience,
                issuer=self.issuer,
                options={"verify_iss": bool(self.issuer)},
            )
        except jwt.PyJWTError as e:
            raise UnauthorizedError(f"Token Invalid: {str(e)}")

        return self._build_context(payload)

    def _get_signing_key(self, header: dict[str, Any]):
        """
        Retrieve the public key named by the token's `kid` header.

        Uses a local cache to reduce JWKS fetch requests.

        Args:
            header (dict): The unverified JWT header.

        Returns:
            The public key object for verifying the JWT.
        """
        kid = header.get("kid")
        if not kid:
            raise UnauthorizedError("Missing kid")

        if kid not in self._JWKS_CACHE:
            self._refresh_keys()
            if kid not in self._JWKS_CACHE:
                raise UnauthorizedError("Key not found")

        return self._JWKS_CACHE[kid]

    def _refresh_keys(self):
        """
        Fetch the provider's JWKS keys and update the local cache.
        """
        if not self.jwks_url:
            self.logger.warning("[AuthenticationService] %s is not set", AUTH_JWKS_URL)
            return

        try:
            r = requests.get(self.jwks_url, timeout=5)
            r.raise_for_status()
            for key_dict in r.json().get("keys", []):
                self._JWKS_CACHE[key_dict["kid"]] = jwt.PyJWK(key_dict).key
        except (requests.RequestException, ValueError, KeyError, jwt.PyJWTError) as e:
            self.logger.error("[AuthenticationService] JWKS fetch failed: %s", e)

    def _build_context(self, payload: dict[str, Any]) -> UserContextDto:
        """
        Build the UserContextDto from a verified token payload.

        Args:
            payload (dict): Decoded JWT payload.

        Returns:
            UserContextDto: Contains sub, primary_email, and roles.
        """
        sub = payload.get("sub")
        if not sub:
            raise UnauthorizedError("Token has no subject")

        role = payload.get("role")
        return UserContextDto(
            sub=sub,
            primary_email=payload.get("email") or "",
            roles=[role] if role else [],
        )
