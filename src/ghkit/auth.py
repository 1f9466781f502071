"""Authorization providers.

A provider supplies the value of the ``Authorization`` header; the client
attaches whatever the provider returns and never manages token refresh,
scopes or JWT construction itself.
"""

from typing import Protocol, runtime_checkable

__all__ = [
    "ANONYMOUS",
    "AuthorizationProvider",
    "ImmutableAuthorizationProvider",
]


@runtime_checkable
class AuthorizationProvider(Protocol):
    """Supplies the Authorization header value for each request."""

    def encoded_authorization(self) -> str | None:
        """Return the full header value, or None for anonymous access."""
        ...


class ImmutableAuthorizationProvider:
    """Authorization provider backed by a fixed header value.

    Example:
        >>> provider = ImmutableAuthorizationProvider.from_oauth_token("ghp_x")
        >>> provider.encoded_authorization()
        'token ghp_x'
    """

    def __init__(self, authorization: str | None, login: str | None = None) -> None:
        self._authorization = authorization
        self.login = login

    @classmethod
    def from_oauth_token(
        cls, oauth_token: str, login: str | None = None
    ) -> "ImmutableAuthorizationProvider":
        return cls(f"token {oauth_token}", login=login)

    @classmethod
    def from_jwt_token(cls, jwt_token: str) -> "ImmutableAuthorizationProvider":
        return cls(f"Bearer {jwt_token}")

    @classmethod
    def from_app_installation_token(
        cls, app_installation_token: str
    ) -> "ImmutableAuthorizationProvider":
        return cls(f"token {app_installation_token}")

    def encoded_authorization(self) -> str | None:
        return self._authorization

    def __repr__(self) -> str:
        kind = "anonymous" if self._authorization is None else self._authorization.split(" ", 1)[0]
        return f"ImmutableAuthorizationProvider({kind}, login={self.login!r})"


ANONYMOUS = ImmutableAuthorizationProvider(None)
