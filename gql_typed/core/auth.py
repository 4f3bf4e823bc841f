"""Request header sources for the GraphQL executor.

An ``Auth`` supplies headers sent with every request of an executor.
Per-call headers passed to ``execute``/``call`` are applied on top.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Auth(Protocol):
    """Protocol for client-level header providers.

    Example:
        class TenantAuth:
            def __init__(self, token: str, tenant: str):
                self.token = token
                self.tenant = tenant

            def get_headers(self) -> dict[str, str]:
                return {"Authorization": f"Bearer {self.token}", "X-Tenant": self.tenant}
    """

    def get_headers(self) -> dict[str, str]:
        """Return headers to include in requests."""
        ...


class BearerAuth:
    """``Authorization: Bearer <token>``."""

    def __init__(self, token: str):
        self.token = token

    def get_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


class HeaderAuth:
    """A fixed set of headers."""

    def __init__(self, headers: dict[str, str]):
        self._headers = dict(headers)

    def get_headers(self) -> dict[str, str]:
        return dict(self._headers)


class NoAuth:
    """No headers (public endpoints, tests)."""

    def get_headers(self) -> dict[str, str]:
        return {}


def parse_header(text: str) -> tuple[str, str]:
    """Split a ``"Name: value"`` header line.

    Raises:
        ValueError: If there is no colon or the name is empty
    """
    name, sep, value = text.partition(":")
    name = name.strip()
    if not sep or not name:
        raise ValueError(f"Invalid header {text!r}, expected 'Name: value'")
    return name, value.strip()
