"""Request principals: who the current request acts as."""

from dataclasses import dataclass
from typing import Union


ANONYMOUS_USER = "anonymousUser"


@dataclass(frozen=True)
class AuthenticAccount:
    """Principal of a request carrying a verified access token."""

    id: int
    username: str

    @property
    def is_anonymous(self) -> bool:
        return False


@dataclass(frozen=True)
class AnonymousPrincipal:
    """Principal of a request without credentials."""

    name: str = ANONYMOUS_USER

    @property
    def is_anonymous(self) -> bool:
        return True


ANONYMOUS = AnonymousPrincipal()

Principal = Union[AuthenticAccount, AnonymousPrincipal]
