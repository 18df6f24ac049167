"""The authenticated identity attached to a request."""

from dataclasses import dataclass

from yogastudio.db.models import User


@dataclass(frozen=True)
class Principal:
    """Snapshot of a user taken when the request was authenticated.

    Frozen: it is not refreshed if the user row changes mid-request.
    """

    id: int
    username: str
    first_name: str
    last_name: str
    password_hash: str
    is_admin: bool = False

    @classmethod
    def from_user(cls, user: User) -> "Principal":
        return cls(
            id=user.id,
            username=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            password_hash=user.password_hash,
            is_admin=bool(user.admin),
        )
