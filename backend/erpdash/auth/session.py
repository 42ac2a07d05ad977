"""The authenticated-session collaborator.

Repositories and the trash ledger only ever ask one question of it: who
is the current user? `None` means nobody is signed in, which reads treat
as "no data" and writes treat as a hard failure.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserSession:
    user_id: str | None = None

    def current_user(self) -> str | None:
        return self.user_id

    @property
    def is_authenticated(self) -> bool:
        return bool(self.user_id)
