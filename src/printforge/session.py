"""Guest session identity attached to new cart line items."""

import uuid
from typing import Callable, Optional


class SessionIdentity:
    """
    Lazily created, opaque guest session identifier.

    The identifier is created on first use and then returned unchanged. The
    library never parses it.
    """

    def __init__(
        self,
        session_id: Optional[str] = None,
        factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ) -> None:
        self._session_id = session_id
        self._factory = factory

    @property
    def session_id(self) -> str:
        """Current session id, created on first access."""
        if self._session_id is None:
            self._session_id = self._factory()
        return self._session_id

    def reset(self) -> None:
        """Forget the current id so the next access creates a new one."""
        self._session_id = None

    def __repr__(self) -> str:
        return f"SessionIdentity(session_id={self._session_id!r})"
