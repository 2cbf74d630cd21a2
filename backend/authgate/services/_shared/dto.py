# comments in English; reST docstrings strict
from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

#: Returns the current unix time in seconds. Injected so tests can pin time.
Clock = Callable[[], float]

system_clock: Clock = time.time


@dataclass(frozen=True, slots=True)
class UserIdentity:
    """
    Opaque identity resolved from the user directory or from token claims.

    :param user_id: Numeric identifier in the user directory.
    :type user_id: int
    :param display_name: Optional human-readable name carried in tokens.
    :type display_name: str | None
    """

    user_id: int
    display_name: str | None = None
