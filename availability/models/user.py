# File: availability/models/user.py

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class User:
    """Minimal user record: the engine only needs existence and a name."""
    id: int
    display_name: str
    email: Optional[str] = None
