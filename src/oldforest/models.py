"""Database models for the Old Forest capsule.

Only the player registry is stored; games themselves live in memory.
"""

import datetime as dt

from sqlmodel import Field, SQLModel


def _now() -> dt.datetime:
    return dt.datetime.now(dt.UTC)


class Player(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    fingerprint: str = Field(unique=True, index=True)
    created_at: dt.datetime = Field(default_factory=_now)
    last_seen: dt.datetime = Field(default_factory=_now)
    wins: int = 0
    deaths: int = 0
