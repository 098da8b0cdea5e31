"""Channel directory adapters.

Implements the core ChannelDirectory port with an in-memory set and with a
simple SQLite table. Both can hand out an immutable snapshot so a single
parse sees one consistent view even if channels are added meanwhile.
"""

from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from typing import FrozenSet, Iterable


def normalize_channel_name(name: str) -> str:
    """Return the canonical ``#name`` form used for lookups."""

    name = name.strip().lower()
    if not name.startswith("#"):
        name = f"#{name}"
    return name


class InMemoryChannelDirectory:
    """Mutable set of known channels that satisfies the ChannelDirectory port."""

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._names = {normalize_channel_name(name) for name in names if name.strip()}

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: str) -> bool:
        return self.exists(name)

    def exists(self, name: str) -> bool:
        return normalize_channel_name(name) in self._names

    def add(self, name: str) -> None:
        self._names.add(normalize_channel_name(name))

    def remove(self, name: str) -> None:
        self._names.discard(normalize_channel_name(name))

    def names(self) -> FrozenSet[str]:
        return frozenset(self._names)

    def snapshot(self) -> "ChannelSnapshot":
        return ChannelSnapshot(self._names)


class ChannelSnapshot:
    """Frozen view of a directory at one point in time."""

    def __init__(self, names: Iterable[str]) -> None:
        self._names = frozenset(normalize_channel_name(name) for name in names)

    def exists(self, name: str) -> bool:
        return normalize_channel_name(name) in self._names


class SQLiteChannelDirectory:
    """Thin SQLite wrapper that satisfies the ChannelDirectory port."""

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_db(self) -> None:
        """Create the channels table if it does not exist.

        Fields:
        - name: normalized channel name including the leading '#' (PRIMARY KEY)
        - added_at: when the channel became known, for auditing
        """

        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS channels (
                    name TEXT PRIMARY KEY,
                    added_at TIMESTAMP NOT NULL
                )
                """
            )

    def add_channel(self, name: str) -> None:
        """Insert a channel if it is not known yet."""

        now = datetime.now(timezone.utc)
        with self._connect() as conn:
            conn.execute(
                "INSERT OR IGNORE INTO channels (name, added_at) VALUES (?, ?)",
                (normalize_channel_name(name), now.isoformat()),
            )

    def remove_channel(self, name: str) -> bool:
        """Delete a channel and report whether it existed."""

        with self._connect() as conn:
            cur = conn.execute(
                "DELETE FROM channels WHERE name = ?",
                (normalize_channel_name(name),),
            )
            return cur.rowcount > 0

    def list_channels(self) -> set[str]:
        """Return every known channel name."""

        with self._connect() as conn:
            rows = conn.execute("SELECT name FROM channels").fetchall()
        return {row["name"] for row in rows}

    def exists(self, name: str) -> bool:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT 1 FROM channels WHERE name = ?",
                (normalize_channel_name(name),),
            ).fetchone()
        return row is not None

    def snapshot(self) -> ChannelSnapshot:
        # One query per parse instead of one per mention.
        return ChannelSnapshot(self.list_channels())
