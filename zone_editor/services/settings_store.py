"""
Persisted editor settings.

Settings are small integers (zone count, spacing, flags) stored per
monitor under a key path, the same shape as the engine's registry values.
"""

import logging
from typing import Dict, Tuple

from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from zone_editor.models import SettingValue

logger = logging.getLogger(__name__)


class SettingsStore:
    """Integer settings in the database, scoped to one key path."""

    def __init__(self, session_factory: sessionmaker, path: str):
        self.session_factory = session_factory
        self.path = path

    def read_int(self, name: str, default: int) -> int:
        with self.session_factory() as session:
            row = session.execute(
                select(SettingValue).where(
                    SettingValue.path == self.path,
                    SettingValue.name == name,
                )
            ).scalar_one_or_none()
        return row.value if row is not None else default

    def write_int(self, name: str, value: int) -> None:
        with self.session_factory() as session:
            with session.begin():
                row = session.get(SettingValue, (self.path, name))
                if row is None:
                    session.add(SettingValue(path=self.path, name=name, value=int(value)))
                else:
                    row.value = int(value)
        logger.debug("Stored %s\\%s = %d", self.path, name, value)


class InMemorySettingsStore:
    """Store with the same interface that keeps values in a dict."""

    def __init__(self, path: str = ""):
        self.path = path
        self.values: Dict[Tuple[str, str], int] = {}

    def read_int(self, name: str, default: int) -> int:
        return self.values.get((self.path, name), default)

    def write_int(self, name: str, value: int) -> None:
        self.values[(self.path, name)] = int(value)
