"""SQLAlchemy models."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from zone_editor.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SettingValue(Base):
    """One integer setting stored under a per-monitor key path."""

    __tablename__ = "setting_values"

    path: Mapped[str] = mapped_column(String(512), primary_key=True)
    name: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[int] = mapped_column(Integer, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )

    def __repr__(self) -> str:
        return f"SettingValue(path='{self.path}', name='{self.name}', value={self.value})"
