# roster/infrastructure/models.py
from __future__ import annotations

from sqlalchemy import String, LargeBinary
from sqlalchemy.orm import declarative_base, Mapped, mapped_column

Base = declarative_base()


class KeyValueORM(Base):
    __tablename__ = "kv_entries"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)

    def __repr__(self) -> str:
        return f"KeyValueORM(key={self.key!r}, size={len(self.value or b'')})"


__all__ = [
    "Base",
    "KeyValueORM",
]
