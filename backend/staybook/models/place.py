"""Place model — a bookable listing published by its owner."""

import uuid
from decimal import Decimal

from sqlalchemy import JSON, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from staybook.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Place(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A listing. Publicly readable, mutable only by the user in ``owner_id``."""

    __tablename__ = "places"

    owner_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str | None] = mapped_column(String(512), default=None)
    photos: Mapped[list] = mapped_column(JSON, default=list)  # ordered photo URLs
    description: Mapped[str | None] = mapped_column(Text, default=None)
    perks: Mapped[list] = mapped_column(JSON, default=list)
    extra_info: Mapped[str | None] = mapped_column(Text, default=None)
    check_in: Mapped[str | None] = mapped_column(String(20), default=None)
    check_out: Mapped[str | None] = mapped_column(String(20), default=None)
    max_guests: Mapped[int | None] = mapped_column(default=None)
    price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), default=None)

    def __repr__(self) -> str:
        return f"<Place(id={self.id}, title={self.title!r}, owner_id={self.owner_id})>"
