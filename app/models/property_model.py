"""Property SQLAlchemy model — the single record type of the dashboard."""
import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Enum, Float, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.models.enums import PropertyType

DEFAULT_IMAGE = "https://images.unsplash.com/photo-1560518883-ce09059eeffa?w=800&h=600&fit=crop"
DEFAULT_LAT = 28.6139
DEFAULT_LNG = 77.2090


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Property(Base):
    __tablename__ = "properties"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    name: Mapped[str] = mapped_column(String(100))
    type: Mapped[PropertyType] = mapped_column(
        Enum(
            PropertyType,
            name="property_type",
            native_enum=False,
            length=32,
            validate_strings=True,
            values_callable=lambda enum: [member.value for member in enum],
        ),
        comment="Plot, Shed, Retail Store, ...",
    )
    location: Mapped[str] = mapped_column(String(255))
    price: Mapped[float] = mapped_column(Float)
    description: Mapped[str] = mapped_column(String(500))
    image: Mapped[str] = mapped_column(Text, default=DEFAULT_IMAGE, comment="URL or data: URL")

    lat: Mapped[float] = mapped_column(Float, default=DEFAULT_LAT)
    lng: Mapped[float] = mapped_column(Float, default=DEFAULT_LNG)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
    )

    __table_args__ = (
        Index("ix_properties_type", "type"),
        Index("ix_properties_name_location", "name", "location"),
        Index("ix_properties_created_at", "created_at"),
    )

    @property
    def coordinates(self) -> dict:
        return {"lat": self.lat, "lng": self.lng}

    @coordinates.setter
    def coordinates(self, value: dict) -> None:
        self.lat = value["lat"]
        self.lng = value["lng"]

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, name='{self.name}', type={self.type})>"
