"""
Property model for real-estate listings.
Holds location, pricing, specifications and the ordered list of listing images.
"""

from sqlalchemy import String, Text, Integer, Numeric, Float, ForeignKey, CheckConstraint, JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column
from estate_api.database import Base
from decimal import Decimal
from typing import List, Optional


# Images are stored as a JSON document; PostgreSQL gets the binary JSONB type.
ImageList = JSON().with_variant(JSONB(), "postgresql")


class Property(Base):
    """
    Property listing owned by the admin who created it.
    Field ranges are enforced by named check constraints so violations can be
    reported per field.
    """

    __tablename__ = "properties"
    __table_args__ = (
        CheckConstraint("price >= 0", name="properties_price_check"),
        CheckConstraint("beds >= 0", name="properties_beds_check"),
        CheckConstraint("baths >= 0", name="properties_baths_check"),
        CheckConstraint("sqft >= 0", name="properties_sqft_check"),
        CheckConstraint("latitude >= -90 AND latitude <= 90", name="properties_latitude_check"),
        CheckConstraint("longitude >= -180 AND longitude <= 180", name="properties_longitude_check"),
    )

    owner_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
        index=True,
        comment="ID of the admin who created this listing"
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    price: Mapped[Decimal] = mapped_column(Numeric(precision=12, scale=2), nullable=False)

    # Location information
    address: Mapped[Optional[str]] = mapped_column(String(255))
    city: Mapped[Optional[str]] = mapped_column(String(100))
    state: Mapped[Optional[str]] = mapped_column(String(100))
    zip_code: Mapped[Optional[str]] = mapped_column(String(20))
    latitude: Mapped[Optional[float]] = mapped_column(Float)
    longitude: Mapped[Optional[float]] = mapped_column(Float)

    # Specifications
    type: Mapped[Optional[str]] = mapped_column(String(50))
    beds: Mapped[Optional[int]] = mapped_column(Integer)
    baths: Mapped[Optional[float]] = mapped_column(Float)
    sqft: Mapped[Optional[int]] = mapped_column(Integer)

    images: Mapped[List[str]] = mapped_column(
        ImageList,
        nullable=False,
        default=list,
        comment="Ordered list of image data URLs"
    )

    def __repr__(self) -> str:
        """String representation of the property."""
        return f"<Property(id={self.id}, title={self.title[:30]}..., price={self.price})>"

    def to_dict(self) -> dict:
        """
        Convert property to dictionary.

        Returns:
            Dictionary representation of property
        """
        return {
            "id": self.id,
            "owner_id": self.owner_id,
            "title": self.title,
            "description": self.description,
            "price": float(self.price) if self.price is not None else None,
            "address": self.address,
            "city": self.city,
            "state": self.state,
            "zip_code": self.zip_code,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "type": self.type,
            "beds": self.beds,
            "baths": self.baths,
            "sqft": self.sqft,
            "images": list(self.images or []),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
