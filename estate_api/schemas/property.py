"""
Pydantic schemas for property requests and responses.
The request model accepts any field as optional and records which keys the
client sent; presence and emptiness rules are enforced by the validation layer.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List, Any, Dict
from datetime import datetime
from decimal import Decimal


PROPERTY_FIELDS = (
    "title", "description", "price", "address", "city", "state", "zip_code",
    "latitude", "longitude", "type", "beds", "baths", "sqft", "images",
)


class PropertyPayload(BaseModel):
    """Body of property create and update requests."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True, allow_inf_nan=False)

    title: Optional[str] = Field(None, examples=["Modern Family Home"])
    description: Optional[str] = Field(None, examples=["Three bedrooms close to the park."])
    price: Optional[Decimal] = Field(None, description="Listing price", examples=[450000])

    address: Optional[str] = Field(None, examples=["12 Oak Street"])
    city: Optional[str] = Field(None, examples=["Springfield"])
    state: Optional[str] = Field(None, examples=["IL"])
    zip_code: Optional[str] = Field(None, examples=["62704"])
    latitude: Optional[float] = Field(None, examples=[39.7817])
    longitude: Optional[float] = Field(None, examples=[-89.6501])

    type: Optional[str] = Field(None, description="Property type", examples=["House"])
    beds: Optional[int] = Field(None, examples=[3])
    baths: Optional[float] = Field(None, examples=[2.5])
    sqft: Optional[int] = Field(None, examples=[1800])

    images: Optional[Any] = Field(
        None,
        description="Ordered list of base64 image data URLs",
        examples=[["data:image/png;base64,iVBORw0KGgo="]]
    )

    @field_validator("price", "latitude", "longitude", "beds", "baths", "sqft", mode="before")
    @classmethod
    def blank_number_to_none(cls, v):
        """A blank string for a numeric field counts as no value."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def field_values(self) -> Dict[str, Any]:
        """Values of every listing field, including those not sent."""
        return {field: getattr(self, field) for field in PROPERTY_FIELDS}

    def provided_fields(self) -> set:
        """Names of the listing fields present in the request body."""
        return set(self.model_fields_set)


class PropertyResponse(BaseModel):
    """Property as stored."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_id: int
    title: str
    description: Optional[str] = None
    price: float
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    type: Optional[str] = None
    beds: Optional[int] = None
    baths: Optional[float] = None
    sqft: Optional[int] = None
    images: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None


class PropertyListItem(PropertyResponse):
    """Property in the public listing."""

    agent_name: str = Field(..., description="Name of the listing agent")


class PropertyDetailResponse(PropertyListItem):
    """Property with the agent's contact details."""

    agent_email: str = Field(..., description="Email of the listing agent")


class PropertyDeletedResponse(BaseModel):
    message: str = Field(..., examples=["Property deleted successfully"])
    property: PropertyResponse
