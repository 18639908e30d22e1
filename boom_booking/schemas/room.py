from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class RoomCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    capacity: int = Field(..., gt=0)
    category: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    price_per_hour: Decimal = Field(Decimal("0"), ge=0, max_digits=10, decimal_places=2)


class RoomUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    capacity: int | None = Field(None, gt=0)
    category: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = None
    price_per_hour: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    is_active: bool | None = None


class RoomResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    tenant_id: int
    name: str
    capacity: int
    category: str
    description: str | None
    price_per_hour: Decimal
    is_active: bool

    @field_serializer("price_per_hour")
    def serialize_price(self, value: Decimal) -> float:
        return float(value)
