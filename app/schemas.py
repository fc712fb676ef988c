# app/schemas.py
from pydantic import BaseModel, Field, computed_field
from pydantic.alias_generators import to_camel
from typing import List, Optional
from decimal import Decimal
from datetime import datetime
from enum import Enum

from .config import load_config
from .utils import format_display_number, whatsapp_link

class TransactionKind(str, Enum):
    FOR_SALE = "FOR_SALE"
    FOR_RENT = "FOR_RENT"

class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
        use_enum_values = True
        validate_default = True

class ListingCreate(CamelModel):
    url: str
    title: str
    display_title: str
    image_url: Optional[str] = None
    contact_number: Optional[str] = None
    tags: Optional[List[str]] = None
    category: str

class ListingOut(ListingCreate):
    id: int
    last_updated: Optional[datetime] = None

    @computed_field(alias="contactDisplay")
    @property
    def contact_display(self) -> str:
        return format_display_number(self.contact_number, load_config().default_contact_number)

    @computed_field(alias="contactLink")
    @property
    def contact_link(self) -> str:
        return whatsapp_link(self.contact_number, load_config().default_contact_number)

class PropertyCreate(CamelModel):
    url: str
    title: str
    image_url: Optional[str] = None
    price: Decimal = Field(default=Decimal("0"), ge=0)
    transaction_kind: TransactionKind = TransactionKind.FOR_SALE

class PropertyOut(PropertyCreate):
    id: int
    last_updated: Optional[datetime] = None

class ListingResponse(CamelModel):
    success: bool
    items: List[ListingOut] = []
    error: Optional[str] = None

class PropertyResponse(CamelModel):
    success: bool
    items: List[PropertyOut] = []
    error: Optional[str] = None
