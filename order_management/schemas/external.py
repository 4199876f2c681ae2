"""
Schemas for data owned by the customer and inventory services
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional


class ExternalModel(BaseModel):
    """External services speak camelCase JSON"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Address(ExternalModel):
    street: str
    city: str
    state: str
    zip_code: str
    country: str


class Customer(ExternalModel):
    """Customer as returned by the Customer Service"""
    id: str
    name: str
    email: str
    address: Optional[Address] = None
    phone: Optional[str] = None
    created_at: Optional[str] = None


class Dimensions(ExternalModel):
    length: float
    width: float
    height: float


class Product(ExternalModel):
    """Product as returned by the Inventory Service"""
    id: str
    name: str
    price: float
    description: Optional[str] = None
    weight: Optional[float] = None
    dimensions: Optional[Dimensions] = None
    sku: Optional[str] = None
    category: Optional[str] = None
