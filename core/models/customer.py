"""
Customer Models.

Exports:
    Customer: Persisted customer row
    CustomerCreateRequest: Validated create payload
"""

from typing import Dict, Any, Optional, Mapping
from pydantic import BaseModel, Field, field_validator


class CustomerCreateRequest(BaseModel):
    """Create payload. Name and email are required and may not be blank."""

    name: str
    email: str
    phone: Optional[str] = None

    @field_validator('name', 'email')
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be blank")
        return v.strip()


class Customer(BaseModel):
    """Customer row in the Customers table."""

    id: str
    partition: str
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

    def to_entity(self) -> Dict[str, Any]:
        return {
            'PartitionKey': self.partition,
            'RowKey': self.id,
            'Name': self.name,
            'Email': self.email,
            'Phone': self.phone or "",
        }

    @classmethod
    def from_entity(cls, entity: Mapping[str, Any]) -> "Customer":
        return cls(
            id=entity['RowKey'],
            partition=entity['PartitionKey'],
            name=entity.get('Name'),
            email=entity.get('Email'),
            phone=entity.get('Phone'),
        )
