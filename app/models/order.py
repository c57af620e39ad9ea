"""
app/models/order.py

Purpose: Order record model

- A user's request for one catalog service
- Processing status and payment status move independently
- user_id is a reference only; storage does not check it exists
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from utils.time_utils import utcnow


class NewOrder(BaseModel):
    """Fields accepted by Storage.create_order."""
    user_id: int
    service_id: int
    amount: int = Field(..., ge=0)
    notes: Optional[str] = None


class Order(NewOrder):
    id: int
    status: str = "pending"
    payment_status: str = "pending"
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
