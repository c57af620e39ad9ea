from pydantic import BaseModel, Field, validator
from typing import Optional

from utils.constants import ORDER_STATUSES, PAYMENT_STATUSES
from utils.validation_utils import sanitize_input


class OrderCreate(BaseModel):
    service_id: int
    notes: Optional[str] = Field(None, max_length=1000)

    @validator("notes")
    def clean_notes(cls, v):
        if v is None:
            return None
        return sanitize_input(v) or None


class OrderStatusUpdate(BaseModel):
    status: str

    @validator("status")
    def check_status(cls, v):
        if v not in ORDER_STATUSES:
            raise ValueError(f"status must be one of: {', '.join(ORDER_STATUSES)}")
        return v


class PaymentStatusUpdate(BaseModel):
    payment_status: str

    @validator("payment_status")
    def check_payment_status(cls, v):
        if v not in PAYMENT_STATUSES:
            raise ValueError(f"payment_status must be one of: {', '.join(PAYMENT_STATUSES)}")
        return v
