"""
app/models/service.py

Purpose: Catalog service record model

- One government-document assistance offering (Aadhaar, PAN, passport, ...)
- Price in INR, expected processing time and required documents
- Display hints (icon, badge) for the catalog page
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from utils.time_utils import utcnow


class NewService(BaseModel):
    """Fields accepted by Storage.create_service."""
    name: str
    description: str
    category: str
    price: int = Field(..., ge=0)
    processing_time: str
    requirements: str
    icon: str
    badge: Optional[str] = None
    badge_color: Optional[str] = None


class Service(NewService):
    id: int
    created_at: datetime = Field(default_factory=utcnow)
