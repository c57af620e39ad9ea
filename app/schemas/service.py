from pydantic import BaseModel
from typing import List

from app.models.service import NewService


class ServiceCreate(NewService):
    """Admin payload for adding a catalog entry."""

    class Config:
        json_schema_extra = {
            "example": {
                "name": "PAN Card",
                "description": "Apply for new PAN card or request a duplicate",
                "category": "Identity",
                "price": 150,
                "processing_time": "7-10 days",
                "requirements": "Identity proof, address proof, photographs",
                "icon": "fa-credit-card",
                "badge": "Tax Document",
                "badge_color": "orange"
            }
        }


class CategoryList(BaseModel):
    categories: List[str]
