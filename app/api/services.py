"""
app/api/services.py

Purpose: Service catalog endpoints

- GET  /services              full catalog, or one category via ?category=
- GET  /services/categories   distinct categories
- GET  /services/{id}         one service
- POST /services              add a service (admin)
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import require_admin
from app.db.provider import get_storage
from app.db.storage import Storage
from app.models.service import Service
from app.models.user import User
from app.schemas.service import ServiceCreate, CategoryList
from app.services import catalog_service

router = APIRouter()


@router.get("/services", response_model=List[Service])
async def list_services(
    category: Optional[str] = Query(None, description="Exact category name, e.g. Identity"),
    storage: Storage = Depends(get_storage),
):
    return await catalog_service.list_services(storage, category)


@router.get("/services/categories", response_model=CategoryList)
async def list_categories(storage: Storage = Depends(get_storage)):
    return CategoryList(categories=await catalog_service.list_categories(storage))


@router.get("/services/{service_id}", response_model=Service)
async def get_service(service_id: int, storage: Storage = Depends(get_storage)):
    return await catalog_service.get_service_or_404(storage, service_id)


@router.post("/services", response_model=Service, status_code=status.HTTP_201_CREATED)
async def create_service(
    payload: ServiceCreate,
    _: User = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    return await catalog_service.add_service(storage, payload)
