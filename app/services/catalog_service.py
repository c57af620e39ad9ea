"""
app/services/catalog_service.py

Purpose: Service catalog queries

- Lists services, optionally filtered by category
- Distinct categories in catalog order
- Admin creation of new catalog entries
"""

from typing import List, Optional

from app.core.exceptions import ResourceNotFoundError
from app.core.logging import get_logger
from app.db.storage import Storage
from app.models.service import NewService, Service

logger = get_logger(__name__)


async def list_services(storage: Storage, category: Optional[str] = None) -> List[Service]:
    if category is not None:
        return await storage.get_services_by_category(category)
    return await storage.get_services()


async def list_categories(storage: Storage) -> List[str]:
    """
    Distinct categories in the order they first appear in the catalog.
    """
    seen = {}
    for service in await storage.get_services():
        seen.setdefault(service.category, None)
    return list(seen)


async def get_service_or_404(storage: Storage, service_id: int) -> Service:
    service = await storage.get_service(service_id)
    if not service:
        raise ResourceNotFoundError(f"Service {service_id} not found")
    return service


async def add_service(storage: Storage, new_service: NewService) -> Service:
    service = await storage.create_service(new_service)
    logger.info(f"Service added: {service.name}", extra={"service_id": service.id})
    return service
