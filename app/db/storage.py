"""
app/db/storage.py

Purpose: Data-access layer (users, services, orders)

- Storage: async CRUD interface shared by all backends
- MemStorage: dict-per-entity store with monotonic integer ids
- Lookups by unique field are linear scans over small collections
- No foreign-key checks: an order may reference any user_id
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from app.core.config import settings
from app.core.logging import get_logger
from app.core.security import generate_referral_code
from app.models.user import NewUser, User, Role
from app.models.service import NewService, Service
from app.models.order import NewOrder, Order
from utils.constants import ROLE_USER, ORDER_STATUS_PENDING, PAYMENT_STATUS_PENDING
from utils.time_utils import utcnow

logger = get_logger(__name__)


class Storage(ABC):
    """
    Async CRUD interface over users, services and orders.

    Every method returns ``None`` (or an empty list) when the record does not
    exist rather than raising; callers decide whether that is an error.
    """

    # ---------------- Users ----------------

    @abstractmethod
    async def get_user(self, user_id: int) -> Optional[User]: ...

    @abstractmethod
    async def get_user_by_username(self, username: str) -> Optional[User]: ...

    @abstractmethod
    async def get_user_by_email(self, email: str) -> Optional[User]: ...

    @abstractmethod
    async def get_user_by_referral_code(self, code: str) -> Optional[User]: ...

    @abstractmethod
    async def get_users(self) -> List[User]: ...

    @abstractmethod
    async def create_user(self, new_user: NewUser) -> User: ...

    @abstractmethod
    async def update_user(self, user_id: int, **fields) -> Optional[User]: ...

    @abstractmethod
    async def update_user_role(self, user_id: int, role: Role) -> Optional[User]: ...

    @abstractmethod
    async def add_referral_reward(self, user_id: int, amount: int) -> Optional[User]: ...

    # ---------------- Services ----------------

    @abstractmethod
    async def get_services(self) -> List[Service]: ...

    @abstractmethod
    async def get_services_by_category(self, category: str) -> List[Service]: ...

    @abstractmethod
    async def get_service(self, service_id: int) -> Optional[Service]: ...

    @abstractmethod
    async def create_service(self, new_service: NewService) -> Service: ...

    # ---------------- Orders ----------------

    @abstractmethod
    async def get_orders(self) -> List[Order]: ...

    @abstractmethod
    async def get_orders_by_user_id(self, user_id: int) -> List[Order]: ...

    @abstractmethod
    async def get_order(self, order_id: int) -> Optional[Order]: ...

    @abstractmethod
    async def create_order(self, new_order: NewOrder) -> Order: ...

    @abstractmethod
    async def update_order_status(self, order_id: int, status: str) -> Optional[Order]: ...

    @abstractmethod
    async def update_payment_status(self, order_id: int, status: str) -> Optional[Order]: ...

    async def close(self) -> None:
        """Release backend resources. Nothing to do by default."""


# Fields a profile update may touch. Everything else goes through a
# dedicated method (role, rewards) or is immutable (id, created_at).
UPDATABLE_USER_FIELDS = frozenset({"name", "email", "phone", "address", "password"})


def check_user_fields(fields: dict) -> None:
    unknown = set(fields) - UPDATABLE_USER_FIELDS
    if unknown:
        raise ValueError(f"Cannot update user fields: {', '.join(sorted(unknown))}")


class MemStorage(Storage):
    """
    In-memory storage. Nothing survives a restart.

    Single event loop only: no method awaits between allocating an id and
    inserting the record, so ids stay unique under concurrent coroutines.
    """

    def __init__(self):
        self._users: Dict[int, User] = {}
        self._services: Dict[int, Service] = {}
        self._orders: Dict[int, Order] = {}
        self._user_id_counter = 1
        self._service_id_counter = 1
        self._order_id_counter = 1

    # ---------------- Users ----------------

    async def get_user(self, user_id: int) -> Optional[User]:
        return self._users.get(user_id)

    async def get_user_by_username(self, username: str) -> Optional[User]:
        key = username.lower()
        return next((u for u in self._users.values() if u.username.lower() == key), None)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        key = email.lower()
        return next((u for u in self._users.values() if u.email.lower() == key), None)

    async def get_user_by_referral_code(self, code: str) -> Optional[User]:
        return next((u for u in self._users.values() if u.referral_code == code), None)

    async def get_users(self) -> List[User]:
        return list(self._users.values())

    def _unique_referral_code(self) -> str:
        taken = {u.referral_code for u in self._users.values()}
        while True:
            code = generate_referral_code(settings.REFERRAL_CODE_LENGTH)
            if code not in taken:
                return code

    async def create_user(self, new_user: NewUser) -> User:
        user_id = self._user_id_counter
        self._user_id_counter += 1

        data = new_user.model_dump()
        data["referral_code"] = data["referral_code"] or self._unique_referral_code()

        user = User(id=user_id, role=ROLE_USER, referral_rewards=0, created_at=utcnow(), **data)
        self._users[user_id] = user
        logger.debug("User created", extra={"user_id": user_id})
        return user

    async def update_user(self, user_id: int, **fields) -> Optional[User]:
        check_user_fields(fields)
        user = self._users.get(user_id)
        if not user:
            return None

        updated = user.model_copy(update=fields)
        self._users[user_id] = updated
        return updated

    async def update_user_role(self, user_id: int, role: Role) -> Optional[User]:
        user = self._users.get(user_id)
        if not user:
            return None

        updated = user.model_copy(update={"role": role})
        self._users[user_id] = updated
        logger.info(f"Role changed to {role}", extra={"user_id": user_id})
        return updated

    async def add_referral_reward(self, user_id: int, amount: int) -> Optional[User]:
        user = self._users.get(user_id)
        if not user:
            return None

        updated = user.model_copy(update={"referral_rewards": user.referral_rewards + amount})
        self._users[user_id] = updated
        return updated

    # ---------------- Services ----------------

    async def get_services(self) -> List[Service]:
        return list(self._services.values())

    async def get_services_by_category(self, category: str) -> List[Service]:
        return [s for s in self._services.values() if s.category == category]

    async def get_service(self, service_id: int) -> Optional[Service]:
        return self._services.get(service_id)

    async def create_service(self, new_service: NewService) -> Service:
        service_id = self._service_id_counter
        self._service_id_counter += 1

        service = Service(id=service_id, created_at=utcnow(), **new_service.model_dump())
        self._services[service_id] = service
        return service

    # ---------------- Orders ----------------

    async def get_orders(self) -> List[Order]:
        return list(self._orders.values())

    async def get_orders_by_user_id(self, user_id: int) -> List[Order]:
        return [o for o in self._orders.values() if o.user_id == user_id]

    async def get_order(self, order_id: int) -> Optional[Order]:
        return self._orders.get(order_id)

    async def create_order(self, new_order: NewOrder) -> Order:
        order_id = self._order_id_counter
        self._order_id_counter += 1

        now = utcnow()
        order = Order(
            id=order_id,
            status=ORDER_STATUS_PENDING,
            payment_status=PAYMENT_STATUS_PENDING,
            created_at=now,
            updated_at=now,
            **new_order.model_dump()
        )
        self._orders[order_id] = order
        return order

    def _replace_order(self, order_id: int, **changes) -> Optional[Order]:
        order = self._orders.get(order_id)
        if not order:
            return None

        updated = order.model_copy(update={**changes, "updated_at": utcnow()})
        self._orders[order_id] = updated
        return updated

    async def update_order_status(self, order_id: int, status: str) -> Optional[Order]:
        return self._replace_order(order_id, status=status)

    async def update_payment_status(self, order_id: int, status: str) -> Optional[Order]:
        return self._replace_order(order_id, payment_status=status)
