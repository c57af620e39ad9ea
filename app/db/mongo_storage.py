"""
app/db/mongo_storage.py

Purpose: MongoDB implementation of the Storage interface

- Integer ids allocated from a "counters" collection with atomic $inc
- Documents keep "id" alongside Mongo's "_id" (same value)
- Case-insensitive username/email lookups via stored lower-cased keys
"""

from typing import Any, Dict, List, Optional

from pymongo import ASCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

from app.core.config import settings
from app.core.exceptions import ConflictError
from app.core.logging import get_logger
from app.core.security import generate_referral_code
from app.db.storage import Storage, check_user_fields
from app.models.user import NewUser, User, Role
from app.models.service import NewService, Service
from app.models.order import NewOrder, Order
from utils.constants import ROLE_USER, ORDER_STATUS_PENDING, PAYMENT_STATUS_PENDING
from utils.time_utils import utcnow

logger = get_logger(__name__)


def _user_keys(username: Optional[str] = None, email: Optional[str] = None) -> Dict[str, str]:
    keys = {}
    if username is not None:
        keys["username_lower"] = username.lower()
    if email is not None:
        keys["email_lower"] = email.lower()
    return keys


DUPLICATE_MESSAGES = {
    "username_lower": "Username already exists",
    "email_lower": "Email already registered",
    "referral_code": "Referral code already in use",
}


def _conflict_from(exc: DuplicateKeyError) -> ConflictError:
    """Maps a unique-index violation on users to the matching ConflictError."""
    key_pattern = (exc.details or {}).get("keyPattern") or {}
    for field in key_pattern:
        if field in DUPLICATE_MESSAGES:
            return ConflictError(DUPLICATE_MESSAGES[field])
    return ConflictError()


class MongoStorage(Storage):
    """
    Storage backed by Motor collections. Works with any database object that
    exposes ``db["name"]`` collections with the Motor async API.
    """

    def __init__(self, database):
        self._db = database
        self._users = database["users"]
        self._services = database["services"]
        self._orders = database["orders"]
        self._counters = database["counters"]

    async def _next_id(self, name: str) -> int:
        counter = await self._counters.find_one_and_update(
            {"_id": name},
            {"$inc": {"seq": 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return counter["seq"]

    async def _find_all(self, collection, query: Dict[str, Any]) -> List[dict]:
        cursor = collection.find(query).sort("id", ASCENDING)
        return await cursor.to_list(length=None)

    # ---------------- Users ----------------

    async def get_user(self, user_id: int) -> Optional[User]:
        doc = await self._users.find_one({"_id": user_id})
        return User.model_validate(doc) if doc else None

    async def get_user_by_username(self, username: str) -> Optional[User]:
        doc = await self._users.find_one(_user_keys(username=username))
        return User.model_validate(doc) if doc else None

    async def get_user_by_email(self, email: str) -> Optional[User]:
        doc = await self._users.find_one(_user_keys(email=email))
        return User.model_validate(doc) if doc else None

    async def get_user_by_referral_code(self, code: str) -> Optional[User]:
        doc = await self._users.find_one({"referral_code": code})
        return User.model_validate(doc) if doc else None

    async def get_users(self) -> List[User]:
        return [User.model_validate(doc) for doc in await self._find_all(self._users, {})]

    async def _unique_referral_code(self) -> str:
        while True:
            code = generate_referral_code(settings.REFERRAL_CODE_LENGTH)
            if not await self._users.find_one({"referral_code": code}):
                return code

    async def create_user(self, new_user: NewUser) -> User:
        user_id = await self._next_id("users")

        data = new_user.model_dump()
        data["referral_code"] = data["referral_code"] or await self._unique_referral_code()

        user = User(id=user_id, role=ROLE_USER, referral_rewards=0, created_at=utcnow(), **data)
        try:
            await self._users.insert_one({
                "_id": user_id,
                **user.model_dump(),
                **_user_keys(user.username, user.email),
            })
        except DuplicateKeyError as e:
            raise _conflict_from(e) from e
        logger.debug("User created", extra={"user_id": user_id})
        return user

    async def _update_user_doc(self, user_id: int, update: Dict[str, Any]) -> Optional[User]:
        doc = await self._users.find_one_and_update(
            {"_id": user_id},
            update,
            return_document=ReturnDocument.AFTER,
        )
        return User.model_validate(doc) if doc else None

    async def update_user(self, user_id: int, **fields) -> Optional[User]:
        check_user_fields(fields)
        changes = {**fields, **_user_keys(email=fields.get("email"))}
        try:
            return await self._update_user_doc(user_id, {"$set": changes})
        except DuplicateKeyError as e:
            raise _conflict_from(e) from e

    async def update_user_role(self, user_id: int, role: Role) -> Optional[User]:
        user = await self._update_user_doc(user_id, {"$set": {"role": role}})
        if user:
            logger.info(f"Role changed to {role}", extra={"user_id": user_id})
        return user

    async def add_referral_reward(self, user_id: int, amount: int) -> Optional[User]:
        return await self._update_user_doc(user_id, {"$inc": {"referral_rewards": amount}})

    # ---------------- Services ----------------

    async def get_services(self) -> List[Service]:
        return [Service.model_validate(doc) for doc in await self._find_all(self._services, {})]

    async def get_services_by_category(self, category: str) -> List[Service]:
        docs = await self._find_all(self._services, {"category": category})
        return [Service.model_validate(doc) for doc in docs]

    async def get_service(self, service_id: int) -> Optional[Service]:
        doc = await self._services.find_one({"_id": service_id})
        return Service.model_validate(doc) if doc else None

    async def create_service(self, new_service: NewService) -> Service:
        service_id = await self._next_id("services")
        service = Service(id=service_id, created_at=utcnow(), **new_service.model_dump())
        await self._services.insert_one({"_id": service_id, **service.model_dump()})
        return service

    # ---------------- Orders ----------------

    async def get_orders(self) -> List[Order]:
        return [Order.model_validate(doc) for doc in await self._find_all(self._orders, {})]

    async def get_orders_by_user_id(self, user_id: int) -> List[Order]:
        docs = await self._find_all(self._orders, {"user_id": user_id})
        return [Order.model_validate(doc) for doc in docs]

    async def get_order(self, order_id: int) -> Optional[Order]:
        doc = await self._orders.find_one({"_id": order_id})
        return Order.model_validate(doc) if doc else None

    async def create_order(self, new_order: NewOrder) -> Order:
        order_id = await self._next_id("orders")
        now = utcnow()
        order = Order(
            id=order_id,
            status=ORDER_STATUS_PENDING,
            payment_status=PAYMENT_STATUS_PENDING,
            created_at=now,
            updated_at=now,
            **new_order.model_dump()
        )
        await self._orders.insert_one({"_id": order_id, **order.model_dump()})
        return order

    async def _set_order_fields(self, order_id: int, **changes) -> Optional[Order]:
        doc = await self._orders.find_one_and_update(
            {"_id": order_id},
            {"$set": {**changes, "updated_at": utcnow()}},
            return_document=ReturnDocument.AFTER,
        )
        return Order.model_validate(doc) if doc else None

    async def update_order_status(self, order_id: int, status: str) -> Optional[Order]:
        return await self._set_order_fields(order_id, status=status)

    async def update_payment_status(self, order_id: int, status: str) -> Optional[Order]:
        return await self._set_order_fields(order_id, payment_status=status)
