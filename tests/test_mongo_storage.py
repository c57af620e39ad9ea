"""
MongoStorage against an in-process stand-in for Motor collections.
Only the query shapes MongoStorage issues (equality filters, $set/$inc,
sort by one key) are supported.
"""

import asyncio
import copy

import pytest
from pymongo.errors import DuplicateKeyError

from app.core.exceptions import ConflictError

from app.db.indexes import create_indexes
from app.db.mongo_storage import MongoStorage
from app.db.seed import seed_all, SERVICE_CATALOG
from app.models.user import NewUser
from app.models.order import NewOrder


def run(coro):
    return asyncio.run(coro)


def _matches(doc, query):
    return all(doc.get(key) == value for key, value in query.items())


class FakeCursor:
    def __init__(self, docs):
        self._docs = docs

    def sort(self, key, direction):
        self._docs = sorted(self._docs, key=lambda d: d[key], reverse=direction < 0)
        return self

    async def to_list(self, length=None):
        return [copy.deepcopy(d) for d in self._docs]


class FakeCollection:
    def __init__(self):
        self.docs = []
        self.indexes = []

    async def find_one(self, query):
        for doc in self.docs:
            if _matches(doc, query):
                return copy.deepcopy(doc)
        return None

    def find(self, query):
        return FakeCursor([d for d in self.docs if _matches(d, query)])

    async def insert_one(self, doc):
        assert all(d["_id"] != doc["_id"] for d in self.docs), "duplicate _id"
        self.docs.append(copy.deepcopy(doc))

    async def find_one_and_update(self, query, update, upsert=False, return_document=None):
        doc = next((d for d in self.docs if _matches(d, query)), None)
        if doc is None:
            if not upsert:
                return None
            doc = dict(query)
            self.docs.append(doc)
        for key, value in update.get("$set", {}).items():
            doc[key] = value
        for key, value in update.get("$inc", {}).items():
            doc[key] = doc.get(key, 0) + value
        return copy.deepcopy(doc)

    async def create_index(self, keys, **kwargs):
        self.indexes.append(kwargs.get("name"))


class FakeDatabase(dict):
    def __missing__(self, name):
        collection = self[name] = FakeCollection()
        return collection


def new_user(username, email=None):
    return NewUser(
        username=username,
        password="hash.salt",
        name=username.title(),
        email=email or f"{username}@example.com",
    )


def test_ids_come_from_counters():
    db = FakeDatabase()
    storage = MongoStorage(db)

    async def scenario():
        users = [await storage.create_user(new_user(f"user{i}")) for i in range(3)]
        order = await storage.create_order(NewOrder(user_id=1, service_id=1, amount=50))
        return users, order

    users, order = run(scenario())
    assert [u.id for u in users] == [1, 2, 3]
    assert order.id == 1
    assert db["counters"].docs == [
        {"_id": "users", "seq": 3},
        {"_id": "orders", "seq": 1},
    ]


def test_case_insensitive_lookups_use_lowered_keys():
    storage = MongoStorage(FakeDatabase())

    async def scenario():
        created = await storage.create_user(new_user("Ramesh", email="Ramesh@Example.com"))
        return (
            created,
            await storage.get_user_by_username("RAMESH"),
            await storage.get_user_by_email("ramesh@example.com"),
        )

    created, by_name, by_email = run(scenario())
    assert by_name.id == created.id
    assert by_email.email == "Ramesh@Example.com"


def test_email_update_keeps_lookup_key_in_sync():
    storage = MongoStorage(FakeDatabase())

    async def scenario():
        user = await storage.create_user(new_user("ramesh"))
        await storage.update_user(user.id, email="New@Example.com")
        return await storage.get_user_by_email("new@example.com")

    assert run(scenario()).username == "ramesh"


def test_seed_and_category_filter():
    storage = MongoStorage(FakeDatabase())

    async def scenario():
        await seed_all(storage)
        await seed_all(storage)
        return await storage.get_services(), await storage.get_services_by_category("Business")

    services, business = run(scenario())
    assert len(services) == len(SERVICE_CATALOG)
    assert [s.name for s in business] == [s.name for s in SERVICE_CATALOG if s.category == "Business"]


def test_admin_elevation_and_rewards():
    storage = MongoStorage(FakeDatabase())

    async def scenario():
        await seed_all(storage)
        admin = await storage.get_user_by_username("admin")
        await storage.add_referral_reward(admin.id, 50)
        return await storage.get_user(admin.id)

    admin = run(scenario())
    assert admin.role == "admin"
    assert admin.referral_rewards == 50


def test_order_status_updates():
    storage = MongoStorage(FakeDatabase())

    async def scenario():
        order = await storage.create_order(NewOrder(user_id=9, service_id=3, amount=500))
        await storage.update_order_status(order.id, "completed")
        paid = await storage.update_payment_status(order.id, "paid")
        missing = await storage.update_order_status(99, "completed")
        return paid, missing

    paid, missing = run(scenario())
    assert paid.status == "completed"
    assert paid.payment_status == "paid"
    assert missing is None


def test_create_indexes():
    db = FakeDatabase()
    run(create_indexes(db))

    assert "username_unique" in db["users"].indexes
    assert "email_unique" in db["users"].indexes
    assert "user_orders_idx" in db["orders"].indexes


class UniqueUsersCollection(FakeCollection):
    """Enforces the username_lower/email_lower unique indexes like a real server."""

    UNIQUE_KEYS = ("username_lower", "email_lower")

    def _check_unique(self, candidate, skip_id=None):
        for doc in self.docs:
            if doc["_id"] == skip_id:
                continue
            for key in self.UNIQUE_KEYS:
                if key in candidate and doc.get(key) == candidate[key]:
                    raise DuplicateKeyError(
                        f"E11000 duplicate key error index: {key}",
                        11000,
                        {"keyPattern": {key: 1}, "keyValue": {key: candidate[key]}},
                    )

    async def insert_one(self, doc):
        self._check_unique(doc)
        await super().insert_one(doc)

    async def find_one_and_update(self, query, update, upsert=False, return_document=None):
        self._check_unique(update.get("$set", {}), skip_id=query.get("_id"))
        return await super().find_one_and_update(query, update, upsert, return_document)


def unique_users_db():
    db = FakeDatabase()
    db["users"] = UniqueUsersCollection()
    return db


def test_duplicate_username_on_insert_is_a_conflict():
    storage = MongoStorage(unique_users_db())
    run(storage.create_user(new_user("ramesh")))

    with pytest.raises(ConflictError) as exc_info:
        run(storage.create_user(new_user("RAMESH", email="other@example.com")))

    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "Username already exists"


def test_duplicate_email_on_update_is_a_conflict():
    storage = MongoStorage(unique_users_db())

    async def scenario():
        await storage.create_user(new_user("ramesh"))
        other = await storage.create_user(new_user("suresh"))
        await storage.update_user(other.id, email="Ramesh@Example.com")

    with pytest.raises(ConflictError) as exc_info:
        run(scenario())

    assert exc_info.value.message == "Email already registered"
