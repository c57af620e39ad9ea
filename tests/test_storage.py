import asyncio

import pytest

from app.db.storage import MemStorage
from app.models.user import NewUser
from app.models.service import NewService
from app.models.order import NewOrder


def run(coro):
    return asyncio.run(coro)


def new_user(username, email=None, **extra):
    return NewUser(
        username=username,
        password="hash.salt",
        name=username.title(),
        email=email or f"{username}@example.com",
        **extra,
    )


def new_service(name, category="Identity", **extra):
    return NewService(
        name=name,
        description=f"{name} assistance",
        category=category,
        price=100,
        processing_time="5-7 days",
        requirements="ID proof",
        icon="fa-id-card",
        **extra,
    )


def test_create_user_assigns_strictly_increasing_ids():
    storage = MemStorage()

    async def scenario():
        return [await storage.create_user(new_user(f"user{i}")) for i in range(5)]

    users = run(scenario())
    ids = [u.id for u in users]
    assert ids == [1, 2, 3, 4, 5]
    assert len(set(ids)) == len(ids)


def test_concurrent_create_user_ids_are_unique():
    storage = MemStorage()

    async def scenario():
        return await asyncio.gather(*(storage.create_user(new_user(f"user{i}")) for i in range(20)))

    ids = sorted(u.id for u in run(scenario()))
    assert ids == list(range(1, 21))


def test_create_user_defaults():
    storage = MemStorage()
    user = run(storage.create_user(new_user("ramesh")))

    assert user.role == "user"
    assert user.phone is None
    assert user.address is None
    assert user.referral_rewards == 0
    assert len(user.referral_code) == 8
    assert user.created_at is not None


def test_generated_referral_codes_are_unique():
    storage = MemStorage()

    async def scenario():
        return [await storage.create_user(new_user(f"user{i}")) for i in range(50)]

    codes = [u.referral_code for u in run(scenario())]
    assert len(set(codes)) == 50


def test_lookup_by_username_and_email_is_case_insensitive():
    storage = MemStorage()

    async def scenario():
        created = await storage.create_user(new_user("Ramesh", email="Ramesh@Example.com"))
        by_name = await storage.get_user_by_username("rAMESH")
        by_email = await storage.get_user_by_email("ramesh@example.COM")
        missing = await storage.get_user_by_username("suresh")
        return created, by_name, by_email, missing

    created, by_name, by_email, missing = run(scenario())
    assert by_name.id == created.id
    assert by_email.id == created.id
    assert missing is None


def test_update_user_replaces_fields():
    storage = MemStorage()

    async def scenario():
        user = await storage.create_user(new_user("ramesh"))
        updated = await storage.update_user(user.id, name="Ramesh K", phone="9123456789")
        fetched = await storage.get_user(user.id)
        return user, updated, fetched

    user, updated, fetched = run(scenario())
    assert updated.name == "Ramesh K"
    assert fetched.phone == "9123456789"
    assert fetched.email == user.email
    assert user.name == "Ramesh"


def test_update_user_rejects_protected_fields():
    storage = MemStorage()
    user = run(storage.create_user(new_user("ramesh")))

    with pytest.raises(ValueError):
        run(storage.update_user(user.id, role="admin"))


def test_update_unknown_user_returns_none():
    storage = MemStorage()
    assert run(storage.update_user(99, name="Nobody")) is None
    assert run(storage.update_user_role(99, "admin")) is None
    assert run(storage.add_referral_reward(99, 50)) is None


def test_role_and_rewards_updates():
    storage = MemStorage()

    async def scenario():
        user = await storage.create_user(new_user("ramesh"))
        await storage.update_user_role(user.id, "admin")
        await storage.add_referral_reward(user.id, 50)
        await storage.add_referral_reward(user.id, 50)
        return await storage.get_user(user.id)

    user = run(scenario())
    assert user.role == "admin"
    assert user.is_admin
    assert user.referral_rewards == 100


def test_get_user_by_referral_code():
    storage = MemStorage()

    async def scenario():
        user = await storage.create_user(new_user("ramesh", referral_code="RAMESH01"))
        return user, await storage.get_user_by_referral_code("RAMESH01")

    user, found = run(scenario())
    assert found.id == user.id


def test_services_listing_does_not_reseed():
    storage = MemStorage()

    async def scenario():
        await storage.create_service(new_service("PAN Card"))
        first = await storage.get_services()
        second = await storage.get_services()
        return first, second

    first, second = run(scenario())
    assert [s.id for s in first] == [1]
    assert [s.id for s in second] == [1]


def test_services_by_category_preserves_insertion_order():
    storage = MemStorage()

    async def scenario():
        for name, category in [
            ("Aadhaar Card", "Identity"),
            ("GST Registration", "Business"),
            ("PAN Card", "Identity"),
            ("Udyam Registration", "Business"),
            ("Passport", "Identity"),
        ]:
            await storage.create_service(new_service(name, category))
        return await storage.get_services_by_category("Identity")

    names = [s.name for s in run(scenario())]
    assert names == ["Aadhaar Card", "PAN Card", "Passport"]


def test_service_optional_badges_default_to_none():
    storage = MemStorage()
    service = run(storage.create_service(new_service("Affidavit")))
    assert service.badge is None
    assert service.badge_color is None
    assert run(storage.get_service(service.id)) == service
    assert run(storage.get_service(42)) is None


def test_create_order_starts_pending():
    storage = MemStorage()
    order = run(storage.create_order(NewOrder(user_id=1, service_id=2, amount=150)))

    assert order.id == 1
    assert order.status == "pending"
    assert order.payment_status == "pending"
    assert order.created_at == order.updated_at


def test_order_may_reference_missing_user():
    storage = MemStorage()

    async def scenario():
        await storage.create_order(NewOrder(user_id=404, service_id=1, amount=50))
        return await storage.get_orders_by_user_id(404)

    assert len(run(scenario())) == 1


def test_order_status_and_payment_status_move_independently():
    storage = MemStorage()

    async def scenario():
        order = await storage.create_order(NewOrder(user_id=1, service_id=1, amount=50))
        processing = await storage.update_order_status(order.id, "processing")
        paid = await storage.update_payment_status(order.id, "paid")
        return order, processing, paid

    order, processing, paid = run(scenario())
    assert processing.status == "processing"
    assert processing.payment_status == "pending"
    assert paid.status == "processing"
    assert paid.payment_status == "paid"
    assert paid.updated_at >= order.updated_at
    assert paid.created_at == order.created_at


def test_update_unknown_order_returns_none():
    storage = MemStorage()
    assert run(storage.update_order_status(7, "completed")) is None
    assert run(storage.update_payment_status(7, "paid")) is None


def test_orders_by_user_id_filters():
    storage = MemStorage()

    async def scenario():
        for user_id in (1, 2, 1, 3, 1):
            await storage.create_order(NewOrder(user_id=user_id, service_id=1, amount=50))
        return await storage.get_orders_by_user_id(1), await storage.get_orders()

    mine, everything = run(scenario())
    assert [o.id for o in mine] == [1, 3, 5]
    assert len(everything) == 5
