"""
app/db/seed.py

Purpose: Startup data

- Fixed catalog of government-document assistance services
- Demo accounts (a regular user and an admin)
- Idempotent: existing data is never duplicated
"""

from typing import List

from app.core.logging import get_logger
from app.core.security import hash_password
from app.db.storage import Storage
from app.models.service import NewService
from app.models.user import NewUser
from utils.constants import ROLE_ADMIN

logger = get_logger(__name__)


def _service(name, description, category, price, processing_time, requirements, icon, badge=None, badge_color=None):
    return NewService(
        name=name,
        description=description,
        category=category,
        price=price,
        processing_time=processing_time,
        requirements=requirements,
        icon=icon,
        badge=badge,
        badge_color=badge_color,
    )


SERVICE_CATALOG: List[NewService] = [
    # ============================================================
    # IDENTITY
    # ============================================================
    _service("Voter ID Card (EPIC)", "Apply for new voter ID card or make corrections to existing one",
             "Identity", 100, "15-20 days", "Age proof, address proof, photographs",
             "fa-id-card", "Electoral Document", "blue"),
    _service("Aadhaar Card", "Apply for new Aadhaar card or update existing one",
             "Identity", 50, "10-15 days", "Proof of Identity, Proof of Address, Birth Certificate",
             "fa-id-card", "Essential", "green"),
    _service("PAN Card", "Apply for new PAN card or request a duplicate",
             "Identity", 150, "7-10 days", "Identity proof, address proof, photographs",
             "fa-credit-card", "Tax Document", "orange"),
    _service("Birth Certificate", "Apply for birth certificate or get duplicate copy",
             "Identity", 300, "5-7 days", "Hospital records, parents' IDs",
             "fa-baby", "Essential", "green"),
    _service("Income Certificate", "Apply for income certificate for various purposes",
             "Financial", 200, "7-10 days", "Salary slips, bank statements, employment proof",
             "fa-money-bill", "Income Proof", "green"),
    _service("Domicile Certificate", "Get proof of residence certificate",
             "Identity", 150, "10-15 days", "Address proof, residence proof, identity documents",
             "fa-home", "Residence Proof", "blue"),
    _service("Passport", "Apply for new passport or renewal",
             "Identity", 2500, "30-45 days", "Identity proof, address proof, birth certificate",
             "fa-passport", "Travel Document", "blue"),
    _service("Marriage Certificate", "Apply for marriage registration certificate",
             "Legal", 500, "15-20 days", "Marriage photos, witness IDs, age proof",
             "fa-rings-wedding", "Legal Document", "purple"),
    _service("GST Registration", "Register your business under GST",
             "Business", 1000, "3-5 days", "Business PAN, address proof, bank details",
             "fa-receipt", "Business", "indigo"),
    _service("Aadhaar-PAN Linking", "Quick and secure linking of your Aadhaar card with PAN card",
             "Identity", 50, "1-2 days", "Aadhaar card, PAN card",
             "fa-link", "Essential", "blue"),
    _service("E-Shram Card", "Registration for unorganized workers under E-Shram portal",
             "Employment", 100, "2-3 days", "Aadhaar card, bank details, employment details",
             "fa-id-badge", "Labor Welfare", "green"),
    _service("Death Certificate", "Apply for death certificate or obtain certified copies",
             "Identity", 300, "7-10 days", "Hospital or crematorium records, applicant ID proof",
             "fa-file-alt"),
    _service("Aadhaar Address Update", "Update the address on your existing Aadhaar card",
             "Identity", 75, "5-7 days", "Aadhaar card, new address proof",
             "fa-map-marker-alt", "Popular", "green"),
    _service("Caste Certificate", "Apply for SC/ST/OBC caste certificate",
             "Identity", 200, "15-30 days", "Family caste proof, address proof, affidavit",
             "fa-certificate", "Reservation Benefit", "orange"),

    # ============================================================
    # FINANCIAL
    # ============================================================
    _service("Income Tax Return Filing", "File your ITR-1 or ITR-4 with expert assistance",
             "Financial", 499, "1-3 days", "PAN card, Form 16, bank statements",
             "fa-file-invoice-dollar", "Tax Document", "orange"),
    _service("Bank Account Opening (Jan Dhan)", "Open a zero-balance Pradhan Mantri Jan Dhan account",
             "Financial", 50, "3-5 days", "Aadhaar card, PAN card or Form 60, photograph",
             "fa-university"),
    _service("Ayushman Bharat Card", "Enroll for PM-JAY health insurance card",
             "Financial", 100, "5-7 days", "Aadhaar card, ration card, mobile number",
             "fa-heartbeat", "Health", "red"),

    # ============================================================
    # LEGAL
    # ============================================================
    _service("Rent Agreement", "Drafting and registration of residential rent agreement",
             "Legal", 800, "2-3 days", "Owner and tenant ID proofs, property details",
             "fa-file-contract", "Legal Document", "purple"),
    _service("Affidavit", "Notarized affidavit for name change, address or other declarations",
             "Legal", 250, "1-2 days", "Identity proof, stamp paper details",
             "fa-stamp"),
    _service("Police Verification Certificate", "Apply for police clearance or tenant verification",
             "Legal", 400, "10-15 days", "Identity proof, address proof, photographs",
             "fa-shield-alt", "Verification", "blue"),

    # ============================================================
    # BUSINESS
    # ============================================================
    _service("Udyam (MSME) Registration", "Register your micro, small or medium enterprise",
             "Business", 500, "2-3 days", "Aadhaar card, PAN card, business details",
             "fa-industry", "Business", "indigo"),
    _service("FSSAI Food License", "Basic FSSAI registration for food businesses",
             "Business", 1500, "7-15 days", "Identity proof, business address proof, food category details",
             "fa-utensils", "Business", "indigo"),
    _service("Shop & Establishment License", "Register your shop under the state Shops and Establishments Act",
             "Business", 1200, "7-10 days", "Owner ID proof, shop address proof, photographs",
             "fa-store"),

    # ============================================================
    # EMPLOYMENT
    # ============================================================
    _service("PF Withdrawal Assistance", "Help with EPF claim and withdrawal on the UAN portal",
             "Employment", 300, "10-20 days", "UAN, Aadhaar card, bank passbook",
             "fa-piggy-bank"),
    _service("Employment Exchange Registration", "Register with the state employment exchange",
             "Employment", 100, "3-5 days", "Educational certificates, Aadhaar card, photographs",
             "fa-briefcase"),

    # ============================================================
    # TRANSPORT
    # ============================================================
    _service("Driving Licence", "Apply for learner's or permanent driving licence",
             "Transport", 700, "15-30 days", "Age proof, address proof, medical certificate, photographs",
             "fa-car", "Essential", "green"),
    _service("Vehicle Registration Transfer", "Transfer ownership of a registered vehicle",
             "Transport", 900, "15-20 days", "RC, Form 29/30, insurance, PUC certificate",
             "fa-exchange-alt"),

    # ============================================================
    # PROPERTY & WELFARE
    # ============================================================
    _service("Land Record (7/12 Extract)", "Obtain certified copy of land ownership records",
             "Property", 150, "3-5 days", "Survey number, owner name, district details",
             "fa-map"),
    _service("Ration Card", "Apply for new ration card or add family members",
             "Welfare", 200, "15-30 days", "Address proof, family photographs, income certificate",
             "fa-shopping-basket", "Essential", "green"),
    _service("Old Age Pension", "Apply for state or central old age pension scheme",
             "Welfare", 150, "30-45 days", "Age proof, income certificate, bank details",
             "fa-user-clock", "Senior Citizen", "purple"),
]


async def seed_services(storage: Storage) -> int:
    """
    Inserts the service catalog when the catalog is empty.

    Returns:
        Number of services inserted
    """
    existing = await storage.get_services()
    if existing:
        logger.debug(f"Catalog already has {len(existing)} services, skipping seed")
        return 0

    for new_service in SERVICE_CATALOG:
        await storage.create_service(new_service)

    logger.info(f"Seeded {len(SERVICE_CATALOG)} services")
    return len(SERVICE_CATALOG)


async def seed_demo_users(storage: Storage) -> bool:
    """
    Creates the demo user and the demo admin (only if "testuser" is absent).

    Returns:
        True if the accounts were created
    """
    if await storage.get_user_by_username("testuser"):
        return False

    await storage.create_user(NewUser(
        username="testuser",
        password=hash_password("password123"),
        name="Test User",
        email="test@example.com",
        phone="9876543210",
        address="Test Address, Mumbai, India",
    ))

    admin = await storage.create_user(NewUser(
        username="admin",
        password=hash_password("admin123"),
        name="Admin User",
        email="admin@quicktech.com",
        phone="9876543211",
        address="Admin Office, Delhi, India",
    ))
    await storage.update_user_role(admin.id, ROLE_ADMIN)

    logger.info("Demo users created")
    return True


async def seed_all(storage: Storage):
    await seed_services(storage)
    await seed_demo_users(storage)
