"""
Seed the database with categories, vendor users, and approved vendor profiles around a few US metros.
Run after `pip install -e .` and `alembic upgrade head`: python apps/api/scripts/seed_db.py
"""
import asyncio
import logging
import random

from sqlalchemy import select

from burpp.db.session import async_session
from burpp.db.models import Category, UserProfile, VendorProduct, VendorProfile

logger = logging.getLogger(__name__)

NUM_VENDORS = 60
VIRTUAL_ONLY_SHARE = 0.2
APPROVED_SHARE = 0.85

CATEGORIES = [
    ("Home Cleaning", True),
    ("Plumbing", True),
    ("Electrical", True),
    ("Personal Training", True),
    ("Tutoring", True),
    ("Photography", False),
    ("Landscaping", False),
    ("Pet Sitting", False),
    ("Web Design", False),
    ("Life Coaching", False),
    ("Music Lessons", False),
    ("Handyman", False),
]

# zip, lat, lng
METROS = [
    ("10001", 40.7506, -73.9972),
    ("60601", 41.8853, -87.6216),
    ("94103", 37.7726, -122.4099),
    ("78701", 30.2711, -97.7437),
    ("98101", 47.6114, -122.3305),
]

FIRST_NAMES = ["Alex", "Jordan", "Sam", "Taylor", "Morgan", "Casey", "Riley", "Avery", "Jamie", "Quinn"]
LAST_NAMES = ["Smith", "Johnson", "Garcia", "Miller", "Davis", "Lopez", "Wilson", "Nguyen", "Hill", "Baker"]
TITLES = ["Owner", "Lead Specialist", "Certified Pro", "Independent Consultant"]
PRODUCT_TITLES = ["Starter session", "Standard package", "Premium package", "Consultation call"]


def _jitter(value: float, spread: float = 0.15) -> float:
    return round(value + random.uniform(-spread, spread), 6)


async def seed_categories(session) -> list[Category]:
    existing = {c.name: c for c in (await session.execute(select(Category))).scalars().all()}
    created = []
    for name, featured in CATEGORIES:
        if name in existing:
            continue
        cat = Category(name=name, is_active=True, is_featured=featured)
        session.add(cat)
        created.append(cat)
    await session.flush()
    logger.info("Categories: %s created, %s already present", len(created), len(existing))
    return list(existing.values()) + created


async def run_seed() -> None:
    async with async_session() as session:
        categories = await seed_categories(session)
        category_ids = [c.id for c in categories]

        for i in range(NUM_VENDORS):
            first = random.choice(FIRST_NAMES)
            last = random.choice(LAST_NAMES)
            email = f"seed.vendor{i+1}@example.com"
            if (await session.execute(select(UserProfile.id).where(UserProfile.email == email))).first():
                continue

            user = UserProfile(
                email=email,
                first_name=first,
                last_name=last,
                role=UserProfile.VENDOR,
            )
            session.add(user)
            await session.flush()

            virtual_only = random.random() < VIRTUAL_ONLY_SHARE
            zip_code, lat, lng = random.choice(METROS)
            cats = random.sample(category_ids, k=random.randint(1, 3))
            vendor = VendorProfile(
                user_id=user.id,
                business_name=f"{last} {random.choice(CATEGORIES)[0]}",
                profile_title=random.choice(TITLES),
                about=f"{first} has served the area for {random.randint(2, 20)} years.",
                offers_virtual_services=virtual_only or random.random() < 0.3,
                offers_in_person_services=not virtual_only,
                hourly_rate=float(random.randrange(40, 200, 5)),
                service_categories=cats,
                zip_code=zip_code,
                latitude=None if virtual_only else _jitter(lat),
                longitude=None if virtual_only else _jitter(lng),
                service_radius=None if virtual_only else random.choice([5, 10, 25, 50]),
                first_name=first,
                last_name=last,
                email=email,
                admin_approved=random.random() < APPROVED_SHARE,
            )
            session.add(vendor)
            await session.flush()
            for order, title in enumerate(random.sample(PRODUCT_TITLES, k=random.randint(0, 3))):
                session.add(
                    VendorProduct(
                        vendor_id=vendor.id,
                        title=title,
                        starting_price=float(random.randrange(25, 400, 25)),
                        display_order=order,
                    )
                )

            if (i + 1) % 20 == 0:
                logger.info("Progress: seeded %s/%s vendors", i + 1, NUM_VENDORS)
                await session.commit()

        await session.commit()

    logger.info("Done. Seeded %s vendors across %s metros", NUM_VENDORS, len(METROS))


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    logger.info("Starting seed: %s categories, %s vendors", len(CATEGORIES), NUM_VENDORS)
    asyncio.run(run_seed())
