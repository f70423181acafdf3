"""Seed the database with a demo host, a demo guest, listings and bookings.

Run from the backend directory:
    python -m scripts.seed_data
"""

import asyncio
import sys
from datetime import date, timedelta
from decimal import Decimal
from pathlib import Path

# Add backend to path so imports work when run as a script
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import delete, select

from staybook.auth.passwords import hash_password
from staybook.database import async_session_factory, create_tables
from staybook.models.booking import Booking
from staybook.models.place import Place
from staybook.models.user import User

# ---------------------------------------------------------------------------
# Seed data definitions
# ---------------------------------------------------------------------------

DEMO_HOST = {
    "email": "host@staybook.dev",
    "password": "demo1234",
    "name": "Demo Host",
}

DEMO_GUEST = {
    "email": "guest@staybook.dev",
    "password": "demo1234",
    "name": "Demo Guest",
}

PLACES = [
    {
        "title": "Sunny loft near the old town",
        "address": "Rua das Flores 12, Porto, Portugal",
        "description": (
            "Bright top-floor loft with exposed beams and a view over the river. "
            "Five minutes on foot to the old town, cafés and the tram stop."
        ),
        "perks": ["wifi", "tv", "entrance"],
        "extra_info": "Quiet hours after 22:00. No parties.",
        "check_in": "14:00",
        "check_out": "11:00",
        "max_guests": 2,
        "price": Decimal("85.00"),
    },
    {
        "title": "Cabin by the lake",
        "address": "Lakeside Road 4, Hallstatt, Austria",
        "description": (
            "Wooden cabin with a private jetty, wood stove and a small sauna. "
            "Ideal for families who want a quiet week outdoors."
        ),
        "perks": ["parking", "pets", "wifi"],
        "extra_info": "Firewood is included. Bring your own towels.",
        "check_in": "15:00",
        "check_out": "10:00",
        "max_guests": 5,
        "price": Decimal("140.00"),
    },
    {
        "title": "Studio with rooftop terrace",
        "address": "Calle Mayor 30, Madrid, Spain",
        "description": "Compact studio with a shared rooftop terrace in the city centre.",
        "perks": ["wifi", "radio"],
        "extra_info": None,
        "check_in": "13:00",
        "check_out": "11:00",
        "max_guests": 2,
        "price": Decimal("60.00"),
    },
]


async def seed() -> None:
    """Populate the database with demo accounts, places and bookings.

    Idempotent: removes the demo accounts and everything they own before
    re-creating them.
    """
    await create_tables()

    async with async_session_factory() as session:
        emails = [DEMO_HOST["email"], DEMO_GUEST["email"]]
        result = await session.execute(select(User.id).where(User.email.in_(emails)))
        existing_ids = list(result.scalars().all())

        if existing_ids:
            print("Demo users already exist. Deleting and re-seeding...")
            await session.execute(delete(Booking).where(Booking.user_id.in_(existing_ids)))
            await session.execute(delete(Place).where(Place.owner_id.in_(existing_ids)))
            await session.execute(delete(User).where(User.id.in_(existing_ids)))
            await session.flush()

        # ------------------------------------------------------------------
        # 1. Create demo accounts
        # ------------------------------------------------------------------
        host = User(
            email=DEMO_HOST["email"],
            hashed_password=hash_password(DEMO_HOST["password"]),
            name=DEMO_HOST["name"],
        )
        guest = User(
            email=DEMO_GUEST["email"],
            hashed_password=hash_password(DEMO_GUEST["password"]),
            name=DEMO_GUEST["name"],
        )
        session.add_all([host, guest])
        await session.flush()

        print(f"Created demo host: {host.email} (id={host.id})")
        print(f"Created demo guest: {guest.email} (id={guest.id})")

        # ------------------------------------------------------------------
        # 2. Create places owned by the host
        # ------------------------------------------------------------------
        created_places: list[Place] = []
        for place_data in PLACES:
            place = Place(owner_id=host.id, photos=[], **place_data)
            session.add(place)
            await session.flush()
            created_places.append(place)
            print(f"   {place.title} ({place.price}/night)")

        # ------------------------------------------------------------------
        # 3. Create bookings made by the guest
        # ------------------------------------------------------------------
        today = date.today()
        for offset, place in enumerate(created_places[:2]):
            nights = 3 + offset
            check_in = today + timedelta(days=14 * (offset + 1))
            session.add(
                Booking(
                    place_id=place.id,
                    user_id=guest.id,
                    check_in=check_in,
                    check_out=check_in + timedelta(days=nights),
                    number_of_guests=min(2, place.max_guests or 1),
                    name=guest.name,
                    phone="+351 900 000 000",
                    price=place.price * nights if place.price else None,
                )
            )

        await session.commit()

        print()
        print("=" * 60)
        print(f"   Users:    2 ({DEMO_HOST['email']}, {DEMO_GUEST['email']} / demo1234)")
        print(f"   Places:   {len(created_places)}")
        print("   Bookings: 2")
        print("=" * 60)
        print("Done! You can now log in at /api/login")


if __name__ == "__main__":
    asyncio.run(seed())
