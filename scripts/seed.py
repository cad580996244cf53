import asyncio
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.db.session import AsyncSessionLocal
from app.models import (
    BookingRequest, CommentReply, ContactRequest, DayPass, Invoice, Post, PostComment,
    QuoteRequest, User, VisitRequest, Workspace,
)
from app.models.enums import UserRole, UserStatus
from app.security import get_password_hash

# Store credentials for easy output
seeded_user_credentials = {}
DEFAULT_PASSWORD = "password123"

WORKSPACES = [
    {
        "name": "Dedicated Workspace #1",
        "location": "Whitefields, Kondapur",
        "floor": "1st Floor",
        "type": "Dedicated Workspace",
        "capacity": "20 people",
        "amenities": ["High-speed WiFi", "Coffee Bar", "24/7 Access"],
        "featured": True,
        "base_price": Decimal("9999"),
        "price_label": "From ₹9,999/mo",
        "has_conference_hall": True,
        "has_cabin": True,
    },
    {
        "name": "Open Workstation",
        "location": "Whitefields, Kondapur",
        "floor": "2nd Floor",
        "type": "Open WorkStation",
        "capacity": "6-12 people",
        "amenities": ["High-speed WiFi", "Coffee Bar", "Presentation Room"],
        "base_price": Decimal("5999"),
        "price_label": "From ₹5,999/mo",
    },
    {
        "name": "Executive Meeting Room",
        "location": "JBS Parade Ground",
        "floor": "1st Floor",
        "type": "Board Room",
        "capacity": "12 people",
        "amenities": ["High-speed WiFi", "Coffee Bar", "Smart Board"],
        "price_label": "From ₹799/hr",
    },
    {
        "name": "Grand Event Space",
        "location": "Whitefields, Kondapur",
        "floor": "4th Floor",
        "type": "Event Space",
        "capacity": "100-120 people",
        "amenities": ["AV Equipment", "Catering Available", "Parking"],
    },
    {
        "name": "Private Suite",
        "location": "JBS Parade Ground",
        "floor": "5th Floor",
        "type": "Dedicated Workspace",
        "capacity": "4 people",
        "amenities": ["Private Entry", "WiFi", "Printer Access"],
        "featured": True,
        "base_price": Decimal("24999"),
        "price_label": "From ₹24,999/mo",
        "has_cabin": True,
    },
    {
        "name": "Creative Studio",
        "location": "Whitefields, Kondapur",
        "type": "Open Workspace",
        "capacity": "8 people",
        "amenities": ["Natural Light", "Studio Backgrounds", "Coffee"],
        "base_price": Decimal("12999"),
        "price_label": "From ₹12,999/mo",
    },
]

USERS = [
    {"name": "Pranav Raj", "email": "pranav@cohort.com", "role": UserRole.ADMIN, "status": UserStatus.ACTIVE,
     "joined_date": "Jan 15, 2024", "last_active": "Today"},
    {"name": "Amit Sharma", "email": "amit@startup.co", "role": UserRole.MEMBER, "status": UserStatus.ACTIVE,
     "joined_date": "Feb 10, 2024", "last_active": "2 hours ago"},
    {"name": "Sneha Reddy", "email": "sneha@designhub.in", "role": UserRole.MEMBER, "status": UserStatus.INACTIVE,
     "joined_date": "Nov 20, 2023", "last_active": "5 days ago"},
    {"name": "Vikram Malhotra", "email": "vikram@enterprise.com", "role": UserRole.MANAGER,
     "status": UserStatus.ACTIVE, "joined_date": "Mar 01, 2024", "last_active": "10 mins ago"},
    {"name": "Front Desk", "email": "desk@cohort.com", "role": UserRole.AUTHENTICATOR, "status": UserStatus.ACTIVE,
     "joined_date": "Mar 01, 2024", "last_active": "Today"},
]


async def clear_all_data(db: AsyncSession):
    """Clears all seeded tables, children before parents."""
    print("--- Clearing All Existing Data ---")
    for model in (
        CommentReply, PostComment, Post, Invoice, BookingRequest, VisitRequest,
        DayPass, QuoteRequest, ContactRequest, Workspace, User,
    ):
        await db.execute(model.__table__.delete())
    await db.commit()
    print("--- All data cleared successfully. ---")


async def create_user(db: AsyncSession, **fields) -> User:
    user = await db.scalar(select(User).filter(User.email == fields["email"]))
    if user:
        print(f"User {fields['email']} already exists. Skipping creation.")
    else:
        user = User(hashed_password=get_password_hash(DEFAULT_PASSWORD), **fields)
        db.add(user)
        await db.flush()
        print(f"Created User: {user.email} (Role: {user.role.value}, Status: {user.status.value})")
    seeded_user_credentials[user.email] = DEFAULT_PASSWORD
    return user


async def seed_data(db: AsyncSession):
    await clear_all_data(db)

    print("\n--- Creating Workspaces ---")
    for fields in WORKSPACES:
        db.add(Workspace(**fields))
        print(f"Created Workspace: {fields['name']} ({fields['location']})")

    print("\n--- Creating Users ---")
    for fields in USERS:
        await create_user(db, **fields)

    await db.commit()
    print("\n--- Seeding Completed ---")


async def main():
    print("Starting database seed process...")
    async with AsyncSessionLocal() as db:
        await seed_data(db)

    print(f"\n--- Seeded User Credentials (Password for all: {DEFAULT_PASSWORD}) ---")
    for email, password in seeded_user_credentials.items():
        print(f"Email: {email}, Password: {password}")


if __name__ == "__main__":
    # Run after `alembic upgrade head`; existing rows are removed first.
    asyncio.run(main())
