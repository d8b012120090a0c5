from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy import create_engine, select, func
from sqlalchemy.orm import Session
from loguru import logger

from parking_reservation.config.settings_env import settings
from parking_reservation.infrastructure.persistence.models.models import Base, ParkingSlot, User

DATABASE_URL = settings.DATABASE_URL
ASYNC_DATABASE_URL = settings.ASYNC_DATABASE_URL

# Sync engine for initialization and maintenance scripts
engine = create_engine(DATABASE_URL, connect_args={
                       "check_same_thread": False} if "sqlite" in DATABASE_URL else {})

# Async engine for application
async_engine = create_async_engine(ASYNC_DATABASE_URL, echo=False)
AsyncSessionLocal = async_sessionmaker(
    async_engine, class_=AsyncSession, expire_on_commit=False)


async def get_async_db():
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


def seed_slot_type(position: int) -> str:
    """Slot type for the 1-based ``position`` of a seeded slot."""
    if position <= 2:
        return "disabled"
    if position <= 4:
        return "family"
    if position <= 6:
        return "electric"
    return "standard"


def init_db(bind=None):
    bind = bind or engine
    logger.info(f"Initializing database at: {bind.url}")
    Base.metadata.create_all(bind=bind, checkfirst=True)
    logger.info("Tables created")

    with Session(bind) as session:
        existing_slots = session.execute(select(func.count(ParkingSlot.id))).scalar()
        if existing_slots == 0:
            for position in range(1, settings.SEED_SLOT_COUNT + 1):
                session.add(ParkingSlot(
                    slot_number=f"A-{position:02d}",
                    slot_type=seed_slot_type(position),
                    status="available",
                    hourly_rate=settings.DEFAULT_HOURLY_RATE,
                    daily_rate=settings.DEFAULT_DAILY_RATE
                ))
            logger.info(f"Created {settings.SEED_SLOT_COUNT} parking slots")

        admin_email = settings.SEED_ADMIN_EMAIL
        if admin_email:
            admin_email = admin_email.lower()
            existing_admin = session.execute(
                select(User).where(User.email == admin_email)
            ).scalars().first()
            if not existing_admin:
                session.add(User(name=settings.SEED_ADMIN_NAME, email=admin_email, role="admin"))
                logger.info(f"Created admin user {admin_email}")

        session.commit()
