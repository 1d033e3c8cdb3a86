# campusmart/data/seed.py
from decimal import Decimal

from sqlalchemy.orm import Session

from campusmart.data.database import SessionLocal
from campusmart.data.models import ItemModel, UserModel
from campusmart.utils.logging import get_logger

logger = get_logger(__name__)

DEMO_USERS = [
    ("juan", "Juan", "Dela Cruz"),
    ("maria", "Maria", "Santos"),
    ("pedro", "Pedro", "Reyes"),
]

# (username sprzedawcy, nazwa, cena, kategoria)
DEMO_ITEMS = [
    ("maria", "Scientific calculator", "450.00", "school supplies"),
    ("maria", "Lab gown (M)", "300.00", "uniforms"),
    ("pedro", "Calculus textbook", "650.00", "books"),
    ("pedro", "Desk lamp", "199.50", "dorm"),
]


def seed(db: Session | None = None) -> bool:
    own_session = db is None
    db = db or SessionLocal()
    try:
        # not forcing: only seed if empty
        if db.query(UserModel).first():
            return False

        users = {}
        for username, first_name, last_name in DEMO_USERS:
            users[username] = UserModel(username=username, first_name=first_name, last_name=last_name)
            db.add(users[username])
        db.flush()

        for seller, name, price, category in DEMO_ITEMS:
            db.add(
                ItemModel(
                    seller_id=users[seller].id,
                    name=name,
                    price=Decimal(price),
                    category=category,
                )
            )
        db.commit()
        logger.info(f"Seeded {len(DEMO_USERS)} users and {len(DEMO_ITEMS)} items")
        return True
    finally:
        if own_session:
            db.close()
