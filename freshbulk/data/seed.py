# freshbulk/data/seed.py
from decimal import Decimal

from freshbulk.data.database import Base, SessionLocal, engine
from freshbulk.data import models  # noqa: F401  rejestracja tabel w Base.metadata
from freshbulk.domain.schemas import ProductCreate, ProductCategory
from freshbulk.repos.sql_storage import SqlStorage
from freshbulk.repos.storage import Storage
from freshbulk.services.user_service import UserService
from freshbulk.utils.settings import ADMIN_USERNAME, ADMIN_PASSWORD, ADMIN_EMAIL
from freshbulk.utils.logging import get_logger

logger = get_logger(__name__)

_IMG = "https://images.unsplash.com/{}?ixlib=rb-1.2.1&auto=format&fit=crop&w=300&h=200&q=80"

SAMPLE_PRODUCTS = [
    ProductCreate(
        name="Tomatoes",
        category=ProductCategory.VEGETABLES,
        price=Decimal("25"),
        unit="kg",
        description="Fresh, ripe tomatoes perfect for sauces and salads.",
        image_url=_IMG.format("photo-1592924357229-86f5e9152a9e"),
    ),
    ProductCreate(
        name="Apples",
        category=ProductCategory.FRUITS,
        price=Decimal("120"),
        unit="kg",
        description="Sweet and crunchy apples, perfect for snacking or baking.",
        image_url=_IMG.format("photo-1560806887-1e4cd0b6cbd6"),
    ),
    ProductCreate(
        name="Spinach",
        category=ProductCategory.LEAFY_GREENS,
        price=Decimal("40"),
        unit="bunch",
        description="Nutrient-rich spinach leaves for salads and cooking.",
        image_url=_IMG.format("photo-1576045057995-568f588f82fb"),
    ),
    ProductCreate(
        name="Onions",
        category=ProductCategory.VEGETABLES,
        price=Decimal("30"),
        unit="kg",
        description="Essential kitchen staple for adding flavor to any dish.",
        image_url=_IMG.format("photo-1618512496248-a07fe83aa8a0"),
    ),
]


def seed_products(storage: Storage) -> int:
    # not forcing: only seed if empty
    if storage.get_all_products():
        return 0

    for product in SAMPLE_PRODUCTS:
        storage.create_product(product)

    logger.info(f"Seeded {len(SAMPLE_PRODUCTS)} products")
    return len(SAMPLE_PRODUCTS)


def seed():
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        storage = SqlStorage(db)
        seed_products(storage)

        if ADMIN_PASSWORD:
            admin = UserService(storage).ensure_admin(ADMIN_USERNAME, ADMIN_PASSWORD, ADMIN_EMAIL)
            logger.info(f"Admin user ready: {admin.username}")
        else:
            logger.warning("ADMIN_PASSWORD nie ustawione - pomijam tworzenie admina")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
