# freshbulk/main.py
import uvicorn

from freshbulk.api import create_app
from freshbulk.data.database import Base, engine
from freshbulk.utils.settings import STORAGE_BACKEND
from freshbulk.utils.logging import get_logger

# import wszystkich modeli przed create_all
from freshbulk.data.models import ProductModel, OrderModel, AddressModel, UserModel  # noqa: F401

logger = get_logger(__name__)

if STORAGE_BACKEND == "sql":
    logger.info(f"Initializing database, tables: {list(Base.metadata.tables.keys())}")
    try:
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise
    logger.info("Database tables created")
else:
    logger.info("Using in-memory storage")


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
