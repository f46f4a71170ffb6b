# pricecompare/main.py
import uvicorn

from pricecompare.api import create_app
from pricecompare.data.database import Base, engine
from pricecompare.data.models import DocumentModel  # noqa: F401  registers the table
from pricecompare.utils.logging import get_logger

logger = get_logger(__name__)


def init_db() -> None:
    logger.info(f"Creating tables: {list(Base.metadata.tables.keys())}")
    try:
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise


init_db()
app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
