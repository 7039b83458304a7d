import logging
from typing import Optional

from dotenv import load_dotenv
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from db import Base, engine
from relocation.logic.catalog import CATALOG_PATH, load_catalog, seed_catalog

load_dotenv()

logger = logging.getLogger(__name__)


def seed_countries(db_engine: Optional[Engine] = None, path: str = CATALOG_PATH) -> int:
    """
    Create ``rec_countries`` if needed and copy the bundled catalog into it.

    Codes already in the table are left untouched, so the script can be re-run.

    Returns:
        Number of rows added
    """
    db_engine = db_engine if db_engine is not None else engine
    if db_engine is None:
        raise RuntimeError("DATABASE_URL is not set. Please check your environment variables.")

    Base.metadata.create_all(bind=db_engine)

    with Session(db_engine) as db:
        added = seed_catalog(db, load_catalog(path))
        db.commit()

    logger.info(f"Catalog seeding finished: {added} new countries")
    return added


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    seed_countries()
