import logging
import os

from dotenv import load_dotenv

from app.database.sample_data import seed_sample_data
from app.database.storage import MemStorage

load_dotenv()

logger = logging.getLogger(__name__)


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


VALIDATE_REFERENCES = _env_flag("STORE_VALIDATE_REFERENCES", "false")
SEED_SAMPLE_DATA = _env_flag("SEED_SAMPLE_DATA", "true")


def build_store() -> MemStorage:
    store = MemStorage(validate_references=VALIDATE_REFERENCES)
    if SEED_SAMPLE_DATA:
        seed_sample_data(store)
        logger.info(f"Seeded sample data: {store.users.count()} users, {store.workouts.count()} workouts")
    return store


# Process-wide store; routes receive it through get_store so tests can swap it.
db = build_store()


def get_store() -> MemStorage:
    return db
