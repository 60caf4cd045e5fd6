import logging

from jobhunt.db.base import Base
from jobhunt.db.session import engine
import jobhunt.db.models  # noqa: F401  (registers every table on Base.metadata)

logger = logging.getLogger(__name__)


def init_db(bind=None):
    """Create any missing tables. Used when migrations are not enabled."""
    bind = bind or engine
    Base.metadata.create_all(bind=bind)
    logger.info("Database tables ensured")
