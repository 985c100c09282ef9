"""
Check database connectivity and list registered users.
Run: python -m scripts.check_db
"""
import logging
import sys

from sqlalchemy import text

from app.core.config import get_settings
from app.db.models.user import User
from app.db.session import build_engine, build_session_factory

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def check_db(session_factory) -> list:
    """Run a probe query and return (id, name, email, role) for every user."""
    db = session_factory()
    try:
        db.execute(text("SELECT 1"))
        logger.info("Connected successfully")
        return db.query(User.id, User.name, User.email, User.role).order_by(User.id).all()
    finally:
        db.close()


def main() -> int:
    settings = get_settings()
    engine = build_engine(settings.database_url)
    try:
        users = check_db(build_session_factory(engine))
    except Exception as e:
        logger.error(f"Connection failed: {e}")
        return 1
    finally:
        engine.dispose()

    print(f"Users found: {len(users)}")
    for user_id, name, email, role in users:
        print(f"  {user_id}\t{role}\t{email}\t{name}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
