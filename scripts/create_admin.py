"""
Script to create the initial admin account.
Run: python -m scripts.create_admin [--email EMAIL] [--password PASSWORD] [--name NAME]
"""
import argparse
import logging
import sys

from app.core.config import get_settings
from app.core.security import hash_password
from app.db.base import Base
from app.db.models.user import User, UserRole
from app.db.session import build_engine, build_session_factory

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DEFAULT_EMAIL = "admin@jobportal.com"
DEFAULT_PASSWORD = "admin123"


def create_admin(session_factory, email: str, password: str, name: str = "Admin User") -> bool:
    """
    Create an admin account unless the email is already registered.

    Returns True when a new account was created.
    """
    db = session_factory()
    try:
        existing = db.query(User).filter(User.email == email).first()
        if existing:
            logger.info(f"User {email} already exists (ID: {existing.id}, role: {existing.role})")
            return False

        user = User(
            name=name,
            email=email,
            password_hash=hash_password(password),
            role=UserRole.ADMIN.value,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info(f"Created admin user with ID: {user.id}")
        return True

    except Exception as e:
        db.rollback()
        logger.error(f"Error creating admin user: {e}", exc_info=True)
        raise
    finally:
        db.close()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Create the job portal admin account")
    parser.add_argument("--email", default=DEFAULT_EMAIL)
    parser.add_argument("--password", default=DEFAULT_PASSWORD)
    parser.add_argument("--name", default="Admin User")
    args = parser.parse_args(argv)

    settings = get_settings()
    engine = build_engine(settings.database_url)
    Base.metadata.create_all(bind=engine)

    try:
        created = create_admin(build_session_factory(engine), args.email, args.password, args.name)
    except Exception:
        print(f"\n[ERROR] Failed to create admin user {args.email}")
        return 1
    finally:
        engine.dispose()

    if created:
        print(f"\n[SUCCESS] Admin user created: {args.email}")
    else:
        print(f"\n[SKIPPED] Admin user already exists: {args.email}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
