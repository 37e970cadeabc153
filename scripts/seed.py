from pathlib import Path

from sqlmodel import Session

from portfolio.core.config import settings
from portfolio.core.logging import configure_logging
from portfolio.db.session import engine, init_db
from portfolio.db.seed import seed_all

SEED_PATH = Path(__file__).with_name("seed_data.yaml")


def run_seed():
    configure_logging()
    init_db()
    admin = {
        "email": settings.SEED_ADMIN_EMAIL,
        "pseudo": settings.SEED_ADMIN_PSEUDO or "admin",
        "password": settings.SEED_ADMIN_PASSWORD,
    }
    with Session(engine) as session:
        seed_all(session, SEED_PATH, admin=admin)


if __name__ == "__main__":
    run_seed()
