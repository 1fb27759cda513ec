import pathlib

from alembic import command
from alembic.config import Config

from clinic_booking.config import settings

ROOT_DIR = pathlib.Path(__file__).resolve().parents[1]


def apply_migrations():
    print(f"Using DB: {settings.resolved_database_url}")

    config = Config(str(ROOT_DIR / "alembic.ini"))
    config.set_main_option("script_location", str(ROOT_DIR / "alembic"))

    command.upgrade(config, "head")
    print("All migrations applied.")


if __name__ == "__main__":
    apply_migrations()
