import fcntl
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from alembic.config import Config

from alembic import command
from pickem.utils.logging import logger

BACKEND_DIR = Path(__file__).resolve().parents[2]
MIGRATION_LOCK_PATH = Path("/tmp/pickem-alembic.lock")


@contextmanager
def migration_lock() -> Iterator[None]:
    """Serializes migration runs across workers started on the same host."""
    with MIGRATION_LOCK_PATH.open("w", encoding="utf-8") as lock_file:
        fcntl.flock(lock_file, fcntl.LOCK_EX)
        try:
            yield
        finally:
            fcntl.flock(lock_file, fcntl.LOCK_UN)


def get_alembic_config() -> Config:
    alembic_config = Config(str(BACKEND_DIR / "alembic.ini"))
    alembic_config.set_main_option("script_location", str(BACKEND_DIR / "alembic"))
    return alembic_config


def alembic_run_migrations() -> None:
    with migration_lock():
        logger.info("Running migrations up to head")
        command.upgrade(get_alembic_config(), "head")
