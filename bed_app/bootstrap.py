from bed_app.config import DATA_DIR, LOG_LEVEL
from bed_app.database import init_db
from bed_app.logging_config import setup_logging


def initialize_application() -> None:
    setup_logging(LOG_LEVEL)
    DATA_DIR.mkdir(parents=True, exist_ok=True)
    init_db()
