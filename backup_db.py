import logging
import shutil
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)

# Paths
BASE_DIR = Path(__file__).resolve().parent
DB_FILE = BASE_DIR / "scorecard.db"
BACKUP_DIR = BASE_DIR / "backups"


def backup_database(db_file: Path = DB_FILE, backup_dir: Path = BACKUP_DIR, now=None):
    """Copia el catálogo de campos; devuelve la ruta del backup o None si no hay BD."""
    db_file, backup_dir = Path(db_file), Path(backup_dir)
    if not db_file.exists():
        logger.warning("database not found: %s", db_file)
        return None

    backup_dir.mkdir(parents=True, exist_ok=True)

    # Nombre del backup con fecha y hora
    timestamp = (now or datetime.now()).strftime("%Y-%m-%d_%H-%M")
    backup_file = backup_dir / f"scorecard_{timestamp}.db"
    shutil.copy(db_file, backup_file)
    logger.info("backup created: %s", backup_file.name)
    return backup_file


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    backup_database()
