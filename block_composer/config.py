"""
Configuration block_composer — lue depuis l'environnement au chargement.
"""
import os
from pathlib import Path

_ROOT = Path(__file__).parent.parent

# Durée de la transition de sortie avant retrait effectif d'un bloc (ms)
REMOVAL_DELAY_MS = int(os.getenv("REMOVAL_DELAY_MS", "300"))

# Quota de stockage affiché dans l'éditeur (octets)
STORAGE_LIMIT_BYTES = int(os.getenv("STORAGE_LIMIT_BYTES", str(1024 ** 3)))

# Seuils de niveau du quota (pourcentage utilisé)
STORAGE_WARNING_PCT  = 75.0
STORAGE_CRITICAL_PCT = 90.0

BASE_URL        = os.getenv("BASE_URL", "http://localhost:8001")
UPLOADS_DIR     = os.getenv("UPLOADS_DIR", str(_ROOT / "dist" / "uploads"))
UPLOAD_ENDPOINT = os.getenv("UPLOAD_ENDPOINT", "")
UPLOAD_TIMEOUT  = int(os.getenv("UPLOAD_TIMEOUT", "60"))

DB_PATH   = os.getenv("DB_PATH", str(_ROOT / "data" / "block_composer.db"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
