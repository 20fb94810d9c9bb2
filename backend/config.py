"""
Configuration et utilitaires partagés
"""

import os
from datetime import datetime, timezone
from motor.motor_asyncio import AsyncIOMotorClient
from dotenv import load_dotenv
from pathlib import Path

# Charger .env
ROOT_DIR = Path(__file__).parent
load_dotenv(ROOT_DIR / '.env')

# MongoDB
MONGO_URL = os.environ.get('MONGO_URL', 'mongodb://localhost:27017')
DB_NAME = os.environ.get('DB_NAME', 'prospection')

client = AsyncIOMotorClient(MONGO_URL)
db = client[DB_NAME]

# Serveur
CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*').split(',')
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

# Synchronisation des statistiques (file best-effort)
STATS_SYNC_QUEUE_SIZE = int(os.environ.get('STATS_SYNC_QUEUE_SIZE', '1000'))
STATS_SYNC_DRAIN_TIMEOUT = float(os.environ.get('STATS_SYNC_DRAIN_TIMEOUT', '10'))


# ==================== HELPERS ====================

def now_iso() -> str:
    """Retourne la date/heure actuelle en ISO"""
    return datetime.now(timezone.utc).isoformat()
