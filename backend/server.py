"""
Prospection - API Backend
Suivi terrain du porte-à-porte et statistiques commerciaux

Démarre avec:
    uvicorn server:app --host 0.0.0.0 --port 8001 --reload
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from config import CORS_ORIGINS, LOG_LEVEL

# Configuration logging
logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger("prospection")

# Créer l'app
app = FastAPI(
    title="Prospection API",
    description="Prospection porte-à-porte: portes, immeubles et statistiques commerciaux",
    version="1.0.0"
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ==================== IMPORT DES ROUTES ====================

from routes import portes, immeubles, statistics

# Routes avec préfixe /api
app.include_router(portes.router, prefix="/api")
app.include_router(immeubles.router, prefix="/api")
app.include_router(statistics.router, prefix="/api")

# ==================== ROUTE RACINE ====================

@app.get("/")
async def root():
    return {
        "name": "Prospection API",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs"
    }


# ==================== STARTUP / SHUTDOWN ====================

@app.on_event("startup")
async def startup():
    logger.info("🚀 Prospection API démarrée")

    from config import db
    from services.stats_dispatcher import stats_dispatcher

    # Index sur les collections
    await db.statistics.create_index("commercial_id", unique=True)
    await db.portes.create_index("id", unique=True)
    await db.portes.create_index("immeuble_id")
    await db.immeubles.create_index("commercial_id")
    await db.immeubles.create_index("zone_id")
    await db.zones_en_cours.create_index("user_id")
    await db.historique_zones.create_index("zone_id")

    logger.info("✅ Index MongoDB créés")

    stats_dispatcher.start()


@app.on_event("shutdown")
async def shutdown():
    from config import client
    from services.stats_dispatcher import stats_dispatcher

    await stats_dispatcher.stop()
    client.close()
    logger.info("🛑 Prospection API arrêtée")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8001)
