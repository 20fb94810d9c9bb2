"""
Routes pour les statistiques commerciaux
- Lecture des agrégats
- Recalcul global (maintenance)
- Validation de cohérence (lecture seule)
- Statistiques par zone
"""

from fastapi import APIRouter, Query
from typing import List, Optional

from config import db
from models import (
    StatisticDocument,
    RecalculationResult,
    CoherenceReport,
    ZoneStatistic
)
from services.statistic_sync import sync_commercial_stats, recalculate_all_stats
from services.stats_coherence import validate_stats_coherence
from services.zone_statistics import get_zone_statistics

router = APIRouter(prefix="/statistics", tags=["Statistiques"])


@router.get("", response_model=List[StatisticDocument])
async def list_statistics(
    commercial_id: Optional[str] = Query(None, description="Filtrer sur un commercial")
):
    query = {}
    if commercial_id:
        query["commercial_id"] = commercial_id
    return await db.statistics.find(query, {"_id": 0}).to_list(1000)


@router.post("/recalculate", response_model=RecalculationResult)
async def recalculate():
    """
    Recalcule les statistiques de tous les commerciaux depuis les portes.
    Un échec sur un commercial est compté, le recalcul continue.
    """
    return await recalculate_all_stats()


@router.get("/coherence", response_model=CoherenceReport)
async def coherence():
    """
    Compare les statistiques stockées aux statistiques réelles.
    Lecture seule: corriger avec POST /statistics/recalculate.
    """
    return await validate_stats_coherence()


@router.post("/sync/{immeuble_id}")
async def sync_immeuble(immeuble_id: str):
    """
    Synchronisation manuelle des stats du commercial d'un immeuble.
    """
    stats = await sync_commercial_stats(immeuble_id)
    return {"synced": stats is not None, "stats": stats}


@router.get("/zones", response_model=List[ZoneStatistic])
async def zones():
    return await get_zone_statistics()
