"""
╔══════════════════════════════════════════════════════════════════════════════╗
║  Prospection - Calcul des statistiques réelles                               ║
║                                                                              ║
║  Les compteurs sont TOUJOURS recalculés depuis les portes en base:           ║
║  - Lecture seule, aucun effet de bord                                        ║
║  - Même snapshot de portes = mêmes compteurs                                 ║
║  - Utilise contribution_of (porte_status) pour chaque groupe de statut       ║
╚══════════════════════════════════════════════════════════════════════════════╝
"""

from typing import Dict, List
from config import db
from models.porte_status import StatutPorte, CONTRIBUTION_FIELDS, contribution_of


STAT_FIELDS = CONTRIBUTION_FIELDS + (
    "immeubles_visites",
    "nb_immeubles_prospectes",
)


def empty_stats() -> Dict[str, int]:
    return {field: 0 for field in STAT_FIELDS}


async def count_portes_by_statut(immeuble_ids: List[str]) -> Dict[str, int]:
    """Nombre de portes par statut sur un ensemble d'immeubles"""
    if not immeuble_ids:
        return {}

    groups = await db.portes.aggregate([
        {"$match": {"immeuble_id": {"$in": immeuble_ids}}},
        {"$group": {"_id": "$statut", "count": {"$sum": 1}}},
    ]).to_list(None)

    return {g["_id"]: g["count"] for g in groups}


async def compute_stats_for_immeubles(immeuble_query: dict) -> Dict[str, int]:
    """
    Compteurs réels pour tous les immeubles correspondant à `immeuble_query`
    (ex: {"commercial_id": ...} ou {"zone_id": ...}).

    Lève UnknownStatusError si une porte porte un statut hors taxonomie.
    """
    stats = empty_stats()

    immeubles = await db.immeubles.find(immeuble_query, {"_id": 0, "id": 1}).to_list(None)
    immeuble_ids = [i["id"] for i in immeubles]
    if not immeuble_ids:
        return stats

    counts = await count_portes_by_statut(immeuble_ids)
    for statut, count in counts.items():
        for field, value in contribution_of(statut, count).items():
            stats[field] += value

    # Immeubles visités = au moins une porte != NON_VISITE
    visites = await db.portes.distinct(
        "immeuble_id",
        {
            "immeuble_id": {"$in": immeuble_ids},
            "statut": {"$ne": StatutPorte.NON_VISITE.value},
        }
    )
    stats["immeubles_visites"] = len(visites)
    stats["nb_immeubles_prospectes"] = len(visites)  # Pour l'instant identique

    return stats


async def compute_real_stats(commercial_id: str) -> Dict[str, int]:
    """Statistiques réelles d'un commercial, sur toutes les portes de ses immeubles"""
    return await compute_stats_for_immeubles({"commercial_id": commercial_id})
