"""
╔══════════════════════════════════════════════════════════════════════════════╗
║  Prospection - Synchronisation des statistiques commerciaux                  ║
║                                                                              ║
║  SEUL CE MODULE écrit dans la collection statistics                          ║
║                                                                              ║
║  RÈGLES:                                                                     ║
║  - Chaque sync RECALCULE l'agrégat complet depuis les portes (pas de delta)  ║
║    → idempotent, et des syncs concurrentes convergent vers la vérité         ║
║  - Une erreur de sync n'est JAMAIS propagée à la mise à jour de porte        ║
║  - Le recalcul global continue malgré l'échec d'un commercial                ║
╚══════════════════════════════════════════════════════════════════════════════╝
"""

import logging
import uuid
from typing import Dict, Any, Optional
from config import db, now_iso
from services.stats_ground_truth import compute_real_stats
from services.zone_assignment import resolve_current_zone_id

logger = logging.getLogger("statistic_sync")


async def upsert_statistic(commercial_id: str, stats: Dict[str, int], zone_id: Optional[str]) -> None:
    """
    Met à jour ou crée LA statistique d'un commercial (clé: commercial_id)
    """
    now = now_iso()
    await db.statistics.update_one(
        {"commercial_id": commercial_id},
        {
            "$set": {
                **stats,
                "zone_id": zone_id,
                "updated_at": now
            },
            "$setOnInsert": {
                "id": str(uuid.uuid4()),
                "created_at": now
            }
        },
        upsert=True
    )


async def refresh_commercial_stats(commercial_id: str) -> Dict[str, Any]:
    """
    Recalcule et enregistre les stats d'un commercial.
    Les erreurs sont propagées (l'appelant décide: log ou comptage).
    """
    stats = await compute_real_stats(commercial_id)
    zone_id = await resolve_current_zone_id(commercial_id)
    await upsert_statistic(commercial_id, stats, zone_id)
    return {**stats, "zone_id": zone_id}


async def sync_commercial_stats(immeuble_id: str) -> Optional[Dict[str, Any]]:
    """
    Met à jour les statistiques du commercial propriétaire d'un immeuble
    après modification d'une porte.

    Best-effort: ne lève jamais d'exception.

    Returns:
        Les stats enregistrées, ou None si rien n'a été synchronisé
    """
    try:
        immeuble = await db.immeubles.find_one(
            {"id": immeuble_id},
            {"_id": 0, "id": 1, "commercial_id": 1}
        )
        if not immeuble:
            logger.warning(f"[STATS_SYNC] Immeuble {immeuble_id} introuvable, sync ignorée")
            return None

        commercial_id = immeuble.get("commercial_id")
        if not commercial_id:
            logger.warning(f"[STATS_SYNC] Immeuble {immeuble_id} n'a pas de commercial associé")
            return None

        commercial = await db.commerciaux.find_one({"id": commercial_id}, {"_id": 0, "id": 1})
        if not commercial:
            logger.warning(
                f"[STATS_SYNC] Commercial {commercial_id} (immeuble {immeuble_id}) introuvable"
            )
            return None

        stats = await refresh_commercial_stats(commercial_id)
        logger.debug(f"[STATS_SYNC] Stats mises à jour pour commercial {commercial_id}: {stats}")
        return stats

    except Exception as e:
        logger.error(f"[STATS_SYNC] Erreur sync stats pour immeuble {immeuble_id}: {str(e)}")
        return None


async def recalculate_all_stats() -> Dict[str, int]:
    """
    Recalcule les statistiques de TOUS les commerciaux (job de maintenance).

    Returns:
        {"updated": int, "errors": int}
    """
    updated = 0
    errors = 0

    commerciaux = await db.commerciaux.find({}, {"_id": 0, "id": 1}).to_list(None)

    for commercial in commerciaux:
        commercial_id = commercial["id"]
        try:
            await refresh_commercial_stats(commercial_id)
            updated += 1
        except Exception as e:
            logger.error(f"[RECALC] Erreur recalcul stats commercial {commercial_id}: {str(e)}")
            errors += 1

    logger.info(f"[RECALC] Recalcul terminé: {updated} mis à jour, {errors} erreurs")
    return {"updated": updated, "errors": errors}
