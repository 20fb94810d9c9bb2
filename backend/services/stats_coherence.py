"""
Validation de cohérence entre portes et statistiques stockées.

LECTURE SEULE: ce module n'écrit jamais. Les incohérences sont retournées
pour correction (ex: relancer recalculate_all_stats).
"""

import logging
from typing import Dict, Any
from config import db
from services.stats_ground_truth import compute_real_stats

logger = logging.getLogger("stats_coherence")

# Compteurs comparés champ par champ
COHERENCE_FIELDS = (
    "contrats_signes",
    "rendez_vous_pris",
    "refus",
    "immeubles_visites",
)


async def _commercial_display_name(commercial_id: str) -> str:
    commercial = await db.commerciaux.find_one(
        {"id": commercial_id},
        {"_id": 0, "nom": 1, "prenom": 1}
    )
    if not commercial:
        return ""
    return f"{commercial.get('nom', '')} {commercial.get('prenom', '')}".strip()


async def validate_stats_coherence() -> Dict[str, Any]:
    """
    Compare chaque statistique stockée avec les stats réelles recalculées.

    Returns:
        {
            "valid_count": int,
            "invalid": [{commercial_id, commercial, current, real, mismatched_fields}],
            "errors": int   # statistiques impossibles à recalculer
        }
    """
    valid_count = 0
    invalid = []
    errors = 0

    statistics = await db.statistics.find({}, {"_id": 0}).to_list(None)

    for stat in statistics:
        commercial_id = stat.get("commercial_id")
        if not commercial_id:
            continue

        try:
            real = await compute_real_stats(commercial_id)
        except Exception as e:
            logger.error(f"[COHERENCE] Erreur recalcul stats commercial {commercial_id}: {str(e)}")
            errors += 1
            continue

        current = {field: stat.get(field, 0) for field in COHERENCE_FIELDS}
        mismatched = [field for field in COHERENCE_FIELDS if current[field] != real[field]]

        if not mismatched:
            valid_count += 1
            continue

        invalid.append({
            "commercial_id": commercial_id,
            "commercial": await _commercial_display_name(commercial_id),
            "current": current,
            "real": real,
            "mismatched_fields": mismatched
        })

    logger.info(
        f"[COHERENCE] {valid_count} cohérentes, {len(invalid)} incohérentes, {errors} erreurs"
    )
    return {"valid_count": valid_count, "invalid": invalid, "errors": errors}
