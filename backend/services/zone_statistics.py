"""
Statistiques par zone

Compteurs calculés directement depuis les portes des immeubles de chaque zone
(même calcul que les stats commerciaux), pour toutes les zones ayant eu au
moins une assignation (en cours ou historique).
"""

import logging
from typing import List, Dict, Any
from config import db
from services.stats_ground_truth import compute_stats_for_immeubles
from services.zone_assignment import USER_TYPE_COMMERCIAL

logger = logging.getLogger("zone_statistics")


def _rate(numerator: int, denominator: int) -> float:
    return numerator / denominator * 100 if denominator > 0 else 0.0


async def get_zone_statistics() -> List[Dict[str, Any]]:
    """
    Returns:
        Liste triée par performance_globale décroissante
    """
    current_assignments = await db.zones_en_cours.find({}, {"_id": 0}).to_list(None)
    history_assignments = await db.historique_zones.find({}, {"_id": 0}).to_list(None)
    assignments = current_assignments + history_assignments

    zone_ids = sorted({a["zone_id"] for a in assignments if a.get("zone_id")})
    if not zone_ids:
        return []

    zones = await db.zones.find({"id": {"$in": zone_ids}}, {"_id": 0}).to_list(None)

    results = []
    for zone in zones:
        stats = await compute_stats_for_immeubles({"zone_id": zone["id"]})

        contrats = stats["contrats_signes"]
        rdv = stats["rendez_vous_pris"]
        refus = stats["refus"]
        visites = stats["immeubles_visites"]

        taux_conversion = _rate(contrats, refus + rdv + contrats)
        taux_succes_rdv = _rate(rdv, visites)

        commerciaux_in_zone = {
            a["user_id"] for a in assignments
            if a.get("zone_id") == zone["id"] and a.get("user_type") == USER_TYPE_COMMERCIAL
        }

        results.append({
            "zone_id": zone["id"],
            "zone_name": zone.get("nom", ""),
            "total_contrats_signes": contrats,
            "total_immeubles_visites": visites,
            "total_rendez_vous_pris": rdv,
            "total_refus": refus,
            "total_immeubles_prospectes": stats["nb_immeubles_prospectes"],
            "total_portes_prospectes": stats["nb_portes_prospectes"],
            "taux_conversion": round(taux_conversion, 2),
            "taux_succes_rdv": round(taux_succes_rdv, 2),
            "nombre_commerciaux": len(commerciaux_in_zone),
            "performance_globale": round(taux_conversion + taux_succes_rdv, 2),
        })

    results.sort(key=lambda z: z["performance_globale"], reverse=True)
    logger.debug(f"[ZONES] {len(results)} zones calculées")
    return results
