"""
Service immeubles
- Création d'un immeuble avec toutes ses portes (NON_VISITE, 0 repassage)
- Liste des portes d'un immeuble
- Statistiques de portes par immeuble
"""

import logging
import uuid
from typing import Dict, Any, List, Optional
from config import db, now_iso
from models.immeuble import ImmeubleCreate
from models.porte_status import StatutPorte, get_all_statuses
from services.zone_assignment import find_zone_en_cours

logger = logging.getLogger("immeuble_service")


class ImmeubleIntrouvableError(LookupError):
    pass


def build_portes(immeuble_id: str, nb_etages: int, nb_portes_par_etage: int) -> List[dict]:
    """Portes d'un immeuble: numéro = étage + n° de porte sur 2 chiffres (101, 102...)"""
    now = now_iso()
    portes = []
    for etage in range(1, nb_etages + 1):
        for porte in range(1, nb_portes_par_etage + 1):
            portes.append({
                "id": str(uuid.uuid4()),
                "numero": f"{etage}{porte:02d}",
                "etage": etage,
                "immeuble_id": immeuble_id,
                "statut": StatutPorte.NON_VISITE.value,
                "nb_repassages": 0,
                "created_at": now,
                "updated_at": now
            })
    return portes


async def create_immeuble(data: ImmeubleCreate) -> Dict[str, Any]:
    """
    Crée un immeuble et toutes ses portes.
    Sans zone explicite, l'immeuble prend la zone en cours du commercial.
    """
    zone_id = data.zone_id
    if not zone_id and data.commercial_id:
        assignment = await find_zone_en_cours(data.commercial_id)
        if assignment:
            zone_id = assignment.get("zone_id")

    now = now_iso()
    immeuble = {
        "id": str(uuid.uuid4()),
        "adresse": data.adresse,
        "nb_etages": data.nb_etages,
        "nb_portes_par_etage": data.nb_portes_par_etage,
        "commercial_id": data.commercial_id,
        "zone_id": zone_id,
        "created_at": now,
        "updated_at": now
    }
    await db.immeubles.insert_one({**immeuble})

    portes = build_portes(immeuble["id"], data.nb_etages, data.nb_portes_par_etage)
    await db.portes.insert_many([{**p} for p in portes])

    logger.info(
        f"[IMMEUBLE] Créé {immeuble['id']} ({data.adresse}) avec {len(portes)} portes, "
        f"commercial={data.commercial_id} zone={zone_id}"
    )
    return immeuble


async def list_portes(immeuble_id: str, etage: Optional[int] = None) -> List[dict]:
    query = {"immeuble_id": immeuble_id}
    if etage:
        query["etage"] = etage

    return await db.portes.find(query, {"_id": 0}) \
        .sort([("etage", 1), ("numero", 1)]) \
        .to_list(None)


async def get_statistiques_portes(immeuble_id: Optional[str] = None) -> Dict[str, Any]:
    """
    Compteurs de portes par statut (tous les statuts présents, même à 0),
    taux de conversion et répartition par étage.
    """
    match = {"immeuble_id": immeuble_id} if immeuble_id else {}

    if immeuble_id:
        immeuble = await db.immeubles.find_one({"id": immeuble_id}, {"_id": 0, "id": 1})
        if not immeuble:
            raise ImmeubleIntrouvableError(f"Immeuble {immeuble_id} introuvable")

    by_statut = {s.value: 0 for s in get_all_statuses()}
    groups = await db.portes.aggregate([
        {"$match": match},
        {"$group": {"_id": "$statut", "count": {"$sum": 1}}},
    ]).to_list(None)
    for group in groups:
        by_statut[group["_id"]] = group["count"]

    etages = await db.portes.aggregate([
        {"$match": match},
        {"$group": {"_id": "$etage", "count": {"$sum": 1}}},
        {"$sort": {"_id": 1}},
    ]).to_list(None)

    total_portes = sum(by_statut.values())
    contrats = by_statut[StatutPorte.CONTRAT_SIGNE.value]

    return {
        "total_portes": total_portes,
        "by_statut": by_statut,
        "portes_visitees": total_portes - by_statut[StatutPorte.NON_VISITE.value],
        "taux_conversion": round(contrats / total_portes * 100, 2) if total_portes else 0.0,
        "portes_par_etage": [{"etage": e["_id"], "count": e["count"]} for e in etages]
    }
