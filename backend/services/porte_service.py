"""
╔══════════════════════════════════════════════════════════════════════════════╗
║  Prospection - Mise à jour terrain des portes                                ║
║                                                                              ║
║  ORDRE STRICT:                                                               ║
║  1. Validation (AVANT toute écriture)                                        ║
║  2. Règle repassage                                                          ║
║  3. Écriture porte + updated_at immeuble                                     ║
║  4. Si le statut a changé → notification sync stats (best-effort)            ║
║                                                                              ║
║  Le résultat de la mise à jour ne dépend JAMAIS de la sync des stats         ║
╚══════════════════════════════════════════════════════════════════════════════╝
"""

import logging
from typing import Dict, Any, Optional
from config import db, now_iso
from models.porte import PorteUpdate
from models.porte_status import StatutPorte, UnknownStatusError, metadata_for
from services.stats_dispatcher import stats_dispatcher

logger = logging.getLogger("porte_service")


class PorteValidationError(ValueError):
    """Raised when a door update is rejected before persistence"""
    pass


class PorteIntrouvableError(LookupError):
    pass


# Champs qu'une mise à jour ne peut pas vider (null explicite)
NON_NULLABLE_FIELDS = ("statut", "numero")


def validate_porte_update(update: PorteUpdate, current: Optional[dict] = None) -> None:
    """
    Règles vérifiées AVANT toute écriture:
    - statut et numero ne peuvent pas être mis à null
    - un statut qui exige un RDV doit arriver avec rdv_date ET rdv_time
      dans la même écriture
    - une porte qui reste dans un statut à RDV garde sa date et son heure
      (porte actuelle + mise à jour)
    """
    for field in NON_NULLABLE_FIELDS:
        if field in update.model_fields_set and getattr(update, field) is None:
            raise PorteValidationError(f"Le champ {field} ne peut pas être vidé")

    if update.statut is not None:
        if metadata_for(update.statut).requires_rdv_datetime:
            if not update.rdv_date or not update.rdv_time:
                raise PorteValidationError(
                    f"Le statut {update.statut.value} nécessite une date et une heure de rendez-vous"
                )
        return

    if not current:
        return

    try:
        rdv_required = metadata_for(current.get("statut")).requires_rdv_datetime
    except UnknownStatusError:
        # Statut legacy: seule une mise à jour de statut peut corriger la porte
        return

    if rdv_required:
        merged = {**current, **update.model_dump(exclude_unset=True, mode="json")}
        if not merged.get("rdv_date") or not merged.get("rdv_time"):
            raise PorteValidationError(
                f"La porte est en {current['statut']}: date et heure de rendez-vous obligatoires"
            )


def compute_nb_repassages(current: dict, new_statut: Optional[StatutPorte]) -> int:
    """
    +1 uniquement en ENTRANT dans NECESSITE_REPASSAGE.
    Ré-enregistrer NECESSITE_REPASSAGE ne change rien.
    """
    nb_repassages = current.get("nb_repassages", 0) or 0
    if (
        new_statut == StatutPorte.NECESSITE_REPASSAGE
        and current.get("statut") != StatutPorte.NECESSITE_REPASSAGE.value
    ):
        return nb_repassages + 1
    return nb_repassages


async def get_porte(porte_id: str) -> Dict[str, Any]:
    porte = await db.portes.find_one({"id": porte_id}, {"_id": 0})
    if not porte:
        raise PorteIntrouvableError(f"Porte {porte_id} introuvable")
    return porte


async def update_porte(porte_id: str, update: PorteUpdate) -> Dict[str, Any]:
    """
    Applique une mise à jour terrain sur une porte.

    Raises:
        PorteIntrouvableError si la porte n'existe pas
        PorteValidationError si la mise à jour est invalide (rien n'est écrit)
    """
    current = await get_porte(porte_id)

    # 1. Validation AVANT toute écriture
    validate_porte_update(update, current)

    old_statut = current.get("statut")

    data = update.model_dump(exclude_unset=True, mode="json")
    now = now_iso()

    # 2. Règle repassage
    if update.statut is not None:
        data["nb_repassages"] = compute_nb_repassages(current, update.statut)

    data["updated_at"] = now

    # 3. Écriture porte + tri par récence de l'immeuble
    await db.portes.update_one({"id": porte_id}, {"$set": data})
    await db.immeubles.update_one(
        {"id": current["immeuble_id"]},
        {"$set": {"updated_at": now}}
    )

    # 4. Sync stats si le statut a changé
    statut_changed = update.statut is not None and update.statut.value != old_statut
    if statut_changed:
        logger.info(
            f"[PORTE] {porte_id} {old_statut} -> {update.statut.value} "
            f"(immeuble {current['immeuble_id']})"
        )
        stats_dispatcher.notify_porte_statut_changed(current["immeuble_id"])

    return {**current, **data}
