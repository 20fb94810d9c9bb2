"""
╔══════════════════════════════════════════════════════════════════════════════╗
║  Prospection - Routes Portes                                                 ║
║                                                                              ║
║  Mise à jour terrain des portes + référentiel des statuts                    ║
║  La réponse ne dépend jamais de la synchronisation des statistiques          ║
╚══════════════════════════════════════════════════════════════════════════════╝
"""

from fastapi import APIRouter, HTTPException

from models import PorteDocument, PorteUpdate, get_status_reference
from services.porte_service import (
    get_porte,
    update_porte,
    PorteIntrouvableError,
    PorteValidationError
)

router = APIRouter(prefix="/portes", tags=["Portes"])


@router.get("/statuts")
async def list_statuts():
    """
    Référentiel des statuts de porte et de leur effet sur les statistiques.
    """
    statuts = get_status_reference()
    return {"statuts": statuts, "count": len(statuts)}


@router.get("/{porte_id}", response_model=PorteDocument)
async def read_porte(porte_id: str):
    try:
        return await get_porte(porte_id)
    except PorteIntrouvableError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{porte_id}", response_model=PorteDocument)
async def patch_porte(porte_id: str, data: PorteUpdate):
    """
    Met à jour une porte (statut, RDV, commentaire...).

    - RENDEZ_VOUS_PRIS sans rdv_date/rdv_time → 400, rien n'est écrit
    - Passage en NECESSITE_REPASSAGE → nb_repassages +1
    - Changement de statut → sync des stats du commercial en arrière-plan
    """
    try:
        return await update_porte(porte_id, data)
    except PorteValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PorteIntrouvableError as e:
        raise HTTPException(status_code=404, detail=str(e))
