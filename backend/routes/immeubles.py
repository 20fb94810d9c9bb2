"""
Routes Immeubles
- Création d'un immeuble avec ses portes
- Liste des portes
- Statistiques de portes
"""

from fastapi import APIRouter, HTTPException, Query
from typing import Optional

from models import ImmeubleCreate, ImmeubleDocument
from services.immeuble_service import (
    create_immeuble,
    list_portes,
    get_statistiques_portes,
    ImmeubleIntrouvableError
)

router = APIRouter(prefix="/immeubles", tags=["Immeubles"])


@router.post("", response_model=ImmeubleDocument)
async def post_immeuble(data: ImmeubleCreate):
    """
    Crée un immeuble et génère nb_etages x nb_portes_par_etage portes (NON_VISITE).
    """
    return await create_immeuble(data)


@router.get("/{immeuble_id}/portes")
async def get_portes(
    immeuble_id: str,
    etage: Optional[int] = Query(None, description="Filtrer sur un étage")
):
    portes = await list_portes(immeuble_id, etage=etage)
    return {"portes": portes, "count": len(portes)}


@router.get("/{immeuble_id}/statistiques")
async def get_statistiques(immeuble_id: str):
    try:
        return await get_statistiques_portes(immeuble_id)
    except ImmeubleIntrouvableError as e:
        raise HTTPException(status_code=404, detail=str(e))
