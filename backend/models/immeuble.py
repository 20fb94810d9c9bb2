"""
Prospection - Modèle Immeuble
"""

from typing import Optional
from pydantic import BaseModel, Field


class ImmeubleCreate(BaseModel):
    """Création d'immeuble (les portes sont générées automatiquement)"""
    adresse: str
    nb_etages: int = Field(ge=1)
    nb_portes_par_etage: int = Field(ge=1)
    commercial_id: Optional[str] = None
    zone_id: Optional[str] = None  # Sinon: zone en cours du commercial


class ImmeubleDocument(BaseModel):
    id: str
    adresse: str
    nb_etages: int
    nb_portes_par_etage: int
    commercial_id: Optional[str] = None
    zone_id: Optional[str] = None
    created_at: str = ""
    updated_at: str = ""  # Mis à jour à chaque modification de porte
