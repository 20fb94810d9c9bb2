"""
╔══════════════════════════════════════════════════════════════════════════════╗
║  Prospection - Modèle Porte                                                  ║
║                                                                              ║
║  RÈGLES:                                                                     ║
║  1. Création en masse avec l'immeuble: statut=NON_VISITE, nb_repassages=0    ║
║  2. RENDEZ_VOUS_PRIS exige rdv_date + rdv_time                               ║
║  3. nb_repassages +1 UNIQUEMENT en entrant dans NECESSITE_REPASSAGE          ║
╚══════════════════════════════════════════════════════════════════════════════╝
"""

from typing import Optional
from pydantic import BaseModel, Field
from .porte_status import StatutPorte


class PorteDocument(BaseModel):
    """
    Structure d'une porte en base de données
    """
    id: str
    numero: str
    nom_personnalise: Optional[str] = None
    etage: int
    immeuble_id: str

    statut: StatutPorte = StatutPorte.NON_VISITE
    nb_repassages: int = Field(default=0, ge=0)

    # RDV (obligatoire si statut=RENDEZ_VOUS_PRIS)
    rdv_date: Optional[str] = None   # YYYY-MM-DD
    rdv_time: Optional[str] = None   # HH:MM

    commentaire: Optional[str] = None
    derniere_visite: Optional[str] = None

    created_at: str = ""
    updated_at: str = ""


class PorteUpdate(BaseModel):
    """Mise à jour terrain d'une porte (seuls les champs fournis sont écrits)"""
    numero: Optional[str] = None
    nom_personnalise: Optional[str] = None
    statut: Optional[StatutPorte] = None
    rdv_date: Optional[str] = None
    rdv_time: Optional[str] = None
    commentaire: Optional[str] = None
    derniere_visite: Optional[str] = None
