"""
╔══════════════════════════════════════════════════════════════════════════════╗
║  Prospection - Modèle Statistic (agrégat par commercial)                     ║
║                                                                              ║
║  RÈGLES:                                                                     ║
║  1. UNE seule statistique par commercial (index unique commercial_id)        ║
║  2. Écrite UNIQUEMENT par statistic_sync (sync + recalcul)                   ║
║  3. Jamais écrite par la validation de cohérence                             ║
╚══════════════════════════════════════════════════════════════════════════════╝
"""

from typing import Optional, List, Dict
from pydantic import BaseModel


class StatisticDocument(BaseModel):
    id: str
    commercial_id: str
    zone_id: Optional[str] = None

    contrats_signes: int = 0
    rendez_vous_pris: int = 0
    refus: int = 0
    absents: int = 0
    argumentes: int = 0
    immeubles_visites: int = 0
    nb_immeubles_prospectes: int = 0
    nb_portes_prospectes: int = 0

    created_at: str = ""
    updated_at: str = ""


class RecalculationResult(BaseModel):
    """Bilan du recalcul global"""
    updated: int
    errors: int


class CoherenceMismatch(BaseModel):
    """Statistique incohérente: valeur stockée vs valeur réelle"""
    commercial_id: str
    commercial: str = ""
    current: Dict[str, int]
    real: Dict[str, int]
    mismatched_fields: List[str] = []


class CoherenceReport(BaseModel):
    valid_count: int
    invalid: List[CoherenceMismatch] = []
    errors: int = 0


class ZoneStatistic(BaseModel):
    zone_id: str
    zone_name: str = ""
    total_contrats_signes: int = 0
    total_immeubles_visites: int = 0
    total_rendez_vous_pris: int = 0
    total_refus: int = 0
    total_immeubles_prospectes: int = 0
    total_portes_prospectes: int = 0
    taux_conversion: float = 0.0
    taux_succes_rdv: float = 0.0
    nombre_commerciaux: int = 0
    performance_globale: float = 0.0
