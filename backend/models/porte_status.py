"""
╔══════════════════════════════════════════════════════════════════════════════╗
║  Prospection - Statuts de porte (source unique de vérité)                    ║
║                                                                              ║
║  RÈGLES:                                                                     ║
║  1. Ensemble FERMÉ de 7 statuts                                              ║
║  2. Chaque statut a UNE configuration (effet sur les statistiques)           ║
║  3. La table STATUS_CONFIG est en lecture seule                              ║
║  4. NON_VISITE ne compte JAMAIS comme prospecté                              ║
║                                                                              ║
║  Pour ajouter un statut:                                                     ║
║  1. Ajouter la valeur dans StatutPorte                                       ║
║  2. Ajouter sa configuration dans STATUS_CONFIG (sinon l'import échoue)      ║
╚══════════════════════════════════════════════════════════════════════════════╝
"""

from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Union
from pydantic import BaseModel, ConfigDict


class StatutPorte(str, Enum):
    """
    Statuts possibles pour une porte
    """
    NON_VISITE = "NON_VISITE"                    # Statut par défaut
    CONTRAT_SIGNE = "CONTRAT_SIGNE"
    REFUS = "REFUS"
    RENDEZ_VOUS_PRIS = "RENDEZ_VOUS_PRIS"
    ABSENT = "ABSENT"
    ARGUMENTE = "ARGUMENTE"                      # Refus après argumentation
    NECESSITE_REPASSAGE = "NECESSITE_REPASSAGE"


class UnknownStatusError(ValueError):
    """Raised when a status is outside the closed StatutPorte set"""
    pass


class StatusMetadata(BaseModel):
    """
    Comportement d'un statut dans le calcul des statistiques
    """
    model_config = ConfigDict(frozen=True)

    value: StatutPorte
    description: str
    count_as_prospected: bool
    increment_contrats_signes: bool = False
    increment_rendez_vous_pris: bool = False
    increment_refus: bool = False
    increment_absents: bool = False
    increment_argumentes: bool = False
    requires_rdv_datetime: bool = False


# Compteurs alimentés par contribution_of (dans cet ordre)
CONTRIBUTION_FIELDS = (
    "contrats_signes",
    "rendez_vous_pris",
    "refus",
    "absents",
    "argumentes",
    "nb_portes_prospectes",
)


STATUS_CONFIG = MappingProxyType({
    StatutPorte.NON_VISITE: StatusMetadata(
        value=StatutPorte.NON_VISITE,
        description="Porte non visitée - statut par défaut",
        count_as_prospected=False,
    ),
    StatutPorte.CONTRAT_SIGNE: StatusMetadata(
        value=StatutPorte.CONTRAT_SIGNE,
        description="Contrat signé - succès commercial",
        count_as_prospected=True,
        increment_contrats_signes=True,
    ),
    StatutPorte.REFUS: StatusMetadata(
        value=StatutPorte.REFUS,
        description="Refus du prospect",
        count_as_prospected=True,
        increment_refus=True,
    ),
    StatutPorte.RENDEZ_VOUS_PRIS: StatusMetadata(
        value=StatutPorte.RENDEZ_VOUS_PRIS,
        description="Rendez-vous planifié avec le prospect",
        count_as_prospected=True,
        increment_rendez_vous_pris=True,
        requires_rdv_datetime=True,
    ),
    StatutPorte.ABSENT: StatusMetadata(
        value=StatutPorte.ABSENT,
        description="Personne absente - pas de réponse à la porte",
        count_as_prospected=True,
        increment_absents=True,
    ),
    StatutPorte.ARGUMENTE: StatusMetadata(
        value=StatutPorte.ARGUMENTE,
        description="Refus après discussion et argumentation commerciale",
        count_as_prospected=True,
        increment_refus=True,
        increment_argumentes=True,
    ),
    StatutPorte.NECESSITE_REPASSAGE: StatusMetadata(
        value=StatutPorte.NECESSITE_REPASSAGE,
        description="Nécessite un repassage ultérieur",
        count_as_prospected=True,
    ),
})

_missing = [s.value for s in StatutPorte if s not in STATUS_CONFIG]
if _missing:
    raise RuntimeError(f"STATUS_CONFIG incomplet, statuts sans configuration: {_missing}")


# ==================== HELPERS ====================

def metadata_for(status: Union[StatutPorte, str]) -> StatusMetadata:
    """
    Retourne la configuration d'un statut.
    Lève UnknownStatusError pour toute valeur hors de l'ensemble fermé
    (données legacy ou étrangères, ex: "CURIEUX").
    """
    try:
        return STATUS_CONFIG[StatutPorte(status)]
    except ValueError:
        raise UnknownStatusError(f"Statut de porte inconnu: {status!r}") from None


def contribution_of(status: Union[StatutPorte, str], count: int) -> Dict[str, int]:
    """
    Compteurs apportés par `count` portes dans le statut `status`.

    Utilisé par le calcul des stats réelles ET par la validation de cohérence:
    les deux ne peuvent donc pas diverger.
    """
    if count < 0:
        raise ValueError(f"count doit être >= 0 (reçu {count})")

    config = metadata_for(status)

    return {
        "contrats_signes": count if config.increment_contrats_signes else 0,
        "rendez_vous_pris": count if config.increment_rendez_vous_pris else 0,
        "refus": count if config.increment_refus else 0,
        "absents": count if config.increment_absents else 0,
        "argumentes": count if config.increment_argumentes else 0,
        "nb_portes_prospectes": count if config.count_as_prospected else 0,
    }


def get_all_statuses() -> List[StatutPorte]:
    return list(StatutPorte)


def get_prospected_statuses() -> List[StatutPorte]:
    return [s for s in StatutPorte if STATUS_CONFIG[s].count_as_prospected]


def is_prospected_status(status: Union[StatutPorte, str]) -> bool:
    return metadata_for(status).count_as_prospected


def requires_rdv_datetime(status: Union[StatutPorte, str]) -> bool:
    return metadata_for(status).requires_rdv_datetime


def get_status_reference() -> List[dict]:
    """Table de référence sérialisable (reporting / UI)"""
    return [STATUS_CONFIG[s].model_dump(mode="json") for s in StatutPorte]
