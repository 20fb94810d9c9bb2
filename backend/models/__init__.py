"""
╔══════════════════════════════════════════════════════════════════════════════╗
║  Prospection - Models Package                                                ║
║                                                                              ║
║  Exports tous les modèles pour import facile                                 ║
║  from models import StatutPorte, PorteUpdate, ImmeubleCreate, etc.           ║
╚══════════════════════════════════════════════════════════════════════════════╝
"""

# Statuts de porte (source unique de vérité)
from .porte_status import (
    StatutPorte,
    StatusMetadata,
    UnknownStatusError,
    STATUS_CONFIG,
    CONTRIBUTION_FIELDS,
    metadata_for,
    contribution_of,
    get_all_statuses,
    get_prospected_statuses,
    is_prospected_status,
    requires_rdv_datetime,
    get_status_reference,
)

# Porte
from .porte import (
    PorteDocument,
    PorteUpdate,
)

# Immeuble
from .immeuble import (
    ImmeubleCreate,
    ImmeubleDocument,
)

# Statistiques
from .statistic import (
    StatisticDocument,
    RecalculationResult,
    CoherenceMismatch,
    CoherenceReport,
    ZoneStatistic,
)

__all__ = [
    # Statuts
    "StatutPorte",
    "StatusMetadata",
    "UnknownStatusError",
    "STATUS_CONFIG",
    "CONTRIBUTION_FIELDS",
    "metadata_for",
    "contribution_of",
    "get_all_statuses",
    "get_prospected_statuses",
    "is_prospected_status",
    "requires_rdv_datetime",
    "get_status_reference",
    # Porte
    "PorteDocument",
    "PorteUpdate",
    # Immeuble
    "ImmeubleCreate",
    "ImmeubleDocument",
    # Statistiques
    "StatisticDocument",
    "RecalculationResult",
    "CoherenceMismatch",
    "CoherenceReport",
    "ZoneStatistic",
]
