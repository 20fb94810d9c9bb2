"""
Résolution de la zone en cours d'un commercial (collection zones_en_cours).
Toujours lue en base, jamais mise en cache: une réassignation de zone est
prise en compte dès la synchronisation suivante.
"""

from typing import Optional
from config import db

USER_TYPE_COMMERCIAL = "COMMERCIAL"


class ZoneReferenceError(LookupError):
    """Raised when a zone assignment points to a zone that does not exist"""
    pass


async def find_zone_en_cours(user_id: str, user_type: str = USER_TYPE_COMMERCIAL) -> Optional[dict]:
    """Assignation de zone actuelle d'un utilisateur, ou None"""
    return await db.zones_en_cours.find_one(
        {"user_id": user_id, "user_type": user_type},
        {"_id": 0}
    )


async def resolve_current_zone_id(commercial_id: str) -> Optional[str]:
    """
    Zone actuelle d'un commercial.

    - Pas d'assignation → None
    - Assignation vers une zone inexistante → ZoneReferenceError
    """
    assignment = await find_zone_en_cours(commercial_id)
    if not assignment or not assignment.get("zone_id"):
        return None

    zone_id = assignment["zone_id"]
    zone = await db.zones.find_one({"id": zone_id}, {"_id": 0, "id": 1})
    if not zone:
        raise ZoneReferenceError(
            f"Commercial {commercial_id} assigné à une zone inexistante: {zone_id}"
        )

    return zone_id
