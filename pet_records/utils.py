# pet_records/utils.py
from typing import Any, Dict, Optional
from bson import ObjectId
from datetime import datetime, timezone

from .errors import NotFound

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

def _as_utc(value: datetime) -> datetime:
    # MongoDB devuelve datetimes naive en UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value

def to_id(doc: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Convierte _id -> id (str), el resto de ObjectIds a strings y marca
    los datetimes como UTC. Recorre documentos anidados (owner).
    Si doc es None, devuelve {}.
    """
    if doc is None:
        return {}
    d = dict(doc)

    if "_id" in d:
        d["id"] = str(d.pop("_id"))

    for key, value in d.items():
        if isinstance(value, ObjectId):
            d[key] = str(value)
        elif isinstance(value, datetime):
            d[key] = _as_utc(value)
        elif isinstance(value, dict):
            d[key] = to_id(value)

    return d

def to_object_id(value: str) -> ObjectId:
    """
    Convierte un string a ObjectId. Un id mal formado no puede existir en
    la colección, así que se trata como NotFound.
    """
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        raise NotFound()
    return ObjectId(value)
