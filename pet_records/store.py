# pet_records/store.py
import logging
import re
from datetime import datetime
from typing import Any, Callable, Dict, List

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from .errors import NotFound, StorageUnavailable
from .schemas.pet import PetFields, PetPayload, PetRecord
from .utils import to_id, to_object_id, utcnow
from .validation import validate_pet

logger = logging.getLogger(__name__)

# Campos que gestiona el sistema; se ignoran si llegan en un payload
_SYSTEM_FIELDS = {"id", "_id", "createdAt", "updatedAt"}


def _to_record(doc: Dict[str, Any]) -> PetRecord:
    return PetRecord.model_validate(to_id(doc))


def _to_document(fields: PetFields) -> Dict[str, Any]:
    return fields.model_dump(exclude_none=True)


def _merge(current: Dict[str, Any], changes: Dict[str, Any]) -> Dict[str, Any]:
    merged = {k: v for k, v in current.items() if k not in _SYSTEM_FIELDS}
    for key, value in changes.items():
        if key in _SYSTEM_FIELDS:
            continue
        if key == "owner" and isinstance(value, dict) and isinstance(merged.get("owner"), dict):
            merged["owner"] = {**merged["owner"], **value}
        else:
            merged[key] = value
    return merged


class PetStore:
    """
    Colección de mascotas en MongoDB. Valida antes de escribir y traduce
    los errores del driver a StorageUnavailable.
    """

    def __init__(self, collection: AsyncIOMotorCollection, clock: Callable[[], datetime] = utcnow):
        self.collection = collection
        self.clock = clock

    async def insert(self, payload: PetPayload) -> PetRecord:
        fields = validate_pet(payload).unwrap()
        now = self.clock()
        doc = _to_document(fields)
        doc["createdAt"] = now
        doc["updatedAt"] = now
        try:
            res = await self.collection.insert_one(doc)
            created = await self.collection.find_one({"_id": res.inserted_id})
        except PyMongoError as e:
            raise self._storage_error("insert", e) from e
        logger.info("Created pet %s (%s)", res.inserted_id, fields.name)
        return _to_record(created)

    async def find_all(self) -> List[PetRecord]:
        try:
            docs = await self.collection.find({}, sort=[("createdAt", DESCENDING)]).to_list(length=None)
        except PyMongoError as e:
            raise self._storage_error("find_all", e) from e
        return [_to_record(d) for d in docs]

    async def find_by_id(self, pet_id: str) -> PetRecord:
        oid = to_object_id(pet_id)
        try:
            doc = await self.collection.find_one({"_id": oid})
        except PyMongoError as e:
            raise self._storage_error("find_by_id", e) from e
        if not doc:
            raise NotFound()
        return _to_record(doc)

    async def exists(self, name: str, owner_phone: str) -> bool:
        """Hay ya una mascota con ese nombre y teléfono del dueño"""
        try:
            doc = await self.collection.find_one({"name": name, "owner.phone": owner_phone})
        except PyMongoError as e:
            raise self._storage_error("exists", e) from e
        return doc is not None

    async def update_by_id(self, pet_id: str, payload: PetPayload) -> PetRecord:
        oid = to_object_id(pet_id)
        try:
            current = await self.collection.find_one({"_id": oid})
        except PyMongoError as e:
            raise self._storage_error("update_by_id", e) from e
        if not current:
            raise NotFound()

        changes = payload.model_dump(exclude_unset=True)
        merged = _merge(current, changes)
        fields = validate_pet(PetPayload.model_validate(merged)).unwrap()

        update = _to_document(fields)
        update["updatedAt"] = self.clock()
        try:
            # owner se reemplaza completo para que un email vaciado desaparezca
            doc = await self.collection.find_one_and_update(
                {"_id": oid},
                {"$set": update},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise self._storage_error("update_by_id", e) from e
        if not doc:
            # borrado entre la lectura y la escritura
            raise NotFound()
        logger.info("Updated pet %s", pet_id)
        return _to_record(doc)

    async def delete_by_id(self, pet_id: str) -> PetRecord:
        oid = to_object_id(pet_id)
        try:
            doc = await self.collection.find_one_and_delete({"_id": oid})
        except PyMongoError as e:
            raise self._storage_error("delete_by_id", e) from e
        if not doc:
            raise NotFound()
        logger.info("Deleted pet %s", pet_id)
        return _to_record(doc)

    async def search(self, query: str) -> List[PetRecord]:
        """
        Coincidencia parcial sin distinguir mayúsculas en name u owner.name.
        Una consulta vacía devuelve el listado completo.
        """
        text = (query or "").strip()
        if not text:
            return await self.find_all()
        pattern = re.escape(text)
        q = {
            "$or": [
                {"name": {"$regex": pattern, "$options": "i"}},
                {"owner.name": {"$regex": pattern, "$options": "i"}},
            ]
        }
        try:
            docs = await self.collection.find(q).to_list(length=None)
        except PyMongoError as e:
            raise self._storage_error("search", e) from e
        return [_to_record(d) for d in docs]

    def _storage_error(self, operation: str, error: PyMongoError) -> StorageUnavailable:
        logger.error("MongoDB error during %s: %s", operation, error, exc_info=error)
        return StorageUnavailable(str(error))
