# pet_records/routers/dev.py
# Endpoint de desarrollo para crear datos de prueba
from fastapi import APIRouter, Depends

from ..schemas.pet import PetPayload
from ..store import PetStore
from .pets import get_store

router = APIRouter()

SAMPLE_PETS = [
    {"name": "Rex", "type": "dog", "age": 3,
     "owner": {"name": "Ann Walker", "phone": "555-1111", "email": "ann@example.com"}},
    {"name": "Misu", "type": "cat", "age": 5,
     "owner": {"name": "Luis Ortega", "phone": "555-2222"}},
    {"name": "Bruno", "type": "dog", "age": 8,
     "owner": {"name": "Marta Ruiz", "phone": "555-3333", "email": "marta@example.com"}},
    {"name": "Nube", "type": "cat", "age": 1,
     "owner": {"name": "Ann Walker", "phone": "555-1111", "email": "ann@example.com"}},
]

@router.post("/seed-data")
async def seed_data(store: PetStore = Depends(get_store)):
    """
    Crea mascotas de prueba. Solo para desarrollo.
    No duplica: se salta las que ya existen (mismo nombre y teléfono).
    """
    created_ids = []
    for data in SAMPLE_PETS:
        if await store.exists(data["name"], data["owner"]["phone"]):
            continue
        pet = await store.insert(PetPayload.model_validate(data))
        created_ids.append(pet.id)

    return {
        "success": True,
        "data": {"created": len(created_ids), "ids": created_ids},
    }
