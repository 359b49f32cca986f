# pet_records/routers/pets.py
from fastapi import APIRouter, Depends, Request, status
from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import List

from ..config import get_settings
from ..db import get_db
from ..middleware.rate_limit import limiter, write_limit
from ..schemas.pet import Envelope, PetPayload, PetRecord
from ..store import PetStore

router = APIRouter()
settings = get_settings()

async def get_store(db: AsyncIOMotorDatabase = Depends(get_db)) -> PetStore:
    return PetStore(db[settings.pets_collection])

def ok(data) -> dict:
    return {"success": True, "data": data}

# Los errores (ValidationFailed, NotFound, StorageUnavailable) los convierte
# en sobre {success: false} el handler registrado en main.py

@router.post(
    "",
    response_model=Envelope[PetRecord],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(write_limit)
async def create_pet(request: Request, payload: PetPayload, store: PetStore = Depends(get_store)):
    return ok(await store.insert(payload))

@router.get("", response_model=Envelope[List[PetRecord]], response_model_exclude_none=True)
async def list_pets(store: PetStore = Depends(get_store)):
    return ok(await store.find_all())

# Declarada antes de /{pet_id} aunque no colisionan (dos segmentos vs uno)
@router.get("/search/{query:path}", response_model=Envelope[List[PetRecord]], response_model_exclude_none=True)
async def search_pets(query: str, store: PetStore = Depends(get_store)):
    return ok(await store.search(query))

@router.get("/{pet_id}", response_model=Envelope[PetRecord], response_model_exclude_none=True)
async def get_pet(pet_id: str, store: PetStore = Depends(get_store)):
    return ok(await store.find_by_id(pet_id))

@router.put("/{pet_id}", response_model=Envelope[PetRecord], response_model_exclude_none=True)
@limiter.limit(write_limit)
async def update_pet(request: Request, pet_id: str, payload: PetPayload, store: PetStore = Depends(get_store)):
    return ok(await store.update_by_id(pet_id, payload))

@router.delete("/{pet_id}", response_model=Envelope[PetRecord], response_model_exclude_none=True)
@limiter.limit(write_limit)
async def delete_pet(request: Request, pet_id: str, store: PetStore = Depends(get_store)):
    return ok(await store.delete_by_id(pet_id))
