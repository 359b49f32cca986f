from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Generic, Literal, Optional, TypeVar
from datetime import datetime

PetType = Literal["dog", "cat"]
PET_TYPES: tuple[str, ...] = ("dog", "cat")
MIN_AGE = 0
MAX_AGE = 50

T = TypeVar("T")

# ---------- Entrada (body de POST/PUT) ----------
# Campos opcionales: la validación de negocio la hace validation.validate_pet

class OwnerPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None

class PetPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    type: Optional[str] = None
    age: Any = None
    owner: Optional[OwnerPayload] = None

# ---------- Registro validado ----------

class Owner(BaseModel):
    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    email: Optional[str] = None

class PetFields(BaseModel):
    name: str = Field(..., min_length=1)
    type: PetType
    age: int = Field(..., ge=MIN_AGE, le=MAX_AGE)
    owner: Owner

class PetRecord(PetFields):
    id: str
    createdAt: datetime
    updatedAt: datetime

# ---------- Sobre de respuesta ----------

class Envelope(BaseModel, Generic[T]):
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
