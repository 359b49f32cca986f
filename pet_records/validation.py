"""
Normalización y validación de registros de mascotas.

Funciones puras: no tocan la base de datos. ``validate_pet`` devuelve un
``ValidationResult`` con el registro normalizado o con todas las reglas
incumplidas; quien llama decide si eso es un ``ValidationFailed``.
"""
from dataclasses import dataclass, field
from typing import Any, Optional

from .errors import ValidationFailed, Violation
from .schemas.pet import MAX_AGE, MIN_AGE, PET_TYPES, Owner, OwnerPayload, PetFields, PetPayload


@dataclass
class ValidationResult:
    record: Optional[PetFields] = None
    violations: list[Violation] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.record is not None and not self.violations

    def unwrap(self) -> PetFields:
        if not self.ok:
            raise ValidationFailed(self.violations)
        return self.record


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip()


def normalize_payload(payload: PetPayload) -> PetPayload:
    """Recorta espacios y pasa ``type`` y ``owner.email`` a minúsculas."""
    owner = None
    if payload.owner is not None:
        email = _clean(payload.owner.email)
        owner = OwnerPayload(
            name=_clean(payload.owner.name),
            phone=_clean(payload.owner.phone),
            email=email.lower() if email else None,
        )
    pet_type = _clean(payload.type)
    age = payload.age.strip() if isinstance(payload.age, str) else payload.age
    return PetPayload(
        name=_clean(payload.name),
        type=pet_type.lower() if pet_type is not None else None,
        age=age,
        owner=owner,
    )


def _coerce_age(value: Any) -> tuple[Optional[int], Optional[Violation]]:
    if value is None or value == "":
        return None, Violation("MissingField", "age", "Pet age is required")
    # bool es subclase de int
    if isinstance(value, bool):
        return None, Violation("InvalidType", "age", "Age must be a whole number")
    if isinstance(value, str):
        try:
            value = int(value)
        except ValueError:
            try:
                value = float(value)
            except ValueError:
                return None, Violation("InvalidType", "age", "Age must be a whole number")
    if isinstance(value, float):
        if not value.is_integer():
            return None, Violation("InvalidType", "age", "Age must be a whole number")
        value = int(value)
    if not isinstance(value, int):
        return None, Violation("InvalidType", "age", "Age must be a whole number")

    if value < MIN_AGE:
        return None, Violation("OutOfRange", "age", "Age must be a positive number")
    if value > MAX_AGE:
        return None, Violation("OutOfRange", "age", "Age must be realistic")
    return value, None


def validate_pet(payload: PetPayload) -> ValidationResult:
    data = normalize_payload(payload)
    violations: list[Violation] = []

    if not data.name:
        violations.append(Violation("MissingField", "name", "Pet name is required"))

    if not data.type:
        violations.append(Violation("InvalidEnum", "type", "Pet type is required"))
    elif data.type not in PET_TYPES:
        violations.append(Violation("InvalidEnum", "type", f"'{data.type}' is not a valid pet type"))

    age, age_violation = _coerce_age(data.age)
    if age_violation is not None:
        violations.append(age_violation)

    owner = data.owner or OwnerPayload()
    if not owner.name:
        violations.append(Violation("MissingField", "owner.name", "Owner name is required"))
    if not owner.phone:
        violations.append(Violation("MissingField", "owner.phone", "Owner phone is required"))

    if violations:
        return ValidationResult(violations=violations)

    record = PetFields(
        name=data.name,
        type=data.type,
        age=age,
        owner=Owner(name=owner.name, phone=owner.phone, email=owner.email),
    )
    return ValidationResult(record=record)
