"""
Excepciones del dominio. Cada una lleva el código HTTP con el que la API
la devuelve dentro del sobre ``{success: false, error}``.
"""
from dataclasses import dataclass
from typing import Literal, Sequence

ViolationKind = Literal["MissingField", "InvalidEnum", "OutOfRange", "InvalidType"]


@dataclass(frozen=True)
class Violation:
    kind: ViolationKind
    field: str
    message: str


class PetRecordsError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailed(PetRecordsError):
    """El payload del cliente no cumple el esquema."""
    status_code = 400

    def __init__(self, violations: Sequence[Violation]):
        self.violations = list(violations)
        detail = ", ".join(f"{v.field}: {v.message}" for v in self.violations)
        super().__init__(f"Pet validation failed: {detail}")


class NotFound(PetRecordsError):
    """El id no corresponde a ningún registro (o no es un id válido)."""
    status_code = 404

    def __init__(self, message: str = "Pet not found"):
        super().__init__(message)


class StorageUnavailable(PetRecordsError):
    """Fallo de conexión o de infraestructura en MongoDB."""
    status_code = 500
