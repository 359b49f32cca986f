"""
Estado de la interfaz y las acciones del usuario sobre él.

``PetsViewModel`` es el estado explícito (copia local de todas las
mascotas, lo que se muestra, la mascota en edición, el filtro y la
notificación). ``PetsController`` aplica cada acción sobre el view-model
que recibe; nunca hay estado global.

Tras cada alta, edición o borrado correcto se vuelve a pedir el listado
completo, así que lo mostrado refleja siempre lo que hay en el servidor.
"""
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from .api import ApiError, PetsApi

logger = logging.getLogger(__name__)

NOTIFICATION_SECONDS = 3.0
TYPE_FILTERS = ("all", "dog", "cat")


@dataclass
class Notification:
    message: str
    kind: str = "success"  # success | error
    shown_at: float = field(default_factory=time.monotonic)

    def is_visible(self, now: Optional[float] = None) -> bool:
        now = time.monotonic() if now is None else now
        return now - self.shown_at < NOTIFICATION_SECONDS


@dataclass
class Stats:
    total: int
    dogs: int
    cats: int


@dataclass
class PetsViewModel:
    all_pets: List[Dict[str, Any]] = field(default_factory=list)
    displayed: List[Dict[str, Any]] = field(default_factory=list)
    current_edit_id: Optional[str] = None
    form_open: bool = False
    type_filter: str = "all"
    search_text: str = ""
    notification: Optional[Notification] = None

    @property
    def stats(self) -> Stats:
        return Stats(
            total=len(self.displayed),
            dogs=sum(1 for p in self.displayed if p.get("type") == "dog"),
            cats=sum(1 for p in self.displayed if p.get("type") == "cat"),
        )

    @property
    def form_title(self) -> str:
        return "Edit Pet Details" if self.current_edit_id else "Add New Pet"


def pet_form(name: str, pet_type: str, age: Any, owner_name: str, owner_phone: str, owner_email: str = "") -> Dict[str, Any]:
    """Payload completo tal como lo envía el formulario."""
    return {
        "name": name,
        "type": pet_type,
        "age": age,
        "owner": {"name": owner_name, "phone": owner_phone, "email": owner_email},
    }


class PetsController:

    def __init__(self, api: PetsApi, confirm: Callable[[str], bool] = lambda message: True):
        self.api = api
        self.confirm = confirm

    def notify(self, vm: PetsViewModel, message: str, kind: str = "success") -> None:
        vm.notification = Notification(message, kind)

    # ---------- Lectura ----------

    def load(self, vm: PetsViewModel) -> None:
        try:
            pets = self.api.list()
        except ApiError as e:
            logger.warning("Failed to load pets: %s", e.message)
            self.notify(vm, f"Failed to load pets: {e.message}", "error")
            return
        vm.all_pets = pets
        vm.displayed = list(pets)

    def search(self, vm: PetsViewModel, text: str) -> None:
        query = (text or "").strip()
        vm.search_text = query
        if not query:
            self.load(vm)
            return
        try:
            results = self.api.search(query)
        except ApiError as e:
            self.notify(vm, f"Search failed: {e.message}", "error")
            return
        # la copia local no cambia; solo lo que se muestra
        vm.displayed = results
        if not results:
            self.notify(vm, "No pets found matching your search", "error")

    def filter_by_type(self, vm: PetsViewModel, value: str) -> None:
        if value not in TYPE_FILTERS:
            raise ValueError(f"Unknown type filter: {value}")
        vm.type_filter = value
        if value == "all":
            vm.displayed = list(vm.all_pets)
        else:
            vm.displayed = [p for p in vm.all_pets if p.get("type") == value]

    def clear_search(self, vm: PetsViewModel) -> None:
        # vuelve a la copia local, sin pedir nada al servidor
        vm.search_text = ""
        vm.type_filter = "all"
        vm.displayed = list(vm.all_pets)

    # ---------- Formulario ----------

    def open_add(self, vm: PetsViewModel) -> None:
        vm.current_edit_id = None
        vm.form_open = True

    def open_edit(self, vm: PetsViewModel, pet: Dict[str, Any]) -> None:
        vm.current_edit_id = pet["id"]
        vm.form_open = True

    def close_form(self, vm: PetsViewModel) -> None:
        vm.form_open = False
        vm.current_edit_id = None

    def submit(self, vm: PetsViewModel, form: Dict[str, Any]) -> bool:
        try:
            if vm.current_edit_id:
                self.api.update(vm.current_edit_id, form)
                message = "Pet updated successfully!"
            else:
                self.api.create(form)
                message = "Pet added successfully!"
        except ApiError as e:
            self.notify(vm, f"Operation failed: {e.message}", "error")
            return False
        self.notify(vm, message)
        self.close_form(vm)
        self.load(vm)
        return True

    def delete(self, vm: PetsViewModel, pet_id: str) -> bool:
        if not self.confirm("Are you sure you want to delete this pet record?"):
            return False
        try:
            self.api.delete(pet_id)
        except ApiError as e:
            self.notify(vm, f"Failed to delete pet: {e.message}", "error")
            return False
        self.notify(vm, "Pet deleted successfully!")
        self.load(vm)
        return True
