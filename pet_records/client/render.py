# pet_records/client/render.py
# Vista en texto de las tarjetas de mascotas
from datetime import datetime
from typing import Any, Dict, Optional

from .view_model import PetsViewModel

ICONS = {"dog": "🐕", "cat": "🐈"}
NO_PETS_MESSAGE = "No pets found. Add your first pet!"


def _added_date(value: Optional[str]) -> str:
    if not value:
        return "-"
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        return value


def render_card(pet: Dict[str, Any]) -> str:
    owner = pet.get("owner") or {}
    age = pet.get("age")
    lines = [
        f"{ICONS.get(pet.get('type'), '🐈')} [{pet.get('type')}] {pet.get('name')}",
        f"  Age:   {age} year{'' if age == 1 else 's'}",
        f"  Owner: {owner.get('name')}",
        f"  Phone: {owner.get('phone')}",
    ]
    if owner.get("email"):
        lines.append(f"  Email: {owner['email']}")
    lines.append(f"  Added: {_added_date(pet.get('createdAt'))}")
    return "\n".join(lines)


def render_stats(vm: PetsViewModel) -> str:
    stats = vm.stats
    return f"Total: {stats.total} | Dogs: {stats.dogs} | Cats: {stats.cats}"


def render_board(vm: PetsViewModel, now: Optional[float] = None) -> str:
    parts = [render_stats(vm)]
    if vm.notification is not None and vm.notification.is_visible(now):
        parts.append(f"[{vm.notification.kind}] {vm.notification.message}")
    if not vm.displayed:
        parts.append(NO_PETS_MESSAGE)
    else:
        parts.extend(render_card(p) for p in vm.displayed)
    return "\n\n".join(parts)
