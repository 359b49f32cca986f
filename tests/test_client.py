"""
Tests del cliente REST, el view-model y la vista en texto
"""
import httpx
import pytest

from pet_records.client.api import ApiError, PetsApi
from pet_records.client.render import NO_PETS_MESSAGE, render_board, render_card
from pet_records.client.view_model import Notification, PetsController, PetsViewModel, pet_form

@pytest.fixture
def api(client):
    return PetsApi(client)

@pytest.fixture
def answers():
    """Respuestas del diálogo de confirmación, en orden"""
    return []

@pytest.fixture
def controller(api, answers):
    def confirm(message):
        assert message == "Are you sure you want to delete this pet record?"
        return answers.pop(0) if answers else True
    return PetsController(api, confirm=confirm)

@pytest.fixture
def seeded(api, pet_payload, cat_payload):
    return [api.create(pet_payload), api.create(cat_payload)]

def test_api_unwraps_envelope(api, pet_payload):
    created = api.create(pet_payload)
    assert created["type"] == "dog"
    assert api.get(created["id"]) == created
    assert api.search("rex") == [created]
    assert api.delete(created["id"])["id"] == created["id"]
    assert api.list() == []

def test_api_raises_on_failure(api):
    with pytest.raises(ApiError) as exc:
        api.get("does-not-exist")
    assert exc.value.status_code == 404
    assert exc.value.message == "Pet not found"

def test_api_encodes_search_query(api, pet_payload):
    pet_payload["owner"]["name"] = "Ann/Lee & Co?"
    created = api.create(pet_payload)
    assert [p["id"] for p in api.search("lee & co?")] == [created["id"]]

def test_api_transport_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    api = PetsApi(httpx.Client(transport=httpx.MockTransport(handler), base_url="http://test"))
    with pytest.raises(ApiError) as exc:
        api.list()
    assert exc.value.status_code is None
    assert "connection refused" in exc.value.message

def test_api_closes_http_client():
    def handler(request):
        return httpx.Response(200, json={"success": True, "data": []})

    with PetsApi(httpx.Client(transport=httpx.MockTransport(handler), base_url="http://test")) as api:
        assert api.list() == []
        assert not api.http.is_closed
    assert api.http.is_closed

    connected = PetsApi.connect("http://test")
    connected.close()
    assert connected.http.is_closed

def test_load_fills_snapshot_and_stats(controller, seeded):
    vm = PetsViewModel()
    controller.load(vm)
    assert len(vm.all_pets) == 2
    assert vm.displayed == vm.all_pets
    stats = vm.stats
    assert (stats.total, stats.dogs, stats.cats) == (2, 1, 1)

def test_filter_by_type_is_local(controller, api, seeded):
    vm = PetsViewModel()
    controller.load(vm)

    # lo que cambie en el servidor no se ve hasta recargar
    api.delete(seeded[0]["id"])

    controller.filter_by_type(vm, "dog")
    assert [p["name"] for p in vm.displayed] == ["Rex"]
    assert vm.stats.total == 1 and vm.stats.cats == 0

    controller.filter_by_type(vm, "all")
    assert len(vm.displayed) == 2

    with pytest.raises(ValueError):
        controller.filter_by_type(vm, "bird")

def test_search_replaces_displayed_not_snapshot(controller, seeded):
    vm = PetsViewModel()
    controller.load(vm)

    controller.search(vm, "  ortega ")
    assert vm.search_text == "ortega"
    assert [p["name"] for p in vm.displayed] == ["Misu"]
    assert len(vm.all_pets) == 2
    assert vm.stats.total == 1

    controller.search(vm, "nobody")
    assert vm.displayed == []
    assert vm.notification.kind == "error"
    assert vm.notification.message == "No pets found matching your search"

def test_blank_search_reloads(controller, api, seeded):
    vm = PetsViewModel()
    controller.search(vm, "   ")
    assert len(vm.displayed) == 2
    assert vm.notification is None

def test_clear_search_resets_filter(controller, seeded):
    vm = PetsViewModel()
    controller.load(vm)
    controller.filter_by_type(vm, "cat")
    controller.clear_search(vm)
    assert vm.type_filter == "all"
    assert vm.search_text == ""
    assert len(vm.displayed) == 2

def test_clear_search_uses_local_snapshot(controller, api, seeded):
    vm = PetsViewModel()
    controller.load(vm)
    controller.search(vm, "ortega")
    assert len(vm.displayed) == 1

    # el servidor cambia, pero limpiar la búsqueda no vuelve a pedir el listado
    api.delete(seeded[0]["id"])
    controller.clear_search(vm)
    assert vm.search_text == ""
    assert len(vm.displayed) == 2
    assert {p["id"] for p in vm.displayed} == {p["id"] for p in seeded}

def test_submit_creates_then_edits(controller, api):
    vm = PetsViewModel()
    controller.open_add(vm)
    assert vm.form_title == "Add New Pet"

    form = pet_form("Rex", "dog", 3, "Ann", "555-1111", "ANN@example.com")
    assert controller.submit(vm, form) is True
    assert vm.notification.message == "Pet added successfully!"
    assert vm.form_open is False
    assert len(vm.all_pets) == 1
    pet = vm.all_pets[0]
    assert pet["owner"]["email"] == "ann@example.com"

    controller.open_edit(vm, pet)
    assert vm.current_edit_id == pet["id"]
    assert vm.form_title == "Edit Pet Details"
    assert controller.submit(vm, pet_form("Rex", "dog", 4, "Ann", "555-1111")) is True
    assert vm.notification.message == "Pet updated successfully!"
    assert vm.current_edit_id is None
    assert vm.all_pets[0]["age"] == 4
    assert "email" not in vm.all_pets[0]["owner"]

def test_failed_submit_keeps_state(controller, seeded):
    vm = PetsViewModel()
    controller.load(vm)
    before = list(vm.displayed)

    controller.open_edit(vm, seeded[0])
    ok = controller.submit(vm, pet_form("Rex", "dog", 51, "Ann", "555-1111"))
    assert ok is False
    assert vm.notification.kind == "error"
    assert vm.notification.message == "Operation failed: Pet validation failed: age: Age must be realistic"
    assert vm.form_open is True
    assert vm.current_edit_id == seeded[0]["id"]
    assert vm.displayed == before

def test_delete_requires_confirmation(controller, answers, seeded):
    vm = PetsViewModel()
    controller.load(vm)

    answers.append(False)
    assert controller.delete(vm, seeded[0]["id"]) is False
    assert len(vm.all_pets) == 2

    answers.append(True)
    assert controller.delete(vm, seeded[0]["id"]) is True
    assert vm.notification.message == "Pet deleted successfully!"
    assert [p["id"] for p in vm.all_pets] == [seeded[1]["id"]]

    assert controller.delete(vm, seeded[0]["id"]) is False
    assert vm.notification.message == "Failed to delete pet: Pet not found"

def test_notification_auto_dismisses():
    note = Notification("Saved", shown_at=100.0)
    assert note.is_visible(now=102.9)
    assert not note.is_visible(now=103.0)

def test_render_card():
    pet = {
        "id": "1", "name": "Rex", "type": "dog", "age": 1,
        "owner": {"name": "Ann", "phone": "555-1111"},
        "createdAt": "2026-01-01T12:00:00Z",
    }
    card = render_card(pet)
    assert card.splitlines()[0] == "🐕 [dog] Rex"
    assert "Age:   1 year\n" in card
    assert "Email" not in card
    assert card.endswith("Added: 2026-01-01")

    pet["age"] = 2
    pet["owner"]["email"] = "ann@example.com"
    card = render_card(pet)
    assert "2 years" in card
    assert "Email: ann@example.com" in card

def test_render_board(controller, seeded):
    vm = PetsViewModel()
    assert render_board(vm).endswith(NO_PETS_MESSAGE)

    controller.load(vm)
    vm.notification = Notification("Hello", shown_at=0.0)
    board = render_board(vm, now=1.0)
    assert board.startswith("Total: 2 | Dogs: 1 | Cats: 1")
    assert "[success] Hello" in board
    assert "Rex" in board and "Misu" in board
    assert "[success] Hello" not in render_board(vm, now=10.0)
