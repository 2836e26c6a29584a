from datetime import datetime
from unittest.mock import MagicMock

from bson import ObjectId

from todo_api.dependencies import get_repository
from todo_api.exceptions import StoreError
from todo_api.main import app
from todo_api.repositories import InMemoryRepository, Repository


def assert_todo_shape(todo: dict):
    for key in ["id", "title", "completed", "completed_at"]:
        assert key in todo
    assert isinstance(todo["id"], str)
    assert ObjectId.is_valid(todo["id"])
    assert isinstance(todo["title"], str)
    assert isinstance(todo["completed"], bool)
    datetime.fromisoformat(todo["completed_at"].replace("Z", "+00:00"))


def list_data(client) -> list:
    res = client.get("/todo/")
    assert res.status_code == 200
    return res.json()["data"]


class FailingRepository(InMemoryRepository):
    """Repository whose store is unreachable."""

    def list(self):
        raise StoreError("connection refused")

    def create(self, data):
        raise StoreError("connection refused")

    def update(self, todo_id, data):
        raise StoreError("connection refused")

    def delete(self, todo_id):
        raise StoreError("connection refused")

    def ping(self):
        raise StoreError("connection refused")


class TestHome:
    def test_home_serves_file(self, client, home_file):
        res = client.get("/")
        assert res.status_code == 200
        assert "Hello from the home page." in res.text
        assert res.headers["content-type"].startswith("text/markdown")

    def test_home_missing_file(self, client, home_file):
        home_file.unlink()
        res = client.get("/")
        assert res.status_code == 404
        assert res.json() == {"message": "Home file not found"}

    def test_health_check(self, client):
        res = client.get("/health")
        assert res.status_code == 200
        assert res.json() == {"message": "Healthy", "backend": "memory", "store": "ok"}

    def test_health_check_store_down(self, client):
        app.state.context.repository = FailingRepository()
        res = client.get("/health")
        assert res.status_code == 200
        assert res.json()["store"] == "unreachable"


class TestTodosCRUD:
    def test_list_empty(self, client):
        res = client.get("/todo/")
        assert res.status_code == 200
        assert res.json() == {"message": "All Todos retrieved", "data": []}

    def test_create_then_list(self, client):
        res = client.post("/todo/", json={"title": "buy milk"})
        assert res.status_code == 201
        body = res.json()
        assert body["message"] == "Todo created successfully"
        assert ObjectId.is_valid(body["ID"])

        todos = list_data(client)
        assert len(todos) == 1
        todo = todos[0]
        assert_todo_shape(todo)
        assert todo["id"] == body["ID"]
        assert todo["title"] == "buy milk"
        assert todo["completed"] is False

    def test_create_ignores_completed_in_body(self, client):
        res = client.post("/todo/", json={"title": "already done?", "completed": True})
        assert res.status_code == 201
        assert list_data(client)[0]["completed"] is False

    def test_list_keeps_insertion_order(self, client):
        for title in ["one", "two", "three"]:
            assert client.post("/todo/", json={"title": title}).status_code == 201
        assert [t["title"] for t in list_data(client)] == ["one", "two", "three"]

    def test_update_keeps_id_and_creation_time(self, client):
        tid = client.post("/todo/", json={"title": "old title"}).json()["ID"]
        before = list_data(client)[0]

        res = client.put(f"/todo/{tid}", json={"title": "new title", "completed": True})
        assert res.status_code == 200
        assert res.json() == {"message": "Successfully updated item", "data": 1}

        after = list_data(client)[0]
        assert after["id"] == before["id"] == tid
        assert after["completed_at"] == before["completed_at"]
        assert after["title"] == "new title"
        assert after["completed"] is True

    def test_update_unknown_id_modifies_nothing(self, client):
        res = client.put(f"/todo/{ObjectId()}", json={"title": "nobody", "completed": True})
        assert res.status_code == 200
        assert res.json()["data"] == 0

    def test_update_omitted_completed_resets_flag(self, client):
        tid = client.post("/todo/", json={"title": "task"}).json()["ID"]
        client.put(f"/todo/{tid}", json={"title": "task", "completed": True})

        res = client.put(f"/todo/{tid}", json={"title": "task"})
        assert res.status_code == 200
        assert list_data(client)[0]["completed"] is False

    def test_delete_todo(self, client):
        tid = client.post("/todo/", json={"title": "to delete"}).json()["ID"]
        keep = client.post("/todo/", json={"title": "to keep"}).json()["ID"]

        res = client.delete(f"/todo/{tid}")
        assert res.status_code == 200
        assert res.json() == {"message": "Item deleted successfully", "data": {"DeletedCount": 1}}
        assert [t["id"] for t in list_data(client)] == [keep]

    def test_delete_unknown_id_still_succeeds(self, client):
        res = client.delete(f"/todo/{ObjectId()}")
        assert res.status_code == 200
        assert res.json()["data"] == {"DeletedCount": 0}


class TestValidationErrors:
    def test_create_empty_title(self, client):
        res = client.post("/todo/", json={"title": ""})
        assert res.status_code == 400
        body = res.json()
        assert body["message"] == "Could not decode data"
        assert "Please add a title" in body["error"]
        assert isinstance(body["detail"], list)
        assert list_data(client) == []

    def test_create_whitespace_title_is_stored_as_sent(self, client):
        assert client.post("/todo/", json={"title": "   "}).status_code == 201
        assert client.post("/todo/", json={"title": "  buy milk  "}).status_code == 201
        assert [t["title"] for t in list_data(client)] == ["   ", "  buy milk  "]

    def test_create_missing_title(self, client):
        res = client.post("/todo/", json={})
        assert res.status_code == 400

    def test_create_malformed_json(self, client):
        res = client.post(
            "/todo/",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert res.status_code == 400
        assert res.json()["message"] == "Could not decode data"

    def test_update_empty_title(self, client):
        tid = client.post("/todo/", json={"title": "keep me"}).json()["ID"]
        res = client.put(f"/todo/{tid}", json={"title": "", "completed": True})
        assert res.status_code == 400
        assert "Title cannot be empty" in res.json()["error"]
        assert list_data(client)[0]["title"] == "keep me"

    def test_update_malformed_id_does_not_touch_store(self, client):
        repo = MagicMock(spec=Repository)
        app.dependency_overrides[get_repository] = lambda: repo

        res = client.put("/todo/not-an-id", json={"title": "x", "completed": False})
        assert res.status_code == 400
        assert res.json()["message"] == "Invalid id"
        repo.update.assert_not_called()

    def test_delete_malformed_id(self, client):
        repo = MagicMock(spec=Repository)
        app.dependency_overrides[get_repository] = lambda: repo

        res = client.delete("/todo/1234")
        assert res.status_code == 400
        assert res.json()["message"] == "Invalid id"
        repo.delete.assert_not_called()


class TestStoreFailures:
    def _use_failing_store(self):
        app.dependency_overrides[get_repository] = FailingRepository

    def test_list_store_unreachable(self, client):
        self._use_failing_store()
        res = client.get("/todo/")
        assert res.status_code == 500
        assert res.json() == {
            "message": "Could not fetch the todo collection",
            "error": "connection refused",
        }

    def test_create_store_failure_is_reported(self, client):
        self._use_failing_store()
        res = client.post("/todo/", json={"title": "buy milk"})
        assert res.status_code == 500
        assert res.json()["message"] == "Failed to add data into the database"

    def test_update_store_failure(self, client):
        self._use_failing_store()
        res = client.put(f"/todo/{ObjectId()}", json={"title": "x", "completed": True})
        assert res.status_code == 500
        assert res.json()["error"] == "connection refused"

    def test_delete_store_failure(self, client):
        self._use_failing_store()
        res = client.delete(f"/todo/{ObjectId()}")
        assert res.status_code == 500
        assert res.json()["message"] == "An error occurred while deleting the todo item"
