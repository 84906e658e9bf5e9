import concurrent.futures
from fastapi.testclient import TestClient
import tasktracker.config
from tasktracker.models.task import Task
from tasktracker.models.user import User
from conftest import auth_header


def _signup(client, email="andrew@example.com", password="MyPass777!"):
    r = client.post("/users", json={"name": "Andrew", "email": email, "password": password})
    assert r.status_code == 201
    return r.json()


class TestE2E:
    def test_task_listing_journey(self, client: TestClient):
        _signup(client)
        r = client.post("/users/login", json={"email": "andrew@example.com", "password": "MyPass777!"})
        assert r.status_code == 200
        headers = auth_header(r.json()["token"])

        first = client.post("/tasks", json={"description": "alpha"}, headers=headers).json()
        second = client.post("/tasks", json={"description": "beta", "completed": True}, headers=headers).json()

        r = client.get("/tasks?completed=true", headers=headers)
        assert [t["id"] for t in r.json()] == [second["id"]]

        r = client.get("/tasks?sortBy=description:desc", headers=headers)
        assert [t["description"] for t in r.json()] == ["beta", "alpha"]

        r = client.get("/tasks?limit=1&skip=1", headers=headers)
        assert [t["id"] for t in r.json()] == [second["id"]]

        r = client.get("/tasks?limit=1", headers=headers)
        assert [t["id"] for t in r.json()] == [first["id"]]

    def test_logout_second_session(self, client: TestClient, db):
        signed_up = _signup(client)
        user_id = signed_up["user"]["id"]
        # drop the signup session so only the two logins remain
        client.post("/users/logoutAll", headers=auth_header(signed_up["token"]))
        creds = {"email": "andrew@example.com", "password": "MyPass777!"}

        first = client.post("/users/login", json=creds).json()["token"]
        second = client.post("/users/login", json=creds).json()["token"]
        r = client.post("/users/logout", headers=auth_header(second))
        assert r.status_code == 200

        db.expire_all()
        assert db.get(User, user_id).token_values == [first]

    def test_isolation_and_account_deletion(self, client: TestClient, db):
        owner = _signup(client)
        other = _signup(client, email="other@example.com", password="OtherPass123!")
        owner_headers = auth_header(owner["token"])
        other_headers = auth_header(other["token"])

        task = client.post("/tasks", json={"description": "mine"}, headers=owner_headers).json()

        assert client.get("/tasks", headers=other_headers).json() == []
        assert client.get(f"/tasks/{task['id']}", headers=other_headers).status_code == 404
        assert client.delete(f"/tasks/{task['id']}", headers=other_headers).status_code == 404

        r = client.delete("/users/me", headers=owner_headers)
        assert r.status_code == 200
        assert client.get("/tasks", headers=owner_headers).status_code == 401
        db.expire_all()
        assert db.query(Task).count() == 0

    def test_token_expiration(self, client: TestClient, monkeypatch):
        _signup(client)
        monkeypatch.setattr(tasktracker.config, "ACCESS_TOKEN_EXPIRE_MINUTES", -1)
        token = client.post(
            "/users/login", json={"email": "andrew@example.com", "password": "MyPass777!"}
        ).json()["token"]
        r = client.post("/tasks", json={"description": "late"}, headers=auth_header(token))
        assert r.status_code == 401
        assert "expired" in r.json()["detail"].lower()

    def test_concurrent_logins(self, client: TestClient, db):
        user_id = _signup(client)["user"]["id"]
        creds = {"email": "andrew@example.com", "password": "MyPass777!"}

        def login(_):
            return client.post("/users/login", json=creds)

        with concurrent.futures.ThreadPoolExecutor(max_workers=3) as executor:
            responses = list(executor.map(login, range(5)))

        assert all(r.status_code == 200 for r in responses)
        db.expire_all()
        tokens = db.get(User, user_id).token_values
        # signup token plus one per login, none lost
        assert len(tokens) == 6
        assert {r.json()["token"] for r in responses} <= set(tokens)
