from fastapi.testclient import TestClient


def register_and_login(client: TestClient, username: str, password: str = "secret-pw") -> dict:
    """Registers a user, logs in, returns {"id", "headers"}."""
    resp = client.post(
        "/register",
        json={
            "username": username,
            "password": password,
            "email": f"{username}@example.com",
            "name": username.capitalize(),
            "surname": "Tester",
        },
    )
    assert resp.status_code == 201, resp.text
    return login(client, username, password)


def login(client: TestClient, username: str, password: str) -> dict:
    resp = client.post("/login", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    data = resp.json()
    return {
        "id": data["user"]["id"],
        "headers": {"Authorization": f"Bearer {data['access_token']}"},
    }


def create_listing(client: TestClient, headers: dict, name: str = "Lamp", price: str = "10.00") -> int:
    resp = client.post(
        "/listings",
        json={"name": name, "description": f"{name} for sale", "condition": "used", "price": price},
        headers=headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["id"]

