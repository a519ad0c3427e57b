import json

from models.account import USERS_TABLE

ACCOUNTS = "/api/accounts"


def create(client, email="Awa@Example.com", password="s3cret!", **extra):
    data = {"nom": "Awa Diop", "email": email, "motDePasse": password, **extra}
    return client.post(ACCOUNTS, json={"action": "creerCompteClient", "data": data}).json()


def login(client, email="awa@example.com", password="s3cret!"):
    return client.post(ACCOUNTS, json={"action": "connecterClient", "data": {"email": email, "motDePasse": password}}).json()


def test_create_account_hashes_password(client, store):
    body = create(client)

    assert body["success"] is True
    assert body["id"].startswith("CLT-")
    row = store.tables[USERS_TABLE][0]
    assert row["Email"] == "awa@example.com"
    assert row["PasswordHash"] != "s3cret!"
    assert row["Role"] == "Client"


def test_email_is_unique_regardless_of_case(client, store):
    create(client)
    body = create(client, email="AWA@example.COM")

    assert body == {"success": False, "error": "Un compte avec cet email existe déjà."}
    assert len(store.tables[USERS_TABLE]) == 1


def test_missing_fields_are_refused(client):
    body = client.post(ACCOUNTS, json={"action": "creerCompteClient", "data": {"email": "x@example.com"}}).json()
    assert body["success"] is False
    assert "nom" in body["error"]


def test_login_returns_public_user_and_token(client):
    create(client)
    body = login(client, email=" AWA@example.com ")

    assert body["success"] is True
    assert "PasswordHash" not in body["user"]
    assert body["user"]["Nom"] == "Awa Diop"

    me = client.get(f"{ACCOUNTS}/current-user", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.status_code == 200
    assert me.json()["user"]["IDClient"] == body["user"]["IDClient"]


def test_login_failures_share_one_message(client):
    create(client)
    wrong_password = login(client, password="nope")
    unknown_email = login(client, email="nobody@example.com")

    assert wrong_password == unknown_email == {"success": False, "error": "Email ou mot de passe incorrect."}


def test_current_user_rejects_bad_token(client):
    response = client.get(f"{ACCOUNTS}/current-user", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


def test_update_profile(client, store):
    user_id = create(client, role="Senior")["id"]

    body = client.post(ACCOUNTS, json={"action": "updateProfile", "data": {"userId": user_id, "bio": "CTO", "titre": ""}}).json()
    unknown = client.post(ACCOUNTS, json={"action": "updateProfile", "data": {"userId": "CLT-0", "bio": "x"}}).json()

    assert body["success"] is True
    row = store.tables[USERS_TABLE][0]
    assert row["Bio"] == "CTO"
    assert row["Titre"] == ""
    assert unknown == {"success": False, "error": "Utilisateur non trouvé."}


def test_client_events_and_log_listing(client, store):
    client.post(ACCOUNTS, json={"action": "logClientEvent", "data": {
        "type": "ERROR", "message": "checkout crashed", "url": "/panier", "timestamp": "2024-05-01T10:00:00Z",
    }})

    logs = client.get(ACCOUNTS, params={"action": "getAppLogs"}).json()["logs"]

    assert logs[0][0] == "2024-05-01T10:00:00Z"
    assert logs[0][1] == "FRONT-END"
    assert logs[0][2] == "ERROR"
    assert json.loads(logs[0][3])["message"] == "checkout crashed"


def test_passwords_never_reach_the_log_table(client, store, monkeypatch):
    def broken(password):
        raise RuntimeError("hasher unavailable")

    monkeypatch.setattr("routes.accounts.hash_password", broken)
    body = create(client, password="do-not-log-me")

    assert body["success"] is False
    details = store.tables["Logs"][-1]["Détails"]
    assert "do-not-log-me" not in details
    assert "hasher unavailable" in details
