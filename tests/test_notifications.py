from models.notification import NOTIFICATIONS_TABLE

NOTIFS = "/api/notifications"


def notify(client, user_id, message):
    return client.post(NOTIFS, json={
        "action": "createNotification", "data": {"userId": user_id, "type": "COMMANDE", "message": message},
    }).json()


def test_notifications_are_listed_newest_first(client, store):
    notify(client, "CLT-1", "première")
    notify(client, "CLT-2", "autre client")
    notify(client, "CLT-1", "seconde")

    body = client.get(NOTIFS, params={"action": "getNotifications", "userId": "CLT-1"}).json()

    assert [n["Message"] for n in body["data"]] == ["seconde", "première"]
    assert all(n["Statut"] == "Non lue" for n in body["data"])


def test_listing_requires_a_user(client):
    body = client.get(NOTIFS, params={"action": "getNotifications"}).json()
    assert body == {"success": False, "error": "ID utilisateur manquant."}


def test_mark_all_as_read(client, store):
    notify(client, "CLT-1", "a")
    notify(client, "CLT-1", "b")
    notify(client, "CLT-2", "c")

    body = client.post(NOTIFS, json={"action": "markAsRead", "data": {"userId": "CLT-1"}}).json()

    assert body["updated"] == 2
    statuses = {(row["ID Client"], row["Statut"]) for row in store.tables[NOTIFICATIONS_TABLE]}
    assert statuses == {("CLT-1", "Lue"), ("CLT-2", "Non lue")}


def test_mark_selected_as_read(client, store):
    store.tables[NOTIFICATIONS_TABLE].extend([
        {"ID Notification": "N-1", "ID Client": "CLT-1", "Statut": "Non lue"},
        {"ID Notification": "N-2", "ID Client": "CLT-1", "Statut": "Non lue"},
        {"ID Notification": "N-3", "ID Client": "CLT-2", "Statut": "Non lue"},
    ])

    body = client.post(NOTIFS, json={"action": "markAsRead", "data": {"userId": "CLT-1", "ids": ["N-2", "N-3"]}}).json()

    assert body["updated"] == 1
    assert [row["Statut"] for row in store.tables[NOTIFICATIONS_TABLE]] == ["Non lue", "Lue", "Non lue"]
