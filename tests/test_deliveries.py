import pytest

from routes.deliveries import CONFIG_TABLE, DEFAULT_DELIVERY_OPTIONS, get_delivery_options, setup_delivery_options

DELIVERIES = "/api/deliveries"


def test_no_options_configured(client):
    assert client.get(DELIVERIES, params={"action": "getDeliveryOptions"}).json() == {"success": True, "data": {}}


@pytest.mark.asyncio
async def test_seeded_defaults_are_served(store):
    await setup_delivery_options(store)

    body = await get_delivery_options(store)

    assert body == {"success": True, "data": DEFAULT_DELIVERY_OPTIONS}


@pytest.mark.asyncio
async def test_seeding_keeps_existing_options(store):
    store.tables[CONFIG_TABLE].append({"Clé": "delivery_options", "Valeur": '{"Ziguinchor": {}}'})

    await setup_delivery_options(store)

    assert store.tables[CONFIG_TABLE] == [{"Clé": "delivery_options", "Valeur": '{"Ziguinchor": {}}'}]


def test_malformed_options_yield_empty(client, store):
    store.tables[CONFIG_TABLE].append({"Clé": "delivery_options", "Valeur": "{not json"})

    assert client.get(DELIVERIES, params={"action": "getDeliveryOptions"}).json()["data"] == {}
