import pytest

from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

from abc_core.common.model import BankSend, Coin, CommonsPhase, CurveInfo, MintTokens, Response
from abc_core.webapi.webapi import create_app, response_to_json, to_jsonable


CONTRACT = "contract0"
SUPPLY_DENOM = f"factory/{CONTRACT}/epoxy"


def _instantiate_body(curve_type="linear", value=1, scale=1, allowlist=None, initial_raise=(1, 10 ** 10)):
    return {
        "sender": "creator",
        "supply": {"subdenom": "epoxy", "decimals": 2, "metadata": {"name": "Bonded", "symbol": "EPOXY"}},
        "reserve": {"denom": "satoshi", "decimals": 8},
        "curve_type": {"curve_type": curve_type, "value": value, "scale": scale},
        "phase_config": {
            "initial_raise": list(initial_raise),
            "initial_price": 1,
            "initial_allocation": 10,
            "reserve_percentage": 10,
            "allowlist": allowlist,
        },
    }


@pytest.fixture
def client():
    app = create_app(contract_address=CONTRACT)
    app.config["TESTING"] = True
    return app.test_client()


@pytest.fixture
def instantiated(client):
    resp = client.post("/contract/instantiate", json=_instantiate_body(allowlist=["investor"]))
    assert resp.status_code == 200
    return client


def test_instantiate_emits_create_denom(client):
    resp = client.post("/contract/instantiate", json=_instantiate_body())
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["messages"][0]["type"] == "CreateDenom"
    assert body["messages"][0]["subdenom"] == "epoxy"
    assert {"key": "denom", "value": SUPPLY_DENOM} in body["attributes"]


def test_curve_info_after_instantiate(instantiated):
    resp = instantiated.get("/contract/curve_info")
    assert resp.status_code == 200
    assert resp.get_json() == {"reserve": 0, "supply": 0, "spot_price": "0", "reserve_denom": "satoshi"}


def test_buy_and_burn(instantiated):
    resp = instantiated.post(
        "/contract/buy",
        json={"sender": "investor", "funds": [{"denom": "satoshi", "amount": 2_000_000_000}]},
    )
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["messages"] == [
        {"type": "MintTokens", "denom": SUPPLY_DENOM, "amount": 2000, "mint_to_address": "investor"}
    ]

    info = instantiated.get("/contract/curve_info").get_json()
    assert info["supply"] == 2000
    assert info["spot_price"] == "2"

    resp = instantiated.post(
        "/contract/burn",
        json={"sender": "investor", "amount": 1000, "funds": [{"denom": SUPPLY_DENOM, "amount": 1000}]},
    )
    assert resp.status_code == 200
    messages = resp.get_json()["messages"]
    assert messages[1] == {
        "type": "BankSend",
        "to_address": "investor",
        "amount": [{"denom": "satoshi", "amount": 1_500_000_000}],
    }


def test_concurrent_buys_each_commit():
    app = create_app(contract_address=CONTRACT)
    app.config["TESTING"] = True
    resp = app.test_client().post("/contract/instantiate", json=_instantiate_body())
    assert resp.status_code == 200

    payments = [1000 + i for i in range(200)]

    def buy(amount):
        return app.test_client().post(
            "/contract/buy",
            json={"sender": f"buyer{amount}", "funds": [{"denom": "satoshi", "amount": amount}]},
        ).status_code

    with ThreadPoolExecutor(max_workers=16) as pool:
        statuses = list(pool.map(buy, payments))

    assert statuses == [200] * len(payments)
    info = app.test_client().get("/contract/curve_info").get_json()
    assert info["reserve"] == sum(payments)
    assert info["supply"] == 20


def test_phase_queries(instantiated):
    instantiated.post("/contract/buy", json={"sender": "investor", "funds": [{"denom": "satoshi", "amount": 5}]})
    phase = instantiated.get("/contract/phase").get_json()
    assert phase == {"phase": "HATCH", "hatchers": ["investor"]}

    config = instantiated.get("/contract/phase_config").get_json()
    assert config["hatch"]["allowlist"] == ["investor"]
    assert config["hatch"]["initial_raise"] == [1, 10 ** 10]


def test_core_errors_map_to_400(instantiated):
    resp = instantiated.post("/contract/buy", json={"sender": "mallory", "funds": [{"denom": "satoshi", "amount": 5}]})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "AllowlistError"

    resp = instantiated.post("/contract/buy", json={"sender": "investor", "funds": []})
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "PaymentError", "reason": "No funds sent"}


def test_invalid_config_maps_to_400(client):
    resp = client.post("/contract/instantiate", json=_instantiate_body(initial_raise=(100, 1)))
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "ConfigError"


def test_query_before_instantiate(client):
    resp = client.get("/contract/curve_info")
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "StorageError"


def test_request_validation_error(client):
    resp = client.post("/contract/buy", json={"funds": []})
    assert resp.status_code == 422


def test_to_jsonable():
    assert to_jsonable(Decimal("2.000000000000000000")) == "2"
    assert to_jsonable(Decimal("10.50")) == "10.5"
    assert to_jsonable(CommonsPhase.hatch({"b", "a"})) == {"phase": "HATCH", "hatchers": ["a", "b"]}
    assert to_jsonable(CurveInfo(1, 2, Decimal("0.5"), "satoshi")) == {
        "reserve": 1, "supply": 2, "spot_price": "0.5", "reserve_denom": "satoshi"
    }


def test_response_to_json():
    response = Response()
    response.add_message(MintTokens("d", 1, "alice"))
    response.add_message(BankSend("alice", [Coin("satoshi", 3)]))
    response.add_attribute("action", "buy")
    assert response_to_json(response) == {
        "messages": [
            {"type": "MintTokens", "denom": "d", "amount": 1, "mint_to_address": "alice"},
            {"type": "BankSend", "to_address": "alice", "amount": [{"denom": "satoshi", "amount": 3}]},
        ],
        "attributes": [{"key": "action", "value": "buy"}],
    }
