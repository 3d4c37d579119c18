"""
Tests for Gateway service routes.
"""

import math
import pytest
from fastapi.testclient import TestClient
from unittest.mock import MagicMock

from service_gateway.app.adapters.arc200_client import OperationResult
from service_gateway.app.main import create_app
from shared.config import get_config
from shared.test_helpers import (
    StubContractFactory,
    TestDataFactory,
    TEST_ADDRESS_FROM,
    TEST_ADDRESS_TO,
)


INVALID_ID_BODY = {"success": False, "error": "Invalid tokenId. Must be a number."}
NOT_FOUND_BODY = {"success": False, "error": "Token not found"}
INTERNAL_ERROR_BODY = {"success": False, "error": "Internal Server Error"}

READ_ROUTES = [
    ("name", "arc200_name"),
    ("symbol", "arc200_symbol"),
    ("totalSupply", "arc200_totalSupply"),
    ("decimals", "arc200_decimals"),
]


@pytest.fixture
def config():
    """Gateway configuration pointing at a local node."""
    return get_config(
        "gateway",
        5002,
        algod_url="http://localhost",
        algod_port="4001",
        algod_token="a" * 64,
    )


@pytest.fixture
def contracts():
    """Stub contract factory with a fully readable token."""
    return StubContractFactory(TestDataFactory.token_results())


@pytest.fixture
def ledger_client():
    return MagicMock(name="ledger_client")


@pytest.fixture
def client(config, ledger_client, contracts):
    """Create test client."""
    app = create_app(config=config, ledger_client=ledger_client, contract_factory=contracts)
    return TestClient(app)


def test_liveness_greeting(client):
    response = client.get("/api")
    assert response.status_code == 200
    assert response.text == "Hello, World!"
    assert response.headers["content-type"].startswith("text/plain")


def test_read_name_strips_nul_padding(client, contracts):
    contracts.results["arc200_name"] = OperationResult.ok("Foo\x00\x00")

    response = client.get("/api/assets/42/name")

    assert response.status_code == 200
    assert response.json() == {"success": True, "response": "Foo"}


def test_read_name_with_leading_nul_is_unchanged(client, contracts):
    contracts.results["arc200_name"] = OperationResult.ok("\x00")

    response = client.get("/api/assets/42/name")

    assert response.status_code == 200
    assert response.json() == {"success": True, "response": "\x00"}


@pytest.mark.parametrize("segment,accessor", READ_ROUTES)
def test_read_route_invokes_exactly_one_accessor(client, contracts, ledger_client, segment, accessor):
    response = client.get(f"/api/assets/42/{segment}")

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert len(contracts.instances) == 1
    contract = contracts.instances[0]
    assert contract.calls == [accessor]
    assert contract.contract_id == 42
    assert contract.caller is None
    assert contract.ledger_client is ledger_client


def test_numeric_results_pass_through(client):
    assert client.get("/api/assets/42/totalSupply").json() == {
        "success": True,
        "response": 10_000_000_000_000_000,
    }
    assert client.get("/api/assets/42/decimals").json() == {"success": True, "response": 6}


@pytest.mark.parametrize("token_id", ["abc", "NaN", "1_000", "0x", "12abc", "inf"])
@pytest.mark.parametrize("suffix", [
    "/name",
    "/symbol",
    "/totalSupply",
    "/decimals",
    "",
    f"/transfer/{TEST_ADDRESS_FROM}/{TEST_ADDRESS_TO}/10",
])
def test_non_numeric_token_id_is_rejected(client, contracts, token_id, suffix):
    response = client.get(f"/api/assets/{token_id}{suffix}")

    assert response.status_code == 400
    assert response.json() == INVALID_ID_BODY
    assert contracts.instances == []


@pytest.mark.parametrize("token_id,expected", [
    ("-5", -5),
    ("1.5", 1.5),
    ("0x1A", 26),
    ("1e3", 1000),
    ("007", 7),
])
def test_numeric_token_ids_are_accepted(client, contracts, token_id, expected):
    response = client.get(f"/api/assets/{token_id}/symbol")

    assert response.status_code == 200
    assert contracts.instances[0].contract_id == expected


@pytest.mark.parametrize("segment,accessor", READ_ROUTES)
def test_read_failure_is_not_found(client, contracts, segment, accessor):
    contracts.results[accessor] = OperationResult.fail("application does not exist")

    response = client.get(f"/api/assets/42/{segment}")

    assert response.status_code == 404
    assert response.json() == NOT_FOUND_BODY


def test_read_exception_is_internal_error_and_service_keeps_serving(client, contracts):
    contracts.results["arc200_name"] = ConnectionError("node unreachable")

    response = client.get("/api/assets/42/name")

    assert response.status_code == 500
    assert response.json() == INTERNAL_ERROR_BODY

    response = client.get("/api/assets/42/symbol")
    assert response.status_code == 200
    assert response.json() == {"success": True, "response": "FOO"}


def test_asset_combines_all_reads(client, contracts):
    response = client.get("/api/assets/42")

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "response": {
            "asset": {
                "index": "42",
                "name": "Foo Token",
                "symbol": "FOO",
                "totalSupply": "10000000000000000",
                "decimals": "6",
            }
        },
    }
    assert len(contracts.instances) == 1
    assert sorted(contracts.instances[0].calls) == sorted(accessor for _, accessor in READ_ROUTES)


def test_asset_echoes_token_id_verbatim(client, contracts):
    response = client.get("/api/assets/0x2A")

    assert response.status_code == 200
    assert response.json()["response"]["asset"]["index"] == "0x2A"
    assert contracts.instances[0].contract_id == 42


@pytest.mark.parametrize("accessor", [accessor for _, accessor in READ_ROUTES])
def test_asset_with_one_failed_read_is_not_found(client, contracts, accessor):
    contracts.results[accessor] = OperationResult.fail("logic eval error")

    response = client.get("/api/assets/42")

    assert response.status_code == 404
    body = response.json()
    assert body == NOT_FOUND_BODY
    assert "response" not in body


def test_asset_exception_is_internal_error(client, contracts):
    contracts.results["arc200_decimals"] = RuntimeError("malformed response")

    response = client.get("/api/assets/42")

    assert response.status_code == 500
    assert response.json() == INTERNAL_ERROR_BODY


def test_transfer_success_returns_transaction_ids(client, contracts):
    contracts.results["arc200_transfer"] = TestDataFactory.transfer_result(["TX1", "TX2"])

    response = client.get(f"/api/assets/42/transfer/{TEST_ADDRESS_FROM}/{TEST_ADDRESS_TO}/100")

    assert response.status_code == 200
    assert response.json() == {"success": True, "response": ["TX1", "TX2"]}
    contract = contracts.instances[0]
    assert contract.contract_id == 42
    assert contract.caller == TEST_ADDRESS_FROM
    assert contract.transfer_args == (TEST_ADDRESS_TO, 100)
    assert contract.calls == ["arc200_transfer"]


def test_transfer_failure_carries_details(client, contracts):
    contracts.results["arc200_transfer"] = OperationResult.fail("insufficient balance")

    response = client.get(f"/api/assets/42/transfer/{TEST_ADDRESS_FROM}/{TEST_ADDRESS_TO}/100")

    assert response.status_code == 400
    body = response.json()
    assert body == {
        "success": False,
        "error": "Transfer failed",
        "details": "insufficient balance",
    }
    assert body["error"] != NOT_FOUND_BODY["error"]


def test_transfer_failure_without_details_omits_field(client, contracts):
    contracts.results["arc200_transfer"] = OperationResult(success=False)

    response = client.get(f"/api/assets/42/transfer/{TEST_ADDRESS_FROM}/{TEST_ADDRESS_TO}/100")

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Transfer failed"}


def test_transfer_passes_non_numeric_amount_as_nan(client, contracts):
    contracts.results["arc200_transfer"] = OperationResult.fail("value out of range")

    response = client.get(f"/api/assets/42/transfer/{TEST_ADDRESS_FROM}/{TEST_ADDRESS_TO}/lots")

    assert response.status_code == 400
    amount = contracts.instances[0].transfer_args[1]
    assert isinstance(amount, float) and math.isnan(amount)


def test_transfer_exception_is_internal_error(client, contracts):
    contracts.results["arc200_transfer"] = TimeoutError("node timed out")

    response = client.get(f"/api/assets/42/transfer/{TEST_ADDRESS_FROM}/{TEST_ADDRESS_TO}/100")

    assert response.status_code == 500
    assert response.json() == INTERNAL_ERROR_BODY


def test_contract_factory_failure_is_internal_error(config, ledger_client):
    def broken_factory(*args, **kwargs):
        raise ValueError("cannot bind")

    client = TestClient(create_app(config=config, ledger_client=ledger_client, contract_factory=broken_factory))

    response = client.get("/api/assets/42")
    assert response.status_code == 500
    assert response.json() == INTERNAL_ERROR_BODY


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["service"] == "gateway"
    assert data["status"] == "ok"
    assert data["dependencies"] == {"ledger": "configured"}


def test_metrics_endpoint_counts_ledger_calls(client, contracts):
    contracts.results["arc200_symbol"] = OperationResult.fail("missing")
    client.get("/api/assets/42/name")
    client.get("/api/assets/42/symbol")

    response = client.get("/metrics")

    assert response.status_code == 200
    assert "text/plain" in response.headers["content-type"]
    assert 'ledger_calls_total{method="name",outcome="success"} 1.0' in response.text
    assert 'ledger_calls_total{method="symbol",outcome="failure"} 1.0' in response.text


def test_request_id_is_echoed(client):
    response = client.get("/api", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"

    response = client.get("/api")
    assert response.headers["X-Request-ID"]


def test_service_instance_exposed_on_app_state(client, ledger_client):
    service = client.app.state.gateway_service
    assert service.ledger_client is ledger_client
    assert service.config.port == 5002
