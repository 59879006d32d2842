"""
HTTP API tests (insurance_kernel/api).

Runs the FastAPI app through TestClient against an in-memory SQLite
database with a deterministic clock pinned to 2024-06-15.
"""

from datetime import date
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from insurance_kernel.api.app import create_app
from insurance_kernel.config import KernelSettings
from insurance_kernel.db.engine import reset_engine
from insurance_kernel.domain.clock import DeterministicClock
from insurance_kernel.logging_config import reset_logging

TODAY = date(2024, 6, 15)

JOHN_DOE = {
    "type": "PERSON",
    "name": "John Doe",
    "email": "john.doe@example.com",
    "phone": "+33612345678",
    "birthdate": "1990-05-15",
}

ACME = {
    "type": "COMPANY",
    "name": "Acme Insurance",
    "email": "contact@acme.example",
    "phone": "+41791234567",
    "companyIdentifier": "abc-123",
}


@pytest.fixture
def clock():
    return DeterministicClock(TODAY)


@pytest.fixture
def api(clock):
    app = create_app(KernelSettings(database_url="sqlite://", log_level="WARNING"), clock=clock)
    with TestClient(app) as client:
        yield client
    reset_engine()
    reset_logging()


@pytest.fixture
def john(api):
    response = api.post("/api/clients", json=JOHN_DOE)
    assert response.status_code == 201
    return response.json()


def _create_contract(api, client_id, cost, **dates):
    body = {"clientId": client_id, "costAmount": cost, **dates}
    response = api.post("/api/contracts", json=body)
    assert response.status_code == 201, response.text
    return response.json()


class TestClientEndpoints:
    """Tests for /api/clients."""

    def test_create_person(self, api):
        response = api.post("/api/clients", json=JOHN_DOE)

        assert response.status_code == 201
        body = response.json()
        assert body["type"] == "PERSON"
        assert body["name"] == "John Doe"
        assert body["phone"] == "+33612345678"
        assert body["birthdate"] == "1990-05-15"
        assert "id" in body

    def test_create_company(self, api):
        response = api.post("/api/clients", json=ACME)

        assert response.status_code == 201
        body = response.json()
        assert body["type"] == "COMPANY"
        assert body["companyIdentifier"] == "abc-123"
        assert "birthdate" not in body

    def test_get_client(self, api, john):
        response = api.get(f"/api/clients/{john['id']}")

        assert response.status_code == 200
        assert response.json() == john

    def test_get_unknown_client_is_404(self, api):
        missing = uuid4()

        response = api.get(f"/api/clients/{missing}")

        assert response.status_code == 404
        body = response.json()
        assert body["code"] == "CLIENT_NOT_FOUND"
        assert body["message"] == f"Client not found with id: {missing}"

    def test_invalid_fields_are_400(self, api):
        response = api.post("/api/clients", json={**JOHN_DOE, "name": "J", "email": "nope"})

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "INVALID_INPUT"
        assert {e["field"] for e in body["details"]} == {"name", "email"}

    def test_duplicate_company_identifier_is_400(self, api):
        assert api.post("/api/clients", json=ACME).status_code == 201

        response = api.post("/api/clients", json={**ACME, "name": "Acme Rival"})

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "INVALID_INPUT"
        assert body["details"] == [
            {"field": "company_identifier", "message": "Company identifier already exists"}
        ]

    def test_unknown_type_is_400(self, api):
        response = api.post("/api/clients", json={**JOHN_DOE, "type": "ROBOT"})

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_INPUT"

    def test_malformed_birthdate_is_400(self, api):
        response = api.post("/api/clients", json={**JOHN_DOE, "birthdate": "not-a-date"})

        assert response.status_code == 400

    def test_update_contact_fields(self, api, john):
        update = {"name": "Jane Doe", "email": "jane.doe@example.com", "phone": "+33698765432"}

        response = api.put(f"/api/clients/{john['id']}", json=update)

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Jane Doe"
        assert body["birthdate"] == "1990-05-15"

    def test_update_ignores_variant_fields(self, api, john):
        update = {
            "name": "Jane Doe",
            "email": "jane.doe@example.com",
            "phone": "+33698765432",
            "birthdate": "2000-01-01",
        }

        response = api.put(f"/api/clients/{john['id']}", json=update)

        assert response.status_code == 200
        assert response.json()["birthdate"] == "1990-05-15"

    def test_delete_client(self, api, john):
        response = api.delete(f"/api/clients/{john['id']}")

        assert response.status_code == 204
        assert api.get(f"/api/clients/{john['id']}").status_code == 404

    def test_delete_unknown_client_is_404(self, api):
        assert api.delete(f"/api/clients/{uuid4()}").status_code == 404

    def test_request_id_echoed(self, api):
        response = api.get(f"/api/clients/{uuid4()}", headers={"X-Request-ID": "req-42"})

        assert response.headers["X-Request-ID"] == "req-42"


class TestContractEndpoints:
    """Tests for /api/contracts."""

    def test_create_contract_defaults_start_date(self, api, john):
        body = _create_contract(api, john["id"], "1000.00")

        assert body["startDate"] == "2024-06-15"
        assert body["endDate"] is None
        assert body["costAmount"] == "1000.00"

    def test_create_contract_for_unknown_client_is_404(self, api):
        response = api.post("/api/contracts", json={"clientId": str(uuid4()), "costAmount": "10.00"})

        assert response.status_code == 404

    def test_non_positive_cost_is_400(self, api, john):
        response = api.post("/api/contracts", json={"clientId": john["id"], "costAmount": "0"})

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "cost_amount"

    def test_update_cost(self, api, john):
        created = _create_contract(api, john["id"], "100.00")

        response = api.patch(f"/api/contracts/{created['id']}/cost", json={"costAmount": "150.25"})

        assert response.status_code == 200
        assert response.json()["costAmount"] == "150.25"

    def test_update_cost_of_unknown_contract_is_404(self, api):
        response = api.patch(f"/api/contracts/{uuid4()}/cost", json={"costAmount": "150.25"})

        assert response.status_code == 404
        assert response.json()["code"] == "CONTRACT_NOT_FOUND"

    def test_active_contracts(self, api, john):
        active = _create_contract(api, john["id"], "100.00")
        _create_contract(api, john["id"], "200.00", endDate="2024-06-15")

        response = api.get(f"/api/contracts/client/{john['id']}")

        assert response.status_code == 200
        assert [c["id"] for c in response.json()] == [active["id"]]

    def test_active_contracts_filtered_by_update_date(self, api, john, clock):
        first = _create_contract(api, john["id"], "100.00")
        clock.advance_days(1)
        _create_contract(api, john["id"], "200.00")

        response = api.get(
            f"/api/contracts/client/{john['id']}", params={"updateDate": "2024-06-15"}
        )

        assert [c["id"] for c in response.json()] == [first["id"]]

    def test_active_contracts_for_unknown_client_is_404(self, api):
        assert api.get(f"/api/contracts/client/{uuid4()}").status_code == 404

    def test_active_sum(self, api, john):
        _create_contract(api, john["id"], "1000.00")
        _create_contract(api, john["id"], "1500.50")
        _create_contract(api, john["id"], "750.25")

        response = api.get(f"/api/contracts/client/{john['id']}/sum")

        assert response.status_code == 200
        body = response.json()
        assert body["clientId"] == john["id"]
        assert body["total"] == "3250.75"
        assert body["referenceDate"] == "2024-06-15"

    def test_active_sum_zero(self, api, john):
        response = api.get(f"/api/contracts/client/{john['id']}/sum")

        assert response.json()["total"] == "0.00"

    def test_delete_closes_contracts(self, api, john):
        """After deletion the contracts are end-dated today; the client is gone."""
        _create_contract(api, john["id"], "100.00")

        assert api.delete(f"/api/clients/{john['id']}").status_code == 204
        assert api.get(f"/api/contracts/client/{john['id']}").status_code == 404
