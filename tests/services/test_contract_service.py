"""
Tests for ContractService.

Covers:
- Contract creation with default and explicit dates
- Cost update stamps update_date
- Active contract listing, with and without the update-date filter
- Active cost sum
- Unknown client and contract ids
"""

from datetime import date, timedelta
from decimal import Decimal
from uuid import uuid4

import pytest

from insurance_kernel.domain.clock import DeterministicClock
from insurance_kernel.exceptions import (
    ClientNotFoundError,
    ContractNotFoundError,
    InvalidInputError,
)
from insurance_kernel.services.contract_service import ContractService


class TestCreateContract:
    """Tests for contract creation."""

    def test_defaults_start_date_to_today(self, contract_service, person, today):
        info = contract_service.create_contract(person.id, Decimal("1000.00"))

        assert info.client_id == person.id
        assert info.start_date == today
        assert info.end_date is None
        assert info.update_date == today
        assert info.cost_amount == Decimal("1000.00")

    def test_explicit_dates_kept(self, contract_service, person, today):
        start = today - timedelta(days=90)
        end = today + timedelta(days=90)

        info = contract_service.create_contract(person.id, Decimal("250.00"), start_date=start, end_date=end)

        assert info.start_date == start
        assert info.end_date == end

    def test_unknown_client_raises(self, contract_service):
        with pytest.raises(ClientNotFoundError):
            contract_service.create_contract(uuid4(), Decimal("100.00"))

    def test_invalid_cost_rejected(self, contract_service, person):
        with pytest.raises(InvalidInputError):
            contract_service.create_contract(person.id, Decimal("0.00"))

    def test_missing_cost_rejected(self, contract_service, person):
        with pytest.raises(InvalidInputError):
            contract_service.create_contract(person.id, None)

    def test_logs_creation(self, contract_service, person, captured_logs):
        info = contract_service.create_contract(person.id, Decimal("100.00"))

        record = next(r for r in captured_logs() if r["message"] == "contract_created")
        assert record["contract_id"] == str(info.id)
        assert record["cost_amount"] == "100.00"


class TestGetContract:
    def test_get_existing(self, contract_service, person):
        info = contract_service.create_contract(person.id, Decimal("100.00"))

        assert contract_service.get_contract(info.id) == info

    def test_unknown_id_raises(self, contract_service):
        with pytest.raises(ContractNotFoundError) as exc_info:
            contract_service.get_contract(uuid4())

        assert exc_info.value.code == "CONTRACT_NOT_FOUND"


class TestUpdateContractCost:
    """Tests for cost updates."""

    def test_updates_cost_and_stamps_update_date(self, session, clock, person):
        service = ContractService(session, clock)
        created = service.create_contract(person.id, Decimal("100.00"))
        clock.advance_days(5)

        updated = service.update_contract_cost(created.id, Decimal("125.50"))

        assert updated.cost_amount == Decimal("125.50")
        assert updated.update_date == created.update_date + timedelta(days=5)
        assert updated.start_date == created.start_date

    def test_unknown_contract_raises(self, contract_service):
        with pytest.raises(ContractNotFoundError):
            contract_service.update_contract_cost(uuid4(), Decimal("10.00"))

    def test_invalid_cost_rejected(self, contract_service, person):
        created = contract_service.create_contract(person.id, Decimal("100.00"))

        with pytest.raises(InvalidInputError):
            contract_service.update_contract_cost(created.id, Decimal("10.001"))

        assert contract_service.get_contract(created.id).cost_amount == Decimal("100.00")


class TestActiveContracts:
    """Tests for the temporal queries."""

    def test_lists_only_active(self, contract_service, person, today):
        open_ended = contract_service.create_contract(person.id, Decimal("100.00"))
        future = contract_service.create_contract(
            person.id, Decimal("200.00"), end_date=today + timedelta(days=1)
        )
        contract_service.create_contract(person.id, Decimal("300.00"), end_date=today)
        contract_service.create_contract(
            person.id, Decimal("400.00"), end_date=today - timedelta(days=1)
        )

        ids = {c.id for c in contract_service.get_active_contracts(person.id)}

        assert ids == {open_ended.id, future.id}

    def test_no_contracts_is_empty(self, contract_service, person):
        assert contract_service.get_active_contracts(person.id) == []

    def test_unknown_client_raises(self, contract_service):
        with pytest.raises(ClientNotFoundError):
            contract_service.get_active_contracts(uuid4())

    def test_update_date_filter(self, session, clock, person, today):
        service = ContractService(session, clock)
        first = service.create_contract(person.id, Decimal("100.00"))
        clock.advance_days(1)
        second = service.create_contract(person.id, Decimal("200.00"))

        on_first_day = service.get_active_contracts(person.id, update_date=today)
        on_second_day = service.get_active_contracts(person.id, update_date=today + timedelta(days=1))

        assert [c.id for c in on_first_day] == [first.id]
        assert [c.id for c in on_second_day] == [second.id]

    def test_update_date_filter_excludes_expired(self, session, clock, person, today):
        service = ContractService(session, clock)
        service.create_contract(person.id, Decimal("100.00"), end_date=today)

        assert service.get_active_contracts(person.id, update_date=today) == []

    def test_contract_expires_as_clock_moves(self, session, person, today):
        clock = DeterministicClock(today)
        service = ContractService(session, clock)
        service.create_contract(person.id, Decimal("100.00"), end_date=today + timedelta(days=2))

        clock.advance_days(1)
        assert len(service.get_active_contracts(person.id)) == 1
        clock.advance_days(1)
        assert service.get_active_contracts(person.id) == []


class TestActiveContractsSum:
    """Tests for the active cost aggregate."""

    def test_sum_of_active(self, contract_service, person, today):
        contract_service.create_contract(person.id, Decimal("1000.00"))
        contract_service.create_contract(person.id, Decimal("1500.50"))
        contract_service.create_contract(person.id, Decimal("750.25"))
        contract_service.create_contract(person.id, Decimal("999.99"), end_date=today)

        result = contract_service.get_active_contracts_sum(person.id)

        assert result.total == Decimal("3250.75")
        assert result.client_id == person.id
        assert result.reference_date == today

    def test_zero_when_nothing_active(self, contract_service, person):
        result = contract_service.get_active_contracts_sum(person.id)

        assert result.total == Decimal("0")

    def test_unknown_client_raises(self, contract_service):
        with pytest.raises(ClientNotFoundError):
            contract_service.get_active_contracts_sum(uuid4())

    def test_sum_for_deleted_client_raises(self, client_service, contract_service, session, person):
        """Once the client is deleted the sum query reports the client as unknown."""
        contract_service.create_contract(person.id, Decimal("100.00"))

        client_service.delete_client(person.id)

        with pytest.raises(ClientNotFoundError):
            contract_service.get_active_contracts_sum(person.id)
