"""
Parity tests: ContractSelector SQL push-down vs the pure validity functions.

The selector must return exactly the rows (and the total) that
domain.validity computes from the full contract list, for reference dates
on, before and after every contract boundary.
"""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from insurance_kernel.domain.validity import (
    filter_active,
    filter_active_and_updated_on,
    sum_active,
)
from insurance_kernel.models.contract import Contract
from insurance_kernel.selectors.contract_selector import ContractSelector

BASE = date(2024, 6, 15)


@pytest.fixture
def contracts(session, person):
    rows = [
        Contract.open(person.id, Decimal("1000.00"), BASE - timedelta(days=30)),
        Contract.open(person.id, Decimal("1500.50"), BASE - timedelta(days=30), end_date=BASE + timedelta(days=1)),
        Contract.open(person.id, Decimal("750.25"), BASE, end_date=BASE),
        Contract.open(person.id, Decimal("99.99"), BASE - timedelta(days=10), end_date=BASE - timedelta(days=1)),
        Contract.open(person.id, Decimal("0.01"), BASE, end_date=BASE + timedelta(days=365)),
    ]
    session.add_all(rows)
    session.flush()
    return rows


@pytest.fixture
def selector(session):
    return ContractSelector(session)


REFERENCE_DATES = [
    BASE - timedelta(days=2),
    BASE - timedelta(days=1),
    BASE,
    BASE + timedelta(days=1),
    BASE + timedelta(days=2),
    BASE + timedelta(days=365),
]


class TestSelectorParity:
    """SQL results match the pure functions for every reference date."""

    @pytest.mark.parametrize("reference_date", REFERENCE_DATES)
    def test_active_for_client(self, selector, person, contracts, reference_date):
        expected = {c.id for c in filter_active(contracts, reference_date)}

        result = {c.id for c in selector.active_for_client(person.id, reference_date)}

        assert result == expected

    @pytest.mark.parametrize("reference_date", REFERENCE_DATES)
    def test_active_cost_sum(self, selector, person, contracts, reference_date):
        expected = sum_active(contracts, reference_date)

        assert selector.active_cost_sum(person.id, reference_date) == expected

    @pytest.mark.parametrize("update_date", [BASE - timedelta(days=30), BASE, BASE - timedelta(days=10)])
    def test_active_for_client_updated_on(self, selector, person, contracts, update_date):
        expected = {c.id for c in filter_active_and_updated_on(contracts, BASE, update_date)}

        result = {c.id for c in selector.active_for_client_updated_on(person.id, BASE, update_date)}

        assert result == expected


class TestSelectorQueries:
    def test_active_ordered_by_start_date(self, selector, person, contracts):
        result = selector.active_for_client(person.id, BASE - timedelta(days=2))

        assert len(result) == len(contracts)
        starts = [c.start_date for c in result]
        assert starts == sorted(starts)

    def test_other_clients_excluded(self, selector, client_service, company_spec, contracts):
        other = client_service.create_client(company_spec)

        assert selector.active_for_client(other.id, BASE) == []
        assert selector.active_cost_sum(other.id, BASE) == Decimal("0")

    def test_sum_is_quantized_to_cents(self, selector, person, contracts):
        total = selector.active_cost_sum(person.id, BASE)

        assert total == Decimal("2500.51")
        assert total.as_tuple().exponent == -2
