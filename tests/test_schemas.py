"""
Tests for outbound entity normalization and catalog helpers.
"""

import pydantic
import pytest

from conftest import make_request
from registration_lite.schemas.catalog import TicketType, get_ticket_max_quantity, is_in_person_ticket_type
from registration_lite.schemas.reservation import Company, normalize_reservation


def test_company_id_wins_over_name():
    entity = make_request(company=Company(id=12, name="Acme Inc")).to_entity()

    assert entity["owner_company_id"] == 12
    assert "owner_company" not in entity


def test_company_name_used_without_id():
    entity = make_request(company=Company(name="Acme Inc")).to_entity()

    assert entity["owner_company"] == "Acme Inc"
    assert "owner_company_id" not in entity


def test_empty_affiliation_is_left_out():
    entity = normalize_reservation({"owner_email": "jane@example.com", "owner_company": Company()})

    assert entity == {"owner_email": "jane@example.com"}


def test_missing_promo_code_is_sent_as_null():
    entity = make_request(quantity=2, promo_code="").to_entity()

    assert entity["tickets"] == [{"type_id": 7, "promo_code": None}] * 2


def test_ticket_quantity_must_be_positive():
    with pytest.raises(pydantic.ValidationError):
        make_request(quantity=0)


def test_in_person_ticket_type():
    in_person = TicketType.model_validate({
        "id": 1,
        "badge_type": {"id": 4, "access_levels": [{"name": "VIRTUAL"}, {"name": "IN_PERSON"}]},
    })
    virtual = TicketType.model_validate({"id": 2, "badge_type": {"id": 5, "access_levels": [{"name": "VIRTUAL"}]}})
    unexpanded = TicketType.model_validate({"id": 3, "badge_type": 5})

    assert is_in_person_ticket_type(in_person) is True
    assert is_in_person_ticket_type(virtual) is False
    assert is_in_person_ticket_type(unexpanded) is False


@pytest.mark.parametrize(
    "fields, expected",
    [
        ({}, None),
        ({"quantity_2_sell": 100, "quantity_sold": 95}, 5),
        ({"quantity_2_sell": 100, "quantity_sold": 95, "max_quantity_per_order": 2}, 2),
        ({"max_quantity_per_order": 4}, 4),
        ({"quantity_2_sell": 10, "quantity_sold": 10}, 0),
    ],
)
def test_ticket_max_quantity(fields, expected):
    assert get_ticket_max_quantity(TicketType(id=1, **fields)) == expected
