import pytest
from pydantic import ValidationError

from dealdesk.domain.errors import PersistenceError, UnknownFieldError
from dealdesk.domain.inputs import (
    DEFAULT_VALUES,
    FIELD_ALIASES,
    FIELD_NAMES,
    InputRecord,
    resolve_field_name,
)


def test_field_set_is_fixed():
    assert len(FIELD_NAMES) == 19
    assert FIELD_ALIASES["arv_percentage_goal"] == "arvPercentageGoal"
    assert FIELD_ALIASES["pml_cost"] == "pmlCost"
    assert FIELD_ALIASES["other_expenses"] == "otherExpenses"


def test_defaults():
    assert DEFAULT_VALUES["arv_percentage_goal"] == "70"
    assert all(v == "" for k, v in DEFAULT_VALUES.items() if k != "arv_percentage_goal")
    assert InputRecord.defaults() == InputRecord()


def test_payload_uses_camel_case_keys():
    payload = InputRecord(purchase_price="100000").to_payload()
    assert payload["purchasePrice"] == "100000"
    assert payload["arvPercentageGoal"] == "70"
    assert set(payload) == set(FIELD_ALIASES.values())


def test_resolve_accepts_both_spellings():
    assert resolve_field_name("cashToSeller") == "cash_to_seller"
    assert resolve_field_name("cash_to_seller") == "cash_to_seller"
    with pytest.raises(UnknownFieldError):
        resolve_field_name("hoaFees")


def test_unknown_field_error_is_a_key_error():
    with pytest.raises(KeyError):
        InputRecord().with_field("nope", "1")


def test_extra_fields_are_rejected():
    with pytest.raises(ValidationError):
        InputRecord(hoa_fees="100")


def test_record_is_immutable():
    record = InputRecord()
    with pytest.raises(ValidationError):
        record.arv = "5"


def test_with_field_keeps_raw_text():
    record = InputRecord().with_field("rehab", "  20,000 ish ")
    assert record.rehab == "  20,000 ish "
    assert InputRecord().rehab == ""


def test_from_payload_tolerates_partial_and_odd_values():
    record = InputRecord.from_payload(
        {
            "purchasePrice": "95000",
            "arv": 150000,
            "arvPercentageGoal": None,
            "rehab": {"nested": True},
            "legacyField": "ignored",
        }
    )
    assert record.purchase_price == "95000"
    assert record.arv == "150000"
    assert record.arv_percentage_goal == "70"
    assert record.rehab == ""


def test_from_payload_round_trips():
    original = InputRecord(purchase_price="1", taxes="2.5", arv_percentage_goal="")
    assert InputRecord.from_payload(original.to_payload()) == original


@pytest.mark.parametrize("payload", [[], "text", 42, None])
def test_from_payload_rejects_non_objects(payload):
    with pytest.raises(PersistenceError):
        InputRecord.from_payload(payload)
