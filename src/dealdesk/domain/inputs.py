# src/dealdesk/domain/inputs.py
from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from dealdesk.domain.errors import PersistenceError, UnknownFieldError


class InputRecord(BaseModel):
    """
    Raw calculator inputs, exactly as typed.

    Every value is free text; "" means unset. Numbers are only read out of
    these strings by the derivation engine, never here.
    """
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    # Purchase
    purchase_price: str = ""
    arv: str = ""
    arv_percentage_goal: str = "70"

    # Entry fee
    cash_to_seller: str = ""
    arrears: str = ""
    acquisition_cost: str = ""
    assignment_fee: str = ""
    closing_cost: str = ""
    rehab: str = ""
    holding_costs: str = ""
    marketing: str = ""

    # Monthly cash flow
    rental_income: str = ""
    equity_to_seller: str = ""
    pml_cost: str = ""
    piti: str = ""
    war_chest: str = ""
    insurance: str = ""
    taxes: str = ""
    other_expenses: str = ""

    @classmethod
    def defaults(cls) -> "InputRecord":
        return cls()

    def to_payload(self) -> dict[str, str]:
        return self.model_dump(by_alias=True)

    @classmethod
    def from_payload(cls, payload: Any) -> "InputRecord":
        """
        Rebuild a record from a stored payload.

        Unknown keys are dropped, missing keys and nulls fall back to the
        field default, and non-string scalars are stringified.
        """
        if not isinstance(payload, Mapping):
            raise PersistenceError(
                f"stored inputs must be an object, got {type(payload).__name__}"
            )

        values: dict[str, str] = {}
        for key, raw in payload.items():
            name = _BY_ANY_NAME.get(str(key))
            if name is None or raw is None:
                continue
            if isinstance(raw, (dict, list)):
                continue
            values[name] = raw if isinstance(raw, str) else str(raw)
        return cls(**values)

    def with_field(self, name: str, text: str) -> "InputRecord":
        return self.model_copy(update={resolve_field_name(name): text})


FIELD_NAMES: tuple[str, ...] = tuple(InputRecord.model_fields)

FIELD_ALIASES: dict[str, str] = {name: to_camel(name) for name in FIELD_NAMES}

DEFAULT_VALUES: dict[str, str] = {
    name: field.default for name, field in InputRecord.model_fields.items()
}

_BY_ANY_NAME: dict[str, str] = {
    **{name: name for name in FIELD_NAMES},
    **{alias: name for name, alias in FIELD_ALIASES.items()},
}


def resolve_field_name(name: str) -> str:
    """Map a snake_case or camelCase field name to the record attribute."""
    try:
        return _BY_ANY_NAME[name]
    except KeyError:
        raise UnknownFieldError(name) from None
