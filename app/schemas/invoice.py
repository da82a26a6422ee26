from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..models import InvoiceStatusEnum

FORM_FIELDS = ("customerId", "amount", "status")

FIELD_MESSAGES = {
    "customerId": "Please select a customer.",
    "amount": "Please enter an amount greater than $0.",
    "status": "Please select an invoice status.",
}


def to_cents(amount: Decimal) -> int:
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class InvoiceForm(BaseModel):
    """Validated invoice form input, without id and date."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    customer_id: str = Field(alias="customerId", min_length=1)
    amount: Decimal = Field(gt=0, allow_inf_nan=False)
    status: InvoiceStatusEnum

    @field_validator("amount")
    @classmethod
    def amount_is_at_least_one_cent(cls, value: Decimal) -> Decimal:
        if to_cents(value) <= 0:
            raise ValueError("amount rounds to zero cents")
        return value

    @property
    def amount_in_cents(self) -> int:
        return to_cents(self.amount)


@dataclass(frozen=True)
class InvoiceFormResult:
    data: InvoiceForm | None = None
    errors: dict[str, list[str]] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return self.data is not None


def read_invoice_form(form: Mapping) -> dict[str, Any]:
    def value(key: str) -> Any:
        raw = form.get(key)
        if isinstance(raw, str):
            return raw.strip()
        return raw

    return {key: value(key) for key in FORM_FIELDS}


def parse_invoice_form(form: Mapping) -> InvoiceForm:
    """Validate form input, raising ``pydantic.ValidationError`` on bad input."""
    return InvoiceForm.model_validate(read_invoice_form(form))


def validate_invoice_form(form: Mapping) -> InvoiceFormResult:
    """Validate form input without raising.

    Failures are grouped per form field name, in field order, with one
    human-readable message per failing field.
    """
    try:
        return InvoiceFormResult(data=parse_invoice_form(form))
    except ValidationError as exc:
        return InvoiceFormResult(errors=field_errors(exc))


def field_errors(exc: ValidationError) -> dict[str, list[str]]:
    failed = {str(error["loc"][0]) for error in exc.errors() if error["loc"]}
    errors: dict[str, list[str]] = {}
    for name in FORM_FIELDS:
        if name in failed:
            errors[name] = [FIELD_MESSAGES[name]]
    return errors
