from .invoice import (
    InvoiceForm,
    InvoiceFormResult,
    parse_invoice_form,
    read_invoice_form,
    validate_invoice_form,
)

__all__ = [
    "InvoiceForm",
    "InvoiceFormResult",
    "parse_invoice_form",
    "read_invoice_form",
    "validate_invoice_form",
]
