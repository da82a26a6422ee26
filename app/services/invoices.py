"""Invoice create/update/delete actions.

Each action validates form input, writes through an ``InvoiceRepository``,
invalidates the listing page through a ``PageCache`` and returns one of
the result types below. The HTTP layer decides how to realise a
``Redirect``.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date

from ..config import settings
from ..models.base import utcnow
from ..schemas import validate_invoice_form
from .invoice_repository import InvoiceRepository
from .page_cache import PageCache

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Redirect:
    url: str


@dataclass(frozen=True)
class ValidationFailed:
    errors: dict[str, list[str]]
    message: str

    def to_state(self) -> dict:
        return {"errors": self.errors, "message": self.message}


@dataclass(frozen=True)
class PersistenceFailed:
    message: str
    cause: Exception = field(compare=False)

    def to_state(self) -> dict:
        return {"message": self.message}


@dataclass(frozen=True)
class Completed:
    message: str

    def to_state(self) -> dict:
        return {"message": self.message}


InvoiceActionResult = Redirect | ValidationFailed | PersistenceFailed | Completed


def today() -> date:
    return utcnow().date()


def create_invoice(
    repository: InvoiceRepository, cache: PageCache, form: Mapping
) -> InvoiceActionResult:
    validated = validate_invoice_form(form)
    if not validated.success:
        return ValidationFailed(
            validated.errors, "Missing Fields. Failed to Create Invoice"
        )

    data = validated.data
    logger.info(
        "Create invoice for customer %s. Amount: %s. Status: %s",
        data.customer_id,
        data.amount,
        data.status.value,
    )
    try:
        repository.insert(
            data.customer_id, data.amount_in_cents, data.status.value, today()
        )
    except Exception as exc:
        logger.exception("Invoice creation failed")
        return PersistenceFailed(f"Failed to Create Invoice. Error {exc}", exc)

    cache.revalidate_path(settings.listing_path)
    return Redirect(settings.listing_path)


def update_invoice(
    repository: InvoiceRepository, cache: PageCache, invoice_id: str, form: Mapping
) -> InvoiceActionResult:
    validated = validate_invoice_form(form)
    if not validated.success:
        return ValidationFailed(
            validated.errors, "Missing Fields. Failed to Update Invoice"
        )

    data = validated.data
    try:
        updated = repository.update(
            invoice_id, data.customer_id, data.amount_in_cents, data.status.value
        )
    except Exception as exc:
        logger.exception("Invoice update failed for %s", invoice_id)
        return PersistenceFailed(f"Failed to Update Invoice. Error {exc}", exc)

    if not updated:
        logger.warning("Invoice update matched no rows for %s", invoice_id)

    cache.revalidate_path(settings.listing_path)
    return Redirect(settings.listing_path)


def delete_invoice(
    repository: InvoiceRepository, cache: PageCache, invoice_id: str
) -> InvoiceActionResult:
    try:
        deleted = repository.delete(invoice_id)
    except Exception as exc:
        logger.exception("Invoice delete failed for %s", invoice_id)
        return PersistenceFailed(f"Failed to Delete Invoice. Error {exc}", exc)

    if not deleted:
        logger.warning("Invoice delete matched no rows for %s", invoice_id)

    cache.revalidate_path(settings.listing_path)
    return Completed("Invoice deleted")
