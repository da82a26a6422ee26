import datetime as dt
from abc import ABC, abstractmethod

from fastapi import Depends
from sqlalchemy import delete, insert, update
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import Invoice


class InvoiceRepository(ABC):
    @abstractmethod
    def insert(
        self, customer_id: str, amount: int, status: str, date: dt.date
    ) -> None:
        raise NotImplementedError

    @abstractmethod
    def update(
        self, invoice_id: str, customer_id: str, amount: int, status: str
    ) -> int:
        """Return the number of rows affected."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, invoice_id: str) -> int:
        """Return the number of rows affected."""
        raise NotImplementedError


class SqlInvoiceRepository(InvoiceRepository):
    """Single-statement writes against the ``invoices`` table.

    Each call commits its own statement; on error the session is rolled
    back and the exception re-raised unchanged.
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def insert(
        self, customer_id: str, amount: int, status: str, date: dt.date
    ) -> None:
        self._execute(
            insert(Invoice).values(
                customer_id=customer_id, amount=amount, status=status, date=date
            )
        )

    def update(
        self, invoice_id: str, customer_id: str, amount: int, status: str
    ) -> int:
        return self._execute(
            update(Invoice)
            .where(Invoice.id == invoice_id)
            .values(customer_id=customer_id, amount=amount, status=status)
            .execution_options(synchronize_session=False)
        )

    def delete(self, invoice_id: str) -> int:
        return self._execute(
            delete(Invoice)
            .where(Invoice.id == invoice_id)
            .execution_options(synchronize_session=False)
        )

    def _execute(self, statement) -> int:
        try:
            rowcount = self._db.execute(statement).rowcount
            self._db.commit()
        except Exception:
            self._db.rollback()
            raise
        return rowcount


def get_invoice_repository(db: Session = Depends(get_db)) -> SqlInvoiceRepository:
    return SqlInvoiceRepository(db)
