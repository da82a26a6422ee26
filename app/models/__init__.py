from .base import Base
from .customer import Customer
from .invoice import Invoice, InvoiceStatusEnum

__all__ = [
    "Base",
    "Customer",
    "Invoice",
    "InvoiceStatusEnum",
]
