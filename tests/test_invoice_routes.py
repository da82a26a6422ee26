from sqlalchemy import select

from app.main import app
from app.models import Invoice
from app.models.base import utcnow
from app.services.invoice_repository import InvoiceRepository, get_invoice_repository


class BrokenInvoiceRepository(InvoiceRepository):
    def insert(self, customer_id, amount, status, date):
        raise RuntimeError("database is down")

    def update(self, invoice_id, customer_id, amount, status):
        raise RuntimeError("database is down")

    def delete(self, invoice_id):
        raise RuntimeError("database is down")


def _invoice(db_session, customer, amount=1000, status="pending"):
    invoice = Invoice(
        customer_id=customer.id, amount=amount, status=status, date=utcnow().date()
    )
    db_session.add(invoice)
    db_session.commit()
    return invoice


def test_create_persists_and_redirects(client, db_session, customer):
    response = client.post(
        "/dashboard/invoices/create",
        data={"customerId": customer.id, "amount": "49.99", "status": "paid"},
        follow_redirects=False,
    )

    assert response.status_code == 303
    assert response.headers["location"] == "/dashboard/invoices"
    invoice = db_session.execute(select(Invoice)).scalar_one()
    assert invoice.id
    assert invoice.customer_id == customer.id
    assert invoice.amount == 4999
    assert invoice.status == "paid"
    assert invoice.date == utcnow().date()


def test_create_shows_field_errors(client, db_session, customer):
    response = client.post(
        "/dashboard/invoices/create",
        data={"customerId": "", "amount": "0", "status": "pending"},
    )

    assert response.status_code == 400
    assert "Please select a customer." in response.text
    assert "Please enter an amount greater than $0." in response.text
    assert "Missing Fields. Failed to Create Invoice" in response.text
    assert db_session.execute(select(Invoice)).first() is None


def test_create_store_failure_renders_message(client, customer):
    app.dependency_overrides[get_invoice_repository] = BrokenInvoiceRepository

    response = client.post(
        "/dashboard/invoices/create",
        data={"customerId": customer.id, "amount": "10", "status": "paid"},
        follow_redirects=False,
    )

    assert response.status_code == 500
    assert "Failed to Create Invoice. Error database is down" in response.text


def test_create_for_unknown_customer_is_rejected_by_store(client, db_session):
    response = client.post(
        "/dashboard/invoices/create",
        data={"customerId": "ghost", "amount": "10", "status": "paid"},
        follow_redirects=False,
    )

    assert response.status_code == 500
    assert "Failed to Create Invoice. Error" in response.text
    assert "FOREIGN KEY constraint failed" in response.text
    assert db_session.execute(select(Invoice)).first() is None

def test_edit_form_prefills_amount(client, db_session, customer):
    invoice = _invoice(db_session, customer, amount=1250)

    response = client.get(f"/dashboard/invoices/{invoice.id}/edit")

    assert response.status_code == 200
    assert 'value="12.50"' in response.text


def test_edit_missing_invoice(client):
    response = client.get("/dashboard/invoices/missing/edit")

    assert response.status_code == 404


def test_update_changes_row_and_keeps_date(client, db_session, customer):
    invoice = _invoice(db_session, customer)
    original_date = invoice.date

    response = client.post(
        f"/dashboard/invoices/{invoice.id}/edit",
        data={"customerId": customer.id, "amount": "75", "status": "paid"},
        follow_redirects=False,
    )

    assert response.status_code == 303
    db_session.refresh(invoice)
    assert invoice.amount == 7500
    assert invoice.status == "paid"
    assert invoice.date == original_date


def test_update_validation_failure_leaves_row(client, db_session, customer):
    invoice = _invoice(db_session, customer)

    response = client.post(
        f"/dashboard/invoices/{invoice.id}/edit",
        data={"customerId": customer.id, "amount": "0", "status": "overdue"},
    )

    assert response.status_code == 400
    assert "Missing Fields. Failed to Update Invoice" in response.text
    assert "Please select an invoice status." in response.text
    db_session.refresh(invoice)
    assert invoice.amount == 1000
    assert invoice.status == "pending"


def test_update_store_failure_does_not_redirect(client, customer):
    app.dependency_overrides[get_invoice_repository] = BrokenInvoiceRepository

    response = client.post(
        "/dashboard/invoices/some-id/edit",
        data={"customerId": customer.id, "amount": "10", "status": "paid"},
        follow_redirects=False,
    )

    assert response.status_code == 500
    assert "Failed to Update Invoice. Error database is down" in response.text


def test_delete_removes_only_that_row(client, db_session, customer):
    keep = _invoice(db_session, customer)
    drop = _invoice(db_session, customer)
    keep_id, drop_id = keep.id, drop.id

    response = client.post(f"/dashboard/invoices/{drop_id}/delete")

    assert response.status_code == 200
    assert "Invoice deleted" in response.text
    db_session.expire_all()
    ids = db_session.execute(select(Invoice.id)).scalars().all()
    assert ids == [keep_id]


def test_delete_missing_invoice_is_not_an_error(client):
    response = client.post("/dashboard/invoices/missing/delete")

    assert response.status_code == 200
    assert "Invoice deleted" in response.text


def test_delete_store_failure_renders_message(client):
    app.dependency_overrides[get_invoice_repository] = BrokenInvoiceRepository

    response = client.post("/dashboard/invoices/some-id/delete")

    assert response.status_code == 500
    assert "Failed to Delete Invoice. Error database is down" in response.text

def test_listing_is_cached_until_revalidated(client, customer, page_cache):
    first = client.get("/dashboard/invoices")
    assert first.status_code == 200
    assert page_cache.get("/dashboard/invoices") == first.text

    client.post(
        "/dashboard/invoices/create",
        data={"customerId": customer.id, "amount": "10", "status": "paid"},
        follow_redirects=False,
    )
    assert page_cache.get("/dashboard/invoices") is None

    listing = client.get("/dashboard/invoices")
    assert "$10.00" in listing.text
    assert "Evil Rabbit" in listing.text


def test_listing_search_filters_by_customer(client, db_session, customer):
    _invoice(db_session, customer)

    response = client.get("/dashboard/invoices", params={"q": "nobody"})

    assert response.status_code == 200
    assert "No invoices found." in response.text


def test_root_redirects_to_listing(client):
    response = client.get("/", follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/dashboard/invoices"
