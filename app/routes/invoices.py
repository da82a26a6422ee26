from decimal import Decimal

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from ..config import settings
from ..db import get_db
from ..models import Customer, Invoice, InvoiceStatusEnum
from ..schemas.invoice import read_invoice_form
from ..services import invoices as invoices_service
from ..services.invoice_repository import InvoiceRepository, get_invoice_repository
from ..services.page_cache import RenderedPageCache, get_page_cache

router = APIRouter(prefix=settings.listing_path)
templates = Jinja2Templates(directory="app/templates")


@router.get("", response_class=HTMLResponse)
def invoices_list(
    request: Request,
    q: str | None = None,
    db: Session = Depends(get_db),
    cache: RenderedPageCache = Depends(get_page_cache),
) -> HTMLResponse:
    if not q:
        cached = cache.get(settings.listing_path)
        if cached is not None:
            return HTMLResponse(cached)

    generation = cache.generation(settings.listing_path)
    response = _render_list(request, db, q)
    if not q:
        cache.set(settings.listing_path, response.body.decode(), generation)
    return response


@router.get("/create", response_class=HTMLResponse)
def invoices_new(request: Request, db: Session = Depends(get_db)) -> HTMLResponse:
    return _render_form(request, db, "invoices/create.html", _empty_form())


@router.post("/create", response_class=HTMLResponse)
async def invoices_create(
    request: Request,
    db: Session = Depends(get_db),
    repository: InvoiceRepository = Depends(get_invoice_repository),
    cache: RenderedPageCache = Depends(get_page_cache),
) -> HTMLResponse:
    form = await request.form()
    result = invoices_service.create_invoice(repository, cache, form)
    if isinstance(result, invoices_service.Redirect):
        return RedirectResponse(url=result.url, status_code=303)

    return _render_form(
        request,
        db,
        "invoices/create.html",
        read_invoice_form(form),
        state=result.to_state(),
        status_code=_status_code(result),
    )


@router.get("/{invoice_id}/edit", response_class=HTMLResponse)
def invoices_edit(
    invoice_id: str, request: Request, db: Session = Depends(get_db)
) -> HTMLResponse:
    invoice = db.get(Invoice, invoice_id)
    if not invoice:
        return templates.TemplateResponse(
            request,
            "invoices/not_found.html",
            {"request": request, "invoice_id": invoice_id},
            status_code=404,
        )
    return _render_form(
        request,
        db,
        "invoices/edit.html",
        _invoice_to_form(invoice),
        invoice_id=invoice_id,
    )


@router.post("/{invoice_id}/edit", response_class=HTMLResponse)
async def invoices_update(
    invoice_id: str,
    request: Request,
    db: Session = Depends(get_db),
    repository: InvoiceRepository = Depends(get_invoice_repository),
    cache: RenderedPageCache = Depends(get_page_cache),
) -> HTMLResponse:
    form = await request.form()
    result = invoices_service.update_invoice(repository, cache, invoice_id, form)
    if isinstance(result, invoices_service.Redirect):
        return RedirectResponse(url=result.url, status_code=303)

    return _render_form(
        request,
        db,
        "invoices/edit.html",
        read_invoice_form(form),
        state=result.to_state(),
        status_code=_status_code(result),
        invoice_id=invoice_id,
    )


@router.post("/{invoice_id}/delete", response_class=HTMLResponse)
def invoices_delete(
    invoice_id: str,
    request: Request,
    db: Session = Depends(get_db),
    repository: InvoiceRepository = Depends(get_invoice_repository),
    cache: RenderedPageCache = Depends(get_page_cache),
) -> HTMLResponse:
    result = invoices_service.delete_invoice(repository, cache, invoice_id)
    return _render_list(
        request,
        db,
        None,
        message=result.to_state()["message"],
        status_code=_status_code(result),
    )


def _render_list(
    request: Request,
    db: Session,
    q: str | None,
    message: str | None = None,
    status_code: int = 200,
) -> HTMLResponse:
    query = (
        select(Invoice, Customer)
        .join(Customer, Invoice.customer_id == Customer.id)
        .order_by(Invoice.date.desc(), Customer.name)
    )
    if q:
        like = f"%{q}%"
        query = query.where(
            or_(
                Customer.name.ilike(like),
                Customer.email.ilike(like),
                Invoice.status.ilike(like),
            )
        )
    rows = db.execute(query).all()
    return templates.TemplateResponse(
        request,
        "invoices/list.html",
        {"request": request, "rows": rows, "q": q or "", "message": message},
        status_code=status_code,
    )


def _render_form(
    request: Request,
    db: Session,
    template: str,
    form: dict,
    state: dict | None = None,
    status_code: int = 200,
    invoice_id: str | None = None,
) -> HTMLResponse:
    customers = db.execute(select(Customer).order_by(Customer.name)).scalars().all()
    state = state or {}
    return templates.TemplateResponse(
        request,
        template,
        {
            "request": request,
            "customers": customers,
            "statuses": [status.value for status in InvoiceStatusEnum],
            "form": {key: "" if value is None else value for key, value in form.items()},
            "errors": state.get("errors", {}),
            "message": state.get("message"),
            "invoice_id": invoice_id,
        },
        status_code=status_code,
    )


def _status_code(result) -> int:
    if isinstance(result, invoices_service.ValidationFailed):
        return 400
    if isinstance(result, invoices_service.PersistenceFailed):
        return 500
    return 200


def _empty_form() -> dict:
    return {"customerId": "", "amount": "", "status": ""}


def _invoice_to_form(invoice: Invoice) -> dict:
    return {
        "customerId": invoice.customer_id,
        "amount": _format_amount(invoice.amount),
        "status": invoice.status,
    }


def _format_amount(cents: int | None) -> str:
    if cents is None:
        return ""
    return f"{Decimal(cents) / 100:.2f}"
