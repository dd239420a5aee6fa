"""
Servizi per la gestione delle fatture (Invoice) e delle loro righe prodotto.
Rifattorizzato con Pattern Unit of Work.

I campi derivati (resto, commissioni) vengono sempre ricalcolati qui con il
calcolatore, così le invarianti valgono per ogni fattura salvata.
"""
from __future__ import annotations

import logging
from typing import List, Mapping, Optional

from sqlalchemy.exc import IntegrityError

from commissions.models import Invoice, InvoiceProduct
from commissions.services.aggregation_service import filter_invoices_by_month
from commissions.services.calculator import CommissionBreakdown, breakdown_from_lines
from commissions.services.category_service import list_categories
from commissions.services.dto.invoice_input import InvoiceInput, InvoiceLineInput
from commissions.services.dto.month import Month
from commissions.services.dto.ncf import ncf_suffix_number
from commissions.services.errors import DuplicateNcfError, NotFoundError, ValidationError, storage_guard
from commissions.services.logging import log_structured_event
from commissions.services.settings_service import LAST_NCF_NUMBER_KEY, get_rest_percentage
from commissions.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


def lines_from_allocations(allocations: Mapping[str, int]) -> List[InvoiceLineInput]:
    """
    Converte le allocazioni del calcolatore (id categoria -> importo) in righe,
    copiando nome e percentuale correnti della configurazione.
    """
    lines = []
    for category in list_categories():
        amount = int(allocations.get(str(category.id)) or 0)
        lines.append(
            InvoiceLineInput(name=category.name, amount=amount, percentage=category.percentage)
        )
    return lines


def _validate(data: InvoiceInput) -> None:
    if not data.ncf:
        raise ValidationError("NCF obbligatorio")
    if data.total_amount is None or data.total_amount < 0:
        raise ValidationError("Il totale fattura deve essere un intero non negativo")


def _apply(invoice: Invoice, data: InvoiceInput, breakdown: CommissionBreakdown) -> None:
    invoice.ncf = data.ncf
    invoice.invoice_date = data.invoice_date
    invoice.total_amount = breakdown.total_amount
    invoice.rest_amount = breakdown.rest_amount
    invoice.rest_percentage = breakdown.rest_percentage
    invoice.rest_commission = breakdown.rest_commission
    invoice.total_commission = breakdown.total_commission
    # Sostituzione completa: le righe precedenti sono eliminate (delete-orphan)
    invoice.products = [
        InvoiceProduct(
            product_name=line.name,
            amount=line.amount,
            percentage=line.percentage,
            commission=line.commission,
        )
        for line in breakdown.lines
        if line.amount > 0
    ]


def _commit_or_duplicate(uow: UnitOfWork, ncf: str) -> None:
    """Commit; una violazione del vincolo UNIQUE sull'NCF diventa DuplicateNcfError."""
    try:
        uow.commit()
    except IntegrityError as exc:
        if uow.invoices.get_by_ncf(ncf) is not None:
            raise DuplicateNcfError(ncf) from exc
        raise


@storage_guard
def create_invoice(data: InvoiceInput) -> Invoice:
    _validate(data)
    rest_percentage = data.rest_percentage
    if rest_percentage is None:
        rest_percentage = get_rest_percentage()

    with UnitOfWork() as uow:
        if uow.invoices.get_by_ncf(data.ncf) is not None:
            log_structured_event(
                "duplicate_ncf_rejected",
                message="NCF già presente, fattura non salvata",
                level="warning",
                ncf=data.ncf,
            )
            raise DuplicateNcfError(data.ncf)

        breakdown = breakdown_from_lines(data.total_amount, data.lines, rest_percentage)
        invoice = Invoice(seller_id=data.seller_id)
        _apply(invoice, data, breakdown)
        uow.invoices.add(invoice)

        # Il suffisso appena usato diventa la base per il prossimo NCF suggerito
        suffix = ncf_suffix_number(data.ncf)
        if suffix is not None:
            uow.settings.set_value(LAST_NCF_NUMBER_KEY, str(suffix))

        _commit_or_duplicate(uow, data.ncf)

    log_structured_event(
        "invoice_created",
        message="Fattura salvata",
        invoice_id=invoice.id,
        ncf=invoice.ncf,
        total_amount=invoice.total_amount,
        total_commission=str(invoice.total_commission),
    )
    return invoice


@storage_guard
def update_invoice(invoice_id: int, data: InvoiceInput) -> Invoice:
    """
    Sostituisce campi e righe della fattura.

    La percentuale del resto salvata sulla fattura resta quella originale,
    salvo che l'input ne indichi una esplicitamente.
    """
    _validate(data)
    with UnitOfWork() as uow:
        invoice = uow.invoices.get_by_id(invoice_id)
        if invoice is None:
            raise NotFoundError("Fattura non trovata")

        if uow.invoices.get_by_ncf(data.ncf, exclude_id=invoice_id) is not None:
            log_structured_event(
                "duplicate_ncf_rejected",
                message="NCF già usato da un'altra fattura, modifica annullata",
                level="warning",
                ncf=data.ncf,
                invoice_id=invoice_id,
            )
            raise DuplicateNcfError(data.ncf)

        rest_percentage = (
            data.rest_percentage if data.rest_percentage is not None else invoice.rest_percentage
        )
        breakdown = breakdown_from_lines(data.total_amount, data.lines, rest_percentage)
        _apply(invoice, data, breakdown)
        if data.seller_id is not None:
            invoice.seller_id = data.seller_id

        _commit_or_duplicate(uow, data.ncf)

    log_structured_event(
        "invoice_updated",
        message="Fattura aggiornata",
        invoice_id=invoice.id,
        ncf=invoice.ncf,
        total_commission=str(invoice.total_commission),
    )
    return invoice


@storage_guard
def delete_invoice(invoice_id: int) -> bool:
    with UnitOfWork() as uow:
        invoice = uow.invoices.get_by_id(invoice_id)
        if invoice is None:
            raise NotFoundError("Fattura non trovata")
        ncf = invoice.ncf
        uow.invoices.delete(invoice)
        uow.commit()

    log_structured_event("invoice_deleted", message="Fattura eliminata", invoice_id=invoice_id, ncf=ncf)
    return True


@storage_guard
def get_invoice(invoice_id: int) -> Invoice:
    with UnitOfWork() as uow:
        invoice = uow.invoices.get_by_id(invoice_id)
    if invoice is None:
        raise NotFoundError("Fattura non trovata")
    return invoice


@storage_guard
def list_invoices(seller_id: Optional[int] = None, month: Optional[Month] = None) -> List[Invoice]:
    """Fatture dalla più recente alla più vecchia (data di creazione), con le righe."""
    with UnitOfWork() as uow:
        invoices = uow.invoices.list_recent_first(seller_id=seller_id)
    if month is not None:
        invoices = filter_invoices_by_month(invoices, month)
    return invoices


def invoice_to_dict(invoice: Invoice) -> dict:
    return {
        "id": invoice.id,
        "ncf": invoice.ncf,
        "invoice_date": invoice.invoice_date.isoformat() if invoice.invoice_date else None,
        "total_amount": invoice.total_amount,
        "rest_amount": invoice.rest_amount,
        "rest_percentage": float(invoice.rest_percentage),
        "rest_commission": float(invoice.rest_commission),
        "total_commission": float(invoice.total_commission),
        "seller_id": invoice.seller_id,
        "created_at": invoice.created_at.isoformat() if invoice.created_at else None,
        "effective_date": invoice.effective_date.isoformat() if invoice.effective_date else None,
        "products": [
            {
                "id": product.id,
                "product_name": product.product_name,
                "amount": product.amount,
                "percentage": float(product.percentage),
                "commission": float(product.commission),
            }
            for product in invoice.products
        ],
    }
