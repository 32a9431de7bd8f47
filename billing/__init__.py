"""
Billing reconciliation — invoice reading + contract terms -> itemized bill.
"""

from .models import Bill, BillItem, BillMeta, ContractTerms, RawInvoiceReading
from .reconciler import compute_bill, excess_kwh

__all__ = [
    "Bill",
    "BillItem",
    "BillMeta",
    "ContractTerms",
    "RawInvoiceReading",
    "compute_bill",
    "excess_kwh",
]
