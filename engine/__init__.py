"""
Cashflow projection engine — monthly economy/payment math, payback, ROI and NPV.
"""

from .models import Projection, SaleParameters
from .projector import compute_roi

__all__ = ["Projection", "SaleParameters", "compute_roi"]
