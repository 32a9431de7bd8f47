"""
Reporting — DataFrame views of bills and projections plus the proposal summary.
"""

from .summary import ProposalSummary, generate_proposal_summary, payment_label
from .tables import bill_to_frame, projection_to_frame, yearly_summary

__all__ = [
    "ProposalSummary",
    "generate_proposal_summary",
    "payment_label",
    "bill_to_frame",
    "projection_to_frame",
    "yearly_summary",
]
