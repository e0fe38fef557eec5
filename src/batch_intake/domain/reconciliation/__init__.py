"""Reconciliation of newly received roundtrips against the rest of their batch.

1) scan the batch's known roundtrips for newer deliveries and approvals
2) build an ordered registration plan (``engine.reconcile``)
3) append the planned events through the repository port (``apply.apply_plan``)
"""

from __future__ import annotations

from .apply import apply_plan
from .engine import reconcile
from .plan import Diagnostic, DiagnosticReason, EventRegistration, RegistrationPlan

__all__ = [
    "Diagnostic",
    "DiagnosticReason",
    "EventRegistration",
    "RegistrationPlan",
    "apply_plan",
    "reconcile",
]
