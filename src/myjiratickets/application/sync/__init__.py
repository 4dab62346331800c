"""
Sync Module - Orchestration of synchronization between Jira, the store and the artifact.
"""

from .orchestrator import SyncOrchestrator, FallbackToManual
from .reconciler import (
    reconcile,
    SyncOutcome,
    TicketMutation,
    MutationAction,
)

__all__ = [
    "SyncOrchestrator",
    "FallbackToManual",
    "reconcile",
    "SyncOutcome",
    "TicketMutation",
    "MutationAction",
]
