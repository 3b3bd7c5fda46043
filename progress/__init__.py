"""Progress Module - Historico de tentativas sincronizado com o AgentFS.

Arquitetura:
- store.py: AttemptStore (colecao por usuario + observacao ao vivo)
- synchronizer.py: ProgressSynchronizer, Subscription, AttemptRecord
- stats.py: ProgressSummary para o painel
"""

from .stats import ProgressSummary, summarize
from .store import AttemptStore
from .synchronizer import (
    AttemptRecord,
    AttemptStatus,
    ProgressSynchronizer,
    Subscription,
    sort_attempts,
)

__all__ = [
    "AttemptStore",
    "AttemptRecord",
    "AttemptStatus",
    "ProgressSynchronizer",
    "Subscription",
    "sort_attempts",
    "ProgressSummary",
    "summarize",
]
