from __future__ import annotations

from dataclasses import dataclass

from bankops.access.permissions import AuthorizationSession
from bankops.metrics.models import ExecutiveMetrics


@dataclass
class PageContext:
    session: AuthorizationSession
    metrics: ExecutiveMetrics
