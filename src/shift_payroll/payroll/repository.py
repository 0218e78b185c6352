from __future__ import annotations

from typing import Protocol, Sequence

from .model import PayrollPeriod


class PayrollPeriodRepository(Protocol):
    def list_for_tenant(self, tenant_id: str) -> Sequence[PayrollPeriod]:
        raise NotImplementedError
