from __future__ import annotations

from checkout_api.application.dto.checkout import PlanOutput
from checkout_api.domain.entities.plan import list_plans


class ListPlansUseCase:
    def execute(self) -> list[PlanOutput]:
        return [
            PlanOutput(
                key=plan.key,
                name=plan.name,
                amount_cents=plan.amount_cents,
                currency=plan.currency,
                interval=plan.interval,
            )
            for plan in list_plans()
        ]
