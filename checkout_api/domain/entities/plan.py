from __future__ import annotations

from dataclasses import dataclass


ENTERPRISE_PLAN_KEY = "enterprise"


@dataclass(frozen=True)
class Plan:
    key: str
    name: str
    amount_cents: int
    currency: str = "usd"
    interval: str = "month"


# Monthly subscription prices. Enterprise is sold through demo booking and is
# never part of the self-serve catalog.
PLAN_CATALOG: dict[str, Plan] = {
    "starter": Plan(key="starter", name="NeuroSphere Starter", amount_cents=49900),
    "growth": Plan(key="growth", name="NeuroSphere Growth", amount_cents=149900),
}


def get_plan(key: str) -> Plan | None:
    return PLAN_CATALOG.get(key)


def list_plans() -> list[Plan]:
    return list(PLAN_CATALOG.values())
