"""Docs Proxy — health-check endpoint backed by the upstream status feed."""

from __future__ import annotations

from fastapi import APIRouter

from app.services.health_evaluator import HealthEvaluator
from shared.health import create_health_router


def build_router(evaluator: HealthEvaluator) -> APIRouter:
    # No liveness/readiness split: the feed verdict is the only signal.
    return create_health_router(evaluator.is_healthy)
