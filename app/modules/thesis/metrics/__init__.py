# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/metrics/__init__.py

Métricas Prometheus del flujo de tesis.
"""

from .workflow_metrics import (
    ACTIONS_TOTAL,
    ACTION_LATENCY,
    instrument_workflow_action,
    record_workflow_action,
)

__all__ = [
    "ACTIONS_TOTAL",
    "ACTION_LATENCY",
    "instrument_workflow_action",
    "record_workflow_action",
]
