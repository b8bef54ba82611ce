# -*- coding: utf-8 -*-
"""
backend/app/routes/__init__.py

Router raíz sin prefijo (health). Los módulos de dominio se montan en
app.main bajo /api.

Fecha: 2026-02-03
"""

from fastapi import APIRouter

from .health_routes import router as health_router

router = APIRouter()
router.include_router(health_router)

__all__ = ["router"]

# Fin del archivo backend/app/routes/__init__.py
