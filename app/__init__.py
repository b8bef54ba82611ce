# -*- coding: utf-8 -*-
"""
backend/app/__init__.py

Paquete principal del backend de gestión de tesis.

Los módulos se importan como `app.*` cuando la carpeta `backend` está en
el PYTHONPATH (uvicorn app.main:app, pytest).

Fecha: 2026-02-03
"""

# Fin del archivo backend/app/__init__.py
