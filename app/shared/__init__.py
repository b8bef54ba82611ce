# -*- coding: utf-8 -*-
"""
backend/app/shared/__init__.py

Infraestructura compartida: configuración, base de datos, autenticación,
middlewares, storage de documentos, notificaciones y utilidades.

No importa submódulos en import-time para no instanciar settings antes
de que los tests ajusten PYTHON_ENV.

Fecha: 2026-02-03
"""

# Fin del archivo backend/app/shared/__init__.py
