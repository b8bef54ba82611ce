# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/__init__.py

Módulo de gestión de tesis.

Este módulo gestiona:
- Registro de la tesis y su equipo (autores, asesores)
- Revisión de Mesa de Partes (voucher, requisitos, observaciones)
- Conformación del jurado y evaluaciones por ronda
- Fase de informe final, sustentación y archivo
- Historial de estados y notificaciones

Fecha: 2026-02-03
"""

# Paquete liviano: no importes modelos aquí (para no disparar mapeos al importar enums).

__all__ = []
# Fin del archivo
