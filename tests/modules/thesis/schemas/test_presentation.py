# backend\tests\modules\thesis\schemas\test_presentation.py

import pytest

from app.modules.thesis.enums import EstadoTesis
from app.modules.thesis.schemas.presentation import EstadoInfo, describe_estado


@pytest.mark.parametrize("estado", list(EstadoTesis))
def test_every_state_has_label_and_color(estado):
    info = describe_estado(estado)
    assert info.codigo == estado.value
    assert info.label
    assert info.color


@pytest.mark.parametrize("estado,label,color", [
    ("BORRADOR", "Borrador", "gray"),
    ("OBSERVADA_JURADO", "Observada por jurado", "orange"),
    ("SUSTENTADA", "Sustentada", "emerald"),
    ("RECHAZADA", "Rechazada", "red"),
])
def test_known_labels(estado, label, color):
    assert describe_estado(estado) == EstadoInfo(codigo=estado, label=label, color=color)


def test_unknown_state_is_shown_raw():
    assert describe_estado("EN_LIMBO") == EstadoInfo(codigo="EN_LIMBO", label="EN_LIMBO", color="gray")

# Fin del archivo backend/tests/modules/thesis/schemas/test_presentation.py
