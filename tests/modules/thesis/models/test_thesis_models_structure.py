# backend/tests/modules/thesis/models/test_thesis_models_structure.py


def test_thesis_model_core_columns():
    from app.modules.thesis.models import Thesis
    cols = Thesis.__table__.columns
    expected = {
        "id", "codigo", "titulo", "resumen", "palabras_clave",
        "estado", "fase_actual", "ronda_actual",
        "fecha_limite_evaluacion", "fecha_limite_correccion",
        "voucher_fisico_entregado",
        "fecha_sustentacion", "lugar_sustentacion", "modalidad_sustentacion",
        "eliminada", "deleted_at", "created_at", "updated_at", "version",
    }
    assert expected.issubset(set(cols.keys()))
    assert cols["codigo"].unique


def test_thesis_uses_optimistic_versioning():
    from app.modules.thesis.models import Thesis
    assert Thesis.__mapper__.version_id_col is Thesis.__table__.c.version


def test_children_link_to_thesis():
    from app.modules.thesis.models import (
        JuryEvaluation,
        ThesisAdvisor,
        ThesisAuthor,
        ThesisDocument,
        ThesisJuror,
        ThesisStatusHistory,
    )
    for model in (ThesisAuthor, ThesisAdvisor, ThesisJuror, ThesisDocument, JuryEvaluation, ThesisStatusHistory):
        fks = {fk.target_fullname for fk in model.__table__.c.thesis_id.foreign_keys}
        assert fks == {"theses.id"}, model.__name__


def test_history_sequence_and_single_vote_per_round_are_unique():
    from app.modules.thesis.models import JuryEvaluation, ThesisStatusHistory

    def unique_sets(model):
        return {
            tuple(c.name for c in constraint.columns)
            for constraint in model.__table__.constraints
            if constraint.__class__.__name__ == "UniqueConstraint"
        }

    assert ("thesis_id", "secuencia") in unique_sets(ThesisStatusHistory)
    assert ("jury_member_id", "ronda") in unique_sets(JuryEvaluation)


def test_document_versioning_columns():
    from app.modules.thesis.models import ThesisDocument
    cols = set(ThesisDocument.__table__.columns.keys())
    assert {"tipo", "version", "es_version_actual", "firmado", "fecha_firma", "ruta_archivo", "ronda"} <= cols


def test_notification_inbox_columns():
    from app.modules.thesis.models import ThesisNotification
    cols = set(ThesisNotification.__table__.columns.keys())
    assert {"user_id", "thesis_id", "tipo", "titulo", "mensaje", "leida", "created_at"} <= cols


def test_models_have_repr():
    from app.modules.thesis.models import JuryEvaluation, Thesis, ThesisDocument
    for model in (Thesis, ThesisDocument, JuryEvaluation):
        assert "__repr__" in model.__dict__, model.__name__


def test_aggregate_relationships():
    from app.modules.thesis.models import Thesis
    rels = Thesis.__mapper__.relationships
    assert {"autores", "asesores", "jurados", "documentos", "evaluaciones", "historial"} <= set(rels.keys())
    assert all(rels[name].lazy == "selectin" for name in ("autores", "asesores", "jurados", "documentos"))

# Fin del archivo backend/tests/modules/thesis/models/test_thesis_models_structure.py
