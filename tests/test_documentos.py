import base64
import logging

import pytest
from sqlalchemy import select

from app.core import revision_documentos
from app.core.exceptions import FalloTransaccion, RegistroNoEncontrado
from app.models import Auditoria, DocumentoAlumno, DocumentoAlumnoSubido
from tests.conftest import PDF, contar


def _pdf(nombre="constancia.pdf"):
    return {"archivo": (nombre, PDF, "application/pdf")}


async def _subir_y_enviar(client, nombre="constancia.pdf"):
    response = await client.post(
        "/api/v1/documentos/subidos", data={"alumno_id": "S100"}, files=_pdf(nombre)
    )
    assert response.status_code == 201
    subido_id = response.json()["data"]["documento_id"]

    response = await client.post(
        "/api/v1/documentos/enviar",
        json={"documento_id": subido_id, "usuario_tipo": "alumno"},
    )
    assert response.status_code == 201
    return subido_id, response.json()["data"]["documento_id"]


async def _estatus_subido(session_factory, documento_id):
    async with session_factory() as session:
        return (await session.get(DocumentoAlumnoSubido, documento_id)).estatus


async def test_subir_y_listar_expediente(client, escenario):
    response = await client.post(
        "/api/v1/documentos/subidos", data={"alumno_id": "S100"}, files=_pdf()
    )
    assert response.status_code == 201

    response = await client.get("/api/v1/documentos/subidos/alumno/S100")
    data = response.json()["data"]
    assert [d["nombre_archivo"] for d in data] == ["constancia.pdf"]
    assert data[0]["estatus"] == "Subido"

    response = await client.get(f"/api/v1/documentos/subidos/{data[0]['documento_id']}")
    assert response.content == PDF


async def test_subir_a_expediente_de_alumno_inexistente(client, escenario):
    response = await client.post(
        "/api/v1/documentos/subidos", data={"alumno_id": "S999"}, files=_pdf()
    )
    assert response.status_code == 404


async def test_eliminar_subido_inexistente(client, escenario):
    response = await client.delete("/api/v1/documentos/subidos/999")
    assert response.status_code == 404


async def test_enviar_a_revision_marca_en_proceso(client, session_factory, escenario):
    subido_id, documento_id = await _subir_y_enviar(client)

    assert await _estatus_subido(session_factory, subido_id) == "En proceso"
    response = await client.get("/api/v1/documentos/alumno/S100/en-proceso")
    assert [d["documento_id"] for d in response.json()["data"]] == [documento_id]


async def test_enviar_documento_inexistente(client, escenario):
    response = await client.post(
        "/api/v1/documentos/enviar", json={"documento_id": 999, "usuario_tipo": "alumno"}
    )
    assert response.status_code == 404


async def test_aprobar_documento(client, session_factory, escenario):
    subido_id, documento_id = await _subir_y_enviar(client)

    response = await client.put(
        f"/api/v1/documentos/{documento_id}/aprobar", json={"usuario_tipo": "asesor-interno"}
    )

    assert response.status_code == 200
    assert await _estatus_subido(session_factory, subido_id) == "Aceptado"
    response = await client.get("/api/v1/documentos/alumno/S100/aprobados")
    assert [d["documento_id"] for d in response.json()["data"]] == [documento_id]
    assert await contar(session_factory, Auditoria, Auditoria.accion == "UPDATE") == 1


async def test_rechazar_documento(client, session_factory, escenario):
    subido_id, documento_id = await _subir_y_enviar(client)

    response = await client.put(
        f"/api/v1/documentos/{documento_id}/rechazar", json={"usuario_tipo": "asesor-interno"}
    )

    assert response.status_code == 200
    assert await contar(session_factory, DocumentoAlumno) == 0
    assert await _estatus_subido(session_factory, subido_id) == "Rechazado"
    assert await contar(session_factory, Auditoria, Auditoria.accion == "DELETE") == 1


async def test_eliminar_documento(client, session_factory, escenario):
    subido_id, documento_id = await _subir_y_enviar(client)

    assert (await client.delete(f"/api/v1/documentos/{documento_id}")).status_code == 200
    assert await _estatus_subido(session_factory, subido_id) == "Eliminado"
    assert (await client.delete(f"/api/v1/documentos/{documento_id}")).status_code == 404


async def test_revisar_documento_inexistente_no_audita(db, session_factory, escenario):
    with pytest.raises(RegistroNoEncontrado):
        await revision_documentos.aprobar_documento(db, 999, "asesor-interno")
    assert await contar(session_factory, Auditoria) == 0


async def _fallar_marcado(db, alumno_id, nombre_archivo, estatus):
    raise RuntimeError("conexión perdida")


async def test_aprobar_con_fallo_de_base_de_datos_responde_500_y_revierte(
    client, session_factory, escenario, monkeypatch, caplog
):
    subido_id, documento_id = await _subir_y_enviar(client)
    monkeypatch.setattr(
        revision_documentos.documento_subido_crud, "marcar_por_nombre", _fallar_marcado
    )

    with caplog.at_level(logging.ERROR, logger=revision_documentos.__name__):
        response = await client.put(
            f"/api/v1/documentos/{documento_id}/aprobar",
            json={"usuario_tipo": "asesor-interno"},
        )

    assert response.status_code == 500
    async with session_factory() as session:
        documento = await session.get(DocumentoAlumno, documento_id)
    assert documento.estatus == "En proceso"
    assert await _estatus_subido(session_factory, subido_id) == "En proceso"
    assert await contar(session_factory, Auditoria, Auditoria.accion == "UPDATE") == 0
    assert "conexión perdida" in caplog.text


@pytest.mark.parametrize(
    "revisar",
    [
        lambda db, documento_id: revision_documentos.rechazar_documento(
            db, documento_id, "asesor-interno"
        ),
        lambda db, documento_id: revision_documentos.eliminar_documento(db, documento_id),
    ],
    ids=["rechazar", "eliminar"],
)
async def test_fallo_al_marcar_expediente_revierte_la_revision(
    client, db, session_factory, escenario, monkeypatch, revisar
):
    subido_id, documento_id = await _subir_y_enviar(client)
    monkeypatch.setattr(
        revision_documentos.documento_subido_crud, "marcar_por_nombre", _fallar_marcado
    )

    with pytest.raises(FalloTransaccion) as excinfo:
        await revisar(db, documento_id)

    assert isinstance(excinfo.value.__cause__, RuntimeError)
    assert await contar(session_factory, DocumentoAlumno) == 1
    assert await _estatus_subido(session_factory, subido_id) == "En proceso"
    assert await contar(session_factory, Auditoria) == 0


async def test_fallo_al_enviar_a_revision_no_deja_copia(
    client, db, session_factory, escenario, monkeypatch
):
    response = await client.post(
        "/api/v1/documentos/subidos", data={"alumno_id": "S100"}, files=_pdf()
    )
    subido_id = response.json()["data"]["documento_id"]

    async def fallar(db, code):
        raise RuntimeError("conexión perdida")

    monkeypatch.setattr(revision_documentos.documento_subido_crud, "get", fallar)

    response = await client.post(
        "/api/v1/documentos/enviar", json={"documento_id": subido_id, "usuario_tipo": "alumno"}
    )

    assert response.status_code == 500
    assert await contar(session_factory, DocumentoAlumno) == 0
    assert await _estatus_subido(session_factory, subido_id) == "Subido"


async def test_subida_directa_audita_y_aparece_en_cambios(client, session_factory, escenario):
    response = await client.post(
        "/api/v1/documentos/",
        data={"alumno_id": "S100", "usuario_tipo": "alumno"},
        files=_pdf("reporte.pdf"),
    )
    assert response.status_code == 201
    documento_id = response.json()["data"]["documento_id"]

    await client.put(
        f"/api/v1/documentos/{documento_id}/aprobar", json={"usuario_tipo": "asesor-interno"}
    )

    async with session_factory() as session:
        acciones = (await session.execute(select(Auditoria.accion))).scalars().all()
    assert sorted(acciones) == ["INSERT", "UPDATE"]

    response = await client.get("/api/v1/documentos/cambios")
    cambios = {c["usuario_tipo"]: c["cambios"] for c in response.json()["data"]}
    assert cambios == {"alumno": 1, "asesor-interno": 1}

    response = await client.get(f"/api/v1/documentos/{documento_id}")
    assert response.content == PDF


async def test_formatos(client, escenario):
    response = await client.post("/api/v1/formatos/", files=_pdf("carta_aceptacion.pdf"))
    assert response.status_code == 201

    response = await client.get("/api/v1/formatos/")
    formatos = response.json()["data"]
    assert [f["nombre_archivo"] for f in formatos] == ["carta_aceptacion.pdf"]
    assert base64.b64decode(formatos[0]["archivo"]) == PDF
