import logging
from datetime import datetime, timedelta
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Response, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.errores import a_http_exception
from app.config.database import get_db
from app.config.settings import settings
from app.core import revision_documentos
from app.core.archivos import leer_pdf
from app.core.exceptions import PracticasError
from app.crud.alumno import alumno as alumno_crud
from app.crud.documento import (
    documento_subido as documento_subido_crud,
    documento_alumno as documento_alumno_crud,
    auditoria as auditoria_crud,
    TABLA_DOCUMENTO_ALUMNO,
)
from app.models.documento import EstatusDocumento
from app.schemas.documento import DocumentoResumen, EnviarDocumento, RevisionDocumento
from app.utils.helpers import ResponseFormatter

logger = logging.getLogger(__name__)

router = APIRouter()


def _pdf(contenido: bytes, nombre_archivo: str) -> Response:
    return Response(
        content=contenido,
        media_type="application/pdf",
        headers={"Content-Disposition": f'inline; filename="{nombre_archivo}"'},
    )


async def _verificar_alumno(db: AsyncSession, alumno_id: str) -> None:
    if not await alumno_crud.get(db, code=alumno_id):
        raise HTTPException(status_code=404, detail="Alumno no encontrado")


# ------------------------- Expediente del alumno (subidos) -------------------------


@router.post("/subidos", response_model=dict, status_code=201)
async def subir_a_expediente(
    alumno_id: str = Form(...),
    archivo: UploadFile = File(...),
    db: AsyncSession = Depends(get_db),
):
    try:
        contenido = await leer_pdf(archivo)
        await _verificar_alumno(db, alumno_id)
        documento = await documento_subido_crud.subir(
            db, alumno_id=alumno_id, nombre_archivo=archivo.filename, archivo=contenido
        )
        return ResponseFormatter.success(
            {"documento_id": documento.documento_id}, "Documento subido con éxito"
        )
    except HTTPException:
        raise
    except PracticasError as e:
        raise a_http_exception(e)
    except Exception as e:
        logger.error(f"❌ Error subiendo documento de {alumno_id}: {e}")
        raise HTTPException(status_code=500, detail="Error al guardar el documento")


@router.get("/subidos/alumno/{alumno_id}", response_model=dict)
async def read_subidos(alumno_id: str, db: AsyncSession = Depends(get_db)):
    try:
        documentos = await documento_subido_crud.get_by_alumno(db, alumno_id)
        return ResponseFormatter.success(
            [DocumentoResumen.model_validate(d).model_dump() for d in documentos]
        )
    except Exception as e:
        logger.error(f"❌ Error obteniendo documentos de {alumno_id}: {e}")
        raise HTTPException(status_code=500, detail="Error al obtener los documentos")


@router.get("/subidos/{documento_id}")
async def read_subido(documento_id: int, db: AsyncSession = Depends(get_db)):
    documento = await documento_subido_crud.get(db, code=documento_id)
    if not documento:
        raise HTTPException(status_code=404, detail="Documento no encontrado")
    return _pdf(documento.archivo, documento.nombre_archivo)


@router.delete("/subidos/{documento_id}", response_model=dict)
async def delete_subido(documento_id: int, db: AsyncSession = Depends(get_db)):
    try:
        if await documento_subido_crud.eliminar(db, documento_id) == 0:
            await db.rollback()
            raise HTTPException(status_code=404, detail="Documento no encontrado")
        await db.commit()
        return ResponseFormatter.success(None, "Documento eliminado con éxito")
    except HTTPException:
        raise
    except Exception as e:
        await db.rollback()
        logger.error(f"❌ Error eliminando documento subido {documento_id}: {e}")
        raise HTTPException(status_code=500, detail="Error al eliminar el documento")


@router.post("/enviar", response_model=dict, status_code=201)
async def enviar_documento(datos: EnviarDocumento, db: AsyncSession = Depends(get_db)):
    """Envía un documento del expediente a revisión"""
    try:
        documento = await revision_documentos.enviar_a_revision(
            db, datos.documento_id, datos.usuario_tipo
        )
    except PracticasError as e:
        raise a_http_exception(e)
    return ResponseFormatter.success(
        {"documento_id": documento.documento_id}, "Documento enviado a revisión"
    )


# ------------------------------- Documentos en revisión -------------------------------


@router.post("/", response_model=dict, status_code=201)
async def subir_documento(
    alumno_id: str = Form(...),
    usuario_tipo: Optional[str] = Form(None),
    archivo: UploadFile = File(...),
    db: AsyncSession = Depends(get_db),
):
    try:
        contenido = await leer_pdf(archivo)
        await _verificar_alumno(db, alumno_id)
        documento = await revision_documentos.subir_documento(
            db,
            alumno_id=alumno_id,
            nombre_archivo=archivo.filename,
            archivo=contenido,
            usuario_tipo=usuario_tipo,
        )
        return ResponseFormatter.success(
            {"documento_id": documento.documento_id}, "Documento subido con éxito"
        )
    except HTTPException:
        raise
    except PracticasError as e:
        raise a_http_exception(e)
    except Exception as e:
        logger.error(f"❌ Error subiendo documento a revisión de {alumno_id}: {e}")
        raise HTTPException(status_code=500, detail="Error al guardar el documento")


@router.get("/cambios", response_model=dict)
async def read_cambios(db: AsyncSession = Depends(get_db)):
    """Cambios recientes en los documentos en revisión, por tipo de usuario"""
    try:
        desde = datetime.now() - timedelta(seconds=settings.audit_window_seconds)
        filas = await auditoria_crud.cambios_recientes(db, TABLA_DOCUMENTO_ALUMNO, desde)
        return ResponseFormatter.success(
            [{"cambios": f.cambios, "usuario_tipo": f.usuario_tipo} for f in filas]
        )
    except Exception as e:
        logger.error(f"❌ Error consultando cambios: {e}")
        raise HTTPException(status_code=500, detail="Error al consultar los cambios")


async def _listar(db: AsyncSession, alumno_id: str, estatus: EstatusDocumento) -> dict:
    try:
        documentos = await documento_alumno_crud.get_by_alumno_y_estatus(
            db, alumno_id, estatus.value
        )
        return ResponseFormatter.success(
            [DocumentoResumen.model_validate(d).model_dump() for d in documentos]
        )
    except Exception as e:
        logger.error(f"❌ Error obteniendo documentos de {alumno_id}: {e}")
        raise HTTPException(status_code=500, detail="Error al obtener los documentos")


@router.get("/alumno/{alumno_id}/en-proceso", response_model=dict)
async def read_en_proceso(alumno_id: str, db: AsyncSession = Depends(get_db)):
    return await _listar(db, alumno_id, EstatusDocumento.EN_PROCESO)


@router.get("/alumno/{alumno_id}/aprobados", response_model=dict)
async def read_aprobados(alumno_id: str, db: AsyncSession = Depends(get_db)):
    return await _listar(db, alumno_id, EstatusDocumento.ACEPTADO)


@router.get("/{documento_id}")
async def read_documento(documento_id: int, db: AsyncSession = Depends(get_db)):
    documento = await documento_alumno_crud.get(db, code=documento_id)
    if not documento:
        raise HTTPException(status_code=404, detail="Documento no encontrado")
    return _pdf(documento.archivo, documento.nombre_archivo)


@router.put("/{documento_id}/aprobar", response_model=dict)
async def aprobar(
    documento_id: int, datos: RevisionDocumento, db: AsyncSession = Depends(get_db)
):
    try:
        await revision_documentos.aprobar_documento(db, documento_id, datos.usuario_tipo)
    except PracticasError as e:
        raise a_http_exception(e)
    return ResponseFormatter.success(None, "Documento aprobado")


@router.put("/{documento_id}/rechazar", response_model=dict)
async def rechazar(
    documento_id: int, datos: RevisionDocumento, db: AsyncSession = Depends(get_db)
):
    try:
        await revision_documentos.rechazar_documento(db, documento_id, datos.usuario_tipo)
    except PracticasError as e:
        raise a_http_exception(e)
    return ResponseFormatter.success(None, "Documento rechazado")


@router.delete("/{documento_id}", response_model=dict)
async def delete_documento(documento_id: int, db: AsyncSession = Depends(get_db)):
    try:
        await revision_documentos.eliminar_documento(db, documento_id)
    except PracticasError as e:
        raise a_http_exception(e)
    return ResponseFormatter.success(None, "Documento eliminado")
