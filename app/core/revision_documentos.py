"""
Flujo de revisión de documentos del alumno.

El alumno sube documentos a su expediente (documentos_alumno_subidos) y los
envía a revisión (documentos_alumno). Cada decisión del revisor actualiza
ambas tablas y deja un registro en auditoria dentro de la misma confirmación.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import PracticasError, RegistroNoEncontrado, FalloTransaccion
from app.crud.documento import (
    documento_subido as documento_subido_crud,
    documento_alumno as documento_alumno_crud,
    auditoria as auditoria_crud,
    TABLA_DOCUMENTO_ALUMNO,
)
from app.models.documento import DocumentoAlumno, EstatusDocumento

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _transaccion(db: AsyncSession, descripcion: str):
    """Confirma al salir; cualquier error revierte todo lo hecho en el bloque"""
    try:
        yield
        await db.commit()
    except PracticasError:
        await db.rollback()
        raise
    except Exception as e:
        await db.rollback()
        logger.error(f"❌ Error al {descripcion}, cambios revertidos: {e}")
        raise FalloTransaccion(f"Error al {descripcion}: {e}") from e


async def _obtener_documento(db: AsyncSession, documento_id: int) -> DocumentoAlumno:
    documento = await documento_alumno_crud.get(db, documento_id)
    if documento is None:
        raise RegistroNoEncontrado("el documento", documento_id)
    return documento


async def subir_documento(
    db: AsyncSession,
    *,
    alumno_id: str,
    nombre_archivo: str,
    archivo: bytes,
    usuario_tipo: Optional[str],
) -> DocumentoAlumno:
    """Registra un documento directamente en revisión y lo audita"""
    async with _transaccion(db, "guardar el documento en la base de datos"):
        documento = DocumentoAlumno(
            alumno_id=alumno_id,
            nombre_archivo=nombre_archivo,
            archivo=archivo,
            estatus=EstatusDocumento.EN_PROCESO.value,
            usuario_tipo=usuario_tipo,
        )
        db.add(documento)
        auditoria_crud.registrar(db, TABLA_DOCUMENTO_ALUMNO, "INSERT", usuario_tipo)
    await db.refresh(documento)
    return documento


async def enviar_a_revision(
    db: AsyncSession, documento_subido_id: int, usuario_tipo: str
) -> DocumentoAlumno:
    """Copia un documento subido a la tabla de revisión"""
    async with _transaccion(db, "procesar el documento"):
        subido = await documento_subido_crud.get(db, documento_subido_id)
        if subido is None:
            raise RegistroNoEncontrado("el documento", documento_subido_id)

        documento = DocumentoAlumno(
            alumno_id=subido.alumno_id,
            nombre_archivo=subido.nombre_archivo,
            archivo=subido.archivo,
            estatus=EstatusDocumento.EN_PROCESO.value,
            usuario_tipo=usuario_tipo,
        )
        db.add(documento)
        subido.estatus = EstatusDocumento.EN_PROCESO.value
    await db.refresh(documento)
    return documento


async def aprobar_documento(db: AsyncSession, documento_id: int, usuario_tipo: str) -> None:
    async with _transaccion(db, "aprobar el documento"):
        documento = await _obtener_documento(db, documento_id)
        documento.estatus = EstatusDocumento.ACEPTADO.value
        documento.usuario_tipo = usuario_tipo
        await documento_subido_crud.marcar_por_nombre(
            db, documento.alumno_id, documento.nombre_archivo, EstatusDocumento.ACEPTADO.value
        )
        auditoria_crud.registrar(db, TABLA_DOCUMENTO_ALUMNO, "UPDATE", usuario_tipo)
    logger.info(f"📄 Documento {documento_id} aprobado por {usuario_tipo}")


async def rechazar_documento(db: AsyncSession, documento_id: int, usuario_tipo: str) -> None:
    async with _transaccion(db, "rechazar el documento"):
        documento = await _obtener_documento(db, documento_id)
        alumno_id, nombre_archivo = documento.alumno_id, documento.nombre_archivo
        await documento_alumno_crud.eliminar(db, documento_id)
        await documento_subido_crud.marcar_por_nombre(
            db, alumno_id, nombre_archivo, EstatusDocumento.RECHAZADO.value
        )
        auditoria_crud.registrar(db, TABLA_DOCUMENTO_ALUMNO, "DELETE", usuario_tipo)
    logger.info(f"📄 Documento {documento_id} rechazado por {usuario_tipo}")


async def eliminar_documento(db: AsyncSession, documento_id: int) -> None:
    async with _transaccion(db, "eliminar el documento"):
        documento = await _obtener_documento(db, documento_id)
        alumno_id, nombre_archivo = documento.alumno_id, documento.nombre_archivo
        if await documento_alumno_crud.eliminar(db, documento_id) == 0:
            raise RegistroNoEncontrado("el documento", documento_id)
        await documento_subido_crud.marcar_por_nombre(
            db, alumno_id, nombre_archivo, EstatusDocumento.ELIMINADO.value
        )
