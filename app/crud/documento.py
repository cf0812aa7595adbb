from datetime import datetime
from typing import List
from sqlalchemy import select, update, func
from sqlalchemy.engine import Row
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.base import CRUDBase
from app.models.documento import (
    DocumentoAlumno,
    DocumentoAlumnoSubido,
    Auditoria,
    Formato,
    EstatusDocumento,
)
from app.schemas.documento import DocumentoResumen

TABLA_DOCUMENTO_ALUMNO = "documentoAlumno"


class CRUDDocumentoSubido(CRUDBase[DocumentoAlumnoSubido, DocumentoResumen, DocumentoResumen]):
    def __init__(self):
        super().__init__(DocumentoAlumnoSubido, "documento_id")

    async def subir(
        self, db: AsyncSession, *, alumno_id: str, nombre_archivo: str, archivo: bytes
    ) -> DocumentoAlumnoSubido:
        db_obj = DocumentoAlumnoSubido(
            alumno_id=alumno_id,
            nombre_archivo=nombre_archivo,
            archivo=archivo,
            estatus=EstatusDocumento.SUBIDO.value,
        )
        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj

    async def get_by_alumno(
        self, db: AsyncSession, alumno_id: str
    ) -> List[DocumentoAlumnoSubido]:
        result = await db.execute(
            select(DocumentoAlumnoSubido)
            .where(DocumentoAlumnoSubido.alumno_id == alumno_id)
            .order_by(DocumentoAlumnoSubido.documento_id)
        )
        return result.scalars().all()

    async def marcar_por_nombre(
        self, db: AsyncSession, alumno_id: str, nombre_archivo: str, estatus: str
    ) -> int:
        """Actualiza el estatus de la copia subida con el mismo nombre, sin confirmar"""
        result = await db.execute(
            update(DocumentoAlumnoSubido)
            .where(
                (DocumentoAlumnoSubido.nombre_archivo == nombre_archivo)
                & (DocumentoAlumnoSubido.alumno_id == alumno_id)
            )
            .values(estatus=estatus)
        )
        return result.rowcount


class CRUDDocumentoAlumno(CRUDBase[DocumentoAlumno, DocumentoResumen, DocumentoResumen]):
    def __init__(self):
        super().__init__(DocumentoAlumno, "documento_id")

    async def get_by_alumno_y_estatus(
        self, db: AsyncSession, alumno_id: str, estatus: str
    ) -> List[DocumentoAlumno]:
        result = await db.execute(
            select(DocumentoAlumno)
            .where(
                (DocumentoAlumno.alumno_id == alumno_id)
                & (DocumentoAlumno.estatus == estatus)
            )
            .order_by(DocumentoAlumno.documento_id)
        )
        return result.scalars().all()


class CRUDAuditoria(CRUDBase[Auditoria, DocumentoResumen, DocumentoResumen]):
    def __init__(self):
        super().__init__(Auditoria, "auditoria_id")

    def registrar(self, db: AsyncSession, tabla: str, accion: str, usuario_tipo: str) -> Auditoria:
        """Agrega el registro a la sesión; se confirma junto con el cambio auditado"""
        db_obj = Auditoria(
            tabla=tabla, accion=accion, fecha=datetime.now(), usuario_tipo=usuario_tipo
        )
        db.add(db_obj)
        return db_obj

    async def cambios_recientes(
        self, db: AsyncSession, tabla: str, desde: datetime
    ) -> List[Row]:
        result = await db.execute(
            select(
                func.count(Auditoria.auditoria_id).label("cambios"),
                Auditoria.usuario_tipo,
            )
            .where((Auditoria.tabla == tabla) & (Auditoria.fecha > desde))
            .group_by(Auditoria.usuario_tipo)
        )
        return result.all()


class CRUDFormato(CRUDBase[Formato, DocumentoResumen, DocumentoResumen]):
    def __init__(self):
        super().__init__(Formato, "documento_id")

    async def subir(self, db: AsyncSession, *, nombre_archivo: str, archivo: bytes) -> Formato:
        db_obj = Formato(nombre_archivo=nombre_archivo, archivo=archivo)
        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj

    async def get_all(self, db: AsyncSession) -> List[Formato]:
        result = await db.execute(select(Formato).order_by(Formato.documento_id))
        return result.scalars().all()


documento_subido = CRUDDocumentoSubido()
documento_alumno = CRUDDocumentoAlumno()
auditoria = CRUDAuditoria()
formato = CRUDFormato()
