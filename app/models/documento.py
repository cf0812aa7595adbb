from enum import Enum
from datetime import datetime

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, LargeBinary
from .base import BaseModel


class EstatusDocumento(str, Enum):
    SUBIDO = "Subido"
    EN_PROCESO = "En proceso"
    ACEPTADO = "Aceptado"
    RECHAZADO = "Rechazado"
    ELIMINADO = "Eliminado"


class DocumentoAlumnoSubido(BaseModel):
    """Documento que el alumno sube a su expediente antes de enviarlo a revisión"""

    __tablename__ = "documentos_alumno_subidos"

    documento_id = Column(Integer, primary_key=True, autoincrement=True)
    alumno_id = Column(
        String(20), ForeignKey("alumnos.num_control", ondelete="CASCADE"), nullable=False
    )
    nombre_archivo = Column(String(255), nullable=False)
    archivo = Column(LargeBinary, nullable=False)
    estatus = Column(String(20), nullable=False, default=EstatusDocumento.SUBIDO.value)


class DocumentoAlumno(BaseModel):
    """Documento enviado a revisión del asesor"""

    __tablename__ = "documentos_alumno"

    documento_id = Column(Integer, primary_key=True, autoincrement=True)
    alumno_id = Column(
        String(20), ForeignKey("alumnos.num_control", ondelete="CASCADE"), nullable=False
    )
    nombre_archivo = Column(String(255), nullable=False)
    archivo = Column(LargeBinary, nullable=False)
    estatus = Column(String(20), nullable=False, default=EstatusDocumento.EN_PROCESO.value)
    usuario_tipo = Column(String(50), nullable=True)


class Auditoria(BaseModel):
    __tablename__ = "auditoria"

    auditoria_id = Column(Integer, primary_key=True, autoincrement=True)
    tabla = Column(String(100), nullable=False)
    accion = Column(String(20), nullable=False)
    fecha = Column(DateTime, nullable=False, default=datetime.now)
    usuario_tipo = Column(String(50), nullable=True)


class Formato(BaseModel):
    """Plantilla PDF descargable por los alumnos"""

    __tablename__ = "formatos"

    documento_id = Column(Integer, primary_key=True, autoincrement=True)
    nombre_archivo = Column(String(255), nullable=False)
    archivo = Column(LargeBinary, nullable=False)
