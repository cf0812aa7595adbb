from .base import BaseModel, Estatus
from .alumno import Alumno
from .asesor import AsesorInterno, AsesorExterno
from .entidad import EntidadReceptora, Administrador
from .vacante import Vacante
from .postulacion import Postulacion
from .practica import Practica, EstadoPractica
from .documento import (
    DocumentoAlumno,
    DocumentoAlumnoSubido,
    Auditoria,
    Formato,
    EstatusDocumento,
)

__all__ = [
    "BaseModel",
    "Estatus",
    "Alumno",
    "AsesorInterno",
    "AsesorExterno",
    "EntidadReceptora",
    "Administrador",
    "Vacante",
    "Postulacion",
    "Practica",
    "EstadoPractica",
    # Documentos y auditoría
    "DocumentoAlumno",
    "DocumentoAlumnoSubido",
    "Auditoria",
    "Formato",
    "EstatusDocumento",
]
