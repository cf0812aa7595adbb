from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import date, datetime


class AlumnoBase(BaseModel):
    num_control: str
    nombre: str
    apellido_paterno: str
    apellido_materno: str
    fecha_nacimiento: Optional[date] = None
    carrera: Optional[str] = None
    semestre: Optional[int] = None
    turno: Optional[str] = None
    correo: str
    num_celular: Optional[str] = None
    asesor_interno_id: Optional[int] = None


class AlumnoCreate(AlumnoBase):
    contraseña: str
    foto_perfil: Optional[bytes] = None


class AlumnoUpdate(BaseModel):
    nombre: Optional[str] = None
    apellido_paterno: Optional[str] = None
    apellido_materno: Optional[str] = None
    fecha_nacimiento: Optional[date] = None
    carrera: Optional[str] = None
    semestre: Optional[int] = None
    turno: Optional[str] = None
    correo: Optional[str] = None
    num_celular: Optional[str] = None
    foto_perfil: Optional[bytes] = None


class AlumnoInDB(AlumnoBase):
    model_config = ConfigDict(from_attributes=True)

    estatus: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Alumno(AlumnoInDB):
    pass


class AlumnoResumen(BaseModel):
    """Fila de listados: nombre completo y foto como data URI"""

    num_control: str
    nombre: str
    estatus: Optional[str] = None
    turno: Optional[str] = None
    carrera: Optional[str] = None
    foto_perfil: Optional[str] = None
