from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import date, datetime


class Practica(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    practica_id: int
    alumno_id: str
    entidad_id: int
    asesor_externo_id: int
    fecha_inicio: date
    fecha_fin: date
    estado: str
    titulo_vacante: str
    fecha_creacion: datetime


class PracticaDeEntidad(BaseModel):
    practica_id: int
    titulo_vacante: str
    nombre_alumno: str
    apellido_alumno: str
    correo_alumno: str
    nombre_asesor_externo: str
    apellido_asesor_externo: str
    fecha_inicio: date
    fecha_fin: date
    estado: str


class PracticaDeAlumno(BaseModel):
    practica_id: int
    num_control: str
    nombre_alumno: str
    apellido_alumno: str
    apellido_materno_alumno: str
    correo_asesor_externo: str
    nombre_asesor_externo: str
    apellido_paterno_asesor_externo: str
    apellido_materno_asesor_externo: str
    num_celular_entidad: Optional[str] = None
    fecha_inicio: date
    fecha_fin: date
    estado: str
    titulo_vacante: str
