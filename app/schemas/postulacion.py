from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime


class PostulacionCreate(BaseModel):
    alumno_id: str
    vacante_id: int
    nombre_alumno: str
    correo_alumno: str
    carta_presentacion: bytes


class Postulacion(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    postulacion_id: int
    alumno_id: str
    vacante_id: int
    nombre_alumno: str
    correo_alumno: str
    created_at: Optional[datetime] = None


class PostulacionConCarta(Postulacion):
    vacante_titulo: Optional[str] = None
    carta_presentacion: Optional[str] = None
