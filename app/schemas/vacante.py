from pydantic import BaseModel, ConfigDict, field_validator
from typing import Optional
from datetime import date, datetime

from app.utils.helpers import normalizar_fecha


class VacanteBase(BaseModel):
    titulo: str
    fecha_inicio: date
    fecha_final: date
    ciudad: Optional[str] = None
    tipo_trabajo: Optional[str] = None
    descripcion: Optional[str] = None

    @field_validator("fecha_inicio", "fecha_final", mode="before")
    @classmethod
    def parse_fecha(cls, v):
        # Acepta también "2024-03-01T00:00:00.000Z" como lo envía el frontend
        return normalizar_fecha(v)


class VacanteCreate(VacanteBase):
    entidad_id: int
    asesor_externo_id: int


class VacanteUpdate(VacanteBase):
    # Al editar, todos los campos son obligatorios
    ciudad: str
    tipo_trabajo: str
    descripcion: str


class Vacante(VacanteBase):
    model_config = ConfigDict(from_attributes=True)

    vacante_id: int
    entidad_id: int
    asesor_externo_id: int
    estatus: Optional[str] = None
    created_at: Optional[datetime] = None


class VacanteDetalle(Vacante):
    """Vacante con los nombres del asesor externo y la entidad"""

    nombre_asesor_externo: Optional[str] = None
    apellido_paterno_asesor_externo: Optional[str] = None
    apellido_materno_asesor_externo: Optional[str] = None
    nombre_empresa: Optional[str] = None
    logo_empresa: Optional[str] = None
