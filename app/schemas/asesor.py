from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime


class AsesorBase(BaseModel):
    nombre: str
    apellido_paterno: str
    apellido_materno: str
    correo: str
    num_celular: Optional[str] = None


class AsesorInternoCreate(AsesorBase):
    contraseña: str
    foto_perfil: Optional[bytes] = None


class AsesorInternoUpdate(BaseModel):
    nombre: Optional[str] = None
    apellido_paterno: Optional[str] = None
    apellido_materno: Optional[str] = None
    correo: Optional[str] = None
    num_celular: Optional[str] = None
    foto_perfil: Optional[bytes] = None


class AsesorInterno(AsesorBase):
    model_config = ConfigDict(from_attributes=True)

    asesor_interno_id: int
    created_at: Optional[datetime] = None


class AsesorInternoResumen(BaseModel):
    asesor_interno_id: int
    nombre_completo: str


class AsesorExternoCreate(AsesorBase):
    contraseña: str
    entidad_id: int
    foto_perfil: Optional[bytes] = None


class AsesorExterno(AsesorBase):
    model_config = ConfigDict(from_attributes=True)

    asesor_externo_id: int
    entidad_id: int
    created_at: Optional[datetime] = None
