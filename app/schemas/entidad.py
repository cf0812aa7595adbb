from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime


class EntidadBase(BaseModel):
    nombre_entidad: str
    nombre_usuario: str
    direccion: str
    categoria: str
    correo: str
    num_celular: Optional[str] = None


class EntidadCreate(EntidadBase):
    contraseña: str
    foto_perfil: Optional[bytes] = None


class EntidadUpdate(BaseModel):
    nombre_entidad: Optional[str] = None
    nombre_usuario: Optional[str] = None
    direccion: Optional[str] = None
    categoria: Optional[str] = None
    correo: Optional[str] = None
    num_celular: Optional[str] = None
    foto_perfil: Optional[bytes] = None


class Entidad(EntidadBase):
    model_config = ConfigDict(from_attributes=True)

    entidad_id: int
    estatus: Optional[str] = None
    created_at: Optional[datetime] = None


class EntidadResumen(BaseModel):
    entidad_id: int
    nombre: str
    estatus: Optional[str] = None
    logo_empresa: Optional[str] = None
