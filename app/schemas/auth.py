from enum import Enum
from pydantic import BaseModel
from typing import Any, Optional


class Rol(str, Enum):
    ALUMNO = "alumno"
    ENTIDAD = "entidad"
    ASESOR_INTERNO = "asesor-interno"
    ASESOR_EXTERNO = "asesor-externo"


class UserLogin(BaseModel):
    email: str
    password: str


class VerificarDuplicado(BaseModel):
    valor: str
    excluir_id: Optional[Any] = None
