from pydantic import BaseModel, ConfigDict
from typing import Optional


class DocumentoResumen(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    documento_id: int
    nombre_archivo: str
    estatus: Optional[str] = None


class EnviarDocumento(BaseModel):
    documento_id: int
    usuario_tipo: str


class RevisionDocumento(BaseModel):
    usuario_tipo: str


class Formato(BaseModel):
    documento_id: int
    nombre_archivo: str
    archivo: str
