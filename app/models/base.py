from enum import Enum

from sqlalchemy import Column, DateTime, func
from sqlalchemy.ext.declarative import declared_attr
from app.config.database import Base


class Estatus(str, Enum):
    """Estatus administrativo de alumnos, entidades y vacantes (sin asignar = NULL o vacío)"""

    ACEPTADO = "Aceptado"
    RECHAZADO = "Rechazado"


class TimestampMixin:
    """Mixin para agregar campos de timestamp a los modelos"""

    @declared_attr
    def created_at(cls):
        return Column(DateTime(timezone=True), server_default=func.now())

    @declared_attr
    def updated_at(cls):
        return Column(
            DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
        )


class BaseModel(Base, TimestampMixin):
    """Modelo base con timestamps"""

    __abstract__ = True
