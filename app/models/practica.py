from enum import Enum

from sqlalchemy import Column, String, Integer, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from .base import BaseModel


class EstadoPractica(str, Enum):
    INICIADA = "Iniciada"


class Practica(BaseModel):
    __tablename__ = "practicas_profesionales"

    practica_id = Column(Integer, primary_key=True, autoincrement=True)
    alumno_id = Column(
        String(20), ForeignKey("alumnos.num_control"), nullable=False, index=True
    )
    entidad_id = Column(
        Integer, ForeignKey("entidades_receptoras.entidad_id"), nullable=False
    )
    asesor_externo_id = Column(
        Integer, ForeignKey("asesores_externos.asesor_externo_id"), nullable=False
    )
    fecha_inicio = Column(Date, nullable=False)
    fecha_fin = Column(Date, nullable=False)
    estado = Column(String(20), nullable=False, default=EstadoPractica.INICIADA.value)
    titulo_vacante = Column(String(150), nullable=False)
    fecha_creacion = Column(DateTime, nullable=False)

    # Relationships
    alumno = relationship("Alumno", back_populates="practicas")
    entidad = relationship("EntidadReceptora")
    asesor_externo = relationship("AsesorExterno")
