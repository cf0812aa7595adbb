from sqlalchemy import Column, String, Integer, Date, Text, ForeignKey
from sqlalchemy.orm import relationship
from .base import BaseModel


class Vacante(BaseModel):
    __tablename__ = "vacantes_practica"

    vacante_id = Column(Integer, primary_key=True, autoincrement=True)
    titulo = Column(String(150), nullable=False)
    fecha_inicio = Column(Date, nullable=False)
    fecha_final = Column(Date, nullable=False)
    ciudad = Column(String(100), nullable=True)
    tipo_trabajo = Column(String(50), nullable=True)
    descripcion = Column(Text, nullable=True)
    estatus = Column(String(20), nullable=True)
    entidad_id = Column(
        Integer, ForeignKey("entidades_receptoras.entidad_id"), nullable=False
    )
    asesor_externo_id = Column(
        Integer, ForeignKey("asesores_externos.asesor_externo_id"), nullable=False
    )

    # Relationships
    entidad = relationship("EntidadReceptora", back_populates="vacantes")
    asesor_externo = relationship("AsesorExterno", back_populates="vacantes")
    postulaciones = relationship(
        "Postulacion", back_populates="vacante", passive_deletes=True
    )
