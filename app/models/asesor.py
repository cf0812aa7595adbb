from sqlalchemy import Column, String, Integer, ForeignKey, LargeBinary
from sqlalchemy.orm import relationship
from .base import BaseModel


class AsesorInterno(BaseModel):
    __tablename__ = "asesores_internos"

    asesor_interno_id = Column(Integer, primary_key=True, autoincrement=True)
    nombre = Column(String(100), nullable=False)
    apellido_paterno = Column(String(100), nullable=False)
    apellido_materno = Column(String(100), nullable=False)
    correo = Column(String(150), unique=True, nullable=False)
    contraseña = Column(String(255), nullable=False)
    num_celular = Column(String(20), nullable=True)
    foto_perfil = Column(LargeBinary, nullable=True)

    # Relationships
    alumnos = relationship("Alumno", back_populates="asesor_interno")

    @property
    def nombre_completo(self) -> str:
        return f"{self.nombre} {self.apellido_paterno} {self.apellido_materno}"


class AsesorExterno(BaseModel):
    __tablename__ = "asesores_externos"

    asesor_externo_id = Column(Integer, primary_key=True, autoincrement=True)
    nombre = Column(String(100), nullable=False)
    apellido_paterno = Column(String(100), nullable=False)
    apellido_materno = Column(String(100), nullable=False)
    correo = Column(String(150), unique=True, nullable=False)
    contraseña = Column(String(255), nullable=False)
    num_celular = Column(String(20), nullable=True)
    foto_perfil = Column(LargeBinary, nullable=True)
    entidad_id = Column(
        Integer, ForeignKey("entidades_receptoras.entidad_id"), nullable=False
    )

    # Relationships
    entidad = relationship("EntidadReceptora", back_populates="asesores_externos")
    vacantes = relationship("Vacante", back_populates="asesor_externo")
