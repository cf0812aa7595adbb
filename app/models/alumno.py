from sqlalchemy import Column, String, Integer, Date, ForeignKey, LargeBinary
from sqlalchemy.orm import relationship
from .base import BaseModel


class Alumno(BaseModel):
    __tablename__ = "alumnos"

    num_control = Column(String(20), primary_key=True, index=True)
    nombre = Column(String(100), nullable=False)
    apellido_paterno = Column(String(100), nullable=False)
    apellido_materno = Column(String(100), nullable=False)
    fecha_nacimiento = Column(Date, nullable=True)
    carrera = Column(String(100), nullable=True)
    semestre = Column(Integer, nullable=True)
    turno = Column(String(20), nullable=True)
    correo = Column(String(150), unique=True, nullable=False)
    contraseña = Column(String(255), nullable=False)
    num_celular = Column(String(20), nullable=True)
    foto_perfil = Column(LargeBinary, nullable=True)
    estatus = Column(String(20), nullable=True)
    asesor_interno_id = Column(
        Integer, ForeignKey("asesores_internos.asesor_interno_id"), nullable=True
    )

    # Relationships
    asesor_interno = relationship("AsesorInterno", back_populates="alumnos")
    postulaciones = relationship(
        "Postulacion", back_populates="alumno", passive_deletes=True
    )
    practicas = relationship("Practica", back_populates="alumno")

    @property
    def nombre_completo(self) -> str:
        return f"{self.nombre} {self.apellido_paterno} {self.apellido_materno}"
