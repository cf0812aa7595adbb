from sqlalchemy import Column, String, Integer, ForeignKey, LargeBinary, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import BaseModel


class Postulacion(BaseModel):
    __tablename__ = "postulaciones"
    __table_args__ = (
        UniqueConstraint("alumno_id", "vacante_id", name="uq_postulacion_alumno_vacante"),
    )

    postulacion_id = Column(Integer, primary_key=True, autoincrement=True)
    alumno_id = Column(
        String(20),
        ForeignKey("alumnos.num_control", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Una vacante retirada arrastra las postulaciones de los demás alumnos
    vacante_id = Column(
        Integer,
        ForeignKey("vacantes_practica.vacante_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Copia del alumno al momento de postularse
    nombre_alumno = Column(String(100), nullable=False)
    correo_alumno = Column(String(150), nullable=False)
    carta_presentacion = Column(LargeBinary, nullable=False)

    # Relationships
    alumno = relationship("Alumno", back_populates="postulaciones")
    vacante = relationship("Vacante", back_populates="postulaciones")
