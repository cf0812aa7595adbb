from sqlalchemy import Column, String, Integer, LargeBinary
from sqlalchemy.orm import relationship
from .base import BaseModel


class EntidadReceptora(BaseModel):
    __tablename__ = "entidades_receptoras"

    entidad_id = Column(Integer, primary_key=True, autoincrement=True)
    nombre_entidad = Column(String(150), nullable=False)
    nombre_usuario = Column(String(100), nullable=False)
    direccion = Column(String(255), nullable=False)
    categoria = Column(String(100), nullable=False)
    correo = Column(String(150), unique=True, nullable=False)
    contraseña = Column(String(255), nullable=False)
    num_celular = Column(String(20), nullable=True)
    foto_perfil = Column(LargeBinary, nullable=True)
    estatus = Column(String(20), nullable=True)

    # Relationships
    asesores_externos = relationship("AsesorExterno", back_populates="entidad")
    vacantes = relationship("Vacante", back_populates="entidad")


class Administrador(BaseModel):
    __tablename__ = "administradores"

    admin_id = Column(Integer, primary_key=True, autoincrement=True)
    nombre = Column(String(100), nullable=False)
    correo = Column(String(150), unique=True, nullable=False)
    contraseña = Column(String(255), nullable=False)
    num_celular = Column(String(20), nullable=True)
