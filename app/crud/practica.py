from datetime import date, datetime
from typing import Optional, List
from sqlalchemy import select
from sqlalchemy.engine import Row
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.base import CRUDBase
from app.models.alumno import Alumno
from app.models.asesor import AsesorExterno
from app.models.entidad import EntidadReceptora
from app.models.practica import Practica, EstadoPractica
from app.schemas.practica import Practica as PracticaSchema


class CRUDPractica(CRUDBase[Practica, PracticaSchema, PracticaSchema]):
    def __init__(self):
        super().__init__(Practica, "practica_id")

    async def registrar(
        self,
        db: AsyncSession,
        *,
        alumno_id: str,
        entidad_id: int,
        asesor_externo_id: int,
        fecha_inicio: date,
        fecha_fin: date,
        titulo_vacante: str,
        fecha_creacion: datetime,
        estado: str = EstadoPractica.INICIADA.value,
    ) -> Practica:
        """Inserta la práctica sin confirmar; la transacción es del llamador"""
        db_obj = Practica(
            alumno_id=alumno_id,
            entidad_id=entidad_id,
            asesor_externo_id=asesor_externo_id,
            fecha_inicio=fecha_inicio,
            fecha_fin=fecha_fin,
            estado=estado,
            titulo_vacante=titulo_vacante,
            fecha_creacion=fecha_creacion,
        )
        db.add(db_obj)
        await db.flush()
        return db_obj

    async def get_activa_de_alumno(
        self, db: AsyncSession, alumno_id: str
    ) -> Optional[Practica]:
        result = await db.execute(
            select(Practica)
            .where(
                (Practica.alumno_id == alumno_id)
                & (Practica.estado == EstadoPractica.INICIADA.value)
            )
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def get_ultima_de_alumno(
        self, db: AsyncSession, alumno_id: str
    ) -> Optional[Row]:
        result = await db.execute(
            select(
                Practica.practica_id,
                Alumno.num_control,
                Alumno.nombre.label("nombre_alumno"),
                Alumno.apellido_paterno.label("apellido_alumno"),
                Alumno.apellido_materno.label("apellido_materno_alumno"),
                AsesorExterno.correo.label("correo_asesor_externo"),
                AsesorExterno.nombre.label("nombre_asesor_externo"),
                AsesorExterno.apellido_paterno.label("apellido_paterno_asesor_externo"),
                AsesorExterno.apellido_materno.label("apellido_materno_asesor_externo"),
                EntidadReceptora.num_celular.label("num_celular_entidad"),
                Practica.fecha_inicio,
                Practica.fecha_fin,
                Practica.estado,
                Practica.titulo_vacante,
            )
            .join(Alumno, Practica.alumno_id == Alumno.num_control)
            .join(AsesorExterno, Practica.asesor_externo_id == AsesorExterno.asesor_externo_id)
            .join(EntidadReceptora, Practica.entidad_id == EntidadReceptora.entidad_id)
            .where(Practica.alumno_id == alumno_id)
            .order_by(Practica.fecha_creacion.desc())
            .limit(1)
        )
        return result.first()

    async def get_by_entidad(self, db: AsyncSession, entidad_id: int) -> List[Row]:
        result = await db.execute(
            select(
                Practica.practica_id,
                Practica.titulo_vacante,
                Alumno.nombre.label("nombre_alumno"),
                Alumno.apellido_paterno.label("apellido_alumno"),
                Alumno.correo.label("correo_alumno"),
                AsesorExterno.nombre.label("nombre_asesor_externo"),
                AsesorExterno.apellido_paterno.label("apellido_asesor_externo"),
                Practica.fecha_inicio,
                Practica.fecha_fin,
                Practica.estado,
            )
            .join(Alumno, Practica.alumno_id == Alumno.num_control)
            .join(AsesorExterno, Practica.asesor_externo_id == AsesorExterno.asesor_externo_id)
            .where(Practica.entidad_id == entidad_id)
            .order_by(Practica.practica_id)
        )
        return result.all()


practica = CRUDPractica()
