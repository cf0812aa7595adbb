from typing import Optional, List
from sqlalchemy import select, delete, func, or_
from sqlalchemy.engine import Row
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.base import CRUDBase
from app.models.postulacion import Postulacion
from app.models.vacante import Vacante
from app.schemas.postulacion import PostulacionCreate


class CRUDPostulacion(CRUDBase[Postulacion, PostulacionCreate, PostulacionCreate]):
    def __init__(self):
        super().__init__(Postulacion, "postulacion_id")

    async def get_claves(self, db: AsyncSession, postulacion_id: int) -> Optional[Row]:
        """alumno_id y vacante_id de la postulación, sin bloquear"""
        result = await db.execute(
            select(Postulacion.alumno_id, Postulacion.vacante_id).where(
                Postulacion.postulacion_id == postulacion_id
            )
        )
        return result.first()

    async def bloquear_afectadas(
        self, db: AsyncSession, alumno_id: str, vacante_id: int
    ) -> List[int]:
        """
        Bloquea en orden de id las postulaciones del alumno y las de la vacante,
        que son las que una aceptación elimina.
        """
        result = await db.execute(
            select(Postulacion.postulacion_id)
            .where(
                or_(Postulacion.alumno_id == alumno_id, Postulacion.vacante_id == vacante_id)
            )
            .order_by(Postulacion.postulacion_id)
            .with_for_update()
        )
        return result.scalars().all()

    async def get_para_aceptacion(
        self, db: AsyncSession, postulacion_id: int
    ) -> Optional[Row]:
        """
        Postulación unida a su vacante, con la fila de la postulación bloqueada
        hasta el fin de la transacción. None si la vacante ya no existe.
        """
        result = await db.execute(
            select(
                Postulacion.alumno_id,
                Postulacion.vacante_id,
                Postulacion.nombre_alumno,
                Postulacion.correo_alumno,
                Vacante.entidad_id,
                Vacante.asesor_externo_id,
                Vacante.titulo.label("titulo_vacante"),
                Vacante.fecha_inicio,
                Vacante.fecha_final,
            )
            .join(Vacante, Postulacion.vacante_id == Vacante.vacante_id)
            .where(Postulacion.postulacion_id == postulacion_id)
            .with_for_update(of=Postulacion)
        )
        return result.first()

    async def existe(self, db: AsyncSession, alumno_id: str, vacante_id: int) -> bool:
        result = await db.execute(
            select(func.count(Postulacion.postulacion_id)).where(
                (Postulacion.alumno_id == alumno_id)
                & (Postulacion.vacante_id == vacante_id)
            )
        )
        return result.scalar() > 0

    async def get_by_vacante(self, db: AsyncSession, vacante_id: int) -> List[Row]:
        result = await db.execute(
            select(Postulacion, Vacante.titulo.label("vacante_titulo"))
            .join(Vacante, Postulacion.vacante_id == Vacante.vacante_id)
            .where(Postulacion.vacante_id == vacante_id)
            .order_by(Postulacion.postulacion_id)
        )
        return result.all()

    async def get_vacantes_de_alumno(self, db: AsyncSession, alumno_id: str) -> List[int]:
        result = await db.execute(
            select(Postulacion.vacante_id).where(Postulacion.alumno_id == alumno_id)
        )
        return result.scalars().all()

    async def eliminar_por_alumno(self, db: AsyncSession, alumno_id: str) -> int:
        """Elimina todas las postulaciones del alumno sin confirmar"""
        result = await db.execute(
            delete(Postulacion).where(Postulacion.alumno_id == alumno_id)
        )
        return result.rowcount


postulacion = CRUDPostulacion()
