from typing import Optional, List
from sqlalchemy import select, delete, or_
from sqlalchemy.engine import Row
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.base import CRUDBase
from app.models.asesor import AsesorExterno
from app.models.entidad import EntidadReceptora
from app.models.postulacion import Postulacion
from app.models.vacante import Vacante
from app.schemas.vacante import VacanteCreate, VacanteUpdate


class CRUDVacante(CRUDBase[Vacante, VacanteCreate, VacanteUpdate]):
    def __init__(self):
        super().__init__(Vacante, "vacante_id")

    def _select_detalle(self):
        return (
            select(
                Vacante,
                AsesorExterno.nombre.label("nombre_asesor_externo"),
                AsesorExterno.apellido_paterno.label("apellido_paterno_asesor_externo"),
                AsesorExterno.apellido_materno.label("apellido_materno_asesor_externo"),
                EntidadReceptora.nombre_entidad.label("nombre_empresa"),
                EntidadReceptora.foto_perfil.label("logo_empresa"),
            )
            .join(AsesorExterno, Vacante.asesor_externo_id == AsesorExterno.asesor_externo_id)
            .join(EntidadReceptora, Vacante.entidad_id == EntidadReceptora.entidad_id)
        )

    async def get_by_entidad(self, db: AsyncSession, entidad_id: int) -> List[Row]:
        result = await db.execute(
            self._select_detalle()
            .where(Vacante.entidad_id == entidad_id)
            .order_by(Vacante.vacante_id.desc())
        )
        return result.all()

    async def get_paginadas(self, db: AsyncSession, page: int, limit: int) -> List[Row]:
        result = await db.execute(
            self._select_detalle()
            .order_by(Vacante.vacante_id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return result.all()

    async def get_by_estatus(
        self, db: AsyncSession, estatus: Optional[str] = None
    ) -> List[Row]:
        query = self._select_detalle()
        if estatus:
            query = query.where(Vacante.estatus == estatus)
        else:
            query = query.where(or_(Vacante.estatus.is_(None), Vacante.estatus == ""))
        result = await db.execute(query.order_by(Vacante.vacante_id.desc()))
        return result.all()

    async def eliminar_con_postulaciones(self, db: AsyncSession, vacante_id: int) -> int:
        """Elimina las postulaciones de la vacante y la vacante en una sola confirmación"""
        try:
            await db.execute(delete(Postulacion).where(Postulacion.vacante_id == vacante_id))
            eliminadas = await self.eliminar(db, vacante_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return eliminadas


vacante = CRUDVacante()
