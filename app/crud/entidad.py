from typing import Optional, List
from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.base import CRUDBase
from app.models.entidad import EntidadReceptora
from app.schemas.entidad import EntidadCreate, EntidadUpdate
from app.core.security import get_password_hash


class CRUDEntidad(CRUDBase[EntidadReceptora, EntidadCreate, EntidadUpdate]):
    def __init__(self):
        super().__init__(EntidadReceptora, "entidad_id")

    async def create(self, db: AsyncSession, *, obj_in: EntidadCreate) -> EntidadReceptora:
        data = obj_in.model_dump(exclude={"contraseña"})
        db_obj = EntidadReceptora(**data, contraseña=get_password_hash(obj_in.contraseña))
        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj

    async def get_all_ordered(self, db: AsyncSession) -> List[EntidadReceptora]:
        result = await db.execute(
            select(EntidadReceptora).order_by(EntidadReceptora.nombre_entidad)
        )
        return result.scalars().all()

    async def get_by_estatus(
        self, db: AsyncSession, estatus: Optional[str] = None
    ) -> List[EntidadReceptora]:
        query = select(EntidadReceptora)
        if estatus:
            query = query.where(EntidadReceptora.estatus == estatus)
        else:
            query = query.where(
                or_(EntidadReceptora.estatus.is_(None), EntidadReceptora.estatus == "")
            )
        result = await db.execute(query.order_by(EntidadReceptora.nombre_entidad))
        return result.scalars().all()


entidad = CRUDEntidad()
