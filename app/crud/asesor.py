from typing import List
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.base import CRUDBase
from app.models.asesor import AsesorInterno, AsesorExterno
from app.schemas.asesor import (
    AsesorInternoCreate,
    AsesorInternoUpdate,
    AsesorExternoCreate,
)
from app.core.security import get_password_hash


class CRUDAsesorInterno(CRUDBase[AsesorInterno, AsesorInternoCreate, AsesorInternoUpdate]):
    def __init__(self):
        super().__init__(AsesorInterno, "asesor_interno_id")

    async def create(
        self, db: AsyncSession, *, obj_in: AsesorInternoCreate
    ) -> AsesorInterno:
        data = obj_in.model_dump(exclude={"contraseña"})
        db_obj = AsesorInterno(**data, contraseña=get_password_hash(obj_in.contraseña))
        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj

    async def get_all_ordered(self, db: AsyncSession) -> List[AsesorInterno]:
        result = await db.execute(
            select(AsesorInterno).order_by(AsesorInterno.asesor_interno_id)
        )
        return result.scalars().all()


class CRUDAsesorExterno(CRUDBase[AsesorExterno, AsesorExternoCreate, AsesorExternoCreate]):
    def __init__(self):
        super().__init__(AsesorExterno, "asesor_externo_id")

    async def create(
        self, db: AsyncSession, *, obj_in: AsesorExternoCreate
    ) -> AsesorExterno:
        data = obj_in.model_dump(exclude={"contraseña"})
        db_obj = AsesorExterno(**data, contraseña=get_password_hash(obj_in.contraseña))
        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj


asesor_interno = CRUDAsesorInterno()
asesor_externo = CRUDAsesorExterno()
