from typing import Optional, List
from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.base import CRUDBase
from app.models.alumno import Alumno
from app.schemas.alumno import AlumnoCreate, AlumnoUpdate
from app.core.security import get_password_hash


class CRUDAlumno(CRUDBase[Alumno, AlumnoCreate, AlumnoUpdate]):
    def __init__(self):
        super().__init__(Alumno, "num_control")

    async def create(self, db: AsyncSession, *, obj_in: AlumnoCreate) -> Alumno:
        data = obj_in.model_dump(exclude={"contraseña"})
        db_obj = Alumno(**data, contraseña=get_password_hash(obj_in.contraseña))
        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj

    async def get_by_asesor(
        self, db: AsyncSession, asesor_interno_id: int
    ) -> List[Alumno]:
        result = await db.execute(
            select(Alumno).where(Alumno.asesor_interno_id == asesor_interno_id)
        )
        return result.scalars().all()

    async def get_by_estatus(
        self,
        db: AsyncSession,
        estatus: Optional[str] = None,
        asesor_interno_id: Optional[int] = None,
    ) -> List[Alumno]:
        """Sin estatus se devuelven los alumnos pendientes (NULL o vacío)"""
        query = select(Alumno)
        if estatus:
            query = query.where(Alumno.estatus == estatus)
        else:
            query = query.where(or_(Alumno.estatus.is_(None), Alumno.estatus == ""))
        if asesor_interno_id is not None:
            query = query.where(Alumno.asesor_interno_id == asesor_interno_id)
        result = await db.execute(query.order_by(Alumno.nombre))
        return result.scalars().all()


alumno = CRUDAlumno()
