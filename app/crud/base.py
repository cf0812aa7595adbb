from typing import Any, Dict, Generic, Optional, Type, TypeVar, Union
from pydantic import BaseModel
from sqlalchemy import select, delete, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.config.database import Base

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    def __init__(self, model: Type[ModelType], primary_key_field: str = None):
        """
        Objeto CRUD con métodos por defecto para Create, Read, Update, Delete (CRUD).

        Los métodos create/update confirman la transacción; los métodos
        eliminar/actualizar_campos no lo hacen, para poder componerse dentro de
        una transacción mayor.
        """
        self.model = model
        self.primary_key_field = primary_key_field or self._get_primary_key_field()

    def _get_primary_key_field(self):
        """
        Obtiene el nombre del campo de clave primaria del modelo.
        """
        for column in self.model.__table__.columns:
            if column.primary_key:
                return column.name
        return "id"  # fallback por defecto

    @property
    def primary_key_column(self):
        return getattr(self.model, self.primary_key_field)

    async def get(self, db: AsyncSession, code: Any) -> Optional[ModelType]:
        result = await db.execute(
            select(self.model).where(self.primary_key_column == code)
        )
        return result.scalar_one_or_none()

    async def create(self, db: AsyncSession, *, obj_in: CreateSchemaType) -> ModelType:
        db_obj = self.model(**obj_in.model_dump())
        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj

    async def update(
        self,
        db: AsyncSession,
        *,
        db_obj: ModelType,
        obj_in: Union[UpdateSchemaType, Dict[str, Any]]
    ) -> ModelType:
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.model_dump(exclude_unset=True)

        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj

    async def eliminar(self, db: AsyncSession, code: Any) -> int:
        """DELETE por clave primaria sin confirmar; devuelve las filas afectadas"""
        result = await db.execute(
            delete(self.model).where(self.primary_key_column == code)
        )
        return result.rowcount

    async def actualizar_campos(self, db: AsyncSession, code: Any, **valores) -> int:
        """UPDATE por clave primaria sin confirmar; devuelve las filas afectadas"""
        result = await db.execute(
            update(self.model)
            .where(self.primary_key_column == code)
            .values(**valores)
        )
        return result.rowcount


    async def bloquear(self, db: AsyncSession, code: Any) -> Optional[Any]:
        """SELECT ... FOR UPDATE sobre la fila; devuelve su clave o None si ya no existe"""
        result = await db.execute(
            select(self.primary_key_column)
            .where(self.primary_key_column == code)
            .with_for_update()
        )
        return result.scalar_one_or_none()
