import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.config.database import get_db
from app.crud.practica import practica as practica_crud
from app.schemas.practica import PracticaDeAlumno, PracticaDeEntidad
from app.utils.helpers import ResponseFormatter

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/entidad/{entidad_id}", response_model=dict)
async def read_practicas_de_entidad(entidad_id: int, db: AsyncSession = Depends(get_db)):
    try:
        filas = await practica_crud.get_by_entidad(db, entidad_id)
        data = [
            PracticaDeEntidad.model_validate(dict(f._mapping)).model_dump(mode="json")
            for f in filas
        ]
        return ResponseFormatter.success(data)
    except Exception as e:
        logger.error(f"❌ Error obteniendo prácticas de la entidad {entidad_id}: {e}")
        raise HTTPException(status_code=500, detail="Error en el servidor")


@router.get("/alumno/{alumno_id}", response_model=dict)
async def read_practica_de_alumno(alumno_id: str, db: AsyncSession = Depends(get_db)):
    """Práctica más reciente del alumno"""
    fila = await practica_crud.get_ultima_de_alumno(db, alumno_id)
    if fila is None:
        raise HTTPException(
            status_code=404, detail="No se encontró práctica profesional para este alumno"
        )
    return ResponseFormatter.success(
        PracticaDeAlumno.model_validate(dict(fila._mapping)).model_dump(mode="json")
    )
