import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config.database import get_db
from app.crud.asesor import asesor_externo as asesor_externo_crud
from app.crud.entidad import entidad as entidad_crud
from app.crud.vacante import vacante as vacante_crud
from app.models.base import Estatus
from app.schemas.vacante import VacanteCreate, VacanteDetalle, VacanteUpdate
from app.utils.helpers import ResponseFormatter, codificar_base64

logger = logging.getLogger(__name__)

router = APIRouter()


def _detalle(fila) -> dict:
    vacante_obj = fila[0]
    data = VacanteDetalle.model_validate(vacante_obj).model_dump(mode="json")
    data.update(
        nombre_asesor_externo=fila.nombre_asesor_externo,
        apellido_paterno_asesor_externo=fila.apellido_paterno_asesor_externo,
        apellido_materno_asesor_externo=fila.apellido_materno_asesor_externo,
        nombre_empresa=fila.nombre_empresa,
        logo_empresa=codificar_base64(fila.logo_empresa, data_uri=True),
    )
    return data


@router.post("/", response_model=dict, status_code=201)
async def create_vacante(vacante_in: VacanteCreate, db: AsyncSession = Depends(get_db)):
    """Publicar una vacante; queda pendiente de revisión"""
    try:
        if not await entidad_crud.get(db, code=vacante_in.entidad_id):
            raise HTTPException(status_code=404, detail="No existe la entidad receptora")
        if not await asesor_externo_crud.get(db, code=vacante_in.asesor_externo_id):
            raise HTTPException(status_code=404, detail="No existe el asesor externo")

        nueva = await vacante_crud.create(db, obj_in=vacante_in)
        logger.info(f"📌 Vacante publicada: {nueva.vacante_id} ({nueva.titulo})")
        return ResponseFormatter.success(
            {"vacante_id": nueva.vacante_id}, "Vacante registrada con éxito"
        )
    except HTTPException:
        raise
    except IntegrityError as e:
        await db.rollback()
        raise HTTPException(status_code=400, detail=str(e.orig))
    except Exception as e:
        logger.error(f"❌ Error registrando vacante: {e}")
        raise HTTPException(status_code=500, detail="Error al registrar la vacante")


@router.get("/", response_model=dict)
async def read_vacantes(
    estatus: Optional[Estatus] = Query(default=None),
    db: AsyncSession = Depends(get_db),
):
    """Vacantes por estatus; sin estatus devuelve las pendientes"""
    try:
        filas = await vacante_crud.get_by_estatus(db, estatus.value if estatus else None)
        return ResponseFormatter.success([_detalle(f) for f in filas])
    except Exception as e:
        logger.error(f"❌ Error obteniendo vacantes: {e}")
        raise HTTPException(status_code=500, detail="Error en el servidor")


@router.get("/paginadas/{page}/{limit}", response_model=dict)
async def read_vacantes_paginadas(page: int, limit: int, db: AsyncSession = Depends(get_db)):
    if page < 1 or limit < 1:
        raise HTTPException(status_code=400, detail="Página y límite deben ser positivos")
    try:
        filas = await vacante_crud.get_paginadas(db, page, limit)
        return ResponseFormatter.success([_detalle(f) for f in filas])
    except Exception as e:
        logger.error(f"❌ Error obteniendo vacantes paginadas: {e}")
        raise HTTPException(status_code=500, detail="Error al obtener las vacantes")


@router.get("/entidad/{entidad_id}", response_model=dict)
async def read_vacantes_de_entidad(entidad_id: int, db: AsyncSession = Depends(get_db)):
    try:
        filas = await vacante_crud.get_by_entidad(db, entidad_id)
        return ResponseFormatter.success([_detalle(f) for f in filas])
    except Exception as e:
        logger.error(f"❌ Error obteniendo vacantes de la entidad {entidad_id}: {e}")
        raise HTTPException(status_code=500, detail="Error al obtener las vacantes")


@router.get("/{vacante_id}", response_model=dict)
async def read_vacante(vacante_id: int, db: AsyncSession = Depends(get_db)):
    vacante_obj = await vacante_crud.get(db, code=vacante_id)
    if not vacante_obj:
        raise HTTPException(status_code=404, detail="Vacante no encontrada")
    return ResponseFormatter.success(VacanteDetalle.model_validate(vacante_obj).model_dump(mode="json"))


@router.put("/{vacante_id}", response_model=dict)
async def update_vacante(
    vacante_id: int, vacante_in: VacanteUpdate, db: AsyncSession = Depends(get_db)
):
    try:
        filas = await vacante_crud.actualizar_campos(
            db, vacante_id, **vacante_in.model_dump()
        )
        if filas == 0:
            await db.rollback()
            raise HTTPException(status_code=404, detail="Vacante no encontrada")
        await db.commit()
        return ResponseFormatter.success(None, "Vacante actualizada con éxito")
    except HTTPException:
        raise
    except Exception as e:
        await db.rollback()
        logger.error(f"❌ Error actualizando vacante {vacante_id}: {e}")
        raise HTTPException(status_code=500, detail="Error al actualizar la vacante")


async def _cambiar_estatus(db: AsyncSession, vacante_id: int, estatus: Estatus) -> dict:
    try:
        filas = await vacante_crud.actualizar_campos(db, vacante_id, estatus=estatus.value)
        if filas == 0:
            await db.rollback()
            raise HTTPException(status_code=404, detail="Vacante no encontrada")
        await db.commit()
        mensaje = "aceptada" if estatus == Estatus.ACEPTADO else "rechazada"
        return ResponseFormatter.success(None, f"Vacante {mensaje} con éxito")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Error cambiando estatus de la vacante {vacante_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error en el servidor: {e}")


@router.put("/{vacante_id}/aceptar", response_model=dict)
async def aceptar_vacante(vacante_id: int, db: AsyncSession = Depends(get_db)):
    return await _cambiar_estatus(db, vacante_id, Estatus.ACEPTADO)


@router.put("/{vacante_id}/rechazar", response_model=dict)
async def rechazar_vacante(vacante_id: int, db: AsyncSession = Depends(get_db)):
    return await _cambiar_estatus(db, vacante_id, Estatus.RECHAZADO)


@router.delete("/{vacante_id}", response_model=dict)
async def delete_vacante(vacante_id: int, db: AsyncSession = Depends(get_db)):
    """Elimina una vacante aceptada junto con sus postulaciones"""
    try:
        vacante_obj = await vacante_crud.get(db, code=vacante_id)
        if not vacante_obj:
            raise HTTPException(status_code=404, detail="Vacante no encontrada")
        if vacante_obj.estatus != Estatus.ACEPTADO.value:
            raise HTTPException(
                status_code=403, detail="Solo se pueden eliminar elementos aceptados"
            )
        await vacante_crud.eliminar_con_postulaciones(db, vacante_id)
        logger.info(f"🗑️ Vacante {vacante_id} eliminada con sus postulaciones")
        return ResponseFormatter.success(
            None, "Vacante y sus postulaciones eliminadas correctamente"
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Error eliminando vacante {vacante_id}: {e}")
        raise HTTPException(status_code=500, detail="Error al eliminar la vacante")
