import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.errores import a_http_exception
from app.config.database import get_db
from app.core.archivos import leer_imagen
from app.core.duplicados import correo_duplicado, celular_duplicado
from app.core.exceptions import PracticasError, RegistroDuplicado
from app.crud.entidad import entidad as entidad_crud
from app.models.base import Estatus
from app.schemas.entidad import Entidad, EntidadCreate, EntidadResumen, EntidadUpdate
from app.utils.helpers import ResponseFormatter, codificar_base64

logger = logging.getLogger(__name__)

router = APIRouter()


def _resumen(e) -> dict:
    return EntidadResumen(
        entidad_id=e.entidad_id,
        nombre=e.nombre_entidad,
        estatus=e.estatus,
        logo_empresa=codificar_base64(e.foto_perfil, data_uri=True),
    ).model_dump()


@router.get("/", response_model=dict)
async def read_entidades(
    estatus: Optional[Estatus] = Query(default=None),
    db: AsyncSession = Depends(get_db),
):
    """Entidades por estatus; sin estatus devuelve las pendientes"""
    try:
        entidades = await entidad_crud.get_by_estatus(db, estatus.value if estatus else None)
        return ResponseFormatter.success([_resumen(e) for e in entidades])
    except Exception as e:
        logger.error(f"❌ Error obteniendo entidades: {e}")
        raise HTTPException(status_code=500, detail="Error en el servidor")


@router.get("/todas", response_model=dict)
async def read_todas_entidades(db: AsyncSession = Depends(get_db)):
    try:
        entidades = await entidad_crud.get_all_ordered(db)
        return ResponseFormatter.success([_resumen(e) for e in entidades])
    except Exception as e:
        logger.error(f"❌ Error obteniendo entidades: {e}")
        raise HTTPException(status_code=500, detail=f"Error en el servidor: {e}")


@router.get("/{entidad_id}", response_model=dict)
async def read_entidad(entidad_id: int, db: AsyncSession = Depends(get_db)):
    entidad_obj = await entidad_crud.get(db, code=entidad_id)
    if not entidad_obj:
        raise HTTPException(status_code=404, detail="No existe la entidad receptora")
    data = Entidad.model_validate(entidad_obj).model_dump(mode="json")
    data["foto_perfil"] = codificar_base64(entidad_obj.foto_perfil)
    return ResponseFormatter.success(data)


@router.post("/", response_model=dict, status_code=201)
async def create_entidad(
    nombre_entidad: str = Form(...),
    nombre_usuario: str = Form(...),
    direccion: str = Form(...),
    categoria: str = Form(...),
    correo: str = Form(...),
    password: str = Form(...),
    num_celular: str = Form(...),
    foto: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_db),
):
    """Registro de entidad receptora"""
    try:
        if await correo_duplicado(db, correo):
            raise RegistroDuplicado("El correo ya está registrado")
        if await celular_duplicado(db, num_celular):
            raise RegistroDuplicado("El número de celular ya está registrado")

        nueva = await entidad_crud.create(
            db,
            obj_in=EntidadCreate(
                nombre_entidad=nombre_entidad,
                nombre_usuario=nombre_usuario,
                direccion=direccion,
                categoria=categoria,
                correo=correo,
                contraseña=password,
                num_celular=num_celular,
                foto_perfil=await leer_imagen(foto),
            ),
        )
        logger.info(f"🏢 Entidad receptora registrada: {nueva.entidad_id}")
        return ResponseFormatter.success(
            {"insert_id": nueva.entidad_id}, "Entidad receptora registrada con éxito"
        )
    except PracticasError as e:
        raise a_http_exception(e)
    except IntegrityError as e:
        await db.rollback()
        raise HTTPException(status_code=400, detail=str(e.orig))
    except Exception as e:
        logger.error(f"❌ Error registrando entidad: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.put("/{entidad_id}", response_model=dict)
async def update_entidad(
    entidad_id: int,
    nombre_entidad: Optional[str] = Form(None),
    nombre_usuario: Optional[str] = Form(None),
    direccion: Optional[str] = Form(None),
    categoria: Optional[str] = Form(None),
    correo: Optional[str] = Form(None),
    num_celular: Optional[str] = Form(None),
    foto: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_db),
):
    try:
        cambios = EntidadUpdate(
            nombre_entidad=nombre_entidad or None,
            nombre_usuario=nombre_usuario or None,
            direccion=direccion or None,
            categoria=categoria or None,
            correo=correo or None,
            num_celular=num_celular or None,
            foto_perfil=await leer_imagen(foto),
        ).model_dump(exclude_none=True)
        if not cambios:
            raise HTTPException(status_code=400, detail="No hay campos para actualizar")

        entidad_obj = await entidad_crud.get(db, code=entidad_id)
        if not entidad_obj:
            raise HTTPException(status_code=404, detail="No existe la entidad receptora")
        if "correo" in cambios and await correo_duplicado(db, cambios["correo"], entidad_id):
            raise RegistroDuplicado("El correo ya está registrado")
        if "num_celular" in cambios and await celular_duplicado(
            db, cambios["num_celular"], entidad_id
        ):
            raise RegistroDuplicado("El número de celular ya está registrado")

        await entidad_crud.update(db, db_obj=entidad_obj, obj_in=cambios)
        return ResponseFormatter.success(None, "Entidad actualizada con éxito")
    except HTTPException:
        raise
    except PracticasError as e:
        raise a_http_exception(e)
    except Exception as e:
        logger.error(f"❌ Error actualizando entidad {entidad_id}: {e}")
        raise HTTPException(status_code=500, detail="Error en el servidor")


async def _cambiar_estatus(db: AsyncSession, entidad_id: int, estatus: Estatus) -> dict:
    try:
        filas = await entidad_crud.actualizar_campos(db, entidad_id, estatus=estatus.value)
        if filas == 0:
            await db.rollback()
            raise HTTPException(status_code=404, detail="No existe la entidad receptora")
        await db.commit()
        mensaje = "aceptada" if estatus == Estatus.ACEPTADO else "rechazada"
        return ResponseFormatter.success(None, f"Entidad {mensaje} con éxito")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Error cambiando estatus de la entidad {entidad_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error en el servidor: {e}")


@router.put("/{entidad_id}/aceptar", response_model=dict)
async def aceptar_entidad(entidad_id: int, db: AsyncSession = Depends(get_db)):
    return await _cambiar_estatus(db, entidad_id, Estatus.ACEPTADO)


@router.put("/{entidad_id}/rechazar", response_model=dict)
async def rechazar_entidad(entidad_id: int, db: AsyncSession = Depends(get_db)):
    return await _cambiar_estatus(db, entidad_id, Estatus.RECHAZADO)


@router.delete("/{entidad_id}", response_model=dict)
async def delete_entidad(entidad_id: int, db: AsyncSession = Depends(get_db)):
    """Solo se eliminan entidades aceptadas"""
    try:
        entidad_obj = await entidad_crud.get(db, code=entidad_id)
        if not entidad_obj:
            raise HTTPException(status_code=404, detail="No existe la entidad receptora")
        if entidad_obj.estatus != Estatus.ACEPTADO.value:
            raise HTTPException(
                status_code=403, detail="Solo se pueden eliminar elementos aceptados"
            )
        await entidad_crud.eliminar(db, entidad_id)
        await db.commit()
        return ResponseFormatter.success(None, "Entidad eliminada con éxito")
    except HTTPException:
        raise
    except IntegrityError:
        await db.rollback()
        raise HTTPException(
            status_code=409,
            detail="La entidad tiene asesores, vacantes o prácticas registradas",
        )
    except Exception as e:
        logger.error(f"❌ Error eliminando entidad {entidad_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error en el servidor: {e}")
