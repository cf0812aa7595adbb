import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.errores import a_http_exception
from app.config.database import get_db
from app.core.archivos import leer_imagen
from app.core.duplicados import correo_duplicado, celular_duplicado
from app.core.exceptions import PracticasError, RegistroDuplicado
from app.crud.asesor import asesor_interno as asesor_interno_crud
from app.crud.asesor import asesor_externo as asesor_externo_crud
from app.crud.entidad import entidad as entidad_crud
from app.schemas.asesor import (
    AsesorInterno,
    AsesorInternoCreate,
    AsesorInternoResumen,
    AsesorInternoUpdate,
    AsesorExterno,
    AsesorExternoCreate,
)
from app.utils.helpers import ResponseFormatter, codificar_base64

logger = logging.getLogger(__name__)

internos_router = APIRouter()
externos_router = APIRouter()


async def _verificar_contacto(db: AsyncSession, correo: str, num_celular: str, excluir_id=None):
    if correo and await correo_duplicado(db, correo, excluir_id):
        raise RegistroDuplicado("El correo ya está registrado")
    if num_celular and await celular_duplicado(db, num_celular, excluir_id):
        raise RegistroDuplicado("El número de celular ya está registrado")


# ------------------------------ Asesores internos ------------------------------


@internos_router.get("/", response_model=dict)
async def read_asesores_internos(db: AsyncSession = Depends(get_db)):
    try:
        asesores = await asesor_interno_crud.get_all_ordered(db)
        data = [
            AsesorInternoResumen(
                asesor_interno_id=a.asesor_interno_id, nombre_completo=a.nombre_completo
            ).model_dump()
            for a in asesores
        ]
        return ResponseFormatter.success(data)
    except Exception as e:
        logger.error(f"❌ Error obteniendo asesores internos: {e}")
        raise HTTPException(status_code=500, detail=f"Error en el servidor: {e}")


@internos_router.get("/{asesor_interno_id}", response_model=dict)
async def read_asesor_interno(asesor_interno_id: int, db: AsyncSession = Depends(get_db)):
    asesor = await asesor_interno_crud.get(db, code=asesor_interno_id)
    if not asesor:
        raise HTTPException(status_code=404, detail="No existe el asesor interno")
    data = AsesorInterno.model_validate(asesor).model_dump(mode="json")
    data["foto_perfil"] = codificar_base64(asesor.foto_perfil)
    return ResponseFormatter.success(data)


@internos_router.post("/", response_model=dict, status_code=201)
async def create_asesor_interno(
    nombre: str = Form(...),
    apellido_paterno: str = Form(...),
    apellido_materno: str = Form(...),
    correo: str = Form(...),
    password: str = Form(...),
    num_celular: str = Form(...),
    foto: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_db),
):
    try:
        await _verificar_contacto(db, correo, num_celular)
        nuevo = await asesor_interno_crud.create(
            db,
            obj_in=AsesorInternoCreate(
                nombre=nombre,
                apellido_paterno=apellido_paterno,
                apellido_materno=apellido_materno,
                correo=correo,
                contraseña=password,
                num_celular=num_celular,
                foto_perfil=await leer_imagen(foto),
            ),
        )
        return ResponseFormatter.success(
            {"insert_id": nuevo.asesor_interno_id}, "Asesor interno registrado con éxito"
        )
    except PracticasError as e:
        raise a_http_exception(e)
    except IntegrityError as e:
        await db.rollback()
        raise HTTPException(status_code=400, detail=str(e.orig))
    except Exception as e:
        logger.error(f"❌ Error registrando asesor interno: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@internos_router.put("/{asesor_interno_id}", response_model=dict)
async def update_asesor_interno(
    asesor_interno_id: int,
    nombre: Optional[str] = Form(None),
    apellido_paterno: Optional[str] = Form(None),
    apellido_materno: Optional[str] = Form(None),
    correo: Optional[str] = Form(None),
    num_celular: Optional[str] = Form(None),
    foto: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_db),
):
    try:
        cambios = AsesorInternoUpdate(
            nombre=nombre or None,
            apellido_paterno=apellido_paterno or None,
            apellido_materno=apellido_materno or None,
            correo=correo or None,
            num_celular=num_celular or None,
            foto_perfil=await leer_imagen(foto),
        ).model_dump(exclude_none=True)
        if not cambios:
            raise HTTPException(status_code=400, detail="No hay campos para actualizar")

        asesor = await asesor_interno_crud.get(db, code=asesor_interno_id)
        if not asesor:
            raise HTTPException(status_code=404, detail="No existe el asesor interno")
        await _verificar_contacto(
            db, cambios.get("correo"), cambios.get("num_celular"), asesor_interno_id
        )

        await asesor_interno_crud.update(db, db_obj=asesor, obj_in=cambios)
        return ResponseFormatter.success(None, "Asesor interno actualizado con éxito")
    except HTTPException:
        raise
    except PracticasError as e:
        raise a_http_exception(e)
    except Exception as e:
        logger.error(f"❌ Error actualizando asesor interno {asesor_interno_id}: {e}")
        raise HTTPException(status_code=500, detail="Error en el servidor")


# ------------------------------ Asesores externos ------------------------------


@externos_router.get("/{asesor_externo_id}", response_model=dict)
async def read_asesor_externo(asesor_externo_id: int, db: AsyncSession = Depends(get_db)):
    asesor = await asesor_externo_crud.get(db, code=asesor_externo_id)
    if not asesor:
        raise HTTPException(status_code=404, detail="No existe el asesor externo")
    data = AsesorExterno.model_validate(asesor).model_dump(mode="json")
    data["foto_perfil"] = codificar_base64(asesor.foto_perfil)
    return ResponseFormatter.success(data)


@externos_router.post("/", response_model=dict, status_code=201)
async def create_asesor_externo(
    nombre: str = Form(...),
    apellido_paterno: str = Form(...),
    apellido_materno: str = Form(...),
    correo: str = Form(...),
    password: str = Form(...),
    num_celular: str = Form(...),
    entidad_id: int = Form(...),
    foto: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_db),
):
    try:
        if not await entidad_crud.get(db, code=entidad_id):
            raise HTTPException(status_code=404, detail="No existe la entidad receptora")
        await _verificar_contacto(db, correo, num_celular)
        nuevo = await asesor_externo_crud.create(
            db,
            obj_in=AsesorExternoCreate(
                nombre=nombre,
                apellido_paterno=apellido_paterno,
                apellido_materno=apellido_materno,
                correo=correo,
                contraseña=password,
                num_celular=num_celular,
                entidad_id=entidad_id,
                foto_perfil=await leer_imagen(foto),
            ),
        )
        return ResponseFormatter.success(
            {"insert_id": nuevo.asesor_externo_id}, "Asesor externo registrado con éxito"
        )
    except HTTPException:
        raise
    except PracticasError as e:
        raise a_http_exception(e)
    except IntegrityError as e:
        await db.rollback()
        raise HTTPException(status_code=400, detail=str(e.orig))
    except Exception as e:
        logger.error(f"❌ Error registrando asesor externo: {e}")
        raise HTTPException(status_code=500, detail=str(e))
