import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, Response, UploadFile
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.errores import a_http_exception
from app.config.database import get_db
from app.core.archivos import leer_imagen
from app.core.duplicados import correo_duplicado, celular_duplicado
from app.core.exceptions import PracticasError, RegistroDuplicado
from app.crud.alumno import alumno as alumno_crud
from app.models.base import Estatus
from app.schemas.alumno import Alumno, AlumnoCreate, AlumnoResumen, AlumnoUpdate
from app.utils.helpers import ResponseFormatter, codificar_base64

logger = logging.getLogger(__name__)

router = APIRouter()


def _resumen(a) -> dict:
    return AlumnoResumen(
        num_control=a.num_control,
        nombre=a.nombre_completo,
        estatus=a.estatus,
        turno=a.turno,
        carrera=a.carrera,
        foto_perfil=codificar_base64(a.foto_perfil, data_uri=True),
    ).model_dump()


def _detalle(a) -> dict:
    data = Alumno.model_validate(a).model_dump(mode="json")
    data["foto_perfil"] = codificar_base64(a.foto_perfil)
    return data


@router.get("/", response_model=dict)
async def read_alumnos(
    estatus: Optional[Estatus] = Query(default=None),
    asesor_interno_id: Optional[int] = Query(default=None),
    db: AsyncSession = Depends(get_db),
):
    """Alumnos por estatus; sin estatus devuelve los pendientes de revisión"""
    try:
        alumnos = await alumno_crud.get_by_estatus(
            db, estatus.value if estatus else None, asesor_interno_id
        )
        if not alumnos:
            raise HTTPException(status_code=404, detail="No se encontraron alumnos")
        return ResponseFormatter.success([_resumen(a) for a in alumnos])
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Error obteniendo alumnos: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/asesor/{asesor_interno_id}", response_model=dict)
async def read_alumnos_de_asesor(
    asesor_interno_id: int, db: AsyncSession = Depends(get_db)
):
    """Alumnos asignados a un asesor interno"""
    try:
        alumnos = await alumno_crud.get_by_asesor(db, asesor_interno_id)
        if not alumnos:
            raise HTTPException(status_code=404, detail="No se encontraron alumnos")
        return ResponseFormatter.success([_resumen(a) for a in alumnos])
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Error obteniendo alumnos del asesor {asesor_interno_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{num_control}", response_model=dict)
async def read_alumno(num_control: str, db: AsyncSession = Depends(get_db)):
    try:
        alumno_obj = await alumno_crud.get(db, code=num_control)
        if not alumno_obj:
            raise HTTPException(status_code=404, detail="No existe el alumno")
        return ResponseFormatter.success(_detalle(alumno_obj))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Error obteniendo alumno {num_control}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{num_control}/foto")
async def read_foto_alumno(num_control: str, db: AsyncSession = Depends(get_db)):
    alumno_obj = await alumno_crud.get(db, code=num_control)
    if not alumno_obj or not alumno_obj.foto_perfil:
        raise HTTPException(status_code=404, detail="Imagen no encontrada")
    return Response(content=alumno_obj.foto_perfil, media_type="image/jpeg")


@router.post("/", response_model=dict, status_code=201)
async def create_alumno(
    num_control: str = Form(...),
    nombre: str = Form(...),
    apellido_paterno: str = Form(...),
    apellido_materno: str = Form(...),
    fecha_nacimiento: date = Form(...),
    carrera: str = Form(...),
    semestre: int = Form(...),
    turno: str = Form(...),
    correo: str = Form(...),
    password: str = Form(...),
    num_celular: str = Form(...),
    asesor_interno_id: Optional[int] = Form(None),
    foto: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_db),
):
    """Registro de alumno"""
    try:
        if await alumno_crud.get(db, code=num_control):
            raise RegistroDuplicado(f"Ya existe un alumno con número de control {num_control}")
        if await correo_duplicado(db, correo):
            raise RegistroDuplicado("El correo ya está registrado")
        if await celular_duplicado(db, num_celular):
            raise RegistroDuplicado("El número de celular ya está registrado")

        obj_in = AlumnoCreate(
            num_control=num_control,
            nombre=nombre,
            apellido_paterno=apellido_paterno,
            apellido_materno=apellido_materno,
            fecha_nacimiento=fecha_nacimiento,
            carrera=carrera,
            semestre=semestre,
            turno=turno,
            correo=correo,
            contraseña=password,
            num_celular=num_celular,
            asesor_interno_id=asesor_interno_id,
            foto_perfil=await leer_imagen(foto),
        )
        nuevo = await alumno_crud.create(db, obj_in=obj_in)
        logger.info(f"👨‍🎓 Alumno registrado: {nuevo.num_control}")
        return ResponseFormatter.success(
            {"num_control": nuevo.num_control}, "Alumno registrado con éxito"
        )
    except PracticasError as e:
        raise a_http_exception(e)
    except IntegrityError as e:
        await db.rollback()
        raise HTTPException(status_code=400, detail=str(e.orig))
    except Exception as e:
        logger.error(f"❌ Error registrando alumno {num_control}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.put("/{num_control}", response_model=dict)
async def update_alumno(
    num_control: str,
    nombre: Optional[str] = Form(None),
    apellido_paterno: Optional[str] = Form(None),
    apellido_materno: Optional[str] = Form(None),
    fecha_nacimiento: Optional[date] = Form(None),
    carrera: Optional[str] = Form(None),
    semestre: Optional[int] = Form(None),
    turno: Optional[str] = Form(None),
    correo: Optional[str] = Form(None),
    num_celular: Optional[str] = Form(None),
    foto: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_db),
):
    """Actualiza solo los campos enviados"""
    try:
        cambios = AlumnoUpdate(
            nombre=nombre or None,
            apellido_paterno=apellido_paterno or None,
            apellido_materno=apellido_materno or None,
            fecha_nacimiento=fecha_nacimiento,
            carrera=carrera or None,
            semestre=semestre,
            turno=turno or None,
            correo=correo or None,
            num_celular=num_celular or None,
            foto_perfil=await leer_imagen(foto),
        ).model_dump(exclude_none=True)
        if not cambios:
            raise HTTPException(status_code=400, detail="No hay campos para actualizar")

        alumno_obj = await alumno_crud.get(db, code=num_control)
        if not alumno_obj:
            raise HTTPException(status_code=404, detail="No existe el alumno")
        if "correo" in cambios and await correo_duplicado(db, cambios["correo"], num_control):
            raise RegistroDuplicado("El correo ya está registrado")
        if "num_celular" in cambios and await celular_duplicado(
            db, cambios["num_celular"], num_control
        ):
            raise RegistroDuplicado("El número de celular ya está registrado")

        await alumno_crud.update(db, db_obj=alumno_obj, obj_in=cambios)
        return ResponseFormatter.success(None, "Alumno actualizado con éxito")
    except HTTPException:
        raise
    except PracticasError as e:
        raise a_http_exception(e)
    except Exception as e:
        logger.error(f"❌ Error actualizando alumno {num_control}: {e}")
        raise HTTPException(status_code=500, detail="Error en el servidor")


async def _cambiar_estatus(db: AsyncSession, num_control: str, estatus: Estatus) -> dict:
    try:
        filas = await alumno_crud.actualizar_campos(db, num_control, estatus=estatus.value)
        if filas == 0:
            await db.rollback()
            raise HTTPException(status_code=404, detail="No existe el alumno")
        await db.commit()
        return ResponseFormatter.success(None, f"Alumno {estatus.value.lower()} con éxito")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Error cambiando estatus del alumno {num_control}: {e}")
        raise HTTPException(status_code=500, detail=f"Error en el servidor: {e}")


@router.put("/{num_control}/aceptar", response_model=dict)
async def aceptar_alumno(num_control: str, db: AsyncSession = Depends(get_db)):
    return await _cambiar_estatus(db, num_control, Estatus.ACEPTADO)


@router.put("/{num_control}/rechazar", response_model=dict)
async def rechazar_alumno(num_control: str, db: AsyncSession = Depends(get_db)):
    return await _cambiar_estatus(db, num_control, Estatus.RECHAZADO)


@router.delete("/{num_control}", response_model=dict)
async def delete_alumno(num_control: str, db: AsyncSession = Depends(get_db)):
    """Solo se eliminan alumnos aceptados"""
    try:
        alumno_obj = await alumno_crud.get(db, code=num_control)
        if not alumno_obj:
            raise HTTPException(status_code=404, detail="No existe el alumno")
        if alumno_obj.estatus != Estatus.ACEPTADO.value:
            raise HTTPException(
                status_code=403, detail="Solo se pueden eliminar elementos aceptados"
            )
        await alumno_crud.eliminar(db, num_control)
        await db.commit()
        return ResponseFormatter.success(None, "Alumno eliminado con éxito")
    except HTTPException:
        raise
    except IntegrityError:
        await db.rollback()
        raise HTTPException(
            status_code=409, detail="El alumno tiene prácticas profesionales registradas"
        )
    except Exception as e:
        logger.error(f"❌ Error eliminando alumno {num_control}: {e}")
        raise HTTPException(status_code=500, detail=f"Error en el servidor: {e}")
