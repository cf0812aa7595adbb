import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, Response, UploadFile, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.errores import a_http_exception
from app.config.database import get_db
from app.core.aceptacion import aceptar_postulacion, rechazar_postulacion
from app.core.archivos import leer_pdf
from app.core.exceptions import PracticasError, PracticaActivaExistente, RegistroDuplicado
from app.crud.alumno import alumno as alumno_crud
from app.crud.postulacion import postulacion as postulacion_crud
from app.crud.practica import practica as practica_crud
from app.crud.vacante import vacante as vacante_crud
from app.schemas.postulacion import Postulacion, PostulacionConCarta, PostulacionCreate
from app.schemas.practica import Practica
from app.utils.helpers import ResponseFormatter, codificar_base64

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/", response_model=dict, status_code=201)
async def create_postulacion(
    alumno_id: str = Form(...),
    vacante_id: int = Form(...),
    carta: UploadFile = File(...),
    db: AsyncSession = Depends(get_db),
):
    """Postular a un alumno a una vacante con su carta de presentación en PDF"""
    try:
        contenido = await leer_pdf(carta)

        alumno_obj = await alumno_crud.get(db, code=alumno_id)
        if not alumno_obj:
            raise HTTPException(status_code=404, detail="Alumno no encontrado")
        if not await vacante_crud.get(db, code=vacante_id):
            raise HTTPException(status_code=404, detail="Vacante no encontrada")
        # Una aceptación en curso del mismo alumno termina antes de esta verificación
        await alumno_crud.bloquear(db, alumno_id)
        if await practica_crud.get_activa_de_alumno(db, alumno_id) is not None:
            raise PracticaActivaExistente(alumno_id)
        if await postulacion_crud.existe(db, alumno_id, vacante_id):
            raise RegistroDuplicado("El alumno ya se postuló a esta vacante")

        nueva = await postulacion_crud.create(
            db,
            obj_in=PostulacionCreate(
                alumno_id=alumno_id,
                vacante_id=vacante_id,
                nombre_alumno=alumno_obj.nombre_completo,
                correo_alumno=alumno_obj.correo,
                carta_presentacion=contenido,
            ),
        )
        logger.info(f"📨 Postulación {nueva.postulacion_id}: {alumno_id} -> vacante {vacante_id}")
        return ResponseFormatter.success(
            {"postulacion_id": nueva.postulacion_id}, "Postulación registrada con éxito"
        )
    except HTTPException:
        raise
    except PracticasError as e:
        raise a_http_exception(e)
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=409, detail="El alumno ya se postuló a esta vacante")
    except Exception as e:
        logger.error(f"❌ Error registrando postulación: {e}")
        raise HTTPException(status_code=500, detail="Error al registrar la postulación")


@router.get("/vacante/{vacante_id}", response_model=dict)
async def read_postulaciones_de_vacante(vacante_id: int, db: AsyncSession = Depends(get_db)):
    try:
        filas = await postulacion_crud.get_by_vacante(db, vacante_id)
        if not filas:
            raise HTTPException(
                status_code=404, detail="No se encontraron postulaciones para esta vacante"
            )
        data = []
        for postulacion_obj, vacante_titulo in filas:
            item = PostulacionConCarta(
                **Postulacion.model_validate(postulacion_obj).model_dump(),
                vacante_titulo=vacante_titulo,
                carta_presentacion=codificar_base64(postulacion_obj.carta_presentacion),
            )
            data.append(item.model_dump(mode="json"))
        return ResponseFormatter.success(data)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Error obteniendo postulaciones de la vacante {vacante_id}: {e}")
        raise HTTPException(status_code=500, detail="Error al obtener las postulaciones")


@router.get("/verificar/{alumno_id}/{vacante_id}", response_model=dict)
async def verificar_postulacion(
    alumno_id: str, vacante_id: int, db: AsyncSession = Depends(get_db)
):
    try:
        existe = await postulacion_crud.existe(db, alumno_id, vacante_id)
        return ResponseFormatter.success({"postulado": existe})
    except Exception as e:
        logger.error(f"❌ Error verificando postulación: {e}")
        raise HTTPException(status_code=500, detail="Error al verificar la postulación")


@router.get("/alumno/{alumno_id}", response_model=dict)
async def read_vacantes_postuladas(alumno_id: str, db: AsyncSession = Depends(get_db)):
    """Ids de las vacantes a las que el alumno se ha postulado"""
    try:
        vacantes = await postulacion_crud.get_vacantes_de_alumno(db, alumno_id)
        return ResponseFormatter.success(list(vacantes))
    except Exception as e:
        logger.error(f"❌ Error obteniendo postulaciones del alumno {alumno_id}: {e}")
        raise HTTPException(status_code=500, detail="Error al obtener las postulaciones")


@router.get("/{postulacion_id}/carta")
async def read_carta(postulacion_id: int, db: AsyncSession = Depends(get_db)):
    postulacion_obj = await postulacion_crud.get(db, code=postulacion_id)
    if not postulacion_obj:
        raise HTTPException(status_code=404, detail="Postulación no encontrada")
    return Response(
        content=postulacion_obj.carta_presentacion,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'inline; filename="carta_{postulacion_id}.pdf"'
        },
    )


@router.post("/{postulacion_id}/aceptar", response_model=dict, status_code=status.HTTP_201_CREATED)
async def aceptar(postulacion_id: int, db: AsyncSession = Depends(get_db)):
    """
    Acepta la postulación y registra la práctica profesional.

    Elimina todas las postulaciones del alumno y la vacante aceptada.
    """
    try:
        practica = await aceptar_postulacion(db, postulacion_id)
    except PracticasError as e:
        raise a_http_exception(e)

    return ResponseFormatter.success(
        Practica.model_validate(practica).model_dump(mode="json"),
        "Práctica profesional registrada, postulaciones y vacante eliminadas",
    )


@router.post("/{postulacion_id}/rechazar", response_model=dict)
async def rechazar(postulacion_id: int, db: AsyncSession = Depends(get_db)):
    try:
        await rechazar_postulacion(db, postulacion_id)
    except PracticasError as e:
        raise a_http_exception(e)

    return ResponseFormatter.success(None, "Postulación rechazada y eliminada")
