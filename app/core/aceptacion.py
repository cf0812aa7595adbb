"""
Aceptación y rechazo de postulaciones.

Aceptar una postulación la convierte en una práctica profesional: se crea la
práctica con los datos de la vacante, se eliminan todas las postulaciones del
alumno y se elimina la vacante. Todo ocurre en una sola transacción sobre la
sesión recibida; quien la abrió es responsable de cerrarla.
"""
import logging
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import (
    PracticasError,
    PostulacionNoEncontrada,
    PracticaActivaExistente,
    FalloTransaccion,
)
from app.crud.alumno import alumno as alumno_crud
from app.crud.postulacion import postulacion as postulacion_crud
from app.crud.practica import practica as practica_crud
from app.crud.vacante import vacante as vacante_crud
from app.models.practica import Practica, EstadoPractica
from app.utils.helpers import normalizar_fecha

logger = logging.getLogger(__name__)


async def _bloquear_en_orden(db: AsyncSession, alumno_id: str, vacante_id: int) -> None:
    # Orden fijo para toda aceptación: alumno, vacante y luego postulaciones por id
    await alumno_crud.bloquear(db, alumno_id)
    await vacante_crud.bloquear(db, vacante_id)
    await postulacion_crud.bloquear_afectadas(db, alumno_id, vacante_id)


async def aceptar_postulacion(db: AsyncSession, postulacion_id: int) -> Practica:
    """
    Promueve la postulación a práctica profesional.

    Las claves de la postulación se leen sin bloqueo; después se bloquean el
    alumno, la vacante y las postulaciones afectadas, y la postulación se vuelve
    a leer. Si otra aceptación confirmó primero, esa lectura ya no la encuentra.

    Raises:
        PostulacionNoEncontrada: no existe la postulación (sin cambios).
        PracticaActivaExistente: el alumno ya tiene una práctica iniciada (sin cambios).
        FalloTransaccion: falló alguna escritura; todo se revirtió.
    """
    try:
        claves = await postulacion_crud.get_claves(db, postulacion_id)
        if claves is None:
            raise PostulacionNoEncontrada(postulacion_id)

        await _bloquear_en_orden(db, claves.alumno_id, claves.vacante_id)
        datos = await postulacion_crud.get_para_aceptacion(db, postulacion_id)
        if datos is None:
            raise PostulacionNoEncontrada(postulacion_id)

        if await practica_crud.get_activa_de_alumno(db, datos.alumno_id) is not None:
            raise PracticaActivaExistente(datos.alumno_id)

        practica = await practica_crud.registrar(
            db,
            alumno_id=datos.alumno_id,
            entidad_id=datos.entidad_id,
            asesor_externo_id=datos.asesor_externo_id,
            fecha_inicio=normalizar_fecha(datos.fecha_inicio),
            fecha_fin=normalizar_fecha(datos.fecha_final),
            titulo_vacante=datos.titulo_vacante,
            fecha_creacion=datetime.now(),
            estado=EstadoPractica.INICIADA.value,
        )

        # El alumno colocado deja de competir por cualquier otra vacante
        eliminadas = await postulacion_crud.eliminar_por_alumno(db, datos.alumno_id)
        await vacante_crud.eliminar(db, datos.vacante_id)

        await db.commit()
    except PracticasError:
        await db.rollback()
        raise
    except Exception as e:
        await db.rollback()
        logger.error(f"❌ Error aceptando postulación {postulacion_id}, cambios revertidos: {e}")
        raise FalloTransaccion(
            f"Error en el servidor al registrar la práctica profesional: {e}"
        ) from e

    logger.info(
        f"✅ Postulación {postulacion_id} aceptada: práctica {practica.practica_id} "
        f"para {datos.alumno_id}, {eliminadas} postulaciones y vacante {datos.vacante_id} eliminadas"
    )
    return practica


async def rechazar_postulacion(db: AsyncSession, postulacion_id: int) -> None:
    """Elimina únicamente la postulación indicada."""
    try:
        eliminadas = await postulacion_crud.eliminar(db, postulacion_id)
        if eliminadas == 0:
            raise PostulacionNoEncontrada(postulacion_id)
        await db.commit()
    except PracticasError:
        await db.rollback()
        raise
    except Exception as e:
        await db.rollback()
        logger.error(f"❌ Error rechazando postulación {postulacion_id}: {e}")
        raise FalloTransaccion(
            f"Error en el servidor al eliminar la postulación: {e}"
        ) from e

    logger.info(f"🗑️ Postulación {postulacion_id} rechazada")
