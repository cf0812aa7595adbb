import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.errores import a_http_exception
from app.config.database import get_db
from app.core.archivos import leer_pdf
from app.core.exceptions import PracticasError
from app.crud.documento import formato as formato_crud
from app.schemas.documento import Formato
from app.utils.helpers import ResponseFormatter, codificar_base64

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/", response_model=dict, status_code=201)
async def subir_formato(archivo: UploadFile = File(...), db: AsyncSession = Depends(get_db)):
    try:
        contenido = await leer_pdf(archivo)
        nuevo = await formato_crud.subir(db, nombre_archivo=archivo.filename, archivo=contenido)
        return ResponseFormatter.success(
            {"documento_id": nuevo.documento_id}, "Formato subido con éxito"
        )
    except PracticasError as e:
        raise a_http_exception(e)
    except Exception as e:
        logger.error(f"❌ Error subiendo formato: {e}")
        raise HTTPException(status_code=500, detail="Error al guardar el formato")


@router.get("/", response_model=dict)
async def read_formatos(db: AsyncSession = Depends(get_db)):
    try:
        formatos = await formato_crud.get_all(db)
        data = [
            Formato(
                documento_id=f.documento_id,
                nombre_archivo=f.nombre_archivo,
                archivo=codificar_base64(f.archivo),
            ).model_dump()
            for f in formatos
        ]
        return ResponseFormatter.success(data)
    except Exception as e:
        logger.error(f"❌ Error obteniendo formatos: {e}")
        raise HTTPException(status_code=500, detail="Error al obtener los formatos")
