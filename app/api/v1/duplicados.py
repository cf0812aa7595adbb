import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.config.database import get_db
from app.core.duplicados import correo_duplicado, celular_duplicado
from app.schemas.auth import VerificarDuplicado

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/correo")
async def verificar_correo(datos: VerificarDuplicado, db: AsyncSession = Depends(get_db)):
    try:
        return {"exists": await correo_duplicado(db, datos.valor, datos.excluir_id)}
    except Exception as e:
        logger.error(f"❌ Error verificando correo: {e}")
        raise HTTPException(status_code=500, detail="Error en el servidor")


@router.post("/celular")
async def verificar_celular(datos: VerificarDuplicado, db: AsyncSession = Depends(get_db)):
    try:
        return {"exists": await celular_duplicado(db, datos.valor, datos.excluir_id)}
    except Exception as e:
        logger.error(f"❌ Error verificando número de celular: {e}")
        raise HTTPException(status_code=500, detail="Error en el servidor")
