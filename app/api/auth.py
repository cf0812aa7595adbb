import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config.database import get_db
from app.core.exceptions import CredencialesInvalidas
from app.core.security import verify_password
from app.models import Alumno, AsesorInterno, AsesorExterno, EntidadReceptora
from app.schemas.alumno import Alumno as AlumnoSchema
from app.schemas.asesor import AsesorExterno as AsesorExternoSchema
from app.schemas.asesor import AsesorInterno as AsesorInternoSchema
from app.schemas.auth import Rol, UserLogin
from app.schemas.entidad import Entidad as EntidadSchema
from app.utils.helpers import ResponseFormatter, codificar_base64

logger = logging.getLogger(__name__)

router = APIRouter()

MODELOS_POR_ROL = {
    Rol.ALUMNO: (Alumno, AlumnoSchema),
    Rol.ENTIDAD: (EntidadReceptora, EntidadSchema),
    Rol.ASESOR_INTERNO: (AsesorInterno, AsesorInternoSchema),
    Rol.ASESOR_EXTERNO: (AsesorExterno, AsesorExternoSchema),
}


async def authenticate_user(db: AsyncSession, rol: Rol, correo: str, password: str):
    """Autenticar usuario del rol indicado por correo y contraseña"""
    modelo, _ = MODELOS_POR_ROL[rol]
    result = await db.execute(select(modelo).where(modelo.correo == correo))
    user = result.scalar_one_or_none()

    if not user or not verify_password(password, user.contraseña):
        raise CredencialesInvalidas("Correo o contraseña incorrectos")
    return user


@router.post("/login/{rol}", response_model=dict)
async def login(rol: Rol, user_data: UserLogin, db: AsyncSession = Depends(get_db)):
    """
    Verifica las credenciales y devuelve el registro del usuario.

    No se emiten tokens ni se abren sesiones.
    """
    try:
        user = await authenticate_user(db, rol, user_data.email, user_data.password)
    except CredencialesInvalidas as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    except Exception as e:
        logger.error(f"❌ Error en login ({rol.value}): {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error interno del servidor",
        )

    _, esquema = MODELOS_POR_ROL[rol]
    data = esquema.model_validate(user).model_dump(mode="json")
    data["foto_perfil"] = codificar_base64(user.foto_perfil)
    logger.info(f"🔐 Inicio de sesión de {rol.value}: {user.correo}")
    return ResponseFormatter.success(data, "Inicio de sesión exitoso")
