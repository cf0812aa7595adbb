"""
Verificación de correos y celulares repetidos entre todos los tipos de usuario.

Un correo o número de celular identifica a una sola persona en todo el
sistema, sin importar si es alumno, asesor, entidad o administrador.
"""
from typing import Any, Optional

from sqlalchemy import Integer, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Alumno, AsesorInterno, AsesorExterno, EntidadReceptora, Administrador

# (modelo, columna de clave primaria)
TABLAS_USUARIO = [
    (EntidadReceptora, EntidadReceptora.entidad_id),
    (Alumno, Alumno.num_control),
    (AsesorInterno, AsesorInterno.asesor_interno_id),
    (AsesorExterno, AsesorExterno.asesor_externo_id),
    (Administrador, Administrador.admin_id),
]

CAMPOS_VERIFICABLES = ("correo", "num_celular")


def _condicion_exclusion(columna_pk, excluir_id: Any):
    if excluir_id is None or excluir_id == "":
        return None
    if isinstance(columna_pk.type, Integer):
        try:
            return columna_pk != int(excluir_id)
        except (TypeError, ValueError):
            # Un id no numérico nunca coincide con una clave entera
            return None
    return columna_pk != str(excluir_id)


async def existe_duplicado(
    db: AsyncSession, campo: str, valor: Any, excluir_id: Optional[Any] = None
) -> bool:
    """True si algún usuario (distinto de excluir_id) ya usa ese valor"""
    if campo not in CAMPOS_VERIFICABLES:
        raise ValueError(f"Campo no verificable: {campo}")
    if valor is None or valor == "":
        return False

    for modelo, columna_pk in TABLAS_USUARIO:
        query = select(columna_pk).where(getattr(modelo, campo) == valor)
        exclusion = _condicion_exclusion(columna_pk, excluir_id)
        if exclusion is not None:
            query = query.where(exclusion)
        result = await db.execute(query.limit(1))
        if result.first() is not None:
            return True
    return False


async def correo_duplicado(
    db: AsyncSession, correo: str, excluir_id: Optional[Any] = None
) -> bool:
    return await existe_duplicado(db, "correo", correo, excluir_id)


async def celular_duplicado(
    db: AsyncSession, num_celular: str, excluir_id: Optional[Any] = None
) -> bool:
    return await existe_duplicado(db, "num_celular", num_celular, excluir_id)
