import logging

from sqlalchemy import select, func

from app.config.database import async_session_factory
from app.core.security import get_password_hash
from app.models.asesor import AsesorInterno
from app.models.entidad import Administrador

logger = logging.getLogger(__name__)


async def seed_database(db) -> None:
    """Poblar la base de datos con las cuentas iniciales"""
    logger.info("🌱 Iniciando seeding de la base de datos...")

    db.add(
        Administrador(
            nombre="Administrador",
            correo="admin@practicas.edu.mx",
            contraseña=get_password_hash("admin123"),
            num_celular="0000000000",
        )
    )
    db.add(
        AsesorInterno(
            nombre="Laura",
            apellido_paterno="Méndez",
            apellido_materno="Ruiz",
            correo="laura.mendez@practicas.edu.mx",
            contraseña=get_password_hash("asesor123"),
            num_celular="0000000001",
        )
    )
    await db.commit()
    logger.info("✅ Administrador y asesor interno de ejemplo creados")


async def check_if_seeded(db) -> bool:
    """Verificar si la base de datos ya tiene datos"""
    result = await db.execute(select(func.count(Administrador.admin_id)))
    return result.scalar() > 0


async def run_seeder() -> bool:
    """Ejecutar el seeder solo si la base de datos está vacía"""
    async with async_session_factory() as db:
        if await check_if_seeded(db):
            logger.info("ℹ️ Base de datos ya contiene datos")
            return False
        await seed_database(db)
        return True
