import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy import text

from .settings import settings

logger = logging.getLogger(__name__)

# Create async engine with connection health checks
engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    future=True,
    pool_pre_ping=True,
    pool_recycle=1200,
    pool_size=10,
    max_overflow=20,
    pool_timeout=10,
    connect_args={
        "server_settings": {
            "application_name": "sistema_practicas",
        },
        "command_timeout": 60,
    },
)

# Create session factory
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=True,
    autocommit=False,
)

Base = declarative_base()


async def get_db() -> AsyncSession:
    """Get database session with proper error handling"""
    session = None
    try:
        session = async_session_factory()
        yield session
    except Exception:
        if session:
            await session.rollback()
        raise
    finally:
        if session:
            await session.close()


async def test_connection(max_retries: int = 5, delay: float = 2.0) -> bool:
    """Test database connection with retries"""
    for attempt in range(max_retries):
        try:
            async with async_session_factory() as session:
                await session.execute(text("SELECT 1"))
                await session.commit()
                logger.info(f"✅ Conexión a base de datos exitosa en intento {attempt + 1}")
                return True
        except Exception as e:
            logger.warning(f"⚠️ Intento de conexión {attempt + 1} fallido: {e}")
            if attempt < max_retries - 1:
                await asyncio.sleep(delay)
    logger.error("❌ Todos los intentos de conexión fallaron")
    return False


async def wait_for_db(max_wait: int = 60) -> bool:
    """Wait for database to be ready"""
    logger.info("⏳ Esperando a la base de datos...")
    start_time = asyncio.get_running_loop().time()

    while True:
        if await test_connection(max_retries=1):
            return True

        elapsed = asyncio.get_running_loop().time() - start_time
        if elapsed > max_wait:
            logger.error(f"❌ Tiempo agotado esperando la base de datos ({max_wait}s)")
            return False

        await asyncio.sleep(2)


async def init_db():
    """Initialize database tables with connection verification"""
    if not await wait_for_db():
        raise RuntimeError("La base de datos no está disponible")

    # Importar modelos para registrar las tablas en el metadata
    import app.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("📊 Tablas de base de datos inicializadas")
    return True


async def close_db():
    """Close database connections"""
    await engine.dispose()
    logger.info("🔌 Conexiones de base de datos cerradas")
