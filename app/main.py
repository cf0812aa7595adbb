import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config.database import init_db, close_db, get_db
from app.config.settings import settings
from app.core.seeder import run_seeder
from app.models import AsesorInterno

# Import routers
from app.api.auth import router as auth_router
from app.api.v1.alumnos import router as alumnos_router
from app.api.v1.asesores import internos_router, externos_router
from app.api.v1.entidades import router as entidades_router
from app.api.v1.vacantes import router as vacantes_router
from app.api.v1.postulaciones import router as postulaciones_router
from app.api.v1.practicas import router as practicas_router
from app.api.v1.documentos import router as documentos_router
from app.api.v1.formatos import router as formatos_router
from app.api.v1.duplicados import router as duplicados_router

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("🚀 Iniciando Sistema de Prácticas Profesionales...")

    # 1. Inicializar base de datos
    try:
        await init_db()
        logger.info("✅ Base de datos inicializada correctamente")
    except Exception as db_error:
        logger.error(f"❌ Error crítico en base de datos: {db_error}")
        raise

    # 2. Datos iniciales opcionales
    if settings.run_seeder:
        try:
            if await run_seeder():
                logger.info("✅ Datos iniciales creados")
        except Exception as seed_error:
            logger.warning(f"⚠️ Error en seeding (continuando): {seed_error}")

    logger.info("🎉 Sistema listo")

    yield

    logger.info("🔄 Cerrando sistema...")
    await close_db()


app = FastAPI(
    title="Sistema de Prácticas Profesionales API",
    description="""
    ## Sistema de Prácticas Profesionales 🎓

    Vinculación de alumnos con vacantes de entidades receptoras.

    ### **Flujo principal:**
    - 🏢 La entidad publica una vacante y el administrador la acepta
    - 📨 El alumno se postula con su carta de presentación
    - ✅ La entidad acepta la postulación y se registra la práctica profesional
    - 📄 El alumno entrega sus documentos y el asesor los revisa
    """,
    version="1.0.0",
    debug=settings.debug,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_hosts,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router, prefix="/auth", tags=["🔐 Autenticación"])
app.include_router(alumnos_router, prefix="/api/v1/alumnos", tags=["👨‍🎓 Alumnos"])
app.include_router(
    internos_router, prefix="/api/v1/asesores-internos", tags=["👨‍🏫 Asesores internos"]
)
app.include_router(
    externos_router, prefix="/api/v1/asesores-externos", tags=["👔 Asesores externos"]
)
app.include_router(
    entidades_router, prefix="/api/v1/entidades", tags=["🏢 Entidades receptoras"]
)
app.include_router(vacantes_router, prefix="/api/v1/vacantes", tags=["📌 Vacantes"])
app.include_router(
    postulaciones_router, prefix="/api/v1/postulaciones", tags=["📨 Postulaciones"]
)
app.include_router(practicas_router, prefix="/api/v1/practicas", tags=["💼 Prácticas"])
app.include_router(documentos_router, prefix="/api/v1/documentos", tags=["📄 Documentos"])
app.include_router(formatos_router, prefix="/api/v1/formatos", tags=["📋 Formatos"])
app.include_router(duplicados_router, prefix="/api/v1/duplicados", tags=["🔎 Duplicados"])


@app.get("/", tags=["🏠 General"])
async def root():
    """Información general del sistema"""
    return {
        "message": "Sistema de Prácticas Profesionales API",
        "status": "running",
        "environment": settings.environment,
        "docs": "/docs",
    }


@app.get("/health", tags=["🏠 General"])
async def health_check():
    return {"status": "healthy"}


@app.get("/test-connection", tags=["🏠 General"])
async def test_db_connection(db: AsyncSession = Depends(get_db)):
    """Verifica la conexión contando los asesores internos"""
    try:
        result = await db.execute(select(func.count(AsesorInterno.asesor_interno_id)))
        return {"message": "Conexión exitosa", "asesores_internos": result.scalar()}
    except Exception as e:
        logger.error(f"❌ Error probando la conexión: {e}")
        raise HTTPException(status_code=500, detail="Error de conexión a la base de datos")
