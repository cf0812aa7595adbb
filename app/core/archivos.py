from typing import Optional

from fastapi import UploadFile

from app.config.settings import settings
from app.core.exceptions import ArchivoInvalido

TIPOS_IMAGEN = {"image/jpeg", "image/png", "image/jpg"}
TIPO_PDF = "application/pdf"


async def _leer_con_limite(archivo: UploadFile, limite_mb: int) -> bytes:
    contenido = await archivo.read()
    if len(contenido) > limite_mb * 1024 * 1024:
        raise ArchivoInvalido(f"El tamaño del archivo no debe exceder {limite_mb} MB")
    return contenido


async def leer_imagen(archivo: Optional[UploadFile]) -> Optional[bytes]:
    """Foto de perfil opcional (JPG, JPEG o PNG)"""
    if archivo is None or not archivo.filename:
        return None
    if archivo.content_type not in TIPOS_IMAGEN:
        raise ArchivoInvalido(
            "Formato de archivo no permitido. Solo se permiten archivos JPG, JPEG y PNG."
        )
    return await _leer_con_limite(archivo, settings.max_image_size_mb)


async def leer_pdf(archivo: Optional[UploadFile]) -> bytes:
    """Documento PDF obligatorio"""
    if archivo is None or not archivo.filename:
        raise ArchivoInvalido("Se requiere un archivo PDF")
    if archivo.content_type != TIPO_PDF:
        raise ArchivoInvalido("Formato de archivo no permitido. Solo se permiten archivos PDF.")
    contenido = await _leer_con_limite(archivo, settings.max_pdf_size_mb)
    if not contenido:
        raise ArchivoInvalido("El archivo PDF está vacío")
    return contenido
