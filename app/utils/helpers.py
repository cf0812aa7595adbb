import base64
from typing import Optional, Dict, Any, Union
from datetime import date, datetime, timezone


def normalizar_fecha(valor: Union[date, datetime, str, None]) -> Optional[date]:
    """
    Reduce una fecha a día calendario, sin hora ni zona horaria.

    Acepta objetos date/datetime y cadenas ISO ("2024-03-01",
    "2024-03-01T00:00:00", "2024-03-01T06:00:00.000Z"). Los datetime con zona
    horaria se convierten a UTC antes de tomar la fecha.
    """
    if valor is None:
        return None
    if isinstance(valor, datetime):
        if valor.tzinfo is not None:
            valor = valor.astimezone(timezone.utc)
        return valor.date()
    if isinstance(valor, date):
        return valor
    if isinstance(valor, str):
        texto = valor.strip()
        if len(texto) > 10 and texto[10] in ("T", " "):
            return normalizar_fecha(datetime.fromisoformat(texto.replace("Z", "+00:00")))
        return date.fromisoformat(texto)
    raise TypeError(f"Tipo de fecha no soportado: {type(valor).__name__}")


def codificar_base64(contenido: Optional[bytes], data_uri: bool = False) -> Optional[str]:
    """Codifica un blob en base64; con data_uri=True lo devuelve listo para <img src>"""
    if not contenido:
        return None
    codificado = base64.b64encode(contenido).decode("ascii")
    if data_uri:
        return f"data:image/jpeg;base64,{codificado}"
    return codificado


class ResponseFormatter:
    """Formateador de respuestas estándar"""

    @staticmethod
    def success(data: Any = None, message: str = "Operación exitosa") -> Dict[str, Any]:
        return {"success": True, "message": message, "data": data}

