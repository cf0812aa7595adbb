from fastapi import HTTPException, status

from app.core.exceptions import (
    PracticasError,
    RegistroNoEncontrado,
    FalloTransaccion,
    OperacionNoPermitida,
    RegistroDuplicado,
    PracticaActivaExistente,
    ArchivoInvalido,
    CredencialesInvalidas,
)

CODIGOS_HTTP = [
    (RegistroNoEncontrado, status.HTTP_404_NOT_FOUND),
    (OperacionNoPermitida, status.HTTP_403_FORBIDDEN),
    (RegistroDuplicado, status.HTTP_409_CONFLICT),
    (PracticaActivaExistente, status.HTTP_409_CONFLICT),
    (ArchivoInvalido, status.HTTP_400_BAD_REQUEST),
    (CredencialesInvalidas, status.HTTP_401_UNAUTHORIZED),
    (FalloTransaccion, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def a_http_exception(error: PracticasError) -> HTTPException:
    """Traduce un error de dominio a la respuesta HTTP correspondiente"""
    for tipo, codigo in CODIGOS_HTTP:
        if isinstance(error, tipo):
            return HTTPException(status_code=codigo, detail=str(error))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(error))
