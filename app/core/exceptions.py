class PracticasError(Exception):
    """Error base del sistema de prácticas profesionales"""


class RegistroNoEncontrado(PracticasError):
    """El registro referenciado no existe; no se realizó ningún cambio"""

    def __init__(self, recurso: str, identificador):
        self.recurso = recurso
        self.identificador = identificador
        super().__init__(f"No se encontró {recurso} con id {identificador}")


class PostulacionNoEncontrada(RegistroNoEncontrado):
    def __init__(self, postulacion_id):
        super().__init__("la postulación", postulacion_id)


class FalloTransaccion(PracticasError):
    """Una escritura dentro de una transacción falló y todo se revirtió"""


class OperacionNoPermitida(PracticasError):
    pass


class RegistroDuplicado(PracticasError):
    pass


class PracticaActivaExistente(PracticasError):
    def __init__(self, alumno_id: str):
        self.alumno_id = alumno_id
        super().__init__(f"El alumno {alumno_id} ya tiene una práctica profesional iniciada")


class ArchivoInvalido(PracticasError):
    pass


class CredencialesInvalidas(PracticasError):
    pass
