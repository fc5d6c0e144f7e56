"""Excepciones del servicio de revisión de código."""


class CodeReviewError(Exception):
    """Base de todos los errores propios del servicio."""


class ConfigurationError(CodeReviewError):
    """Falta una credencial o la configuración es inválida (fatal al arrancar)."""


class ModelCommunicationError(CodeReviewError):
    """
    Fallo de red o de la API de Gemini.

    El mensaje es genérico y apto para el cliente; la causa real queda
    encadenada en `__cause__` y solo se registra en el log.
    """

    DEFAULT_MESSAGE = "Gemini API 통신 중 문제가 발생했습니다."

    def __init__(self, message: str = DEFAULT_MESSAGE) -> None:
        super().__init__(message)
        self.message = message
