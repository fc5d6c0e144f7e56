"""Proveedor Gemini para la revisión de código.

Envía el prompt ya renderizado al modelo configurado pidiendo salida
`application/json` y devuelve el texto crudo. Una sola llamada por petición:
sin reintentos, sin backoff y sin timeout propio.
"""

import asyncio
import logging
from typing import Optional

from google import genai
from google.genai import types

from ..config import Settings
from ..errors import ModelCommunicationError

logger = logging.getLogger(__name__)

JSON_MIME_TYPE = "application/json"


class GeminiProvider:
    """
    Cliente de Google Gemini compartido por todas las peticiones.

    Se crea una vez al arrancar a partir de `Settings` y no se modifica
    después, por lo que puede usarse concurrentemente sin bloqueos.
    """

    def __init__(self, settings: Settings, client: Optional[genai.Client] = None) -> None:
        self.model_name = settings.GEMINI_MODEL
        self.client: genai.Client = client or genai.Client(api_key=settings.AI_API_KEY)
        self.generation_config = types.GenerateContentConfig(response_mime_type=JSON_MIME_TYPE)

    async def generate(self, prompt: str) -> str:
        """
        Llama al modelo con el prompt dado.

        Returns:
            Texto crudo de la respuesta ("" si el modelo no devolvió texto).

        Raises:
            ModelCommunicationError: ante cualquier fallo de red o de la API.
                El error original se registra en el log pero no se expone.
        """
        return await asyncio.to_thread(self._generate_sync, prompt)

    def _generate_sync(self, prompt: str) -> str:
        try:
            resp = self.client.models.generate_content(
                model=self.model_name,
                contents=prompt,
                config=self.generation_config,
            )
        except Exception as e:
            logger.exception("Error en la llamada a la API de Gemini (modelo=%s)", self.model_name)
            raise ModelCommunicationError() from e
        return resp.text or ""
