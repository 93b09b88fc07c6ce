"""
Cliente da API OMDb

Busca os ratings de um filme pelo título:
GET {base_url}/?apiKey=<chave>&t=<título>
"""

import logging
from typing import List, Optional

import requests
from pydantic import ValidationError

from ..config import OMDbConfig
from ..exceptions import OMDbAPIError
from ..models import Rating, RatingsResponse

logger = logging.getLogger(__name__)


class OMDbClient:
    """Cliente HTTP síncrono para a API OMDb"""

    def __init__(self, config: OMDbConfig, session: Optional[requests.Session] = None):
        self.base_url = config.base_url.rstrip('/')
        self.api_key = config.api_key
        self.timeout = config.timeout
        self.session = session or requests.Session()

    def get_ratings(self, title: str) -> List[Rating]:
        """
        Busca os ratings de um filme

        Args:
            title: Título exatamente como veio na lista de entrada

        Returns:
            Lista de Rating na ordem retornada pela API

        Raises:
            OMDbAPIError: erro de rede, status != 200, corpo inválido
                ou filme não encontrado
        """
        try:
            resp = self.session.get(
                f"{self.base_url}/",
                params={'apiKey': self.api_key, 't': title},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise OMDbAPIError(f"error while calling omdb api: {e}") from e

        if resp.status_code != 200:
            raise OMDbAPIError(
                f"error occurred while calling omdb api: {resp.reason}, status code: {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            payload = RatingsResponse.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            raise OMDbAPIError(f"error while decoding response from omdb api: {e}") from e

        if payload.response == 'False':
            raise OMDbAPIError(f"omdb api returned no result: {payload.error or 'unknown error'}")

        logger.debug(f"OMDb: {len(payload.ratings)} ratings para '{title}'")
        return list(payload.ratings)
