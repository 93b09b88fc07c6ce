"""
Exceções do OMDb Ratings

Hierarquia de erros do job:
- ConfigError: configuração inválida, fatal antes de qualquer trabalho
- PipelineError e subclasses: falha de uma etapa da execução
- SessionError / OMDbAPIError / SinkError: erros dos clientes externos
"""

from typing import Optional


class OmdbRatingsError(Exception):
    """Base de todas as exceções do projeto"""


class ConfigError(OmdbRatingsError):
    """Variáveis de ambiente ausentes ou inválidas"""


# === ERROS DOS CLIENTES EXTERNOS ===

class SessionError(OmdbRatingsError):
    """Falha na sessão SFTP"""


class SessionConnectionError(SessionError):
    """Falha de rede, autenticação ou verificação de host key"""


class RemoteFileNotFoundError(SessionError):
    """Arquivo remoto não existe no servidor SFTP"""

    def __init__(self, path: str):
        super().__init__(f"arquivo remoto não encontrado: {path}")
        self.path = path


class OMDbAPIError(OmdbRatingsError):
    """Falha na chamada da API OMDb"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class SinkError(OmdbRatingsError):
    """Falha ao gravar o artefato no bucket"""


# === ERROS DO PIPELINE ===

class PipelineError(OmdbRatingsError):
    """
    Falha de uma etapa do pipeline.

    A mensagem final inclui a causa encadeada, no formato
    "<mensagem>: <causa>".
    """

    stage = "pipeline"

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message}: {self.cause}"


class SourceUnavailableError(PipelineError):
    stage = "open"


class DecodeError(PipelineError):
    stage = "decode"


class RatingLookupError(PipelineError):
    stage = "lookup"

    def __init__(self, title: str, cause: Optional[BaseException] = None):
        super().__init__(f"error while getting ratings for movie {title}", cause)
        self.title = title


class EncodeError(PipelineError):
    stage = "encode"


class UploadError(PipelineError):
    stage = "upload"
