"""
Configuração do OMDb Ratings

Lida uma única vez do ambiente (e de um .env local, se existir) e
repassada como valor imutável para o pipeline.
"""

import os
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, PositiveInt, ValidationError

from .exceptions import ConfigError


class SFTPConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    host: str
    port: PositiveInt
    user: str
    private_key: str
    passphrase: str
    host_key: str
    file_path: str
    timeout: PositiveInt
    env: Optional[str] = None  # "local" apenas para testes de integração


class OMDbConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_url: str
    api_key: str
    timeout: PositiveInt


class AppConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    sftp: SFTPConfig
    omdb: OMDbConfig
    s3_region: str
    s3_bucket: str
    s3_endpoint_url: Optional[str] = None
    log_level: str = "INFO"
    log_format: str = "json"


# Variável de ambiente → campo
SFTP_VARS = {
    'SFTP_HOST': 'host',
    'SFTP_PORT': 'port',
    'SFTP_USER': 'user',
    'SFTP_PRIVATE_KEY': 'private_key',
    'SFTP_PASSPHRASE': 'passphrase',
    'SFTP_HOST_KEY': 'host_key',
    'SFTP_FILE_PATH': 'file_path',
    'SFTP_TIMEOUT': 'timeout',
}

OMDB_VARS = {
    'OMDB_BASE_URL': 'base_url',
    'OMDB_API_KEY': 'api_key',
    'OMDB_TIMEOUT': 'timeout',
}

S3_VARS = {
    'S3_REGION': 's3_region',
    'S3_BUCKET': 's3_bucket',
}


def _read_private_key_file(path: str) -> str:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()
    except OSError as e:
        raise ConfigError(f"não foi possível ler SFTP_PRIVATE_KEY_FILE ({path}): {e}") from e


def load_config(environ: Optional[Mapping[str, str]] = None) -> AppConfig:
    """
    Monta a configuração a partir das variáveis de ambiente

    Args:
        environ: Mapeamento a usar no lugar de os.environ (testes)

    Returns:
        AppConfig imutável

    Raises:
        ConfigError: variáveis obrigatórias ausentes ou valores inválidos
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    env = dict(environ)

    # Chave privada pode vir de arquivo (ex.: chave de teste montada no container)
    if 'SFTP_PRIVATE_KEY' not in env and env.get('SFTP_PRIVATE_KEY_FILE'):
        env['SFTP_PRIVATE_KEY'] = _read_private_key_file(env['SFTP_PRIVATE_KEY_FILE'])

    required = list(SFTP_VARS) + list(OMDB_VARS) + list(S3_VARS)
    missing = [name for name in required if name not in env]
    if missing:
        raise ConfigError(f"variáveis de ambiente obrigatórias ausentes: {', '.join(missing)}")

    sftp = {field: env[name] for name, field in SFTP_VARS.items()}
    sftp['env'] = env.get('SFTP_ENV') or None

    try:
        return AppConfig(
            sftp=SFTPConfig(**sftp),
            omdb=OMDbConfig(**{field: env[name] for name, field in OMDB_VARS.items()}),
            s3_endpoint_url=env.get('S3_ENDPOINT_URL') or None,
            log_level=env.get('LOG_LEVEL', 'INFO'),
            log_format=env.get('LOG_FORMAT', 'json'),
            **{field: env[name] for name, field in S3_VARS.items()},
        )
    except ValidationError as e:
        raise ConfigError(f"configuração inválida: {e}") from e
