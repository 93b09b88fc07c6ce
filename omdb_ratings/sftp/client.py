"""
Cliente SFTP

Abre uma sessão SSH autenticada por chave privada, verifica a host key
do servidor contra a chave esperada (base64) e expõe arquivos remotos
como streams binários.
"""

import base64
import binascii
import io
import logging
import socket
from contextlib import contextmanager
from typing import Iterator, Optional

import paramiko

from ..config import SFTPConfig
from ..exceptions import RemoteFileNotFoundError, SessionConnectionError

logger = logging.getLogger(__name__)

# Tipos de chave aceitos para autenticação
KEY_CLASSES = (paramiko.RSAKey, paramiko.ECDSAKey, paramiko.Ed25519Key)

# Host do docker-compose usado nos testes de integração
LOCAL_SFTP_HOST = 'sftp'


def load_private_key(private_key: str, passphrase: str) -> paramiko.PKey:
    """Lê a chave privada PEM/OpenSSH, tentando cada tipo suportado"""
    last_error: Optional[Exception] = None
    for key_class in KEY_CLASSES:
        try:
            return key_class.from_private_key(io.StringIO(private_key), password=passphrase or None)
        except (paramiko.SSHException, ValueError) as e:
            last_error = e
    raise SessionConnectionError(f"error while parsing private key: {last_error}")


class ExpectedHostKeyPolicy(paramiko.MissingHostKeyPolicy):
    """
    Aceita apenas o servidor cuja host key bate com a chave configurada.

    A chave esperada é o blob público em base64 (mesmo formato da segunda
    coluna de um known_hosts).
    """

    def __init__(self, host_key: str, env: Optional[str] = None):
        self.host_key = host_key
        self.env = env

    def missing_host_key(self, client, hostname, key):
        # paramiko só anexa a porta ao hostname quando ela não é 22
        if self.env == 'local' and hostname == LOCAL_SFTP_HOST:
            logger.warning("Verificação de host key ignorada (ambiente local)")
            return

        try:
            expected = base64.b64decode(self.host_key, validate=True)
        except (binascii.Error, ValueError) as e:
            raise paramiko.SSHException(f"invalid expected host key: {e}") from e

        if expected != key.asbytes():
            raise paramiko.SSHException("ssh: host key mismatch")


class SFTPSessionProvider:
    """
    Sessão SFTP com escopo controlado

    Uso:
        with SFTPSessionProvider(config) as session:
            with session.open(path) as f:
                data = f.read()
    """

    def __init__(self, config: SFTPConfig, ssh_client: Optional[paramiko.SSHClient] = None):
        self.config = config
        self.ssh_client = ssh_client
        self.sftp: Optional[paramiko.SFTPClient] = None

    def connect(self) -> None:
        """Estabelece a conexão SSH e abre o canal SFTP"""
        pkey = load_private_key(self.config.private_key, self.config.passphrase)

        client = self.ssh_client or paramiko.SSHClient()
        client.set_missing_host_key_policy(ExpectedHostKeyPolicy(self.config.host_key, self.config.env))

        logger.info(
            f"Conectando ao SFTP {self.config.host}:{self.config.port} como {self.config.user}"
        )
        try:
            client.connect(
                hostname=self.config.host,
                port=self.config.port,
                username=self.config.user,
                pkey=pkey,
                timeout=self.config.timeout,
                banner_timeout=self.config.timeout,
                auth_timeout=self.config.timeout,
                allow_agent=False,
                look_for_keys=False,
            )
            self.sftp = client.open_sftp()
        except (paramiko.SSHException, socket.error) as e:
            client.close()
            raise SessionConnectionError(
                f"error while establishing ssh connection for sftp: {e}"
            ) from e

        self.ssh_client = client

    def close(self) -> None:
        try:
            if self.sftp is not None:
                self.sftp.close()
        finally:
            self.sftp = None
            if self.ssh_client is not None:
                self.ssh_client.close()

    def __enter__(self) -> "SFTPSessionProvider":
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @contextmanager
    def open(self, path: str) -> Iterator[paramiko.SFTPFile]:
        """
        Abre um arquivo remoto para leitura binária

        Raises:
            SessionConnectionError: sessão não conectada ou falha de I/O
            RemoteFileNotFoundError: caminho inexistente
        """
        if self.sftp is None:
            raise SessionConnectionError("sftp session is not connected")

        try:
            handle = self.sftp.open(path, 'rb')
        except FileNotFoundError as e:
            raise RemoteFileNotFoundError(path) from e
        except (IOError, paramiko.SSHException) as e:
            raise SessionConnectionError(f"failed to open file {path}: {e}") from e

        try:
            yield handle
        except (IOError, paramiko.SSHException) as e:
            raise SessionConnectionError(f"error while reading file {path}: {e}") from e
        finally:
            handle.close()
