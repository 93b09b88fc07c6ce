"""
Destino S3 do documento de ratings
"""

import io
import logging
from typing import BinaryIO, Optional, Union

import boto3
from boto3.exceptions import S3UploadFailedError
from botocore.exceptions import BotoCoreError, ClientError

from ..exceptions import SinkError

logger = logging.getLogger(__name__)


class S3ArtifactSink:
    """Grava objetos em um bucket S3, sobrescrevendo a chave existente"""

    def __init__(self, bucket: str, region: str, endpoint_url: Optional[str] = None, s3_client=None):
        self.bucket = bucket
        self.region = region
        self.s3_client = s3_client or boto3.client('s3', region_name=region, endpoint_url=endpoint_url)

    def put(self, key: str, data: Union[bytes, BinaryIO]) -> str:
        """
        Upload do conteúdo para s3://{bucket}/{key}

        Args:
            key: Chave do objeto
            data: Bytes ou stream binário

        Returns:
            URI s3:// do objeto gravado
        """
        body = io.BytesIO(data) if isinstance(data, (bytes, bytearray)) else data
        uri = f"s3://{self.bucket}/{key}"

        logger.info(f"Uploading → {uri}", extra={'bucket': self.bucket, 'key': key})
        try:
            self.s3_client.upload_fileobj(
                body,
                self.bucket,
                key,
                ExtraArgs={
                    'ContentType': 'application/json',
                    'ServerSideEncryption': 'AES256',
                },
            )
        except (BotoCoreError, ClientError, S3UploadFailedError) as e:
            raise SinkError(f"error while uploading to s3: {e}") from e

        return uri
