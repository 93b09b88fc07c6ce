"""
Lambda Function - Execução agendada

Acionada por uma regra do EventBridge (cron) para rodar o pipeline
SFTP → OMDb → S3 uma vez por invocação
"""

import json
import logging
from datetime import datetime

from .config import load_config
from .data_pipeline.ratings_pipeline import RATINGS_KEY, RatingsPipeline
from .exceptions import ConfigError, PipelineError
from .logging_setup import setup_logging

logger = logging.getLogger(__name__)


def lambda_handler(event, context):
    """
    Handler principal da função Lambda

    O evento não é usado: o arquivo de entrada e o destino vêm
    das variáveis de ambiente
    """
    try:
        config = load_config()
    except ConfigError as e:
        logger.error(f"❌ Configuração inválida: {str(e)}")
        return _response(500, {'error': str(e), 'stage': 'config'})

    setup_logging(config.log_level, config.log_format)
    logger.info(f"🚀 Lambda triggered com evento: {json.dumps(event, default=str)}")

    try:
        rating_list = RatingsPipeline(config).run()
    except PipelineError as e:
        logger.error(f"❌ Erro no pipeline: {str(e)}", extra={'stage': e.stage})
        return _response(500, {'error': str(e), 'stage': e.stage})

    return _response(200, {
        'message': 'Ratings processados com sucesso',
        'key': f"s3://{config.s3_bucket}/{RATINGS_KEY}",
        'movies': len(rating_list.movies),
    })


def _response(status_code: int, body: dict) -> dict:
    body['timestamp'] = datetime.now().isoformat()
    return {
        'statusCode': status_code,
        'body': json.dumps(body),
    }
