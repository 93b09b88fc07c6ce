"""
Setup de logging

Formato JSON (uma linha por evento) para execução agendada,
ou texto simples para rodar localmente.
"""

import json
import logging
import sys
from datetime import datetime, timezone

# Campos extras aceitos via logger.info(..., extra={...})
EXTRA_FIELDS = ('stage', 'title', 'key', 'path', 'bucket', 'count', 'bytes')

TEXT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class JsonFormatter(logging.Formatter):
    """Formata cada registro como um objeto JSON"""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            'time': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname.lower(),
            'logger': record.name,
            'msg': record.getMessage(),
        }
        for field in EXTRA_FIELDS:
            if hasattr(record, field):
                entry[field] = getattr(record, field)
        if record.exc_info:
            entry['error'] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = 'INFO', fmt: str = 'json') -> None:
    """Configura o root logger (substitui handlers existentes)"""
    handler = logging.StreamHandler(sys.stdout)
    if fmt == 'text':
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    else:
        handler.setFormatter(JsonFormatter())

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=[handler],
        force=True,
    )
