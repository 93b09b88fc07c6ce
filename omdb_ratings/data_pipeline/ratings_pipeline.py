"""
OMDb Ratings Pipeline

Pipeline de enriquecimento: SFTP → OMDb → S3
Uma execução processa um arquivo do início ao fim e termina
"""

import logging
import sys
from typing import Dict, Iterable, List, Optional

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from ..config import AppConfig, load_config
from ..exceptions import (
    ConfigError,
    DecodeError,
    EncodeError,
    OMDbAPIError,
    PipelineError,
    RatingLookupError,
    SessionError,
    SinkError,
    SourceUnavailableError,
    UploadError,
)
from ..logging_setup import setup_logging
from ..models import MovieList, MovieRating, Rating, RatingList
from ..omdb.client import OMDbClient
from ..sftp.client import SFTPSessionProvider
from ..storage.s3_sink import S3ArtifactSink

logger = logging.getLogger(__name__)

# Chave fixa: toda execução sobrescreve o mesmo objeto
RATINGS_KEY = 'omdb.ratings'

# Fonte OMDb → campo do MovieRating
RECOGNIZED_SOURCES = {
    'Internet Movie Database': 'imdb',
    'Rotten Tomatoes': 'rotten_tomatoes',
    'Metacritic': 'metacritic',
}


def parse_movie_list(raw: bytes) -> List[str]:
    """Decodifica {"movies": [...]} e retorna os títulos na ordem original"""
    try:
        return list(MovieList.model_validate_json(raw).movies)
    except ValidationError as e:
        raise DecodeError("error while decoding file", e) from e


def fold_ratings(title: str, ratings: Iterable[Rating]) -> MovieRating:
    """
    Junta os ratings de um filme em um MovieRating.

    Fontes não reconhecidas são ignoradas; se uma fonte aparecer mais
    de uma vez, vale a última.
    """
    values: Dict[str, str] = {}
    for rating in ratings:
        field = RECOGNIZED_SOURCES.get(rating.source)
        if field is not None:
            values[field] = rating.value
    return MovieRating(name=title, **values)


def encode_rating_list(rating_list: RatingList) -> bytes:
    """Serializa o documento em JSON (uma linha, com quebra de linha final)"""
    try:
        return (rating_list.model_dump_json(by_alias=True) + '\n').encode('utf-8')
    except (PydanticSerializationError, ValueError) as e:
        raise EncodeError("error while encoding record to json", e) from e


class RatingsPipeline:
    """
    Orquestra uma execução completa:
    abrir arquivo → decodificar → buscar ratings → serializar → upload
    """

    def __init__(
        self,
        config: AppConfig,
        session_provider: Optional[SFTPSessionProvider] = None,
        ratings_client: Optional[OMDbClient] = None,
        sink: Optional[S3ArtifactSink] = None,
    ):
        self.config = config
        self.session_provider = session_provider or SFTPSessionProvider(config.sftp)
        self.ratings_client = ratings_client or OMDbClient(config.omdb)
        self.sink = sink or S3ArtifactSink(
            bucket=config.s3_bucket,
            region=config.s3_region,
            endpoint_url=config.s3_endpoint_url,
        )

    def read_movie_list(self) -> List[str]:
        """Lê o arquivo inteiro do SFTP e decodifica a lista de títulos"""
        path = self.config.sftp.file_path
        logger.info(f"Abrindo arquivo: {path}", extra={'path': path})

        try:
            with self.session_provider as session:
                with session.open(path) as remote_file:
                    raw = remote_file.read()
        except (SessionError, OSError) as e:
            raise SourceUnavailableError("error while opening file", e) from e

        logger.info(f"Arquivo lido: {len(raw)} bytes", extra={'bytes': len(raw)})
        return parse_movie_list(raw)

    def get_ratings_for_movies(self, movies: List[str]) -> RatingList:
        """Busca os ratings de cada título, em ordem, parando no primeiro erro"""
        records = []
        for title in movies:
            logger.debug(f"Buscando ratings: {title}", extra={'title': title})
            try:
                ratings = self.ratings_client.get_ratings(title)
            except OMDbAPIError as e:
                raise RatingLookupError(title, e) from e
            records.append(fold_ratings(title, ratings))
        return RatingList(movies=records)

    def upload(self, key: str, body: bytes) -> str:
        try:
            return self.sink.put(key, body)
        except SinkError as e:
            raise UploadError("error while uploading to s3", e) from e

    def run(self) -> RatingList:
        """
        Executa o pipeline completo

        Returns:
            Documento gravado no S3

        Raises:
            PipelineError: subclasse indicando a etapa que falhou
        """
        logger.info("🚀 Iniciando processamento do arquivo")

        logger.info("📥 Step 1: Leitura da lista de filmes")
        movies = self.read_movie_list()
        logger.info(f"{len(movies)} filmes na lista", extra={'count': len(movies)})

        logger.info("🔎 Step 2: Busca de ratings na OMDb")
        rating_list = self.get_ratings_for_movies(movies)

        logger.info("📤 Step 3: Upload para S3")
        body = encode_rating_list(rating_list)
        uri = self.upload(RATINGS_KEY, body)

        logger.info(f"✅ Documento gravado: {uri}", extra={'key': RATINGS_KEY, 'bytes': len(body)})
        return rating_list


def main() -> int:
    """Função principal para execução standalone"""
    try:
        config = load_config()
    except ConfigError as e:
        setup_logging()
        logger.critical(f"Unable to configure from environment: {e}")
        return 2

    setup_logging(config.log_level, config.log_format)

    try:
        rating_list = RatingsPipeline(config).run()
    except PipelineError as e:
        logger.error(f"❌ cannot process file: {e}", extra={'stage': e.stage})
        return 1

    logger.info(rating_list.model_dump_json(by_alias=True))
    return 0


if __name__ == "__main__":
    sys.exit(main())
