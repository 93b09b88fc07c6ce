"""
Fixtures dos testes de integração (SFTP + LocalStack + OMDb reais)

Rodam apenas com RUN_INTEGRATION_TESTS=1, via docker-compose.yml
"""

import boto3
import pytest

from omdb_ratings.config import load_config
from omdb_ratings.models import MovieRating, RatingList

MOVIES = ["NineLives", "Aristocats", "Keanu", "Garfield"]

EXPECTED = RatingList(movies=[
    MovieRating(name="NineLives", imdb="5.3/10", rotten_tomatoes="14%", metacritic="11/100"),
    MovieRating(name="Aristocats", imdb="7.1/10", rotten_tomatoes="68%", metacritic="66/100"),
    MovieRating(name="Keanu", imdb="6.3/10", rotten_tomatoes="77%", metacritic="63/100"),
    MovieRating(name="Garfield", imdb="5.0/10", rotten_tomatoes="15%", metacritic="27/100"),
])


@pytest.fixture
def movies():
    return list(MOVIES)


@pytest.fixture
def expected():
    return EXPECTED


@pytest.fixture(scope="session")
def integration_config():
    return load_config()


@pytest.fixture(scope="session")
def s3_client(integration_config):
    return boto3.client(
        "s3",
        region_name=integration_config.s3_region,
        endpoint_url=integration_config.s3_endpoint_url,
    )


@pytest.fixture(scope="session")
def bucket(integration_config, s3_client):
    """Cria o bucket de teste no LocalStack (idempotente)"""
    existing = [b["Name"] for b in s3_client.list_buckets().get("Buckets", [])]
    if integration_config.s3_bucket not in existing:
        s3_client.create_bucket(Bucket=integration_config.s3_bucket)
    return integration_config.s3_bucket


@pytest.fixture
def requires_omdb_key(integration_config):
    if not integration_config.omdb.api_key:
        pytest.skip("OMDB_API_KEY não definida")
