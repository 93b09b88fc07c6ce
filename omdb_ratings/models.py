"""
Modelos de dados do OMDb Ratings

Entrada (SFTP):   {"movies": ["Title A", ...]}
Resposta OMDb:    {"Ratings": [{"Source": "...", "Value": "..."}, ...]}
Saída (S3):       {"movies": [{"name", "imdb", "rottenTomatoes", "metacritic"}, ...]}
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class MovieList(BaseModel):
    """Lista de títulos lida do arquivo de entrada"""

    model_config = ConfigDict(frozen=True)

    movies: List[StrictStr]


class Rating(BaseModel):
    """Par (fonte, valor) retornado pela OMDb"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    source: StrictStr = Field(alias="Source")
    value: StrictStr = Field(alias="Value")


class RatingsResponse(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    ratings: List[Rating] = Field(default_factory=list, alias="Ratings")
    response: Optional[str] = Field(default=None, alias="Response")
    error: Optional[str] = Field(default=None, alias="Error")


class MovieRating(BaseModel):
    """Uma linha do documento final: título + 3 ratings reconhecidos"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    imdb: str = ""
    rotten_tomatoes: str = Field(default="", alias="rottenTomatoes")
    metacritic: str = ""


class RatingList(BaseModel):
    """Documento gravado no S3"""

    model_config = ConfigDict(frozen=True)

    movies: List[MovieRating] = Field(default_factory=list)
