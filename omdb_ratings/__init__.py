"""
OMDb Ratings - Batch Job

Enriquecimento de listas de filmes com ratings da OMDb:
- Lista de filmes lida de um servidor SFTP
- Ratings (IMDb, Rotten Tomatoes, Metacritic) via API OMDb
- Documento final gravado no S3 (chave fixa omdb.ratings)
"""

__version__ = "1.0.0"
__author__ = "Data Engineering Team"
