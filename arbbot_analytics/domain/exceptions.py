from __future__ import annotations


class DomainError(Exception):
    """Base para erros de dominio."""


class InvalidInputError(DomainError):
    """Parametros de consulta invalidos."""


class NotFoundError(DomainError):
    """Nenhuma linha encontrada para a entidade solicitada."""


class UpstreamFailureError(DomainError):
    """Banco de dados indisponivel ou erro de consulta."""


class StartupFailureError(DomainError):
    """Conexao inicial com o banco esgotou as tentativas."""


class SnapshotInputError(InvalidInputError):
    """Parametros invalidos para consulta de snapshot."""


class SnapshotNotFoundError(NotFoundError):
    """Snapshot solicitado nao existe."""


class LiquidityInputError(InvalidInputError):
    """Parametros invalidos para consulta de liquidez."""


class EmptySeriesError(InvalidInputError):
    """Estatistica pedida sobre uma serie vazia."""
