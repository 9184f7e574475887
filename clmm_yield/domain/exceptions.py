from __future__ import annotations


class DomainError(Exception):
    """Base para erros de dominio."""


class InvalidPriceError(DomainError):
    """Preco nao positivo ou nao finito entrou no dominio de ticks."""


class InvalidRangeError(DomainError):
    """Faixa de ticks invalida apos o arredondamento (tick_lower >= tick_upper)."""


class InvalidScenarioInputError(DomainError):
    """Parametros invalidos para projecao de cenario."""


class ScenarioLimitError(DomainError):
    """Numero maximo de cenarios simultaneos atingido."""


class ScenarioNotFoundError(DomainError):
    """Cenario solicitado nao existe."""


class PriceLookupDomainError(DomainError):
    """Nao foi possivel obter preco do token de recompensa."""
