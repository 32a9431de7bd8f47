from __future__ import annotations


class MissingConsumptionError(ValueError):
    """The invoice reading has no usable consumption; a bill cannot be computed."""

    def __init__(self, message: str = "Consumo não informado na fatura. Não é possível calcular."):
        super().__init__(message)
