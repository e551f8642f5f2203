from fastapi import HTTPException, status


class GameException(HTTPException):
    def __init__(self, detail: str, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(status_code=status_code, detail=detail)


class NotFoundError(GameException):
    def __init__(self, resource: str, identifier: int | str):
        super().__init__(
            detail=f"{resource} with id '{identifier}' not found",
            status_code=status.HTTP_404_NOT_FOUND,
        )


class ValidationError(GameException):
    def __init__(self, detail: str):
        super().__init__(detail=detail, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)


class InventoryError(GameException):
    def __init__(self, detail: str):
        super().__init__(detail=detail, status_code=status.HTTP_400_BAD_REQUEST)


class InsufficientFundsError(GameException):
    """The payer's platinum-equivalent wealth does not cover the cost."""

    def __init__(self, actor_id: int | str, cost_gp: float, shortfall_gp: float, actor_name: str | None = None):
        self.actor_id = actor_id
        self.actor_name = actor_name or str(actor_id)
        self.cost_gp = cost_gp
        self.shortfall_gp = shortfall_gp
        super().__init__(
            detail=(
                f"{self.actor_name} doesn't have enough funds to purchase an item for {cost_gp}gp "
                f"({shortfall_gp}gp short)."
            ),
            status_code=status.HTTP_402_PAYMENT_REQUIRED,
        )
