"""
Store errors.

Message constants are shared between the domain layer and the HTTP layer so
the same Portuguese text reaches the operator or customer.
"""

# Validation messages
ERROR_NAME_REQUIRED = "Nome é obrigatório"
ERROR_PHONE_REQUIRED = "Telefone é obrigatório"
ERROR_ADDRESS_REQUIRED = "Endereço é obrigatório"
ERROR_DESCRIPTION_REQUIRED = "Descrição é obrigatória"
ERROR_PRICE_NEGATIVE = "Preço deve ser positivo"
ERROR_STOCK_NEGATIVE = "Estoque deve ser positivo"
ERROR_IMAGE_REQUIRED = "URL da imagem é obrigatória"
ERROR_CATEGORY_REQUIRED = "Categoria é obrigatória"
ERROR_SIZES_REQUIRED = "Selecione pelo menos um tamanho"
ERROR_SIZE_REQUIRED = "Selecione um tamanho"
ERROR_EMPTY_CART = "O carrinho está vazio"
ERROR_LOCAL_SALE_INCOMPLETE = "Preencha o nome do cliente e adicione pelo menos um produto"

# Stock messages
ERROR_MAX_QUANTITY_REACHED = "Quantidade máxima atingida para este produto"
ERROR_MAX_QUANTITY_AVAILABLE = "Quantidade máxima disponível: {maximum}"
ERROR_OUT_OF_STOCK = "Produto esgotado"
ERROR_INSUFFICIENT_STOCK = "Estoque insuficiente para {name}. Disponível: {available}, Solicitado: {requested}"

# Product / order messages
ERROR_PRODUCT_NOT_FOUND = "Produto não encontrado"
ERROR_ORDER_FAILED = "Erro ao processar pedido. Tente novamente."
ERROR_LOCAL_SALE_FAILED = "Erro ao registrar venda local"
ERROR_STOCK_UPDATE_FAILED = "Erro ao atualizar estoque"
ERROR_UPLOAD_FAILED = "Erro ao fazer upload da imagem!"

# Auth messages
ERROR_UNAUTHORIZED = "Não autorizado"
ERROR_NOT_ADMIN = "Acesso restrito a administradores"
ERROR_LOGIN_INTERNAL = "Erro interno do servidor"


class StoreError(Exception):
    """Base class for all store errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(StoreError):
    """One or more required fields are missing or invalid.

    ``fields`` maps every failing field name to its message so callers can
    show each message next to the offending input.
    """

    def __init__(self, fields: dict[str, str]):
        self.fields = dict(fields)
        super().__init__("; ".join(f"{name}: {msg}" for name, msg in self.fields.items()))


class ExternalApiError(StoreError):
    """The data API, auth service or storage bucket failed."""


class AuthenticationError(StoreError):
    """Sign-in refused or session token invalid."""


class NotFoundError(StoreError):
    """A requested record does not exist."""

    def __init__(self, message: str = ERROR_PRODUCT_NOT_FOUND):
        super().__init__(message)


class CartLimitError(StoreError):
    """A point-of-sale line change was refused (missing size, stock cap)."""

    def __init__(self, message: str, maximum: int | None = None):
        super().__init__(message)
        self.maximum = maximum


class InsufficientStockError(StoreError):
    """Live stock is lower than the quantity requested for a product."""

    def __init__(self, product_id: str, product_name: str, available: int, requested: int):
        self.product_id = product_id
        self.product_name = product_name
        self.available = available
        self.requested = requested
        super().__init__(
            ERROR_INSUFFICIENT_STOCK.format(
                name=product_name, available=available, requested=requested
            )
        )


class StockDecrementError(ExternalApiError):
    """The order was saved but the stock decrement sequence stopped midway.

    ``decremented`` lists the product ids already written, so the remaining
    products can be reconciled by hand against ``order_id``.
    """

    def __init__(self, order_id: str, decremented: list[str], cause: Exception):
        self.order_id = order_id
        self.decremented = list(decremented)
        self.cause = cause
        super().__init__(
            f"{ERROR_STOCK_UPDATE_FAILED} (pedido {order_id}): {cause}"
        )


__all__ = [
    "StoreError",
    "ValidationError",
    "ExternalApiError",
    "AuthenticationError",
    "NotFoundError",
    "CartLimitError",
    "InsufficientStockError",
    "StockDecrementError",
]
