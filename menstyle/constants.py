"""Store constants, enums, and defaults."""
from enum import Enum


class OrderType(str, Enum):
    """Where an order came from."""
    ONLINE = "online"
    LOCAL = "local"


class PaymentMethod(str, Enum):
    """Payment methods accepted at the register."""
    CASH = "Dinheiro"
    DEBIT_CARD = "Cartão de Débito"
    CREDIT_CARD = "Cartão de Crédito"
    PIX = "PIX"


class StockFilter(str, Enum):
    """Inventory stock filters."""
    ALL = "all"
    LOW = "low"
    OUT = "out"
    AVAILABLE = "available"


CATEGORIES: tuple[str, ...] = (
    "Camisas",
    "Calças",
    "Polos",
    "Blazers",
    "Bermudas",
    "Camisetas",
)

SIZES: tuple[str, ...] = ("P", "M", "G", "GG", "36", "38", "40", "42", "44")

# Products at or below this count are flagged on the dashboard
LOW_STOCK_THRESHOLD = 5

FEATURED_PRODUCTS_LIMIT = 8

# Local sale defaults
LOCAL_SALE_PHONE = "Venda Local"
LOCAL_SALE_ADDRESS = "Retirada na Loja"
DEFAULT_PAYMENT_METHOD = PaymentMethod.CASH.value

# Table and bucket names
PRODUCTS_TABLE = "products"
ORDERS_TABLE = "orders"
ADMIN_USERS_TABLE = "admin_users"
DEFAULT_STORAGE_BUCKET = "products"

DEFAULT_WHATSAPP_NUMBER = "5585994015283"

# Carts untouched for this long are dropped from memory
CART_TTL_SECONDS = 86400  # 24 hours
