"""
Print the store's stock situation from the command line.

Usage: python scripts/check_stock.py
"""
from pathlib import Path

from dotenv import load_dotenv

# Load .env before menstyle.db reads the credentials
env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)
    print(f"📄 Loaded .env from {env_path}")


def check_stock() -> bool:
    from menstyle.db import get_supabase_sync
    from menstyle.services.domains.inventory import stock_status
    from menstyle.services.models import Product

    try:
        client = get_supabase_sync()
    except ValueError as e:
        print(f"❌ Error: {e}")
        return False

    result = client.table("products").select("*").order("stock").execute()
    products = [Product(**row) for row in result.data or []]

    print(f"📦 {len(products)} products, {sum(p.stock for p in products)} units in stock\n")
    for product in products:
        status = stock_status(product.stock)
        if status != "OK":
            print(f"  {status:9s} {product.stock:3d}  {product.name} ({product.category})")
    return True


if __name__ == "__main__":
    raise SystemExit(0 if check_stock() else 1)
