"""HTTP routers for the storefront and the back-office."""
