"""Services: data gateway, repositories, domain services, storage."""
