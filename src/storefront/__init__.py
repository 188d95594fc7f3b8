"""Shopiko storefront: catalogue, accounts, carts, orders and reviews."""
