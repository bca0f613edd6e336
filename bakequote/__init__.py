"""Bakery order pricing and lead capture service."""
