"""Veterinary clinic backend: accounts, pets, medical records and staff."""
