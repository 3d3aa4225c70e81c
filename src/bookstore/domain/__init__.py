"""Domain layer for the bookstore.

Contains account rules and the request principal model.
Persistence is reached only through the repository interfaces.
"""
