"""gy-tax - Guyana salary, tax and loan payoff calculations."""

__version__ = "0.1.0"
