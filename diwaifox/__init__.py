"""Diwai Fox Taxi Service: бронирование поездок, водители, платежи, админ-панель."""

__version__ = "1.0.0"
