# campusmart/domain/errors.py
"""
Wyjatki domenowe. Dziedzicza po wbudowanych, routery tlumacza je
po typie bazowym (ValueError -> 400, PermissionError -> 403).
"""


class ValidationError(ValueError):
    """Brakujace albo bledne dane wejsciowe (400)."""


class InvalidTransitionError(ValidationError):
    """Zmiana statusu niedozwolona przez tabele przejsc."""


class NotFoundError(LookupError):
    """Zamowienie, pozycja koszyka, produkt albo user nie istnieje (404)."""


class AuthorizationError(PermissionError):
    """User nie jest strona zamowienia (403)."""


class InternalError(RuntimeError):
    """Blad bazy / transakcji (500)."""
