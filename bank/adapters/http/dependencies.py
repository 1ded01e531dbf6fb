"""FastAPI dependencies resolving use cases from the application state."""

from fastapi import Request

from bank.infrastructure.container import BankServices


def get_services(request: Request) -> BankServices:
    """Return the services bundle attached by create_app."""
    return request.app.state.services


__all__ = ["get_services"]
