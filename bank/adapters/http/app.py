"""FastAPI application exposing accounts and transaction postings.

Domain errors are mapped to status codes in one place:

* validation failures and insufficient funds are 400;
* unknown accounts and unquoted currencies are 404;
* store and rate-provider failures, including unrecorded postings, are 500.
"""

import time

from fastapi import Depends, FastAPI, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from bank import __version__
from bank.adapters.http.dependencies import get_services
from bank.adapters.http.schemas import (
    AccountResponse,
    CreateAccountRequest,
    CreateTransactionRequest,
    ErrorResponse,
    ExchangeRateResponse,
    TransactionResponse,
    TransactionSummaryResponse,
)
from bank.domain.errors import (
    AccountNotFoundError,
    BankError,
    CurrencyNotFoundError,
    ExchangeRateUnavailableError,
    InsufficientFundsError,
    StoreUnavailableError,
    TransactionRecordingFailedError,
    ValidationError,
)
from bank.infrastructure.container import BankServices, build_services
from bank.infrastructure.logging.logger import get_app_logger

ERROR_STATUS_CODES = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (InsufficientFundsError, status.HTTP_400_BAD_REQUEST),
    (AccountNotFoundError, status.HTTP_404_NOT_FOUND),
    (CurrencyNotFoundError, status.HTTP_404_NOT_FOUND),
    (TransactionRecordingFailedError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (StoreUnavailableError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (ExchangeRateUnavailableError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)

BAD_REQUEST = {status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}}
NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}
SERVER_ERROR = {
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


def status_code_for(error: BankError) -> int:
    """Return the HTTP status code for a domain error."""
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def create_app(services: BankServices | None = None, logger=None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        services: Use cases to expose; built from the environment if absent.
        logger: Optional logger compatible with logging.Logger-like API.

    Returns:
        FastAPI: Configured application.
    """
    resolved_logger = logger or get_app_logger()
    app = FastAPI(title="Bank API", version=__version__)
    app.state.services = services or build_services()

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        resolved_logger.info(
            f"{request.method} {request.url.path} "
            f"{response.status_code} {elapsed_ms:.1f}ms"
        )
        return response

    @app.exception_handler(BankError)
    async def handle_bank_error(request: Request, exc: BankError):
        status_code = status_code_for(exc)
        if status_code >= 500:
            resolved_logger.error(
                f"{request.method} {request.url.path} failed: {exc}"
            )
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(detail=str(exc)).model_dump(),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request,
        exc: RequestValidationError,
    ):
        resolved_logger.warning(
            f"Invalid request body for {request.url.path}: {exc.errors()}"
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ErrorResponse(detail="Invalid request body").model_dump(),
        )

    @app.get("/health", response_class=PlainTextResponse)
    def health() -> str:
        return "OK"

    @app.get(
        "/accounts",
        response_model=list[AccountResponse],
        responses=SERVER_ERROR,
    )
    def list_accounts(
        services: BankServices = Depends(get_services),
    ) -> list[AccountResponse]:
        return [
            AccountResponse.from_account(account)
            for account in services.list_accounts.execute()
        ]

    @app.post(
        "/accounts",
        response_model=AccountResponse,
        status_code=status.HTTP_201_CREATED,
        responses={**BAD_REQUEST, **SERVER_ERROR},
    )
    def create_account(
        request: CreateAccountRequest,
        services: BankServices = Depends(get_services),
    ) -> AccountResponse:
        account = services.create_account.execute(
            request.name,
            request.balance,
            request.currency,
        )
        return AccountResponse.from_account(account)

    @app.get(
        "/accounts/{account_id}",
        response_model=AccountResponse,
        responses={**NOT_FOUND, **SERVER_ERROR},
    )
    def get_account(
        account_id: str,
        services: BankServices = Depends(get_services),
    ) -> AccountResponse:
        account = services.get_account.execute(account_id)
        return AccountResponse.from_account(account)

    @app.get(
        "/accounts/{account_id}/transactions",
        response_model=list[TransactionResponse],
        responses={**NOT_FOUND, **SERVER_ERROR},
    )
    def list_account_transactions(
        account_id: str,
        services: BankServices = Depends(get_services),
    ) -> list[TransactionResponse]:
        return [
            TransactionResponse.from_transaction(transaction)
            for transaction in services.list_transactions.execute(account_id)
        ]

    @app.get(
        "/accounts/{account_id}/summary",
        response_model=TransactionSummaryResponse,
        responses={**NOT_FOUND, **SERVER_ERROR},
    )
    def get_transaction_summary(
        account_id: str,
        services: BankServices = Depends(get_services),
    ) -> TransactionSummaryResponse:
        summary = services.get_summary.execute(account_id)
        return TransactionSummaryResponse.from_summary(summary)

    @app.post(
        "/transactions",
        response_model=TransactionResponse,
        status_code=status.HTTP_201_CREATED,
        responses={**BAD_REQUEST, **NOT_FOUND, **SERVER_ERROR},
    )
    def create_transaction(
        request: CreateTransactionRequest,
        services: BankServices = Depends(get_services),
    ) -> TransactionResponse:
        transaction = services.post_transaction.execute(
            request.account_id,
            request.amount,
            request.type,
        )
        return TransactionResponse.from_transaction(transaction)

    @app.get(
        "/exchange",
        response_model=ExchangeRateResponse,
        responses={**BAD_REQUEST, **NOT_FOUND, **SERVER_ERROR},
    )
    def get_exchange_rate(
        from_currency: str | None = Query(default=None, alias="from"),
        to_currency: str | None = Query(default=None, alias="to"),
        services: BankServices = Depends(get_services),
    ) -> ExchangeRateResponse:
        exchange_rate = services.get_exchange_rate.execute(
            from_currency,
            to_currency,
        )
        return ExchangeRateResponse.from_exchange_rate(exchange_rate)

    return app


__all__ = ["create_app", "status_code_for"]
