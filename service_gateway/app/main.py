"""
Token Gateway service.

Proxies ARC-200 contract reads and transfer simulations over HTTP.
"""

import asyncio
from functools import partial
from typing import Any, Callable, Dict, Optional

from algosdk.v2client.algod import AlgodClient
from fastapi import Depends
from fastapi.responses import JSONResponse, PlainTextResponse

from shared.base_service import BaseService
from shared.config import ServiceConfig
from shared.errors import (
    GatewayException,
    InternalServerError,
    InvalidTokenIdError,
    TokenNotFoundError,
    TransferFailedError,
)
from service_gateway.app.adapters.arc200_client import Arc200Contract, OperationResult
from service_gateway.app.adapters.ledger_client import create_ledger_client
from service_gateway.app.domain.assets import TokenMethod, build_asset_summary
from service_gateway.app.domain.values import is_numeric, normalize_value, to_number

SERVICE_NAME = "gateway"
SERVICE_PORT = 5002

ContractFactory = Callable[..., Arc200Contract]


def validate_token_id(token_id: str) -> str:
    """Reject non-numeric token identifiers before any contract is bound."""
    if not is_numeric(token_id):
        raise InvalidTokenIdError()
    return token_id


class GatewayService(BaseService):
    """Token gateway service implementation."""

    def __init__(self,
                 config: Optional[ServiceConfig] = None,
                 ledger_client: Optional[AlgodClient] = None,
                 contract_factory: Optional[ContractFactory] = None):
        super().__init__(SERVICE_NAME, SERVICE_PORT, config)

        # Built once per service; every binding shares this client.
        self.ledger_client = ledger_client if ledger_client is not None else create_ledger_client(self.config)
        self.contract_factory = contract_factory or partial(
            Arc200Contract, simulate_sender=self.config.simulate_sender
        )

        self.logger.info(
            "Ledger client configured",
            algod_token=self.config.masked_algod_token(),
            algod_url=self.config.algod_url,
            algod_port=self.config.algod_port,
        )

        self._setup_gateway_routes()

        # Expose service instance via app state for introspection/testing
        self.app.state.gateway_service = self

    def _setup_gateway_routes(self):
        """Set up gateway routes."""

        @self.app.get("/api", response_class=PlainTextResponse)
        async def root():
            """Liveness greeting."""
            return "Hello, World!"

        for method in TokenMethod:
            self.app.add_api_route(
                f"/api/assets/{{token_id}}/{method.path_segment}",
                self._read_endpoint(method),
                methods=["GET"],
                name=f"get_asset_{method.name.lower()}",
            )

        @self.app.get("/api/assets/{token_id}")
        async def get_asset(token_id: str = Depends(validate_token_id)):
            """Name, symbol, total supply and decimals in one response."""
            return await self.read_asset(token_id)

        @self.app.get("/api/assets/{token_id}/transfer/{addr_from}/{addr_to}/{amt}")
        async def transfer_asset(addr_from: str, addr_to: str, amt: str,
                                 token_id: str = Depends(validate_token_id)):
            """Simulate a transfer of ``amt`` units from ``addr_from`` to ``addr_to``."""
            return await self.transfer(token_id, addr_from, addr_to, amt)

    def _read_endpoint(self, method: TokenMethod):
        async def read(token_id: str = Depends(validate_token_id)):
            return await self.read_value(token_id, method)

        read.__doc__ = f"Read the token {method.path_segment}."
        return read

    async def read_value(self, token_id: str, method: TokenMethod):
        """Invoke a single accessor and shape its result."""
        try:
            contract = self.contract_factory(to_number(token_id), self.ledger_client)
            result = await self._invoke(method.path_segment, method.invoke(contract))

            if result.success:
                return {"success": True, "response": normalize_value(result.return_value)}
            return self._error_response(TokenNotFoundError())
        except Exception as e:
            return self._internal_error(e, operation=method.path_segment, token_id=token_id)

    async def read_asset(self, token_id: str):
        """Read all four accessors concurrently; succeed only if all do."""
        try:
            contract = self.contract_factory(to_number(token_id), self.ledger_client)
            results = await asyncio.gather(*(
                self._invoke(method.path_segment, method.invoke(contract))
                for method in TokenMethod
            ))

            summary = build_asset_summary(token_id, dict(zip(TokenMethod, results)))
            if summary is None:
                return self._error_response(TokenNotFoundError())
            return {"success": True, "response": {"asset": summary.to_response()}}
        except Exception as e:
            return self._internal_error(e, operation="asset", token_id=token_id)

    async def transfer(self, token_id: str, addr_from: str, addr_to: str, amt: str):
        """Bind with the sender as caller and simulate the transfer."""
        try:
            contract = self.contract_factory(to_number(token_id), self.ledger_client, caller=addr_from)
            result = await self._invoke("transfer", contract.arc200_transfer(addr_to, to_number(amt)))

            if result.success:
                return {"success": True, "response": result.txns}
            return self._error_response(TransferFailedError(details=result.error))
        except Exception as e:
            return self._internal_error(e, operation="transfer", token_id=token_id)

    async def _invoke(self, operation: str, call) -> OperationResult:
        """Await a contract call, recording its outcome."""
        try:
            with self.metrics.time_operation("ledger_call_duration_seconds", method=operation):
                result = await call
        except Exception:
            self.metrics.record_ledger_call(operation, "error")
            raise

        self.metrics.record_ledger_call(operation, "success" if result.success else "failure")
        return result

    def _error_response(self, exc: GatewayException) -> JSONResponse:
        self.metrics.record_error(exc.code)
        return JSONResponse(status_code=exc.status_code, content=exc.to_content())

    def _internal_error(self, exc: Exception, **context: Any) -> JSONResponse:
        self.logger.error("Request failed", error=str(exc), exc_info=exc, **context)
        return self._error_response(InternalServerError())

    async def _check_dependencies(self) -> Dict[str, str]:
        return {
            "ledger": "configured" if self.config.algod_address else "not_configured"
        }


def create_app(config: Optional[ServiceConfig] = None,
               ledger_client: Optional[AlgodClient] = None,
               contract_factory: Optional[ContractFactory] = None):
    """Create FastAPI application."""
    service = GatewayService(config, ledger_client, contract_factory)
    return service.app


def main():
    service = GatewayService()
    service.run()


if __name__ == "__main__":
    main()
