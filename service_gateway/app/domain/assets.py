"""
Token read operations and the combined asset view.
"""

from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional

from pydantic import BaseModel, Field

from service_gateway.app.adapters.arc200_client import Arc200Contract, OperationResult
from service_gateway.app.domain.values import normalize_value


class TokenMethod(Enum):
    """Read-only token accessors exposed by the gateway.

    The value is the URL segment of the single-method route.
    """

    NAME = "name"
    SYMBOL = "symbol"
    TOTAL_SUPPLY = "totalSupply"
    DECIMALS = "decimals"

    @property
    def path_segment(self) -> str:
        return self.value

    def invoke(self, contract: Arc200Contract) -> Awaitable[OperationResult]:
        """Call the accessor this member stands for on ``contract``."""
        return _ACCESSORS[self](contract)


_ACCESSORS: Dict[TokenMethod, Callable[[Arc200Contract], Awaitable[OperationResult]]] = {
    TokenMethod.NAME: lambda contract: contract.arc200_name(),
    TokenMethod.SYMBOL: lambda contract: contract.arc200_symbol(),
    TokenMethod.TOTAL_SUPPLY: lambda contract: contract.arc200_totalSupply(),
    TokenMethod.DECIMALS: lambda contract: contract.arc200_decimals(),
}


class AssetSummary(BaseModel):
    """Combined token metadata returned by GET /api/assets/{tokenId}."""

    index: str = Field(..., description="Token identifier exactly as requested")
    name: Any = Field(..., description="Normalized token name")
    symbol: Any = Field(..., description="Normalized token symbol")
    total_supply: str = Field(..., serialization_alias="totalSupply")
    decimals: str

    def to_response(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


def build_asset_summary(token_id: str, results: Dict[TokenMethod, OperationResult]) -> Optional[AssetSummary]:
    """Assemble the asset view, or None unless every read succeeded."""
    if not all(results[method].success for method in TokenMethod):
        return None

    return AssetSummary(
        index=token_id,
        name=normalize_value(results[TokenMethod.NAME].return_value),
        symbol=normalize_value(results[TokenMethod.SYMBOL].return_value),
        total_supply=str(results[TokenMethod.TOTAL_SUPPLY].return_value),
        decimals=str(results[TokenMethod.DECIMALS].return_value),
    )
