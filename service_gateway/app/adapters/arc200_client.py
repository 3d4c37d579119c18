"""
ARC-200 contract binding for the Gateway.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, List, Optional, Union

from algosdk import abi, encoding, error
from algosdk.atomic_transaction_composer import AtomicTransactionComposer, EmptySigner
from algosdk.v2client.algod import AlgodClient
from algosdk.v2client.models import SimulateRequest

from shared.config import ZERO_ADDRESS
from shared.logging import get_logger


@dataclass
class OperationResult:
    """Outcome of one contract call.

    ``return_value`` and ``txns`` are set only on success, ``error`` only on
    failure.
    """

    success: bool
    return_value: Any = None
    error: Optional[str] = None
    txns: Optional[List[str]] = None

    @classmethod
    def ok(cls, return_value: Any = None, txns: Optional[List[str]] = None) -> "OperationResult":
        return cls(success=True, return_value=return_value, txns=txns)

    @classmethod
    def fail(cls, error: str) -> "OperationResult":
        return cls(success=False, error=error)


class Arc200Contract:
    """Typed calls against one deployed ARC-200 application.

    Every call is evaluated through the node's simulate endpoint with empty
    signatures; nothing is signed or submitted. Reads use ``simulate_sender``,
    transfers use the ``caller`` address the binding was created with.
    """

    NAME = abi.Method.from_signature("arc200_name()byte[32]")
    SYMBOL = abi.Method.from_signature("arc200_symbol()byte[8]")
    TOTAL_SUPPLY = abi.Method.from_signature("arc200_totalSupply()uint256")
    DECIMALS = abi.Method.from_signature("arc200_decimals()uint8")
    TRANSFER = abi.Method.from_signature("arc200_transfer(address,uint256)bool")

    def __init__(self,
                 contract_id: Union[int, float],
                 ledger_client: AlgodClient,
                 caller: Optional[str] = None,
                 simulate_sender: str = ZERO_ADDRESS):
        self.contract_id = contract_id
        self.ledger_client = ledger_client
        self.caller = caller
        self.simulate_sender = simulate_sender
        self.logger = get_logger("gateway.arc200_client")

    async def arc200_name(self) -> OperationResult:
        return await self._call(self.NAME)

    async def arc200_symbol(self) -> OperationResult:
        return await self._call(self.SYMBOL)

    async def arc200_totalSupply(self) -> OperationResult:
        return await self._call(self.TOTAL_SUPPLY)

    async def arc200_decimals(self) -> OperationResult:
        return await self._call(self.DECIMALS)

    async def arc200_transfer(self, addr_to: str, amount: Union[int, float]) -> OperationResult:
        """Simulate a transfer from the caller; returns the transaction ids."""
        if not self.caller:
            return OperationResult.fail("Transfer requires a caller address")
        if not encoding.is_valid_address(addr_to):
            return OperationResult.fail(f"Invalid receiver address: {addr_to}")

        result = await self._call(self.TRANSFER, [addr_to, amount], sender=self.caller)
        if result.success and result.return_value is False:
            return OperationResult.fail("Transfer returned false")
        return result

    def _valid_contract_id(self) -> bool:
        return (
            isinstance(self.contract_id, int)
            and not isinstance(self.contract_id, bool)
            and self.contract_id > 0
        )

    async def _call(self, method: abi.Method, args: Optional[List[Any]] = None,
                    sender: Optional[str] = None) -> OperationResult:
        if not self._valid_contract_id():
            return OperationResult.fail(f"Invalid contract id: {self.contract_id}")

        sender = sender or self.simulate_sender
        if not encoding.is_valid_address(sender):
            return OperationResult.fail(f"Invalid sender address: {sender}")

        # algosdk is blocking; keep the event loop free while the node answers.
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._simulate, method, list(args or []), sender)

    def _simulate(self, method: abi.Method, args: List[Any], sender: str) -> OperationResult:
        try:
            params = self.ledger_client.suggested_params()
            atc = AtomicTransactionComposer()
            atc.add_method_call(
                app_id=self.contract_id,
                method=method,
                sender=sender,
                sp=params,
                signer=EmptySigner(),
                method_args=args,
            )
            response = atc.simulate(
                self.ledger_client,
                SimulateRequest(
                    txn_groups=[],
                    allow_empty_signatures=True,
                    allow_unnamed_resources=True,
                ),
            )
        except (error.AlgodHTTPError, error.ABIEncodingError, error.AtomicTransactionComposerError) as e:
            self.logger.info(
                "Contract call rejected",
                contract_id=self.contract_id,
                method=method.name,
                error=str(e)
            )
            return OperationResult.fail(str(e))

        if response.failure_message:
            self.logger.info(
                "Contract simulation failed",
                contract_id=self.contract_id,
                method=method.name,
                error=response.failure_message
            )
            return OperationResult.fail(response.failure_message)

        abi_result = response.abi_results[0]
        if abi_result.decode_error:
            return OperationResult.fail(str(abi_result.decode_error))

        return OperationResult.ok(
            return_value=self._decode(method, abi_result.return_value),
            txns=list(response.tx_ids),
        )

    @staticmethod
    def _decode(method: abi.Method, value: Any) -> Any:
        """byte[N] results become text; NUL padding is kept."""
        if str(method.returns.type).startswith("byte["):
            return bytes(value).decode("utf-8", errors="replace")
        return value
