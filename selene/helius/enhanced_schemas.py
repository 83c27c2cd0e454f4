from __future__ import annotations

from typing import Any, List, Optional, Union

from pydantic import Field, field_validator

from selene.helius.enums import (
    ProgramNameField,
    SourceField,
    TokenStandardField,
    TransactionContextField,
    TransactionTypeField,
)
from selene.helius.schemas import CamelModel

# Helius caps the parse endpoint at 100 signatures per call
MAX_PARSE_SIGNATURES = 100

Number = Union[int, float]


class TransferUserAccounts(CamelModel):
    from_user_account: Optional[str] = None
    to_user_account: Optional[str] = None


class NativeTransfer(TransferUserAccounts):
    amount: Number = 0


class TokenTransfer(TransferUserAccounts):
    from_token_account: Optional[str] = None
    to_token_account: Optional[str] = None
    token_amount: Number = 0
    token_standard: Optional[TokenStandardField] = None
    mint: str


class RawTokenAmount(CamelModel):
    token_amount: str
    decimals: int


class TokenBalanceChange(CamelModel):
    user_account: str
    token_account: str
    raw_token_amount: RawTokenAmount
    mint: str


class NativeBalanceChange(CamelModel):
    account: str
    # upstream sends this either as a number or as a numeric string
    amount: Number

    @field_validator("amount", mode="before")
    @classmethod
    def _parse_numeric_string(cls, value: Any) -> Any:
        if isinstance(value, str):
            return float(value) if "." in value else int(value)
        return value


class AccountData(CamelModel):
    account: str
    native_balance_change: Number = 0
    token_balance_changes: Optional[List[TokenBalanceChange]] = None


class InnerInstruction(CamelModel):
    accounts: List[str] = Field(default_factory=list)
    data: str = ""
    program_id: str


class Instruction(InnerInstruction):
    inner_instructions: List[InnerInstruction] = Field(default_factory=list)


class ProgramInfo(CamelModel):
    source: SourceField
    account: str
    program_name: ProgramNameField
    instruction_name: str


class TokenSwap(CamelModel):
    native_input: Optional[NativeTransfer] = None
    native_output: Optional[NativeTransfer] = None
    token_inputs: List[TokenTransfer] = Field(default_factory=list)
    token_outputs: List[TokenTransfer] = Field(default_factory=list)
    token_fees: List[TokenTransfer] = Field(default_factory=list)
    native_fees: List[NativeTransfer] = Field(default_factory=list)
    program_info: Optional[ProgramInfo] = None


class SwapEvent(CamelModel):
    native_input: Optional[NativeBalanceChange] = None
    native_output: Optional[NativeBalanceChange] = None
    token_inputs: List[TokenBalanceChange] = Field(default_factory=list)
    token_outputs: List[TokenBalanceChange] = Field(default_factory=list)
    token_fees: List[TokenBalanceChange] = Field(default_factory=list)
    native_fees: List[NativeBalanceChange] = Field(default_factory=list)
    inner_swaps: List[TokenSwap] = Field(default_factory=list)


class Token(CamelModel):
    mint: str
    token_standard: Optional[TokenStandardField] = None


class NFTEvent(CamelModel):
    seller: str = ""
    buyer: str = ""
    timestamp: Number = 0
    amount: Number = 0
    fee: Number = 0
    signature: str = ""
    source: Optional[SourceField] = None
    transaction_type: Optional[TransactionTypeField] = Field(default=None, alias="type")
    sale_type: Optional[TransactionContextField] = None
    nfts: List[Token] = Field(default_factory=list)


class CompressedNftEvent(CamelModel):
    transaction_type: TransactionTypeField = Field(alias="type")
    tree_id: str
    asset_id: str
    leaf_index: Optional[int] = None
    seq: Optional[int] = None
    instruction_index: Optional[int] = None
    inner_instruction_index: Optional[int] = None
    new_leaf_owner: Optional[str] = None
    old_leaf_owner: Optional[str] = None
    new_leaf_delegate: Optional[str] = None
    old_leaf_delegate: Optional[Any] = None
    tree_delegate: Optional[str] = None
    metadata: Optional[Any] = None
    update_args: Optional[Any] = None


class Authority(CamelModel):
    account: str
    from_: str = Field(alias="from")
    to: str
    instruction_index: Optional[int] = None
    inner_instruction_index: Optional[int] = None


class TransactionEvent(CamelModel):
    nft: Optional[NFTEvent] = None
    swap: Optional[SwapEvent] = None
    compressed: Optional[List[CompressedNftEvent]] = None
    set_authority: Optional[List[Authority]] = None


class TransactionError(CamelModel):
    instruction_error: Optional[Any] = Field(default=None, alias="InstructionError")


class EnhancedTransaction(CamelModel):
    description: str = ""
    transaction_type: TransactionTypeField = Field(alias="type")
    source: SourceField
    fee: int = 0
    fee_payer: str = ""
    signature: str
    slot: int = 0
    timestamp: int = 0
    account_data: List[AccountData] = Field(default_factory=list)
    native_transfers: Optional[List[NativeTransfer]] = None
    token_transfers: Optional[List[TokenTransfer]] = None
    transaction_error: Optional[Union[TransactionError, str]] = None
    instructions: List[Instruction] = Field(default_factory=list)
    events: TransactionEvent = Field(default_factory=TransactionEvent)


class ParseTransactionsRequest(CamelModel):
    transactions: List[str] = Field(max_length=MAX_PARSE_SIGNATURES)

    @classmethod
    def from_signatures(cls, signatures: List[str]) -> List["ParseTransactionsRequest"]:
        """Split ``signatures`` into requests of at most 100 signatures each."""
        return [
            cls(transactions=list(signatures[start : start + MAX_PARSE_SIGNATURES]))
            for start in range(0, len(signatures), MAX_PARSE_SIGNATURES)
        ]


__all__ = [
    "AccountData",
    "Authority",
    "CompressedNftEvent",
    "EnhancedTransaction",
    "InnerInstruction",
    "Instruction",
    "MAX_PARSE_SIGNATURES",
    "NFTEvent",
    "NativeBalanceChange",
    "NativeTransfer",
    "ParseTransactionsRequest",
    "ProgramInfo",
    "RawTokenAmount",
    "SwapEvent",
    "Token",
    "TokenBalanceChange",
    "TokenSwap",
    "TokenTransfer",
    "TransactionError",
    "TransactionEvent",
]
