"""Helius enum catalogs.

Upstream keeps adding values to these lists, so model fields never use the
bare enum: they use the ``*Field`` aliases below, which map known values to the
enum and keep an unrecognized value as its raw string.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Union

from pydantic import PlainSerializer, PlainValidator, WithJsonSchema


class TransactionType(str, Enum):
    ANY = "ANY"
    UNKNOWN = "UNKNOWN"
    UNLABELED = "UNLABELED"
    TRANSFER = "TRANSFER"
    SWAP = "SWAP"
    BURN = "BURN"
    BURN_NFT = "BURN_NFT"
    TOKEN_MINT = "TOKEN_MINT"
    NFT_MINT = "NFT_MINT"
    NFT_SALE = "NFT_SALE"
    NFT_LISTING = "NFT_LISTING"
    NFT_CANCEL_LISTING = "NFT_CANCEL_LISTING"
    NFT_BID = "NFT_BID"
    NFT_BID_CANCELLED = "NFT_BID_CANCELLED"
    NFT_GLOBAL_BID = "NFT_GLOBAL_BID"
    NFT_AUCTION_CREATED = "NFT_AUCTION_CREATED"
    COMPRESSED_NFT_MINT = "COMPRESSED_NFT_MINT"
    COMPRESSED_NFT_TRANSFER = "COMPRESSED_NFT_TRANSFER"
    COMPRESSED_NFT_BURN = "COMPRESSED_NFT_BURN"
    CREATE_POOL = "CREATE_POOL"
    ADD_TO_POOL = "ADD_TO_POOL"
    REMOVE_FROM_POOL = "REMOVE_FROM_POOL"
    STAKE_SOL = "STAKE_SOL"
    UNSTAKE_SOL = "UNSTAKE_SOL"
    STAKE_TOKEN = "STAKE_TOKEN"
    UNSTAKE_TOKEN = "UNSTAKE_TOKEN"
    DEPOSIT = "DEPOSIT"
    WITHDRAW = "WITHDRAW"
    CLOSE_ACCOUNT = "CLOSE_ACCOUNT"
    INITIALIZE_ACCOUNT = "INITIALIZE_ACCOUNT"
    SET_AUTHORITY = "SET_AUTHORITY"
    CLAIM_REWARDS = "CLAIM_REWARDS"
    FUSE = "FUSE"


class Source(str, Enum):
    UNKNOWN = "UNKNOWN"
    SYSTEM_PROGRAM = "SYSTEM_PROGRAM"
    STAKE_PROGRAM = "STAKE_PROGRAM"
    SOLANA_PROGRAM_LIBRARY = "SOLANA_PROGRAM_LIBRARY"
    JUPITER = "JUPITER"
    RAYDIUM = "RAYDIUM"
    ORCA = "ORCA"
    SERUM = "SERUM"
    SABER = "SABER"
    MARINADE = "MARINADE"
    MAGIC_EDEN = "MAGIC_EDEN"
    TENSOR = "TENSOR"
    METAPLEX = "METAPLEX"
    CANDY_MACHINE_V3 = "CANDY_MACHINE_V3"
    BUBBLEGUM = "BUBBLEGUM"
    PHANTOM = "PHANTOM"
    SQUADS = "SQUADS"
    W_SOL = "W_SOL"
    USDC = "USDC"


class ProgramName(str, Enum):
    UNKOWN = "UNKOWN"
    JUPITER_V4 = "JUPITER_V4"
    RAYDIUM_LIQUIDITY_POOL_V4 = "RAYDIUM_LIQUIDITY_POOL_V4"
    ORCA_WHIRLPOOLS = "ORCA_WHIRLPOOLS"
    ORCA_TOKEN_SWAP_V2 = "ORCA_TOKEN_SWAP_V2"
    SERUM_DEX_V3 = "SERUM_DEX_V3"
    SABER_STABLE_SWAP = "SABER_STABLE_SWAP"
    MERCURIAL_STABLE_SWAP = "MERCURIAL_STABLE_SWAP"
    LIFINITY_V2 = "LIFINITY_V2"
    MARINADE = "MARINADE"
    BUBBLEGUM = "BUBBLEGUM"


class TransactionContext(str, Enum):
    AUCTION = "AUCTION"
    INSTANT_SALE = "INSTANT_SALE"
    OFFER = "OFFER"
    GLOBAL_OFFER = "GLOBAL_OFFER"
    MINT = "MINT"
    UNKNOWN = "UNKNOWN"


class TokenStandard(str, Enum):
    PROGRAMMABLE_NON_FUNGIBLE = "ProgrammableNonFungible"
    NON_FUNGIBLE = "NonFungible"
    FUNGIBLE = "Fungible"
    FUNGIBLE_ASSET = "FungibleAsset"
    NON_FUNGIBLE_EDITION = "NonFungibleEdition"
    UNKNOWN_STANDARD = "UnknownStandard"


class Interface(str, Enum):
    V1_NFT = "V1_NFT"
    CUSTOM = "Custom"
    V1_PRINT = "V1_PRINT"
    LEGACY_NFT = "Legacy_NFT"
    V2_NFT = "V2_NFT"
    FUNGIBLE_ASSET = "FungibleAsset"
    FUNGIBLE_TOKEN = "FungibleToken"
    IDENTITY = "Identity"
    EXECUTABLE = "Executable"
    PROGRAMMABLE_NFT = "ProgrammableNFT"


class AccountWebhookEncoding(str, Enum):
    JSON_PARSED = "jsonParsed"


class WebhookType(str, Enum):
    ENHANCED = "enhanced"
    ENHANCED_DEVNET = "enhancedDevnet"
    RAW = "raw"
    RAW_DEVNET = "rawDevnet"
    DISCORD = "discord"
    DISCORD_DEVNET = "discordDevnet"


class TxnStatus(str, Enum):
    ALL = "all"
    SUCCESS = "success"
    FAILED = "failed"


class PriorityLevel(str, Enum):
    MIN = "MIN"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    VERY_HIGH = "VERY_HIGH"
    # 100th percentile, easy to overpay with
    UNSAFE_MAX = "UNSAFE_MAX"
    DEFAULT = "DEFAULT"


class AssetSortBy(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    RECENT_ACTION = "recent_action"


class AssetSortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class OwnershipModel(str, Enum):
    SINGLE = "single"
    TOKEN = "token"


class RoyaltyModel(str, Enum):
    CREATORS = "creators"
    FANOUT = "fanout"
    SINGLE = "single"


class Scope(str, Enum):
    FULL = "full"
    ROYALTY = "royalty"
    METADATA = "metadata"
    EXTENSION = "extension"


class TokenType(str, Enum):
    FUNGIBLE = "fungible"
    NON_FUNGIBLE = "nonFungible"
    REGULAR_NFT = "regularNft"
    COMPRESSED_NFT = "compressedNft"
    ALL = "all"


def _raw_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _open(enum_type):
    def _coerce(value: Any) -> Any:
        if isinstance(value, enum_type):
            return value
        if not isinstance(value, str):
            raise ValueError(f"{enum_type.__name__} must be a string")
        try:
            return enum_type(value)
        except ValueError:
            return value

    return Annotated[
        Union[enum_type, str],
        PlainValidator(_coerce),
        PlainSerializer(_raw_value, return_type=str),
        WithJsonSchema({"type": "string"}),
    ]


TransactionTypeField = _open(TransactionType)
SourceField = _open(Source)
ProgramNameField = _open(ProgramName)
TransactionContextField = _open(TransactionContext)
TokenStandardField = _open(TokenStandard)
InterfaceField = _open(Interface)
AccountWebhookEncodingField = _open(AccountWebhookEncoding)


__all__ = [
    "AccountWebhookEncoding",
    "AccountWebhookEncodingField",
    "AssetSortBy",
    "AssetSortDirection",
    "Interface",
    "InterfaceField",
    "OwnershipModel",
    "PriorityLevel",
    "ProgramName",
    "ProgramNameField",
    "RoyaltyModel",
    "Scope",
    "Source",
    "SourceField",
    "TokenStandard",
    "TokenStandardField",
    "TokenType",
    "TransactionContext",
    "TransactionContextField",
    "TransactionType",
    "TransactionTypeField",
    "TxnStatus",
    "WebhookType",
]
