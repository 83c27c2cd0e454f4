"""Digital Asset Standard (DAS) request params and responses.

Request params are camelCase on the wire; asset responses keep the snake_case
keys the DAS API returns.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import Field

from selene.helius.enums import (
    AssetSortBy,
    AssetSortDirection,
    Interface,
    InterfaceField,
    OwnershipModel,
    RoyaltyModel,
    Scope,
    TokenType,
)
from selene.helius.schemas import CamelModel, SnakeModel


class DisplayOptions(CamelModel):
    show_fungible: bool = False
    show_inscription: bool = False


class TokenAccountDisplayOptions(CamelModel):
    show_zero_balance: bool = False


class AssetSortingRequest(CamelModel):
    sort_by: AssetSortBy = AssetSortBy.CREATED
    sort_direction: AssetSortDirection = AssetSortDirection.ASC


class PaginatedParams(CamelModel):
    page: int = 1
    limit: Optional[int] = None
    before: Optional[str] = None
    after: Optional[str] = None


class GetAssetParams(CamelModel):
    id: str
    display_options: Optional[DisplayOptions] = None


class GetAssetBatchParams(CamelModel):
    ids: List[str]
    display_options: Optional[DisplayOptions] = None


class GetAssetProofParams(CamelModel):
    id: str


class GetAssetProofBatchParams(CamelModel):
    ids: List[str]


class GetAssetsByOwnerParams(PaginatedParams):
    owner_address: str
    display_options: Optional[DisplayOptions] = None
    sort_by: Optional[AssetSortingRequest] = None


class GetAssetsByAuthorityParams(PaginatedParams):
    authority_address: str
    display_options: Optional[DisplayOptions] = None
    sort_by: Optional[AssetSortingRequest] = None


class GetAssetsByCreatorParams(PaginatedParams):
    creator_address: str
    only_verified: bool = False
    display_options: Optional[DisplayOptions] = None
    sort_by: Optional[AssetSortingRequest] = None


class GetAssetsByGroupParams(PaginatedParams):
    group_key: str
    group_value: str
    display_options: Optional[DisplayOptions] = None
    sort_by: Optional[AssetSortingRequest] = None


class SearchAssetsParams(PaginatedParams):
    sort_by: Optional[AssetSortingRequest] = None
    creator_address: Optional[str] = None
    owner_address: Optional[str] = None
    json_uri: Optional[str] = None
    grouping: Optional[List[str]] = None
    burnt: Optional[bool] = None
    frozen: Optional[bool] = None
    supply_mint: Optional[str] = None
    supply: Optional[int] = None
    interface: Optional[InterfaceField] = None
    token_type: Optional[TokenType] = None
    delegate: Optional[str] = None
    owner_type: Optional[OwnershipModel] = None
    royalty_amount: Optional[int] = None
    royalty_target: Optional[str] = None
    royalty_target_type: Optional[RoyaltyModel] = None
    compressible: Optional[bool] = None
    compressed: Optional[bool] = None


class GetTokenAccountsParams(CamelModel):
    page: int = 1
    limit: Optional[int] = None
    display_options: TokenAccountDisplayOptions = Field(default_factory=TokenAccountDisplayOptions)
    owner: Optional[str] = None
    mint: Optional[str] = None


class GetAssetProofResponse(SnakeModel):
    root: str = ""
    proof: List[str] = Field(default_factory=list)
    node_index: int = 0
    leaf: str = ""
    tree_id: str = ""


class Ownership(SnakeModel):
    frozen: bool = False
    delegated: bool = False
    delegate: Optional[str] = None
    ownership_model: OwnershipModel = OwnershipModel.SINGLE
    owner: str = ""


class Supply(SnakeModel):
    print_max_supply: Optional[int] = None
    print_current_supply: Optional[int] = None
    edition_nonce: Optional[int] = None


class Uses(SnakeModel):
    use_method: str
    remaining: int
    total: int


class Creator(SnakeModel):
    address: str
    share: int = 0
    verified: bool = False


class Royalty(SnakeModel):
    royalty_model: RoyaltyModel
    target: Optional[str] = None
    percent: float = 0.0
    basis_points: int = 0
    primary_sale_happened: bool = False
    locked: bool = False


class CollectionMetadata(SnakeModel):
    name: Optional[str] = None
    symbol: Optional[str] = None
    image: Optional[str] = None
    description: Optional[str] = None
    external_url: Optional[str] = None


class Grouping(SnakeModel):
    group_key: str
    group_value: Optional[str] = None
    verified: Optional[bool] = None
    collection_metadata: Optional[CollectionMetadata] = None


class Authorities(SnakeModel):
    address: str
    scopes: List[Scope] = Field(default_factory=list)


class Links(SnakeModel):
    external_url: Optional[str] = None
    image: Optional[str] = None
    animation_url: Optional[str] = None


class File(SnakeModel):
    uri: Optional[str] = None
    mime: Optional[str] = None
    cdn_uri: Optional[str] = None
    contexts: Optional[List[str]] = None


class Attribute(SnakeModel):
    value: Any = None
    trait_type: Optional[str] = None


class Metadata(SnakeModel):
    attributes: Optional[List[Attribute]] = None
    description: Optional[str] = None
    name: str = ""
    symbol: str = ""


class Content(SnakeModel):
    schema_: str = Field(default="", alias="$schema")
    json_uri: str = ""
    files: Optional[List[File]] = None
    metadata: Metadata = Field(default_factory=Metadata)
    links: Links = Field(default_factory=Links)


class Compression(SnakeModel):
    eligible: bool = False
    compressed: bool = False
    data_hash: str = ""
    creator_hash: str = ""
    asset_hash: str = ""
    tree: str = ""
    seq: int = 0
    leaf_id: int = 0


class PriceInfo(SnakeModel):
    price_per_token: Decimal = Decimal(0)
    total_price: Decimal = Decimal(0)
    currency: str = "USDC"


class TokenInfo(SnakeModel):
    symbol: str = ""
    balance: int = 0
    supply: int = 0
    decimals: int = 0
    token_program: str = ""
    associated_token_address: str = ""
    price_info: PriceInfo = Field(default_factory=PriceInfo)


class GetAssetResponse(SnakeModel):
    interface: InterfaceField = Interface.CUSTOM
    id: str = ""
    content: Optional[Content] = None
    authorities: Optional[List[Authorities]] = None
    compression: Optional[Compression] = None
    grouping: Optional[List[Grouping]] = None
    royalty: Optional[Royalty] = None
    ownership: Ownership = Field(default_factory=Ownership)
    creators: Optional[List[Creator]] = None
    uses: Optional[Uses] = None
    supply: Optional[Supply] = None
    mutable: bool = False
    burnt: bool = False
    token_info: Optional[TokenInfo] = None


class GetAssetResponseList(SnakeModel):
    grand_total: Optional[int] = None
    total: int = 0
    limit: int = 0
    page: int = 0
    items: List[GetAssetResponse] = Field(default_factory=list)


class TokenAccount(SnakeModel):
    address: str = ""
    mint: str = ""
    owner: str = ""
    amount: int = 0
    delegated_amount: int = 0
    frozen: bool = False


class GetTokenAccountsResponse(SnakeModel):
    total: int = 0
    limit: int = 0
    page: int = 0
    token_accounts: List[TokenAccount] = Field(default_factory=list)


AssetProofBatch = Dict[str, GetAssetProofResponse]


__all__ = [
    "AssetProofBatch",
    "AssetSortingRequest",
    "DisplayOptions",
    "GetAssetBatchParams",
    "GetAssetParams",
    "GetAssetProofBatchParams",
    "GetAssetProofParams",
    "GetAssetProofResponse",
    "GetAssetResponse",
    "GetAssetResponseList",
    "GetAssetsByAuthorityParams",
    "GetAssetsByCreatorParams",
    "GetAssetsByGroupParams",
    "GetAssetsByOwnerParams",
    "GetTokenAccountsParams",
    "GetTokenAccountsResponse",
    "PaginatedParams",
    "SearchAssetsParams",
    "TokenAccount",
    "TokenAccountDisplayOptions",
    "TokenInfo",
]
