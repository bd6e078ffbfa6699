"""Shared transaction view schema (v1).

The web explorer and any other client should render these payloads consistently. The
order of `ViewModelV1.blocks` is part of the contract; clients must not reorder it.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class LinkCategoryV1(str, Enum):
    ADDRESS = "address"
    OBJECT = "object"


class BlockTypeV1(str, Enum):
    HEADER = "header"
    ADDRESSES = "addresses"
    LINKS = "links"
    MODULES = "modules"
    ARGUMENTS = "arguments"
    GAS = "gas"
    TX_SIGNATURE = "tx_signature"
    VALIDATOR_SIGNATURES = "validator_signatures"

    # Only used for the standalone kind-fields projection, never inside a ViewModelV1.
    KIND = "kind"


class FieldV1(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str | None = None
    value: str | list[str]
    is_link: bool = False
    link_category: LinkCategoryV1 | None = None
    emphasize_monospace: bool = False

    @model_validator(mode="after")
    def _check_link_category(self) -> "FieldV1":
        if self.value == "":
            raise ValueError("value must not be empty; omit the field instead")
        if self.is_link and self.link_category is None:
            raise ValueError("link fields require a link_category")
        if not self.is_link and self.link_category is not None:
            raise ValueError("link_category is only allowed on link fields")
        return self


class FieldGroupV1(BaseModel):
    model_config = ConfigDict(frozen=True)

    block: BlockTypeV1
    title: str
    fields: list[FieldV1] = Field(default_factory=list)

    # Known gaps in what the group shows (e.g. values not computed yet).
    notes: list[str] = Field(default_factory=list)


class LinkGroupV1(BaseModel):
    model_config = ConfigDict(frozen=True)

    block: Literal["links"] = "links"
    label: str
    target_ids: list[str] = Field(..., min_length=1)


class ViewModelV1(BaseModel):
    model_config = ConfigDict(frozen=True)

    version: str = "1"
    tx_id: str
    blocks: list[LinkGroupV1 | FieldGroupV1]

    def block_types(self) -> list[BlockTypeV1]:
        return [BlockTypeV1(b.block) for b in self.blocks]
