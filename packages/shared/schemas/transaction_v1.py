"""Shared resolved-transaction schema (v1).

These records come from the upstream decoder after signature verification and gas
computation. Payload fields are decoded leniently: whether a field is required is decided
by the kind formatter, not by the schema.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag


class KindTagV1(str, Enum):
    TRANSFER_OBJECT = "TransferObject"
    CALL = "Call"
    PUBLISH = "Publish"


class ExecutionStatusV1(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["success", "failure"]
    error: str | None = None


class ObjectRefV1(BaseModel):
    model_config = ConfigDict(frozen=True)

    object_id: str = Field(..., min_length=1)
    version: int = 0
    digest: str = ""


class TransferObjectPayloadV1(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["TransferObject"] = "TransferObject"
    object_ref: ObjectRefV1 | None = None
    recipient: str | None = None


class CallPayloadV1(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["Call"] = "Call"
    package_object_id: str | None = None
    module: str | None = None
    function: str | None = None
    arguments: list[Any] = Field(default_factory=list)


class PublishPayloadV1(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["Publish"] = "Publish"

    # Module name -> disassembled module content. Insertion order is the display order.
    modules: dict[str, str] | None = None


class OtherPayloadV1(BaseModel):
    """Fallback for transaction kinds this schema version does not know about."""

    model_config = ConfigDict(frozen=True)

    kind: str = Field(..., min_length=1)
    data: dict[str, Any] = Field(default_factory=dict)


_KNOWN_KINDS = frozenset(tag.value for tag in KindTagV1)


def _payload_tag(value: Any) -> str:
    kind = value.get("kind") if isinstance(value, dict) else getattr(value, "kind", None)
    return kind if kind in _KNOWN_KINDS else "Other"


TransactionKindPayloadV1 = Annotated[
    Union[
        Annotated[TransferObjectPayloadV1, Tag("TransferObject")],
        Annotated[CallPayloadV1, Tag("Call")],
        Annotated[PublishPayloadV1, Tag("Publish")],
        Annotated[OtherPayloadV1, Tag("Other")],
    ],
    Discriminator(_payload_tag),
]


class TransactionRecordV1(BaseModel):
    model_config = ConfigDict(frozen=True)

    tx_id: str = Field(..., min_length=1)
    status: ExecutionStatusV1
    timestamp_ms: int | None = None

    # Kind name as reported upstream. Falls back to the payload variant when absent.
    kind: str | None = None
    payload: TransactionKindPayloadV1

    sender: str | None = None

    gas_payment: ObjectRefV1
    gas_budget: int = Field(..., ge=0)
    gas_fee: int = Field(..., ge=0)

    mutated: list[ObjectRefV1] = Field(default_factory=list)
    created: list[ObjectRefV1] = Field(default_factory=list)

    tx_signature: str = Field(..., min_length=1)
    authority_signatures: list[Annotated[str, Field(min_length=1)]] = Field(default_factory=list)

    @property
    def kind_tag(self) -> str:
        return self.kind or self.payload.kind
