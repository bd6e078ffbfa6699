from __future__ import annotations

import json
from typing import Any

from packages.shared.schemas.transaction_v1 import (
    CallPayloadV1,
    KindTagV1,
    PublishPayloadV1,
    TransactionKindPayloadV1,
    TransferObjectPayloadV1,
)
from packages.shared.schemas.view_v1 import FieldV1, LinkCategoryV1
from services.api.app.services.transaction_base import KindFields, MalformedPayloadError


def format_kind(kind: str, payload: TransactionKindPayloadV1, sender: str | None) -> KindFields:
    """Map a transaction kind and its payload to the kind-specific field set.

    Raises MalformedPayloadError when `kind` disagrees with the payload variant or a field
    the kind needs is missing. Kinds this module does not know about format to an empty
    `KindFields()` so new on-chain kinds never break the view.
    """

    if kind != payload.kind:
        raise MalformedPayloadError(
            kind, f"payload variant {payload.kind!r} does not match kind {kind!r}"
        )

    if kind == KindTagV1.TRANSFER_OBJECT.value:
        return _format_transfer(_expect(kind, payload, TransferObjectPayloadV1), sender)

    if kind == KindTagV1.CALL.value:
        return _format_call(_expect(kind, payload, CallPayloadV1), sender)

    if kind == KindTagV1.PUBLISH.value:
        return _format_publish(_expect(kind, payload, PublishPayloadV1), sender)

    return KindFields()


def _format_transfer(payload: TransferObjectPayloadV1, sender: str | None) -> KindFields:
    if payload.object_ref is None or not payload.object_ref.object_id:
        raise MalformedPayloadError(KindTagV1.TRANSFER_OBJECT.value, "missing object_ref")

    fields = _sender_fields(sender)
    fields.append(_object_link("Object ID", payload.object_ref.object_id))
    if payload.recipient:
        fields.append(_address_link("Recipient", payload.recipient))

    return KindFields(title="Transfer", fields=tuple(fields))


def _format_call(payload: CallPayloadV1, sender: str | None) -> KindFields:
    if not payload.package_object_id:
        raise MalformedPayloadError(KindTagV1.CALL.value, "missing package_object_id")
    if not payload.module:
        raise MalformedPayloadError(KindTagV1.CALL.value, "missing module")

    fields = _sender_fields(sender)
    fields.append(_object_link("Package", payload.package_object_id))
    fields.append(FieldV1(label="Module", value=payload.module))
    if payload.function:
        fields.append(FieldV1(label="Function", value=payload.function))

    return KindFields(
        title="Call",
        fields=tuple(fields),
        arguments=tuple(_render_argument(arg) for arg in payload.arguments),
    )


def _format_publish(payload: PublishPayloadV1, sender: str | None) -> KindFields:
    if payload.modules is None:
        raise MalformedPayloadError(KindTagV1.PUBLISH.value, "missing modules")

    for name, content in payload.modules.items():
        if not name or not content:
            raise MalformedPayloadError(KindTagV1.PUBLISH.value, f"module {name!r} has no content")

    return KindFields(
        title="publish",
        fields=tuple(_sender_fields(sender)),
        modules=tuple(payload.modules.items()),
    )


def _expect(kind: str, payload: TransactionKindPayloadV1, variant: type) -> Any:
    if not isinstance(payload, variant):
        raise MalformedPayloadError(
            kind, f"payload variant {payload.kind!r} does not match kind {kind!r}"
        )
    return payload


def _sender_fields(sender: str | None) -> list[FieldV1]:
    # A missing sender drops the field rather than showing an empty link.
    if not sender:
        return []
    return [_address_link("Sender", sender)]


def _address_link(label: str, value: str) -> FieldV1:
    return FieldV1(label=label, value=value, is_link=True, link_category=LinkCategoryV1.ADDRESS)


def _object_link(label: str, value: str) -> FieldV1:
    return FieldV1(label=label, value=value, is_link=True, link_category=LinkCategoryV1.OBJECT)


def _render_argument(arg: Any) -> str:
    if isinstance(arg, str) and arg:
        return arg
    # Pure Move arguments arrive as raw bytes.
    if isinstance(arg, (bytes, bytearray)):
        return "0x" + bytes(arg).hex()
    try:
        return json.dumps(arg, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        raise MalformedPayloadError(
            KindTagV1.CALL.value, f"argument of type {type(arg).__name__} cannot be displayed"
        ) from e
