from __future__ import annotations

from packages.shared.schemas.transaction_v1 import (
    ObjectRefV1,
    TransactionRecordV1,
    TransferObjectPayloadV1,
)
from packages.shared.schemas.view_v1 import (
    BlockTypeV1,
    FieldGroupV1,
    FieldV1,
    LinkCategoryV1,
    LinkGroupV1,
    ViewModelV1,
)
from services.api.app.services.kind_formatter import format_kind
from services.api.app.services.transaction_base import KindFields

# Display cap for published modules. Pending product confirmation; callers may override.
MODULE_DISPLAY_LIMIT = 3

# Storage fees are not computed upstream yet. Shown as a note, never as a zero value.
STORAGE_FEE_NOTE = "Storage fees are not yet computed for this transaction."


def assemble_view(
    record: TransactionRecordV1,
    *,
    module_display_limit: int = MODULE_DISPLAY_LIMIT,
) -> ViewModelV1:
    """Build the ordered view model for a resolved transaction.

    Block order: header, addresses, link groups (Mutated, Created), modules, arguments,
    gas, transaction signature, validator signatures. Optional blocks are left out entirely
    when there is nothing to show.

    MalformedPayloadError from the kind formatter propagates unchanged.
    """

    if module_display_limit < 1:
        raise ValueError("module_display_limit must be >= 1")

    kind_tag = record.kind_tag
    sender = record.sender
    kind_fields = format_kind(kind_tag, record.payload, sender)

    blocks: list[FieldGroupV1 | LinkGroupV1] = [_header_block(record, kind_tag)]

    addresses = _address_block(record)
    if addresses is not None:
        blocks.append(addresses)

    blocks.extend(_link_groups(record))

    modules = _module_block(kind_fields, module_display_limit)
    if modules is not None:
        blocks.append(modules)

    arguments = _argument_block(kind_fields)
    if arguments is not None:
        blocks.append(arguments)

    blocks.append(_gas_block(record))
    blocks.append(_tx_signature_block(record))
    blocks.append(_validator_signature_block(record))

    return ViewModelV1(tx_id=record.tx_id, blocks=blocks)


def _header_block(record: TransactionRecordV1, kind_tag: str) -> FieldGroupV1:
    fields = [
        FieldV1(label="Transaction ID", value=record.tx_id, emphasize_monospace=True),
        FieldV1(label="Status", value=record.status.status),
    ]
    if record.status.error:
        fields.append(FieldV1(label="Error", value=record.status.error))
    fields.append(FieldV1(label="Kind", value=kind_tag))

    return FieldGroupV1(block=BlockTypeV1.HEADER, title="Transaction", fields=fields)


def _address_block(record: TransactionRecordV1) -> FieldGroupV1 | None:
    if not record.sender:
        return None

    fields = [_address_link("Sender", record.sender)]

    payload = record.payload
    if isinstance(payload, TransferObjectPayloadV1) and payload.recipient:
        fields.append(_address_link("Recipient", payload.recipient))

    if record.timestamp_ms is not None:
        fields.append(FieldV1(label="Timestamp", value=str(record.timestamp_ms)))

    return FieldGroupV1(block=BlockTypeV1.ADDRESSES, title="Addresses", fields=fields)


def _link_groups(record: TransactionRecordV1) -> list[LinkGroupV1]:
    groups: list[LinkGroupV1] = []
    for label, refs in (("Mutated", record.mutated), ("Created", record.created)):
        if refs:
            groups.append(LinkGroupV1(label=label, target_ids=_object_ids(refs)))
    return groups


def _module_block(kind_fields: KindFields, limit: int) -> FieldGroupV1 | None:
    if not kind_fields.modules:
        return None

    shown = kind_fields.modules[:limit]
    notes: list[str] = []
    if len(kind_fields.modules) > len(shown):
        notes.append(f"Showing {len(shown)} of {len(kind_fields.modules)} modules.")

    return FieldGroupV1(
        block=BlockTypeV1.MODULES,
        title="Modules",
        fields=[
            FieldV1(label=name, value=content, emphasize_monospace=True)
            for name, content in shown
        ],
        notes=notes,
    )


def _argument_block(kind_fields: KindFields) -> FieldGroupV1 | None:
    if not kind_fields.arguments:
        return None

    return FieldGroupV1(
        block=BlockTypeV1.ARGUMENTS,
        title="Arguments",
        fields=[FieldV1(value=arg, emphasize_monospace=True) for arg in kind_fields.arguments],
    )


def _gas_block(record: TransactionRecordV1) -> FieldGroupV1:
    return FieldGroupV1(
        block=BlockTypeV1.GAS,
        title="Gas & Storage Fees",
        fields=[
            FieldV1(
                label="Gas Payment",
                value=record.gas_payment.object_id,
                is_link=True,
                link_category=LinkCategoryV1.OBJECT,
            ),
            FieldV1(label="Gas Fees", value=str(record.gas_fee)),
            FieldV1(label="Gas Budget", value=str(record.gas_budget)),
        ],
        notes=[STORAGE_FEE_NOTE],
    )


def _tx_signature_block(record: TransactionRecordV1) -> FieldGroupV1:
    return FieldGroupV1(
        block=BlockTypeV1.TX_SIGNATURE,
        title="Transaction Signatures",
        fields=[FieldV1(label="Signature", value=record.tx_signature, emphasize_monospace=True)],
    )


def _validator_signature_block(record: TransactionRecordV1) -> FieldGroupV1:
    return FieldGroupV1(
        block=BlockTypeV1.VALIDATOR_SIGNATURES,
        title="Validator Signatures",
        fields=[
            FieldV1(value=signature, emphasize_monospace=True)
            for signature in record.authority_signatures
        ],
    )


def _address_link(label: str, value: str) -> FieldV1:
    return FieldV1(label=label, value=value, is_link=True, link_category=LinkCategoryV1.ADDRESS)


def _object_ids(refs: list[ObjectRefV1]) -> list[str]:
    return [ref.object_id for ref in refs]
