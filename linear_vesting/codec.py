"""
JSON shapes for states, actions and transaction snapshots

Byte strings travel as hex. Used by the diagnostics service and the demo.
"""

from typing import Any, Dict, List, Optional

from .context import (
    Address,
    AssetClass,
    BoundKind,
    Credential,
    CredentialKind,
    Datum,
    DatumHash,
    InlineDatum,
    IntervalBound,
    NoDatum,
    PurposeKind,
    ScriptPurpose,
    TransactionSnapshot,
    TxIn,
    TxOut,
    TxOutRef,
    ValidityRange,
    Value,
)
from .keys import collect_signatories
from .state import Action, Claim, Refund, VestingState


class CodecError(ValueError):
    pass


def _hex(data: Dict[str, Any], key: str) -> bytes:
    try:
        return bytes.fromhex(data[key])
    except KeyError:
        raise CodecError(f"Missing field: {key}")
    except (TypeError, ValueError):
        raise CodecError(f"Field {key} is not hex")


def _int(data: Dict[str, Any], key: str) -> int:
    try:
        val = data[key]
    except KeyError:
        raise CodecError(f"Missing field: {key}")
    if isinstance(val, bool) or not isinstance(val, int):
        raise CodecError(f"Field {key} must be an integer")
    return val


def state_from_dict(data: Dict[str, Any]) -> VestingState:
    if not isinstance(data, dict):
        raise CodecError("State must be a JSON object")
    return VestingState(
        owner=_hex(data, 'owner'),
        beneficiary=_hex(data, 'beneficiary'),
        start_time=_int(data, 'start_time'),
        cliff_date=_int(data, 'cliff_date'),
        end_date=_int(data, 'end_date'),
        total_vesting_quantity=_int(data, 'total_vesting_quantity'),
        claimed_quantity=_int(data, 'claimed_quantity'),
    )


def state_to_dict(state: VestingState) -> Dict[str, Any]:
    return {
        'owner': state.owner.hex(),
        'beneficiary': state.beneficiary.hex(),
        'start_time': state.start_time,
        'cliff_date': state.cliff_date,
        'end_date': state.end_date,
        'total_vesting_quantity': state.total_vesting_quantity,
        'claimed_quantity': state.claimed_quantity,
    }


def action_from_dict(data: Dict[str, Any]) -> Action:
    if not isinstance(data, dict):
        raise CodecError("Action must be a JSON object")
    kind = data.get('type')
    if kind == 'claim':
        return Claim(amount_to_claim=_int(data, 'amount_to_claim'))
    if kind == 'refund':
        return Refund()
    raise CodecError(f"Unknown action type: {kind!r}")


def action_to_dict(action: Action) -> Dict[str, Any]:
    if isinstance(action, Claim):
        return {'type': 'claim', 'amount_to_claim': action.amount_to_claim}
    return {'type': 'refund'}


def out_ref_from_dict(data: Dict[str, Any]) -> TxOutRef:
    return TxOutRef(tx_id=_hex(data, 'tx_id'), index=_int(data, 'index'))


def asset_from_dict(data: Dict[str, Any]) -> AssetClass:
    return AssetClass(policy_id=_hex(data, 'policy_id'), asset_name=_hex(data, 'asset_name'))


def asset_to_dict(asset: AssetClass) -> Dict[str, str]:
    return {'policy_id': asset.policy_id.hex(), 'asset_name': asset.asset_name.hex()}


def _credential_from_dict(data: Optional[Dict[str, Any]]) -> Optional[Credential]:
    if data is None:
        return None
    try:
        kind = CredentialKind(data.get('kind'))
    except ValueError:
        raise CodecError(f"Unknown credential kind: {data.get('kind')!r}")
    return Credential(kind, _hex(data, 'hash'))


def address_from_dict(data: Dict[str, Any]) -> Address:
    payment = _credential_from_dict(data.get('payment'))
    if payment is None:
        raise CodecError("Address needs a payment credential")
    return Address(payment, _credential_from_dict(data.get('stake')))


def value_from_list(entries: List[Dict[str, Any]]) -> Value:
    """Merge asset entries into one bundle; repeated assets add up"""
    value: Value = {}
    for entry in entries:
        asset = asset_from_dict(entry)
        value[asset] = value.get(asset, 0) + _int(entry, 'quantity')
    return value


def datum_from_dict(data: Optional[Dict[str, Any]]) -> Datum:
    if data is None:
        return NoDatum()
    kind = data.get('kind')
    if kind == 'inline':
        if 'cbor' in data:
            return InlineDatum(data['cbor'])
        return InlineDatum(state_from_dict(data.get('state') or {}))
    if kind == 'hash':
        return DatumHash(_hex(data, 'hash'))
    raise CodecError(f"Unknown datum kind: {kind!r}")


def output_from_dict(data: Dict[str, Any]) -> TxOut:
    return TxOut(
        address=address_from_dict(data.get('address') or {}),
        value=value_from_list(data.get('value', [])),
        datum=datum_from_dict(data.get('datum')),
    )


def bound_from_dict(data: Dict[str, Any]) -> IntervalBound:
    try:
        kind = BoundKind(data.get('kind'))
    except ValueError:
        raise CodecError(f"Unknown bound kind: {data.get('kind')!r}")
    if kind is BoundKind.FINITE:
        return IntervalBound.finite(_int(data, 'time'))
    return IntervalBound(kind)


def purpose_from_dict(data: Dict[str, Any]) -> ScriptPurpose:
    try:
        kind = PurposeKind(data.get('kind'))
    except ValueError:
        raise CodecError(f"Unknown script purpose: {data.get('kind')!r}")
    out_ref = data.get('out_ref')
    return ScriptPurpose(kind, out_ref_from_dict(out_ref) if out_ref else None)


def signatories_from_dict(data: Dict[str, Any]) -> frozenset:
    """Listed key-hashes plus the key-hash of every witness that signed ``tx_body``

    Witnesses whose signature does not verify contribute nothing.
    """
    signatories = {bytes.fromhex(s) for s in data.get('signatories', [])}
    witnesses = data.get('witnesses', [])
    if witnesses:
        body = _hex(data, 'tx_body')
        try:
            pairs = [(w['public_key'], w['signature']) for w in witnesses]
        except (KeyError, TypeError):
            raise CodecError("Witnesses need public_key and signature")
        signatories |= collect_signatories(body, pairs)
    return frozenset(signatories)


def snapshot_from_dict(data: Dict[str, Any]) -> TransactionSnapshot:
    validity = data.get('validity_range') or {}
    return TransactionSnapshot(
        inputs=[
            TxIn(out_ref_from_dict(i.get('out_ref') or {}), output_from_dict(i))
            for i in data.get('inputs', [])
        ],
        outputs=[output_from_dict(o) for o in data.get('outputs', [])],
        validity_range=ValidityRange(
            lower=bound_from_dict(validity.get('lower') or {'kind': 'neg_inf'}),
            upper=bound_from_dict(validity.get('upper') or {'kind': 'pos_inf'}),
        ),
        signatories=signatories_from_dict(data),
        purpose=purpose_from_dict(data.get('purpose') or {}),
    )
