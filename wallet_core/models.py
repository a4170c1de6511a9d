"""
wallet_core.models
------------------
Wire shapes exchanged with the wallet gateway.

Every model is a dataclass with ``to_dict()`` / ``from_dict()``. ``to_dict``
omits unset optional fields so that the serialized payload only carries what
the caller actually set.
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional
import json

from .constants import SIGNATURE_ALGORITHM


def _compact(d: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in d.items() if v is not None}


def _plain_dict(obj) -> Dict[str, Any]:
    return _compact({f.name: getattr(obj, f.name) for f in fields(obj)})


def _list_of(data: Dict[str, Any], key: str) -> List[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"{key} must be a list, got {type(value).__name__}")
    return list(value)


def _object_of(value: Any, name: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise TypeError(f"{name} must be an object, got {type(value).__name__}")
    return value



# ------------------------------------------------------------------
# Signing
# ------------------------------------------------------------------
@dataclass
class SignatureParams:
    """
    Signer metadata supplied per call.

    private_key is base64 Ed25519 key material. When signing is delegated to a
    key-custody service it may be empty, and security_code unlocks the lookup.
    """
    creator: str
    nonce: str
    private_key: str = ""
    security_code: Optional[str] = None

    def __repr__(self) -> str:
        # keep key material out of logs and tracebacks
        return f"SignatureParams(creator={self.creator!r}, nonce={self.nonce!r})"


@dataclass(frozen=True)
class SignedPayload:
    creator: str
    nonce: str
    signature_value: str
    algorithm: str = SIGNATURE_ALGORITHM

    def to_dict(self) -> Dict[str, Any]:
        return {
            "creator": self.creator,
            "nonce": self.nonce,
            "signature_value": self.signature_value,
            "algorithm": self.algorithm,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SignedPayload":
        return cls(
            creator=data["creator"],
            nonce=data["nonce"],
            signature_value=data["signature_value"],
            algorithm=data.get("algorithm", SIGNATURE_ALGORITHM),
        )


# ------------------------------------------------------------------
# Envelopes
# ------------------------------------------------------------------
@dataclass(frozen=True)
class RequestEnvelope:
    payload: str                            # serialized JSON, exactly the signed bytes
    signature: Optional[SignedPayload] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "payload": self.payload,
            "signature": self.signature.to_dict() if self.signature else None,
        }

    def to_json_bytes(self) -> bytes:
        return json.dumps(self.to_dict(), separators=(",", ":")).encode("utf-8")


@dataclass(frozen=True)
class ResponseEnvelope:
    err_code: int
    err_message: str = ""
    payload: Any = None                     # JSON string on success, or absent

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResponseEnvelope":
        return cls(
            err_code=data["err_code"],
            err_message=data.get("err_message") or "",
            payload=data.get("payload"),
        )


# ------------------------------------------------------------------
# Request payloads
# ------------------------------------------------------------------
@dataclass
class Fee:
    amount: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"amount": self.amount}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Fee":
        return cls(amount=data.get("amount", 0))


def _fee(data: Dict[str, Any]) -> Optional[Fee]:
    raw = data.get("fee")
    return Fee.from_dict(raw) if raw is not None else None


@dataclass
class TokenAmount:
    token_id: str
    amount: int

    def to_dict(self) -> Dict[str, Any]:
        return {"token_id": self.token_id, "amount": self.amount}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TokenAmount":
        return cls(token_id=data["token_id"], amount=data["amount"])


@dataclass
class IssueBody:
    """Colored token issuance against an existing digital asset."""
    issuer: str
    owner: str
    asset_id: str
    amount: int
    fee: Optional[Fee] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            "issuer": self.issuer,
            "owner": self.owner,
            "asset_id": self.asset_id,
            "amount": self.amount,
            "fee": self.fee.to_dict() if self.fee else None,
        })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "IssueBody":
        return cls(
            issuer=data["issuer"],
            owner=data["owner"],
            asset_id=data["asset_id"],
            amount=data["amount"],
            fee=_fee(data),
        )


@dataclass
class IssueAssetBody:
    issuer: str
    owner: str
    asset_id: str
    fee: Optional[Fee] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            "issuer": self.issuer,
            "owner": self.owner,
            "asset_id": self.asset_id,
            "fee": self.fee.to_dict() if self.fee else None,
        })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "IssueAssetBody":
        return cls(
            issuer=data["issuer"],
            owner=data["owner"],
            asset_id=data["asset_id"],
            fee=_fee(data),
        )


@dataclass
class TransferBody:
    from_: str                              # "from" on the wire
    to: str
    asset_id: str
    tokens: List[TokenAmount] = field(default_factory=list)
    fee: Optional[Fee] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            "from": self.from_,
            "to": self.to,
            "asset_id": self.asset_id,
            "tokens": [t.to_dict() for t in self.tokens],
            "fee": self.fee.to_dict() if self.fee else None,
        })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TransferBody":
        return cls(
            from_=data["from"],
            to=data["to"],
            asset_id=data["asset_id"],
            tokens=[TokenAmount.from_dict(_object_of(t, "tokens entry")) for t in _list_of(data, "tokens")],
            fee=_fee(data),
        )


@dataclass
class TransferAssetBody:
    from_: str
    to: str
    assets: List[str] = field(default_factory=list)
    fee: Optional[Fee] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            "from": self.from_,
            "to": self.to,
            "assets": list(self.assets),
            "fee": self.fee.to_dict() if self.fee else None,
        })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TransferAssetBody":
        return cls(
            from_=data["from"],
            to=data["to"],
            assets=_list_of(data, "assets"),
            fee=_fee(data),
        )


@dataclass
class POEBody:
    id: str = ""
    name: str = ""
    parent_id: str = ""
    owner: str = ""
    hash: str = ""
    metadata: Optional[str] = None          # base64 encoded caller metadata
    indexes: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        return _plain_dict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "POEBody":
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            parent_id=data.get("parent_id", ""),
            owner=data.get("owner", ""),
            hash=data.get("hash", ""),
            metadata=data.get("metadata"),
            indexes=data.get("indexes"),
        )


# ------------------------------------------------------------------
# Results
# ------------------------------------------------------------------
@dataclass
class WalletResponse:
    id: str = ""
    endpoint: str = ""
    created: Optional[int] = None
    token_id: Optional[str] = None
    coin_id: Optional[str] = None
    transaction_ids: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return _plain_dict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WalletResponse":
        return cls(
            id=data.get("id", ""),
            endpoint=data.get("endpoint", ""),
            created=data.get("created"),
            token_id=data.get("token_id"),
            coin_id=data.get("coin_id"),
            transaction_ids=_list_of(data, "transaction_ids"),
        )


@dataclass
class OffchainMetadata:
    filename: str = ""
    endpoint: str = ""
    storage_type: str = ""
    content_hash: str = ""
    size: int = 0
    read_only: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return _plain_dict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OffchainMetadata":
        return cls(
            filename=data.get("filename", ""),
            endpoint=data.get("endpoint", ""),
            storage_type=data.get("storage_type", ""),
            content_hash=data.get("content_hash", ""),
            size=data.get("size", 0),
            read_only=bool(data.get("read_only", False)),
        )


@dataclass
class POEPayload:
    id: str = ""
    name: str = ""
    parent_id: str = ""
    owner: str = ""
    hash: str = ""
    metadata: Optional[str] = None
    created: Optional[int] = None
    updated: Optional[int] = None
    status: Optional[int] = None
    offchain_metadata: Optional[OffchainMetadata] = None

    def to_dict(self) -> Dict[str, Any]:
        d = _plain_dict(self)
        if self.offchain_metadata is not None:
            d["offchain_metadata"] = self.offchain_metadata.to_dict()
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "POEPayload":
        offchain = data.get("offchain_metadata")
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            parent_id=data.get("parent_id", ""),
            owner=data.get("owner", ""),
            hash=data.get("hash", ""),
            metadata=data.get("metadata"),
            created=data.get("created"),
            updated=data.get("updated"),
            status=data.get("status"),
            offchain_metadata=OffchainMetadata.from_dict(_object_of(offchain, "offchain_metadata")) if offchain else None,
        )


@dataclass
class UploadResponse:
    id: str = ""
    filename: str = ""
    endpoint: str = ""
    content_hash: str = ""
    size: int = 0
    read_only: bool = False
    transaction_ids: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return _plain_dict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UploadResponse":
        return cls(
            id=data.get("id", ""),
            filename=data.get("filename", ""),
            endpoint=data.get("endpoint", ""),
            content_hash=data.get("content_hash", ""),
            size=data.get("size", 0),
            read_only=bool(data.get("read_only", False)),
            transaction_ids=_list_of(data, "transaction_ids"),
        )


@dataclass
class TxOutput:
    """A UTXO record; spent_txid/spent_time are only set on STXO entries."""
    source_tx_data_hash: str = ""
    ix: int = 0
    ctoken_id: str = ""
    ctype: int = 0
    amount: int = 0
    founder: str = ""
    bc_txid: str = ""
    created: Optional[int] = None
    spent_txid: Optional[str] = None
    spent_time: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return _plain_dict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TxOutput":
        return cls(**{f.name: data[f.name] for f in fields(cls) if f.name in data})


@dataclass
class TransactionLog:
    utxo: List[TxOutput] = field(default_factory=list)
    stxo: List[TxOutput] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "utxo": [o.to_dict() for o in self.utxo],
            "stxo": [o.to_dict() for o in self.stxo],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TransactionLog":
        return cls(
            utxo=[TxOutput.from_dict(_object_of(o, "utxo entry")) for o in _list_of(data, "utxo")],
            stxo=[TxOutput.from_dict(_object_of(o, "stxo entry")) for o in _list_of(data, "stxo")],
        )


@dataclass
class TransactionLogs:
    """Transaction logs keyed by the wallet entity they belong to."""
    logs: Dict[str, TransactionLog] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {k: v.to_dict() for k, v in self.logs.items()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TransactionLogs":
        return cls(logs={k: TransactionLog.from_dict(_object_of(v or {}, f"logs[{k}]")) for k, v in data.items()})


# ------------------------------------------------------------------
# Callbacks
# ------------------------------------------------------------------
@dataclass
class TransactionEvent:
    block_number: int
    block_hash: str
    channel_id: str
    chaincode_id: str
    transaction_id: str
    timestamp: Any = None
    is_invalid: bool = False
    payload: Any = None

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TransactionEvent":
        return cls(
            block_number=data["block_number"],
            block_hash=data["block_hash"],
            channel_id=data["channel_id"],
            chaincode_id=data["chaincode_id"],
            transaction_id=data["transaction_id"],
            timestamp=data.get("timestamp"),
            is_invalid=bool(data.get("is_invalid", False)),
            payload=data.get("payload"),
        )
