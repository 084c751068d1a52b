# MIT License
# Copyright (c) 2025 Hashborn

"""
Wire codec for chains, batches and results.

JSON with named fields through pydantic. The field order on the wire is
irrelevant; block hashes are computed from a separate canonical encoding
(see protocol.crypto.hash).
"""

from typing import Any, List, Union
from pydantic import TypeAdapter, ValidationError
from .types.block import Block
from .types.common import InputError
from .types.envelope import MineResult, PendingBatch, ValidationReport

Raw = Union[str, bytes, dict, list]

_chain_adapter = TypeAdapter(List[Block])
_envelope_adapter = TypeAdapter(PendingBatch)

def _decode(adapter: TypeAdapter, raw: Raw, what: str) -> Any:
    try:
        if isinstance(raw, (str, bytes)):
            return adapter.validate_json(raw)
        return adapter.validate_python(raw)
    except ValidationError as e:
        raise InputError(f"Invalid {what}: {e}") from e

def decode_envelope(raw: Raw) -> PendingBatch:
    return _decode(_envelope_adapter, raw, "batch envelope")

def decode_chain(raw: Raw) -> List[Block]:
    return _decode(_chain_adapter, raw, "chain")

def encode_chain(blocks: List[Block], indent: int = None) -> str:
    return _chain_adapter.dump_json(blocks, indent=indent).decode("utf-8")

def encode_mine_result(result: MineResult, indent: int = None) -> str:
    return result.model_dump_json(indent=indent)

def encode_report(report: ValidationReport, indent: int = None) -> str:
    return report.model_dump_json(indent=indent)
