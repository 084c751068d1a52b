# MIT License
# Copyright (c) 2025 Hashborn

from fastapi import FastAPI, HTTPException
from fastapi.responses import Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from typing import List
from ...protocol.types.block import Block
from ...protocol.types.common import BatchError, ChainTooShortError, InputError, LedgerError, MiningAborted
from ...protocol.types.envelope import InitialiseRequest, MineResult, PendingBatch, ValidationReport
from ...protocol.config.params import CURRENT_NETWORK, LedgerConfig
from ..observability.metrics import metrics_registry
from .. import handlers
import logging

logger = logging.getLogger(__name__)

app = FastAPI(title="StakeLedger Node RPC")

# Set by the node runner (cli serve); devnet by default
config: LedgerConfig = CURRENT_NETWORK

@app.get("/status")
async def get_status():
    return {
        "network": config.network_id,
        "difficulty_prefix": config.difficulty_prefix,
        "max_nonce_attempts": config.max_nonce_attempts,
    }

# Mining is CPU-bound: plain `def` endpoints run in the threadpool

@app.post("/initialise", response_model=List[Block])
def initialise(request: InitialiseRequest):
    try:
        return handlers.initialise_chain(request.address, config=config, timeout=config.mining_timeout_sec)
    except InputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except MiningAborted as e:
        raise HTTPException(status_code=503, detail=str(e))

@app.post("/mine", response_model=MineResult)
def mine(batch: PendingBatch):
    try:
        return handlers.mine_block(batch, config=config, timeout=config.mining_timeout_sec)
    except (BatchError, InputError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except MiningAborted as e:
        raise HTTPException(status_code=503, detail=str(e))
    except LedgerError as e:
        logger.warning(f"Mining rejected: {e}")
        raise HTTPException(status_code=400, detail=str(e))

@app.post("/validate", response_model=ValidationReport)
async def validate(blocks: List[Block]):
    try:
        return handlers.inspect_chain(blocks, config=config)
    except ChainTooShortError as e:
        raise HTTPException(status_code=400, detail=str(e))

@app.get("/metrics")
async def get_metrics():
    """
    Prometheus metrics endpoint.

    Returns metrics in Prometheus text format.
    """
    return Response(
        content=generate_latest(metrics_registry),
        media_type=CONTENT_TYPE_LATEST
    )
