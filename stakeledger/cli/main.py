# MIT License
# Copyright (c) 2025 Hashborn

import argparse
import sys
import json
import logging
import os
import requests
from typing import Optional
from ..protocol.codec import decode_chain, decode_envelope, encode_chain, encode_mine_result, encode_report
from ..protocol.config.params import NETWORKS, get_network
from ..protocol.types.common import LedgerError
from ..blockchain import handlers

NODE_ENV = "STAKELEDGER_NODE"

logger = logging.getLogger(__name__)

def get_node_url(args) -> Optional[str]:
    return args.node or os.environ.get(NODE_ENV)

def read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r") as f:
        return f.read()

def write_output(args, text: str):
    if args.out:
        with open(args.out, "w") as f:
            f.write(text)
        print(f"Written to {args.out}")
    else:
        print(text)

def post_to_node(url: str, path: str, payload) -> dict:
    resp = requests.post(f"{url}{path}", json=payload)
    if resp.status_code != 200:
        try:
            detail = resp.json().get("detail", resp.text)
        except ValueError:
            detail = resp.text
        raise LedgerError(f"Node error ({resp.status_code}): {detail}")
    return resp.json()

# --- Ledger Commands ---
def cmd_init(args):
    url = get_node_url(args)
    if url:
        blocks = post_to_node(url, "/initialise", {"address": args.address})
        write_output(args, json.dumps(blocks, indent=2))
        return
    blocks = handlers.initialise_chain(args.address, config=args.config)
    write_output(args, encode_chain(blocks, indent=2))

def cmd_mine(args):
    raw = read_input(args.file)
    url = get_node_url(args)
    if url:
        try:
            payload = json.loads(raw)
        except ValueError as e:
            raise LedgerError(f"Invalid JSON in {args.file}: {e}")
        result = post_to_node(url, "/mine", payload)
        errors = result.get("errors", [])
        write_output(args, json.dumps(result, indent=2))
    else:
        batch = decode_envelope(raw)
        result = handlers.mine_block(batch, config=args.config, timeout=args.config.mining_timeout_sec)
        errors = result.errors
        write_output(args, encode_mine_result(result, indent=2))
    for error in errors:
        logger.warning(f"Transaction failed: {error}")

def cmd_validate(args):
    """Prints the validation report; exits with 1 when the chain is invalid."""
    raw = read_input(args.file)
    url = get_node_url(args)
    if url:
        try:
            payload = json.loads(raw)
        except ValueError as e:
            raise LedgerError(f"Invalid JSON in {args.file}: {e}")
        report = post_to_node(url, "/validate", payload)
        print(json.dumps(report, indent=2))
        valid = report["valid"]
    else:
        report = handlers.inspect_chain(decode_chain(raw), config=args.config)
        print(encode_report(report, indent=2))
        valid = report.valid
    if not valid:
        sys.exit(1)

def cmd_serve(args):
    from uvicorn import Config, Server
    from ..blockchain.rpc import api

    api.config = args.config
    print(f"Starting StakeLedger node ({args.config.network_id}) on {args.host}:{args.port}")
    server = Server(Config(app=api.app, host=args.host, port=args.port, log_level=args.log_level.lower()))
    server.run()

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="stakeledger", description="StakeLedger CLI")
    parser.add_argument("--node", help=f"Send commands to a running node (env {NODE_ENV})")
    parser.add_argument("--network", choices=sorted(NETWORKS), help="Network preset (default: devnet)")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])

    subparsers = parser.add_subparsers(dest="command", required=True)

    p_init = subparsers.add_parser("init", help="Create a new chain with a genesis account")
    p_init.add_argument("address", help="Genesis account address")
    p_init.add_argument("--out", help="Write the chain to this file")
    p_init.set_defaults(func=cmd_init)

    p_mine = subparsers.add_parser("mine", help="Apply a pending batch and mine the next block")
    p_mine.add_argument("file", help="Batch envelope JSON ('-' for stdin)")
    p_mine.add_argument("--out", help="Write the result to this file")
    p_mine.set_defaults(func=cmd_mine)

    p_validate = subparsers.add_parser("validate", help="Validate the last two blocks of a chain")
    p_validate.add_argument("file", help="Chain JSON ('-' for stdin)")
    p_validate.set_defaults(func=cmd_validate)

    p_serve = subparsers.add_parser("serve", help="Run the RPC node")
    p_serve.add_argument("--host", default="127.0.0.1", help="RPC Host")
    p_serve.add_argument("--port", type=int, default=8000, help="RPC Port")
    p_serve.set_defaults(func=cmd_serve)

    return parser

def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
        datefmt='%H:%M:%S'
    )

    try:
        args.config = get_network(args.network)
        args.func(args)
    except (LedgerError, ValueError, OSError) as e:
        print(f"Error: {e}")
        sys.exit(1)
    except requests.RequestException as e:
        print(f"Connection error: {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
