#!/usr/bin/env python3

"""
Lease tokens to a minting node, then cancel the lease.

Reads the node from TVSYS_NODE_URL (and optionally TVSYS_NETWORK) and the
seed from TVSYS_SEED. Pass --dry-run to print the payloads without sending.
"""

import json
import logging
import os
import sys

from tvsystems_client import (
    Account,
    ApiError,
    Blockchain,
    ClientConfig,
    V_UNITY,
    build_cancel_lease_tx,
    build_lease_tx,
)


def main():
    """Main example function"""
    dry_run = "--dry-run" in sys.argv
    logging.basicConfig(level=logging.INFO)

    config = ClientConfig.from_env()
    account = Account.from_seed(config.network, os.environ.get("TVSYS_SEED", "0123"), 0)
    recipient = os.environ.get("TVSYS_LEASE_RECIPIENT", account.address)

    lease = build_lease_tx(recipient, 1 * V_UNITY)
    print(f"Lease id (local): {lease.get_id()}")
    print("Cold-sign payload:")
    print(json.dumps(lease.to_cold_sign_json(account.public_key), indent=2))

    if dry_run:
        signature = account.get_signature(lease)
        print(json.dumps(lease.to_api_request_json(account.public_key, signature), indent=2))
        return

    with Blockchain.from_config(config) as chain:
        print(f"Height: {chain.get_height()}")
        print(f"Balance: {account.get_balance(chain) / V_UNITY}")

        try:
            sent = account.send_transaction(chain, lease)
        except ApiError as e:
            print(f"Lease rejected: {e}")
            return
        print(f"Lease broadcast: {sent.id}")

        cancel = build_cancel_lease_tx(sent.id)
        cancelled = account.send_transaction(chain, cancel)
        print(f"Cancel broadcast: {cancelled.id}")


if __name__ == "__main__":
    main()
