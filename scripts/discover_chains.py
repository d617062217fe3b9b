"""Discover local Verus daemons, probe them, and optionally run one RPC call.

Usage:
    PYTHONPATH=src python scripts/discover_chains.py
    PYTHONPATH=src python scripts/discover_chains.py vrsc getblockcount
"""

import asyncio
import json
import logging
import sys

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)-5s %(name)s - %(message)s")
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


async def main(argv: list[str]) -> int:
    from verusconnect.container import Container
    from verusconnect.exceptions import RpcError

    container = Container()
    discovery = container.discovery()
    connection = container.connection()

    try:
        chains = await discovery.refresh()
    except RpcError as e:
        print(f"Discovery failed: {e.user_message}")
        for step in e.resolution_steps:
            print(f"  - {step}")
        return 1

    if not chains:
        resolver = container.path_resolver()
        print("No chains found. Expected config files at:")
        print(resolver.expected_config_paths())
        return 1

    print(f"{'CHAIN':<44} {'NAME':<12} {'PORT':>6}  STATUS")
    for c in chains:
        status = "active" if c.is_active else "offline"
        print(f"{c.name:<44} {c.display_name:<12} {c.credentials.port:>6}  {status}")

    if len(argv) < 2:
        return 0

    chain, method, *params = argv
    try:
        await connection.connect_to_chain(discovery, chain)
        result = await connection.call(method, [json.loads(p) for p in params])
    except RpcError as e:
        print(f"\n{e}: {e.user_message}")
        return 1
    finally:
        await connection.disconnect()

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main(sys.argv[1:])))
