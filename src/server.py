"""Protean Engine runner for the Order Management domains.

Starts Engine workers that process events asynchronously:
- OutboxProcessor: polls the outbox table, publishes events to Redis Streams
- StreamSubscriptions: reads Redis Streams, invokes event handlers
  (Products decrements stock on OrderCreated, Logging records activity)

Usage:
    python src/server.py                   # Run every domain engine
    python src/server.py --domain products # Run only the products engine
"""

import argparse
import asyncio
import importlib

from protean.server.engine import Engine

from shared.config import get_settings
from shared.logging import configure_logging

DOMAIN_NAMES = ("customers", "orders", "products", "logstore")


def load_domain(name):
    """Import and initialize a domain by name."""
    if name not in DOMAIN_NAMES:
        raise ValueError(f"Unknown domain: {name}")
    domain = getattr(importlib.import_module(f"{name}.domain"), name)
    domain.init()
    return domain


async def run(domain_names):
    engines = [Engine(load_domain(name)) for name in domain_names]
    await asyncio.gather(*(engine.run() for engine in engines))


def main():
    parser = argparse.ArgumentParser(description="Order Management Engine runner")
    parser.add_argument(
        "--domain",
        choices=DOMAIN_NAMES,
        help="Run a single domain engine (default: run all)",
    )
    args = parser.parse_args()

    domain_names = [args.domain] if args.domain else list(DOMAIN_NAMES)
    settings = get_settings()
    configure_logging(
        f"{args.domain}-engine" if args.domain else "engine",
        version=settings.app_version,
        log_dir=settings.log_dir,
    )

    asyncio.run(run(domain_names))


if __name__ == "__main__":
    main()
