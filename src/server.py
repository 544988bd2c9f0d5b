"""Protean Engine runner for the catering domain.

Starts Engine workers that process events asynchronously in production,
keeping the order board projection current:
- OutboxProcessor: polls the outbox table, publishes events to Redis Streams
- StreamSubscriptions: reads Redis Streams, invokes the board projector

Usage:
    python src/server.py
    python src/server.py --test-mode   # Drain pending work and exit
"""

import argparse
import asyncio

from protean.server.engine import Engine


def _get_domain():
    from catering.domain import catering

    catering.init()
    return catering


async def run(test_mode=False):
    engine = Engine(_get_domain(), test_mode=test_mode)
    await engine.run()


def main():
    parser = argparse.ArgumentParser(description="Catering Engine runner")
    parser.add_argument(
        "--test-mode",
        action="store_true",
        help="Process pending messages once and exit",
    )
    args = parser.parse_args()

    asyncio.run(run(test_mode=args.test_mode))


if __name__ == "__main__":
    main()
