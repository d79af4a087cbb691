"""Command line entry point.

Loads scripts and options from JSON files, runs one check (``--id``) or a
bulk check, prints the resulting notification and exits. Exit status is
``0`` after a completed run and ``2`` when the input cannot be loaded.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

from .args import parse_args
from .consoles import ConsoleNavigator, ConsoleNotifier, ConsoleProgressListener
from .i18n import Localizer
from .logging_utils import configure_logging, log_event
from .options import JsonOptionsStore
from .orchestrator import UpdateOrchestrator
from .registry import MemoryRegistry
from .transport import AiohttpTransport
from .ui import err, info, ok
from .utils import get_version


async def run(args) -> int:
    localizer = Localizer()
    options = JsonOptionsStore.load(args.options) if args.options else JsonOptionsStore()
    async with AiohttpTransport(
        timeout=args.timeout, user_agent=f"scriptwatch/{get_version()}"
    ) as transport:
        try:
            registry = MemoryRegistry.from_file(
                args.scripts, transport=transport, localizer=localizer
            )
        except (OSError, ValueError) as e:
            err(f"Could not load scripts from {args.scripts}: {e}")
            return 2

        orchestrator = UpdateOrchestrator(
            registry,
            transport,
            options,
            ConsoleNotifier(click=True),
            localizer=localizer,
            navigator=ConsoleNavigator(),
            progress_listener=ConsoleProgressListener(echo=args.progress),
        )

        if args.item_id is not None:
            updated = await orchestrator.check_one(args.item_id)
            log_event("cli_check_one", item_id=args.item_id, succeeded=updated)
            if not updated:
                info(f"Script {args.item_id} was not updated.")
            return 0

        if args.if_due and not orchestrator.is_bulk_check_due():
            info("Bulk update check is not due yet.")
            return 0
        if await orchestrator.check_all_due():
            ok("Updates installed.")
        else:
            info("No scripts were updated.")
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    if args.version:
        print(get_version())
        return 0
    configure_logging(args.verbose, args.log_file, args.log_json, args.log_level)
    logging.debug("scriptwatch %s", get_version())
    return asyncio.run(run(args))


__all__ = ["main", "run"]
