"""Command-line entry point for chatlink."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Iterable, List, Optional

from art import tprint
from rich.console import Console

from chatlink import settings as settings_module
from chatlink.adapters.asyncio_scheduler import AsyncioScheduler
from chatlink.adapters.channel_directory import InMemoryChannelDirectory, SQLiteChannelDirectory
from chatlink.adapters.rich_renderer import render_link_table, render_message
from chatlink.core.echo import EchoCoordinator
from chatlink.core.message_list import MessageList
from chatlink.core.models import Sender, create_message
from chatlink.settings import Settings

NAME = "CHATLINK"
FONT = "tarty-1"

CLI_SENDER = Sender(id=1, username="you")


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _file_handler(file_cfg: dict) -> RotatingFileHandler:
    path = file_cfg.get("path", "logs/chatlink.log")
    if not os.path.isabs(path):
        path = os.path.join(settings_module.PROJECT_ROOT, path)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    return RotatingFileHandler(
        path,
        maxBytes=int(file_cfg.get("max_bytes", 5 * 1024 * 1024)),
        backupCount=int(file_cfg.get("backup_count", 5)),
        encoding="utf-8",
    )


def _configure_logging(config: dict) -> list[logging.Handler]:
    """Attach console and rotating file handlers per the ``logging`` section."""

    if not config.get("enabled", False):
        return []

    handlers: list[logging.Handler] = []
    if config.get("console", True):
        handlers.append(logging.StreamHandler())
    if config.get("file", {}).get("enabled", False):
        handlers.append(_file_handler(config["file"]))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)
    for handler in handlers:
        handler.setFormatter(formatter)

    if handlers:
        level = getattr(logging, str(config.get("level", "INFO")).upper(), logging.INFO)
        logging.basicConfig(level=level, handlers=handlers)
    return handlers


def _build_directory(settings: Settings):
    """Use the SQLite directory when configured, seeded with the listed channels."""

    if settings.channel_db_path:
        directory = SQLiteChannelDirectory(settings.channel_db_path)
        directory.init_db()
        for name in settings.channels:
            directory.add_channel(name)
        return directory.snapshot()
    return InMemoryChannelDirectory(settings.channels)


def _read_texts(texts: List[str]) -> List[str]:
    if texts:
        return texts
    return [line.rstrip("\n") for line in sys.stdin if line.strip()]


def _parse(settings: Settings, texts: Iterable[str], console: Console) -> None:
    directory = _build_directory(settings)
    for text in texts:
        message = create_message(text, CLI_SENDER, directory, config=settings.linker)
        console.print(render_message(message))
        if message.links:
            console.print(render_link_table(message))


async def _run_echo(settings: Settings, texts: List[str], console: Console) -> MessageList:
    directory = _build_directory(settings)
    messages = MessageList()
    coordinator = EchoCoordinator(
        messages=messages,
        directory=directory,
        scheduler=AsyncioScheduler(asyncio.get_running_loop()),
        echo_config=settings.echo,
        linker_config=settings.linker,
    )
    try:
        for text in texts:
            echo = coordinator.post(text, CLI_SENDER)
            console.print(render_message(echo))

        # Poll until every echo has been replaced by its confirmed message.
        while coordinator.pending_count:
            await asyncio.sleep(0.05)
    finally:
        coordinator.close()
    return messages


def _echo(settings: Settings, texts: List[str], console: Console) -> None:
    messages = asyncio.run(_run_echo(settings, texts, console))
    console.rule("confirmed")
    for message in messages:
        console.print(render_message(message))


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="chatlink")
    parser.add_argument("--config", help="Path to config.json (defaults to CHATLINK_CONFIG)")
    parser.add_argument("--no-banner", action="store_true", help="Skip the startup banner")
    subparsers = parser.add_subparsers(dest="command")

    parse_parser = subparsers.add_parser("parse", help="Linkify chat text and list its links")
    parse_parser.add_argument("texts", nargs="*", help="Messages to parse (stdin when omitted)")

    echo_parser = subparsers.add_parser(
        "echo",
        help="Post messages as local echoes and wait for their confirmations",
    )
    echo_parser.add_argument("texts", nargs="*", help="Messages to post (stdin when omitted)")

    args = parser.parse_args(argv)

    try:
        settings = settings_module.load_settings(args.config)
    except (FileNotFoundError, ValueError) as exc:
        print(f"chatlink: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc

    if not args.no_banner:
        _print_banner()
    _configure_logging(settings.logging)
    logger = logging.getLogger(__name__)

    console = Console()
    texts = _read_texts(getattr(args, "texts", []))
    logger.info("Processing %s message(s)", len(texts))

    if args.command == "echo":
        _echo(settings, texts, console)
        return
    _parse(settings, texts, console)


if __name__ == "__main__":
    main()
