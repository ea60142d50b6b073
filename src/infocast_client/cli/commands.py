"""
infocast_client.cli.commands

Command-line front end over the session manager and broadcast service.

Responsibilities:
- Parse sub-commands (login, register, logout, whoami, profile, list, show, create,
  edit, delete, stats, home).
- Render broadcasts, cards and stats as plain text.
- Print notifications to stderr and map outcomes to exit codes.
"""

from __future__ import annotations

import argparse
import getpass
import sys
from collections.abc import Sequence
from datetime import datetime
from typing import Any, TextIO

import httpx

from infocast_client.app import InfoCastClient, create_client
from infocast_client.clients.broadcasts_api import BroadcastQuery
from infocast_client.domain.broadcast import BroadcastType, Urgency, draft_fields
from infocast_client.domain.display import BroadcastCard
from infocast_client.domain.stats import StatsSummary
from infocast_client.domain.tags import TagSet
from infocast_client.notifications import Notification, NotificationFeed, NotificationLevel
from infocast_client.results import OperationResult
from infocast_client.settings import Settings, get_settings

_MARKS = {NotificationLevel.success: "✔", NotificationLevel.error: "✖"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="infocast", description="InfoCast broadcast client")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("login", help="Log in and persist the session")
    p.add_argument("--email", required=True)
    p.add_argument("--password")

    p = sub.add_parser("register", help="Create an account and log in")
    p.add_argument("--username", required=True)
    p.add_argument("--email", required=True)
    p.add_argument("--password")

    sub.add_parser("logout", help="Forget the persisted session")
    sub.add_parser("whoami", help="Show the current user")

    p = sub.add_parser("profile", help="Update profile fields")
    p.add_argument("--set", dest="updates", action="append", default=[], metavar="KEY=VALUE")

    p = sub.add_parser("list", help="List broadcasts")
    p.add_argument("--limit", type=int)
    p.add_argument("--page", type=int)
    p.add_argument("--status", choices=["active", "expired"])
    p.add_argument("--urgency")
    p.add_argument("--type")
    p.add_argument("--tag")
    p.add_argument("--search")

    p = sub.add_parser("show", help="Show one broadcast")
    p.add_argument("broadcast_id")

    p = sub.add_parser("create", help="Create a broadcast")
    p.add_argument("--title", required=True)
    p.add_argument("--message", required=True)
    p.add_argument("--urgency", default=Urgency.medium.value)
    p.add_argument("--type", default=BroadcastType.announcement.value)
    p.add_argument("--tag", dest="tags", action="append", default=[])
    p.add_argument("--expires", type=datetime.fromisoformat)

    p = sub.add_parser("edit", help="Edit a broadcast")
    p.add_argument("broadcast_id")
    p.add_argument("--title")
    p.add_argument("--message")
    p.add_argument("--urgency")
    p.add_argument("--type")
    p.add_argument("--add-tag", dest="add_tags", action="append", default=[])
    p.add_argument("--remove-tag", dest="remove_tags", action="append", default=[])
    p.add_argument("--expires", type=datetime.fromisoformat)

    p = sub.add_parser("delete", help="Delete a broadcast")
    p.add_argument("broadcast_id")
    p.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")

    sub.add_parser("stats", help="Show the stats summary")
    sub.add_parser("home", help="Stats plus the most recent active broadcasts")
    return parser


def render_card(card: BroadcastCard) -> str:
    lines = [
        f"{card.glyph} {card.title}  [{card.urgency}/{card.severity}] [{card.type}]  #{card.id}",
        f"   {card.excerpt}",
    ]
    if card.tags:
        lines.append("   tags: " + ", ".join(card.tags))
    meta = [f"by {card.author}"]
    if card.created:
        meta.append(card.created)
    meta.append(f"{card.views} views")
    if card.expiry:
        meta.append(card.expiry)
    if card.can_edit:
        meta.append("(you can edit/delete)")
    lines.append("   " + " · ".join(meta))
    return "\n".join(lines)


def render_stats(stats: StatsSummary) -> str:
    return "\n".join(
        [
            f"Total Broadcasts: {stats.total_broadcasts}",
            f"Active Now: {stats.active_broadcasts}",
            f"Urgent Alerts: {stats.urgent_alerts}",
        ]
    )


def _parse_updates(pairs: Sequence[str]) -> dict[str, str]:
    updates: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise SystemExit(f"invalid --set value: {pair!r} (expected KEY=VALUE)")
        updates[key.strip()] = value
    return updates


def _password(args: argparse.Namespace) -> str:
    return args.password if args.password is not None else getpass.getpass("Password: ")


def _status(result: OperationResult[Any], out: TextIO) -> int:
    if result.success:
        return 0
    if result.error is not None and result.error.details and result.error.status_code is None:
        # Local validation: one line per field.
        for field_name, message in result.error.details.items():
            print(f"{field_name}: {message}", file=out)
    return 1


async def _dispatch(client: InfoCastClient, args: argparse.Namespace, out: TextIO) -> int:
    session = client.session
    broadcasts = client.broadcasts

    match args.command:
        case "login":
            result = await session.login({"email": args.email, "password": _password(args)})
            return _status(result, out)
        case "register":
            user_data = {
                "username": args.username,
                "email": args.email,
                "password": _password(args),
            }
            return _status(await session.register(user_data), out)
        case "logout":
            return _status(await session.logout(), out)
        case "whoami":
            principal = session.principal
            if principal is None:
                print("Not logged in", file=out)
                return 1
            print(f"{principal.username} <{principal.email or '-'}> role={principal.role}", file=out)
            return 0
        case "profile":
            return _status(await session.update_profile(_parse_updates(args.updates)), out)
        case "list":
            query = BroadcastQuery(
                limit=args.limit,
                page=args.page,
                status=args.status,
                urgency=args.urgency,
                type=args.type,
                tag=args.tag,
                search=args.search,
            )
            items = await broadcasts.list_broadcasts(query)
            if not items:
                print("No broadcasts yet", file=out)
            for item in items:
                print(render_card(broadcasts.card(item)), file=out)
            return 0
        case "show":
            result = await broadcasts.get(args.broadcast_id)
            if not result.success or result.value is None:
                print(result.error.message if result.error else "Broadcast not found", file=out)
                return 1
            broadcast = result.value
            print(render_card(broadcasts.card(broadcast)), file=out)
            print("", file=out)
            print(broadcast.message, file=out)
            return 0
        case "create":
            fields = {
                "title": args.title,
                "message": args.message,
                "urgency": args.urgency,
                "type": args.type,
                "tags": TagSet(args.tags).as_tuple(),
                "expiry_date": args.expires,
            }
            result = await broadcasts.create(fields)
            if result.success and result.value is not None:
                print(result.value.id, file=out)
            return _status(result, out)
        case "edit":
            current = await broadcasts.get(args.broadcast_id)
            if not current.success or current.value is None:
                print(current.error.message if current.error else "Broadcast not found", file=out)
                return 1
            fields = draft_fields(current.value)
            for name in ("title", "message", "urgency", "type"):
                value = getattr(args, name)
                if value is not None:
                    fields[name] = value
            if args.expires is not None:
                fields["expiry_date"] = args.expires
            tags = TagSet(fields["tags"])
            for tag in args.add_tags:
                tags.add(tag)
            for tag in args.remove_tags:
                tags.remove(tag)
            fields["tags"] = tags.as_tuple()
            return _status(await broadcasts.update(args.broadcast_id, fields), out)
        case "delete":
            if not args.yes:
                answer = input("Are you sure you want to delete this broadcast? [y/N] ")
                if answer.strip().lower() not in ("y", "yes"):
                    return 1
            return _status(await broadcasts.delete(args.broadcast_id), out)
        case "stats":
            print(render_stats(await broadcasts.stats()), file=out)
            return 0
        case "home":
            dashboard = await broadcasts.dashboard()
            print(render_stats(dashboard.stats), file=out)
            print(f"Today: {len(dashboard.recent)}", file=out)
            for item in dashboard.recent:
                print(render_card(broadcasts.card(item)), file=out)
            return 0
    raise SystemExit(f"unknown command: {args.command}")


async def run(
    argv: Sequence[str] | None = None,
    *,
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    args = build_parser().parse_args(argv)
    out = out or sys.stdout
    err = err or sys.stderr

    feed = NotificationFeed()

    def _print(notification: Notification) -> None:
        print(f"{_MARKS[notification.level]} {notification.message}", file=err)

    feed.subscribe(_print)

    client = await create_client(
        settings=settings or get_settings(),
        transport=transport,
        notifier=feed,
    )
    async with client:
        return await _dispatch(client, args, out)


# --- Module Notes -----------------------------------------------------------
# Every invocation restores the persisted session first (see `app.create_client`).
