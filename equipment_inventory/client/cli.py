"""Command line front end for the equipment inventory.

Examples:
  equipment-inventory list --search ball
  equipment-inventory login s3cret
  equipment-inventory add Basketball --quantity 5 --required 10
  equipment-inventory dec <id>
"""

from __future__ import annotations

import argparse
import asyncio
import os
import sys
from collections.abc import Sequence

import httpx

from equipment_inventory.client.api import InventoryApiClient
from equipment_inventory.client.controller import EquipmentForm, InventoryController
from equipment_inventory.client.notifications import Notification, Notifier
from equipment_inventory.client.storage import CredentialStore
from equipment_inventory.schemas.equipment import EquipmentDTO

DEFAULT_API_URL = "http://localhost:8000"

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_LOGIN_REQUIRED = 2


def _print_notification(note: Notification) -> None:
    if note.kind == "loading":
        return
    prefix = "ok" if note.kind == "success" else "error"
    print(f"[{prefix}] {note.message}", file=sys.stderr)


def _render(items: Sequence[EquipmentDTO]) -> str:
    if not items:
        return "No equipment found."
    lines = [f"{'ID':<36}  {'NAME':<24} {'QTY':>5} {'REQ':>5}  DESCRIPTION"]
    for item in items:
        flag = "!" if item.is_short else " "
        lines.append(
            f"{item.id:<36}  {item.name[:24]:<24} {item.quantity:>5} "
            f"{item.required_quantity:>5}{flag} {item.description or ''}"
        )
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="equipment-inventory", description=__doc__.splitlines()[0])
    parser.add_argument(
        "--url",
        default=os.getenv("INVENTORY_API_URL", DEFAULT_API_URL),
        help="API base URL (env INVENTORY_API_URL)",
    )
    parser.add_argument("--state", default=None, help="credential file (env INVENTORY_CLIENT_STATE)")
    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="show equipment")
    p_list.add_argument("--search", default="", help="case-insensitive name filter")
    p_list.add_argument("--shortage", action="store_true", help="only rows below their target")

    p_login = sub.add_parser("login", help="store the admin password")
    p_login.add_argument("password")
    sub.add_parser("logout", help="forget the admin password")

    p_add = sub.add_parser("add", help="create equipment")
    p_add.add_argument("name")
    p_add.add_argument("--quantity", required=True)
    p_add.add_argument("--required", default="")
    p_add.add_argument("--description", default="")

    p_edit = sub.add_parser("edit", help="update equipment fields")
    p_edit.add_argument("id")
    p_edit.add_argument("--name")
    p_edit.add_argument("--description")
    p_edit.add_argument("--quantity", type=int)
    p_edit.add_argument("--required", type=int)

    p_delete = sub.add_parser("delete", help="delete equipment")
    p_delete.add_argument("id")

    for name, help_text in (("inc", "increase quantity"), ("dec", "decrease quantity")):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("id")
        p.add_argument("--by", type=int, default=1)
    return parser


async def _dispatch(args: argparse.Namespace, controller: InventoryController) -> int:
    if args.command == "login":
        return EXIT_OK if controller.login(args.password) else EXIT_FAILED
    if args.command == "logout":
        controller.logout()
        return EXIT_OK

    if args.command == "list":
        if not await controller.mount():
            return EXIT_FAILED
        controller.search_query = args.search
        items = controller.shortage_items if args.shortage else controller.visible_items
        print(_render(items))
        return EXIT_OK

    if args.command == "add":
        controller.new_equipment = EquipmentForm(
            name=args.name,
            description=args.description,
            quantity=args.quantity,
            required_quantity=args.required,
        )
        ok = await controller.add_equipment()
    elif args.command == "delete":
        ok = await controller.delete_equipment(args.id)
    else:
        if not await controller.mount():
            return EXIT_FAILED
        if controller.is_admin and controller.find(args.id) is None:
            print(f"[error] No equipment with id {args.id}", file=sys.stderr)
            return EXIT_FAILED
        if args.command == "edit":
            ok = controller.start_editing(args.id)
            if ok:
                changes = {
                    "name": args.name,
                    "description": args.description,
                    "quantity": args.quantity,
                    "required_quantity": args.required,
                }
                controller.edit(**{k: v for k, v in changes.items() if v is not None})
                ok = await controller.update_equipment()
        else:
            delta = args.by if args.command == "inc" else -args.by
            ok = await controller.adjust_quantity(args.id, delta)

    if controller.login_prompt_open:
        print("Admin login required: equipment-inventory login <password>", file=sys.stderr)
        return EXIT_LOGIN_REQUIRED
    return EXIT_OK if ok else EXIT_FAILED


async def run(args: argparse.Namespace, transport: httpx.AsyncBaseTransport | None = None) -> int:
    async with InventoryApiClient(args.url, transport=transport) as api:
        controller = InventoryController(
            api, CredentialStore(args.state), Notifier(on_change=_print_notification)
        )
        return await _dispatch(args, controller)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    return asyncio.run(run(args))


if __name__ == "__main__":
    raise SystemExit(main())
