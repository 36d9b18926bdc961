"""
Supply management console.

Interactive terminal front end for the supply REST backend:
- /           dashboard
- /supplies   supply CRUD, CSV import, Excel export
- /inventory  stock in / stock out and the transaction ledger

Usage:
    supply-console
    supply-console --base-url http://localhost:8080/api --page /inventory
"""

import argparse
import logging
import shlex
import sys
from dataclasses import replace
from typing import Callable, Dict, Optional

from frontend.components.header import NAV_LINKS, header
from frontend.core.api import ApiClient, build_api_client
from frontend.core.config import Settings, settings as default_settings
from frontend.core.ui import TerminalUI
from frontend.pages.base import Page
from frontend.pages.dashboard import DashboardPage
from frontend.pages.inventory_management import InventoryManagementPage
from frontend.pages.supply_management import SupplyManagementPage
from frontend.services.inventory_service import InventoryService
from frontend.services.supply_service import SupplyService

logger = logging.getLogger(__name__)

PageFactory = Callable[[], Page]

QUIT_COMMANDS = {"quit", "exit", "q"}


def setup_logging(settings: Settings, verbose: bool = False) -> None:
    handlers: list = []
    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file))
    if verbose or not handlers:
        handlers.append(logging.StreamHandler(sys.stderr))
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def build_routes(ui: TerminalUI, client: ApiClient, settings: Settings) -> Dict[str, PageFactory]:
    supply_service = SupplyService(client)
    inventory_service = InventoryService(client)
    return {
        "/": lambda: DashboardPage(ui),
        "/supplies": lambda: SupplyManagementPage(ui, supply_service, download_dir=settings.download_dir),
        "/inventory": lambda: InventoryManagementPage(ui, inventory_service, supply_service),
    }


class App:
    def __init__(self, ui: TerminalUI, routes: Dict[str, PageFactory]):
        self.ui = ui
        self.routes = routes
        self.path: Optional[str] = None
        self.page: Optional[Page] = None

    def navigate(self, path: str) -> bool:
        factory = self.routes.get(path)
        if factory is None:
            self.ui.alert(f"Unknown page: {path}")
            return False
        if self.page is not None:
            self.page.unmount()
        logger.info("Navigating to %s", path)
        self.path = path
        self.page = factory()
        self.page.mount()
        return True

    def render(self) -> None:
        self.ui.show(header(self.path or "/"))
        if self.page is not None:
            self.ui.show(self.page.render())

    def handle(self, line: str) -> bool:
        """Run one command line. Returns False when the app should stop."""
        try:
            parts = shlex.split(line)
        except ValueError as exc:
            self.ui.alert(str(exc))
            return True
        if not parts:
            return True

        command, args = parts[0].lower(), parts[1:]
        if command in QUIT_COMMANDS:
            return False
        if command.startswith("/"):
            self.navigate(command)
        elif command == "go":
            if args:
                self.navigate(args[0])
            else:
                self.ui.alert("Usage: go <path>")
        elif command == "help":
            self.show_help()
        elif self.page is None or not self.page.dispatch(command, args):
            self.ui.alert(f"Unknown command: {command} (type 'help')")
        return True

    def show_help(self) -> None:
        lines = ["go <path> | <path>  -> " + ", ".join(f"{p} {label}" for p, label in NAV_LINKS)]
        lines.append("help, quit")
        self.ui.show("\n".join(lines))
        if self.page is not None and self.page.commands:
            self.ui.show(self.page.help())

    def run(self, start: str = "/") -> None:
        if not self.navigate(start):
            self.navigate("/")
        running = True
        while running:
            self.render()
            # Forms prompt from inside handle(), so Ctrl-C/Ctrl-D can land there too.
            try:
                running = self.handle(self.ui.prompt(">"))
            except (EOFError, KeyboardInterrupt):
                break
        if self.page is not None:
            self.page.unmount()


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Supply management console")
    parser.add_argument("--base-url", help="REST backend base URL (overrides SUPPLY_API_BASE_URL)")
    parser.add_argument("--page", default="/", help="page to open first: /, /supplies or /inventory")
    parser.add_argument("--download-dir", help="directory for exported files (overrides SUPPLY_DOWNLOAD_DIR)")
    parser.add_argument("--verbose", "-v", action="store_true", help="log to stderr at DEBUG level")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    settings = replace(default_settings)
    if args.base_url:
        settings.api_base_url = args.base_url
    if args.download_dir:
        settings.download_dir = args.download_dir
    setup_logging(settings, verbose=args.verbose)

    ui = TerminalUI()
    client = build_api_client(settings)
    logger.info("Using API at %s", client.base_url)
    try:
        App(ui, build_routes(ui, client, settings)).run(start=args.page)
    finally:
        client.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
