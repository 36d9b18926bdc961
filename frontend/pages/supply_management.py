import logging
from pathlib import Path
from typing import List, Optional

from rich.console import Group, RenderableType
from rich.text import Text

from frontend.components.supply_form import SupplyForm
from frontend.components.supply_list import supply_table
from frontend.core.api import RESPONSE_ERRORS
from frontend.core.ui import TerminalUI
from frontend.hooks.use_supplies import SupplyCollection
from frontend.pages.base import Page, parse_id
from frontend.schemas.supply import Supply, SupplyFormData
from frontend.services.supply_service import EXPORT_FILENAME, SupplyService

logger = logging.getLogger(__name__)


class SupplyManagementPage(Page):
    title = "Supply management"
    commands = {
        "new": "register a new supply",
        "edit <id>": "edit a supply",
        "delete <id>": "delete a supply",
        "export": f"save all supplies to {EXPORT_FILENAME}",
        "import <path>": "import supplies from a CSV file",
        "refresh": "reload the list",
    }

    def __init__(self, ui: TerminalUI, service: SupplyService, download_dir: str = "."):
        super().__init__(ui)
        self.service = service
        self.download_dir = Path(download_dir)
        self.supplies = SupplyCollection(service)
        self.show_form = False
        self.editing: Optional[Supply] = None
        self.form: Optional[SupplyForm] = None

    def mount(self) -> None:
        with self.ui.status("Loading..."):
            self.supplies.mount()

    def unmount(self) -> None:
        self.supplies.unmount()

    def refetch(self) -> None:
        with self.ui.status("Loading..."):
            self.supplies.refetch()

    def render(self) -> RenderableType:
        if self.supplies.loading:
            return Text("Loading...")
        if self.supplies.error:
            return Text(self.supplies.error, style="red")
        return Group(Text(self.title, style="bold"), supply_table(self.supplies.data), self.help())

    def dispatch(self, command: str, args: List[str]) -> bool:
        if command == "new":
            self.handle_create()
        elif command in ("edit", "delete"):
            try:
                supply_id = parse_id(args)
            except ValueError:
                self.ui.alert(f"Usage: {command} <id>")
                return True
            if command == "edit":
                supply = self.supplies.find(supply_id)
                if supply is None:
                    self.ui.alert(f"No supply with id {supply_id}.")
                else:
                    self.handle_edit(supply)
            else:
                self.handle_delete(supply_id)
        elif command == "export":
            self.handle_export()
        elif command == "import":
            if not args:
                self.ui.alert("Usage: import <path>")
            else:
                self.handle_import(Path(args[0]))
        elif command == "refresh":
            self.refetch()
        else:
            return False
        return True

    # -- view state -------------------------------------------------------

    def handle_create(self) -> None:
        self.editing = None
        self._open_form()

    def handle_edit(self, supply: Supply) -> None:
        self.editing = supply
        self._open_form()

    def handle_cancel(self) -> None:
        self.show_form = False
        self.editing = None
        self.form = None

    def _open_form(self) -> None:
        self.form = SupplyForm(self.editing)
        self.show_form = True
        # A failed save keeps the form open with the typed values for another try.
        while self.show_form:
            data = self.form.ask(self.ui)
            if data is None:
                self.handle_cancel()
            else:
                self.handle_submit(data)

    # -- mutations --------------------------------------------------------

    def handle_submit(self, data: SupplyFormData) -> bool:
        try:
            if self.editing is not None:
                self.service.update(self.editing.id, data)
            else:
                self.service.create(data)
        except RESPONSE_ERRORS:
            logger.exception("Error saving supply")
            self.ui.alert("Failed to save.")
            return False

        self.handle_cancel()
        self.refetch()
        return True

    def handle_delete(self, supply_id: int) -> bool:
        if not self.ui.confirm("Are you sure you want to delete this supply?"):
            return False
        try:
            self.service.delete(supply_id)
        except RESPONSE_ERRORS:
            logger.exception("Error deleting supply")
            self.ui.alert("Failed to delete.")
            return False

        self.refetch()
        return True

    def handle_export(self) -> Optional[Path]:
        try:
            content = self.service.export_excel()
        except RESPONSE_ERRORS:
            logger.exception("Error exporting supplies")
            self.ui.alert("Failed to export.")
            return None

        target = self.download_dir / EXPORT_FILENAME
        try:
            self.download_dir.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        except OSError:
            logger.exception("Cannot write %s", target)
            self.ui.alert("Failed to export.")
            return None
        self.ui.info(f"Saved {target}")
        return target

    def handle_import(self, path: Path) -> Optional[str]:
        try:
            with path.open("rb") as fh:
                message = self.service.import_csv(fh, filename=path.name)
        # RequestException is an OSError subclass, so it has to be matched first.
        except RESPONSE_ERRORS:
            logger.exception("Error importing supplies")
            self.ui.alert("Failed to import.")
            return None
        except OSError:
            logger.exception("Cannot read %s", path)
            self.ui.alert(f"Cannot read {path}.")
            return None

        self.ui.info(message)
        self.refetch()
        return message
