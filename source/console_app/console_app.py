"""Text front end: startup database check and a command loop over the coordinator."""

import sys
from typing import Callable, Dict

from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

from coordinator.coordinator import Coordinator, EntityKind
from repositories.shop_repository import ShopRepository
from utilities.config import get_db_url
from utilities.exceptions import DataManagerError
from utilities.logger import Logger

# Set up logger
logger = Logger.get_logger(__name__)

HELP = """Commands:
  list <kind>            show all records
  add <kind>             add a record
  edit <kind> <id>       edit a record
  delete <kind> <id>     delete a record
  reload                 reload everything
  help                   show this text
  quit                   exit
Kinds: shop, product, order, courier"""


class ConsoleNotifier:
    """Prints messages and asks for confirmation on the terminal."""

    def __init__(self, input_func: Callable[[str], str] = input, output=None):
        self.input_func = input_func
        self.output = output or sys.stdout

    def _print(self, text: str) -> None:
        print(text, file=self.output)

    def info(self, message: str) -> None:
        self._print(message)

    def warning(self, message: str) -> None:
        self._print(f"Warning: {message}")

    def error(self, message: str) -> None:
        self._print(f"Error: {message}")

    def confirm(self, message: str) -> bool:
        answer = self.input_func(f"{message} [y/N] ")
        return answer.strip().lower() in ("y", "yes")


def describe_database(db_url: str) -> str:
    """Return the connection URL with the password hidden."""
    try:
        return make_url(db_url).render_as_string(hide_password=True)
    except ArgumentError:
        return "<invalid connection string>"


def check_storage(shop_repository: ShopRepository, notifier) -> bool:
    """Run a trial read of the shop table."""
    try:
        shop_repository.get_all()
    except DataManagerError as e:
        notifier.error(
            "Cannot start: the database is not reachable.\n\n"
            f"{e}\n\n"
            "Check that:\n"
            "1. The database server is running\n"
            f"2. The connection string is correct ({describe_database(shop_repository.db_url)})\n"
            "3. The tables exist (run the data initializer)"
        )
        return False
    logger.info("Startup database check passed")
    return True


class ConsoleApp:
    """
    Minimal command loop. It only prompts and prints; every decision is
    made by the coordinator.
    """

    def __init__(self, coordinator: Coordinator, notifier: ConsoleNotifier):
        self.coordinator = coordinator
        self.notifier = notifier
        self.input_func = notifier.input_func

    def prompt_fields(self, defaults: Dict[str, str]) -> Dict[str, str]:
        fields = {}
        for name, default in defaults.items():
            suffix = f" [{default}]" if default else ""
            value = self.input_func(f"{name}{suffix}: ").strip()
            fields[name] = value or default
        return fields

    def show(self, kind: EntityKind) -> None:
        collection = self.coordinator.collection(kind)
        for record in collection:
            self.notifier.info(str(record))
        self.notifier.info(f"({len(collection)} {collection.name})")

    def select(self, kind: EntityKind, raw_id: str):
        try:
            record_id = int(raw_id)
        except ValueError:
            return None
        return self.coordinator.collection(kind).find(record_id)

    def handle(self, line: str) -> bool:
        """Run one command; returns False when the loop should stop."""
        parts = line.split()
        if not parts:
            return True
        command, args = parts[0].lower(), parts[1:]

        if command in ("quit", "exit"):
            return False
        if command == "help":
            self.notifier.info(HELP)
            return True
        if command == "reload":
            self.coordinator.load_all()
            return True

        try:
            kind = EntityKind(args[0].lower())
        except (IndexError, ValueError):
            self.notifier.warning("Unknown kind. Type 'help' for usage.")
            return True

        if command == "list":
            self.show(kind)
        elif command == "add":
            defaults = self.coordinator.form_for(kind).initial_fields()
            self.coordinator.add(kind, self.prompt_fields(defaults))
        elif command == "edit":
            record = self.select(kind, args[1] if len(args) > 1 else "")
            if record is None:
                self.coordinator.edit(kind, None, {})
                return True
            defaults = self.coordinator.form_for(kind, record).initial_fields()
            self.coordinator.edit(kind, record, self.prompt_fields(defaults))
        elif command == "delete":
            record = self.select(kind, args[1] if len(args) > 1 else "")
            self.coordinator.delete(kind, record)
        else:
            self.notifier.warning(f"Unknown command '{command}'. Type 'help' for usage.")
        return True

    def __call__(self) -> None:
        self.coordinator.load_all()
        self.notifier.info(HELP)
        while True:
            try:
                line = self.input_func("> ")
            except EOFError:
                break
            if not self.handle(line):
                break


def main() -> int:
    notifier = ConsoleNotifier()
    db_url = get_db_url()
    shop_repository = ShopRepository(db_url)

    if not check_storage(shop_repository, notifier):
        return 1

    coordinator = Coordinator(shop_repository=shop_repository, notifier=notifier, db_url=db_url)
    ConsoleApp(coordinator, notifier)()
    return 0


if __name__ == "__main__":
    sys.exit(main())
