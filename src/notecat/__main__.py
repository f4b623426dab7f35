"""Notecat entry point.

Usage:
    python -m notecat [OPTIONS]

Options:
    --config PATH    Path to YAML config file
    --profile NAME   Profile name (dev, prod, test)
    --provider NAME  Provider to categorize with (chatgpt, claude, gemini, mistral)
    --store PATH     Settings and API key store file
    --mock-ai        Use a mock categorizer (no network calls)
    --dry-run        Load config and exit
    --help           Show this help message
    --version        Show version
"""

import argparse
import logging
import shlex
import sys
from pathlib import Path
from typing import TextIO

from dotenv import load_dotenv

# Load .env before anything reads API keys from the environment
_env_file = Path(__file__).parent.parent.parent / ".env"
if _env_file.exists():
    load_dotenv(_env_file)
else:
    load_dotenv()  # Fall back to current directory

from . import __version__
from .categorize import (
    CategorizationError,
    CategoryDispatcher,
    MockCategoryProvider,
    Provider,
)
from .config import NotecatConfig
from .config.loader import load_config
from .config.profiles import detect_profile
from .config.settings import ProviderCredentials, UserSettings
from .config.store import JSONFileStore
from .logger import AttemptLog
from .notes import Author, NoteFilter, NoteService, NoteStoreError

HELP_TEXT = """Commands:
  add TEXT                       Categorize and add a note
  list [search=.. category=.. member=.. date=all|today|week|month]
  search TERM                    List notes whose text or category contains TERM
  stats [week|month]             Streak, trend, categories, leaderboard
  move FROM TO                   Move note at position FROM to position TO
  delete N                       Delete the note at position N
  categories [add|remove NAME]   Show or edit the category list
  provider [NAME]                Show or select the AI provider
  ai on|off                      Enable or disable AI categorization
  key NAME [VALUE]               Set (or clear) an API key, e.g. key openai sk-...
  export PATH / import PATH      Save or load notes as JSON
  help                           Show this help
  quit                           Leave the session"""


def setup_logging(level: str) -> None:
    """Configure logging based on config."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="notecat",
        description="Notecat - AI note categorizer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m notecat                       # Run with auto-detected profile
  python -m notecat --profile prod        # Run with production profile
  python -m notecat --provider gemini     # Categorize with Gemini
  python -m notecat --mock-ai --dry-run   # Load config and exit

Environment:
  NOTECAT_PROFILE    Set profile (dev, prod, test)
  OPENAI_API_KEY, ANTHROPIC_API_KEY, GEMINI_API_KEY, MISTRAL_API_KEY
""",
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to YAML config file",
        metavar="PATH",
    )

    parser.add_argument(
        "--profile",
        choices=["dev", "prod", "test"],
        help="Configuration profile to use",
    )

    parser.add_argument(
        "--provider",
        choices=[p.value for p in Provider],
        help="AI provider to categorize with (saved to settings)",
    )

    parser.add_argument(
        "--store",
        type=Path,
        metavar="PATH",
        help="Path to the settings/API key store (overrides config)",
    )

    parser.add_argument(
        "--mock-ai",
        action="store_true",
        help="Use a mock categorizer instead of real providers",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Load config and exit (for testing)",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Notecat v{__version__}",
    )

    return parser.parse_args(argv)


def build_service(config: NotecatConfig, store_path: Path | None = None, mock_ai: bool = False) -> NoteService:
    """Wire settings, credentials, dispatcher and store into a NoteService."""
    kv_store = JSONFileStore(store_path or config.storage.path)
    settings = UserSettings(kv_store, config.settings)
    credentials = ProviderCredentials(kv_store)

    attempt_log = None
    if config.logging.attempts_enabled:
        attempt_log = AttemptLog(Path(config.logging.attempts_dir))

    dispatcher = CategoryDispatcher.from_config(config.providers, attempt_log=attempt_log)
    if mock_ai:
        for provider in Provider:
            dispatcher.register(MockCategoryProvider(provider, response="Uncategorized"))

    author = Author(name=config.user.name, avatar=config.user.avatar)
    return NoteService(dispatcher, settings, credentials, author)


def parse_filter(tokens: list[str]) -> NoteFilter:
    """Build a NoteFilter from key=value tokens.

    Raises:
        ValueError: On unknown keys or date ranges.
    """
    fields = {"search": "search", "category": "category", "member": "member", "date": "date_range"}
    values: dict[str, str] = {}
    for token in tokens:
        key, sep, value = token.partition("=")
        if not sep or key not in fields:
            raise ValueError(f"Unknown filter '{token}', use search=, category=, member= or date=")
        values[fields[key]] = value
    return NoteFilter(**values)


def format_notes(service: NoteService, note_filter: NoteFilter) -> str:
    """Render notes as numbered lines (numbers are display positions)."""
    store = service.store
    notes = store.filter(note_filter)
    if not notes:
        return "No notes found."

    lines = []
    for note in notes:
        position = store.index_of(note.id) + 1
        lines.append(
            f"{position:>3}. [{note.category}] {note.content} "
            f"({note.author.name}, {note.timestamp[:10]})"
        )
    return "\n".join(lines)


def format_stats(service: NoteService, time_range: str = "week") -> str:
    """Render streak, trend, category and leaderboard summaries."""
    store = service.store
    metrics = store.activity_metrics()
    days = 30 if time_range == "month" else 7

    lines = [f"Streak: {metrics.streak} day(s), {metrics.today_notes} note(s) today, {metrics.total_notes} total"]
    if metrics.goal_reached:
        lines.append("Amazing! You've achieved a 7 day streak!")
    else:
        lines.append(f"Keep it up, you're {metrics.remaining_days} days away from a 7 day streak!")

    lines.append(f"Notes per day (last {days} days):")
    for day, count in store.daily_counts(days).items():
        lines.append(f"  {day.isoformat()}  {count}")

    distribution = store.category_distribution()
    if distribution:
        lines.append("Categories:")
        for category, count in distribution.items():
            lines.append(f"  {category}: {count}")

    leaders = store.leaderboard()
    if leaders:
        lines.append("Leaderboard:")
        for rank, (name, count) in enumerate(leaders, 1):
            lines.append(f"  {rank}. {name} ({count})")

    return "\n".join(lines)


def handle_command(service: NoteService, line: str) -> str:
    """Execute one session command and return the text to show.

    Raises:
        CategorizationError: If categorization fails.
        NoteStoreError: If a note operation fails.
        ValueError, IndexError: On malformed arguments.
    """
    settings = service.settings
    command, _, rest = line.strip().partition(" ")
    command = command.lower()

    if command in ("", "help", "?"):
        return HELP_TEXT

    # Note text is taken verbatim
    if command == "add":
        note = service.capture(rest)
        return f"Added note as '{note.category}'"

    args = shlex.split(rest) if rest.strip() else []

    if command == "list":
        return format_notes(service, parse_filter(args))

    if command == "search":
        return format_notes(service, NoteFilter(search=rest.strip()))

    if command == "stats":
        return format_stats(service, args[0] if args else "week")

    if command == "move":
        if len(args) != 2:
            raise ValueError("Usage: move FROM TO")
        service.store.reorder(int(args[0]) - 1, int(args[1]) - 1)
        return "Moved."

    if command == "delete":
        if len(args) != 1:
            raise ValueError("Usage: delete N")
        index = int(args[0]) - 1
        if not 0 <= index < len(service.store):
            raise IndexError(f"No note at position {args[0]}")
        note = service.delete(service.store.notes[index].id)
        return f"Deleted '{note.content}'"

    if command == "categories":
        if not args:
            return ", ".join(settings.categories) or "No categories."
        action, name = args[0], " ".join(args[1:])
        if action == "add":
            return "Added." if settings.add_category(name) else f"'{name}' not added."
        if action == "remove":
            return "Removed." if settings.remove_category(name) else f"'{name}' not found."
        raise ValueError("Usage: categories [add|remove NAME]")

    if command == "provider":
        if not args:
            return f"Provider: {settings.selected_provider}"
        name = args[0].lower()
        if name not in [p.value for p in Provider]:
            raise ValueError(f"Unknown provider '{name}'")
        settings.set_selected_provider(name)
        return f"Provider set to {name}"

    if command == "ai":
        if not args or args[0] not in ("on", "off"):
            return f"AI categorization is {'on' if settings.ai_enabled else 'off'}"
        settings.set_ai_enabled(args[0] == "on")
        return f"AI categorization {args[0]}"

    if command == "key":
        if not args:
            raise ValueError("Usage: key NAME [VALUE]")
        service.credentials.set(args[0], args[1] if len(args) > 1 else "")
        return f"API key for {args[0]} {'saved' if len(args) > 1 else 'cleared'}"

    if command == "export":
        if len(args) != 1:
            raise ValueError("Usage: export PATH")
        return f"Exported {service.export_notes(Path(args[0]))} notes"

    if command == "import":
        if len(args) != 1:
            raise ValueError("Usage: import PATH")
        return f"Imported {service.import_notes(Path(args[0]))} notes"

    raise ValueError(f"Unknown command '{command}', type 'help'")


def run_session(
    service: NoteService,
    stdin: TextIO = sys.stdin,
    stdout: TextIO = sys.stdout,
) -> int:
    """Read commands until 'quit' or end of input.

    Failures are reported and the session continues with state unchanged.
    """
    logger = logging.getLogger("notecat")
    prompt = "notecat> "

    stdout.write(prompt)
    stdout.flush()
    for line in stdin:
        if line.strip().lower() in ("quit", "exit"):
            break
        try:
            output = handle_command(service, line)
        except CategorizationError as e:
            output = f"Failed to categorize note: {e}"
        except NoteStoreError as e:
            output = f"Error: {e}"
        except (ValueError, IndexError, OSError) as e:
            logger.debug(f"Command failed: {line.strip()!r}: {e}")
            output = f"Error: {e}"
        stdout.write(output + "\n" + prompt)
        stdout.flush()

    stdout.write("\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for Notecat.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    args = parse_args(argv)

    # Load configuration
    try:
        if args.config:
            config = load_config(path=args.config)
        else:
            config = load_config(profile=args.profile or detect_profile().value)
    except FileNotFoundError as e:
        print(f"Error: Config file not found: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    setup_logging(config.logging.level)
    logger = logging.getLogger("notecat")

    logger.info(f"Notecat v{__version__}")
    logger.info(f"Profile: {args.profile or detect_profile().value}")

    service = build_service(config, store_path=args.store, mock_ai=args.mock_ai)
    settings = service.settings

    if args.provider:
        settings.set_selected_provider(args.provider)

    if args.dry_run:
        logger.info("Dry run mode - exiting after config load")
        logger.info(f"Provider: {settings.selected_provider}")
        logger.info(f"AI enabled: {settings.ai_enabled}")
        logger.info(f"API keys: {service.credentials.configured()}")
        return 0

    print("\n" + "=" * 50)
    print("  Notecat")
    print("=" * 50)
    print(f"  Version: {__version__}")
    print(f"  Provider: {settings.selected_provider}{' (mock)' if args.mock_ai else ''}")
    print(f"  AI categorization: {'on' if settings.ai_enabled else 'off'}")
    print(f"  Categories: {', '.join(settings.categories)}")
    print("=" * 50)
    print("Type 'help' for commands.\n")

    try:
        return run_session(service)
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received")
        return 0


if __name__ == "__main__":
    sys.exit(main())
