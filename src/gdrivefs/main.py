# main.py
import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import get_settings
from .exceptions import GDriveError
from .gdrive import GoogleDriveAdapter
from .session import GoogleSessionProvider
from .storage.dto import FileEntry


def setup_logging():
    """Configures logging to file and console explicitly."""
    settings = get_settings()
    log_level_name = settings.LOG_LEVEL.upper()

    # Get the root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level_name)

    # Clear any existing handlers to prevent duplicate logs on re-runs or implicit configs
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # Console output goes to stderr so `cat` can stream file content to stdout
    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    root_logger.addHandler(stream_handler)

    try:
        file_handler = logging.FileHandler(settings.LOG_FILE)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
    except IOError as e:
        # Log to console if file logging fails (e.g., permissions)
        root_logger.error(f"Failed to set up file logging to {settings.LOG_FILE}: {e}")

    # Reducing "noise" from third-party libraries
    logging.getLogger("googleapiclient").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def build_adapter(settings) -> GoogleDriveAdapter:
    """Creates the adapter and its session provider from settings."""
    session_provider = GoogleSessionProvider(
        credentials_json=settings.GDRIVE_CREDENTIALS_JSON,
        token_json=settings.GDRIVE_TOKEN_JSON,
    )
    return GoogleDriveAdapter(session_provider, settings=settings)


async def _ls(adapter: GoogleDriveAdapter, args) -> None:
    container = FileEntry(is_directory=True, id=args.id, path=args.path)
    entries = await adapter.readdir(container)
    for entry in entries:
        kind = "d" if entry.is_directory else "-"
        size = "" if entry.size is None else entry.size
        print(f"{kind} {entry.id}\t{size}\t{entry.path}")
    logging.info(f"Listed {len(entries)} entries in '{args.path}'.")


async def _cat(adapter: GoogleDriveAdapter, args) -> None:
    result = await adapter.readfile(FileEntry(is_file=True, id=args.id, mime=args.mime))
    if args.output:
        Path(args.output).write_bytes(result.body)
        logging.info(f"Downloaded {args.id} ({result.mime}) to {args.output}.")
    else:
        sys.stdout.buffer.write(result.body)
        sys.stdout.flush()


async def _put(adapter: GoogleDriveAdapter, args) -> None:
    local_path = Path(args.local_path)
    entry = FileEntry(
        is_file=True,
        id=args.id,
        filename=args.name or local_path.name,
        parent_id=args.parent_id,
        mime=args.mime,
    )
    size = await adapter.writefile(entry, local_path.read_bytes())
    logging.info(f"Uploaded {local_path} ({size} bytes reported).")


async def _mkdir(adapter: GoogleDriveAdapter, args) -> None:
    entry = FileEntry(is_directory=True, filename=args.name, parent_id=args.parent_id)
    resource = await adapter.mkdir(entry)
    print(resource.get("id"))
    logging.info(f"Created folder '{args.name}' with ID: {resource.get('id')}")


async def _url(adapter: GoogleDriveAdapter, args) -> None:
    link = await adapter.url(FileEntry(id=args.id))
    print(link or "")


COMMANDS = {"ls": _ls, "cat": _cat, "put": _put, "mkdir": _mkdir, "url": _url}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Browse and edit Google Drive through the gdrivefs adapter."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    ls = subparsers.add_parser("ls", help="List a folder.")
    ls.add_argument("--id", help="Folder ID. Omit to list the root.")
    ls.add_argument("--path", default="/", help="Logical path of the folder.")

    cat = subparsers.add_parser("cat", help="Download a file.")
    cat.add_argument("id", help="File ID.")
    cat.add_argument("--mime", help="Expected mime type.")
    cat.add_argument("--output", help="Write to this file instead of stdout.")

    put = subparsers.add_parser("put", help="Upload a local file.")
    put.add_argument("local_path", help="Local file to upload.")
    target = put.add_mutually_exclusive_group()
    target.add_argument("--id", help="Overwrite the file with this ID.")
    target.add_argument("--parent-id", help="Create the file in this folder.")
    put.add_argument("--name", help="Remote file name (defaults to the local name).")
    put.add_argument("--mime", help="Content type of the upload.")

    mkdir = subparsers.add_parser("mkdir", help="Create a folder.")
    mkdir.add_argument("name", help="Folder name.")
    mkdir.add_argument("--parent-id", help="Parent folder ID.")

    url = subparsers.add_parser("url", help="Print the download link of a file.")
    url.add_argument("id", help="File ID.")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging()
    settings = get_settings()

    try:
        adapter = build_adapter(settings)
        asyncio.run(COMMANDS[args.command](adapter, args))
    except GDriveError as e:
        logging.error(f"Command '{args.command}' failed. Error: {e.message}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
