"""
Handball fitness test tracker - command line
"""
import asyncio
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

from loguru import logger

from records import (
    FieldUpdateError,
    Group,
    NAME_FIELDS,
    add_player,
    ensure_groups,
    parse_numeric_input,
    resolve_field,
    update_player,
    validate_player,
)
from spreadsheet import SpreadsheetError, read_workbook, write_workbook
from storage import AutoSaver, DirectoryStore, PersistenceStore, logging_config, storage_config


def setup_logging(level: Optional[str] = None) -> None:
    """Console sink, plus daily log files when enabled"""
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=level or logging_config.level,
    )
    if logging_config.file_logging:
        logger.add(
            os.path.join(logging_config.log_dir, "handball_{time:YYYY-MM-DD}.log"),
            rotation="1 day",
            retention="30 days",
            level="DEBUG",
        )


def export_filename(now: Optional[datetime] = None) -> str:
    """dane_testowe_zawodnikow_DD-MM-YY-HH-MM-SS.xlsx"""
    now = now or datetime.now()
    return f"dane_testowe_zawodnikow_{now.strftime('%d-%m-%y-%H-%M-%S')}.xlsx"


def parse_assignment(text: str) -> Tuple[str, object]:
    """FIELD=VALUE → (attribute, parsed value)"""
    if "=" not in text:
        raise ValueError(f"Expected FIELD=VALUE, got {text!r}")
    field, raw = text.split("=", 1)
    name = resolve_field(field.strip())
    if name in NAME_FIELDS:
        return name, raw
    return name, parse_numeric_input(raw)


class CommandError(Exception):
    """Command could not be completed"""


class HandballTracker:
    """Stored files plus spreadsheet import/export"""

    def __init__(self, store: Optional[PersistenceStore] = None):
        self.store = store or PersistenceStore(DirectoryStore(storage_config.data_dir))

    def _load(self, file_id: str) -> List[Group]:
        groups = self.store.load_file(file_id)
        if groups is None:
            raise CommandError(f"File not found or unreadable: {file_id}")
        return groups

    def _name(self, file_id: str) -> str:
        info = self.store.get_file_info(file_id)
        return info.name if info else file_id

    def list_files(self) -> None:
        files = self.store.recent_files()
        if not files:
            print("No saved files")
            return
        print(f"\n{'ID':<20} {'Name':<30} {'Modified':<16}")
        print("-" * 68)
        for f in files:
            modified = f.last_modified.astimezone().strftime("%d.%m.%Y %H:%M")
            print(f"{f.id:<20} {f.name:<30} {modified:<16}")

    def show(self, file_id: str, group_index: Optional[int] = None) -> None:
        groups = self._load(file_id)
        for gi, group in enumerate(groups):
            if group_index is not None and gi != group_index:
                continue
            print(f"\n=== [{gi}] {group.name} ({len(group.players)} players) ===")
            print(f"{'#':>3} {'Name':<31} {'30m':>6} {'pkt':>4} {'MB sum':>7} {'pkt':>4} {'5-jump':>7} {'pkt':>4}")
            for pi, p in enumerate(group.players):
                print(
                    f"{pi:>3} {p.full_name:<31} "
                    f"{_fmt(p.sprint30m_time):>6} {_fmt(p.sprint30m_score):>4} "
                    f"{_fmt(p.medicine_ball_sum):>7} {_fmt(p.medicine_ball_score):>4} "
                    f"{_fmt(p.five_jump_distance):>7} {_fmt(p.five_jump_score):>4}"
                )

    async def edit(
        self,
        file_id: str,
        assignments: List[str],
        group_index: int = 0,
        row: Optional[int] = None,
    ) -> None:
        """Apply FIELD=VALUE edits to one row (a new row when ``row`` is None)"""
        groups = ensure_groups(self._load(file_id))
        if not 0 <= group_index < len(groups):
            raise CommandError(f"No group {group_index} in file {file_id}")

        group = groups[group_index]
        if row is None:
            group = add_player(group)
            row = len(group.players) - 1
        elif not 0 <= row < len(group.players):
            raise CommandError(f"No row {row} in group {group.name!r}")

        saver = AutoSaver(self.store, file_id, self._name(file_id))
        for assignment in assignments:
            try:
                field, value = parse_assignment(assignment)
            except KeyError as e:
                raise CommandError(f"Unknown field: {e}") from None
            except ValueError as e:
                raise CommandError(f"{assignment}: {e}") from None
            try:
                group = update_player(group, row, field, value)
            except FieldUpdateError as e:
                raise CommandError(str(e)) from None
            groups = [*groups[:group_index], group, *groups[group_index + 1:]]
            saver.schedule(groups)
        saver.flush()

        for issue in validate_player(group.players[row]).issues:
            logger.warning(f"{issue.field}: {issue.message} ({issue.value})")
        logger.info(f"Updated row {row} of group {group.name!r}")

    async def export(self, file_id: str, output: Optional[str] = None) -> str:
        groups = self._load(file_id)
        blob = await write_workbook(groups)
        path = output or export_filename()
        Path(path).write_bytes(blob.content)
        logger.info(f"Exported {file_id} to {path}")
        return path

    async def import_workbook(self, path: str, name: Optional[str] = None) -> str:
        data = Path(path).read_bytes()
        groups = ensure_groups(await read_workbook(data))
        file_name = name or Path(path).stem
        file_id = self.store.create_file(file_name)
        self.store.save_file(file_id, file_name, groups)
        logger.info(f"Imported {path} as {file_name!r} ({file_id})")
        return file_id


def _fmt(value) -> str:
    return "-" if value is None else f"{value:g}"


def build_parser():
    import argparse

    parser = argparse.ArgumentParser(description="Handball fitness test tracker")
    parser.add_argument("--data-dir", type=str, default=None, help="Store directory")
    parser.add_argument("--log-level", type=str, default=None, help="Log level")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("files", help="List saved files")

    p = sub.add_parser("create", help="Create an empty file")
    p.add_argument("name")

    p = sub.add_parser("rename", help="Rename a file")
    p.add_argument("file_id")
    p.add_argument("name")

    p = sub.add_parser("delete", help="Delete a file")
    p.add_argument("file_id")

    p = sub.add_parser("show", help="Print a file's groups")
    p.add_argument("file_id")
    p.add_argument("--group", type=int, default=None, help="Group index")

    p = sub.add_parser("edit", help="Set fields of one player (FIELD=VALUE ...)")
    p.add_argument("file_id")
    p.add_argument("assignments", nargs="+")
    p.add_argument("--group", type=int, default=0, help="Group index")
    p.add_argument("--row", type=int, default=None, help="Player row (new row if omitted)")

    p = sub.add_parser("export", help="Write a file to .xlsx")
    p.add_argument("file_id")
    p.add_argument("--output", type=str, default=None, help="Output path")

    p = sub.add_parser("import", help="Create a file from .xlsx")
    p.add_argument("path")
    p.add_argument("--name", type=str, default=None, help="File name")

    return parser


async def main(argv: Optional[List[str]] = None) -> int:
    """Entry point; returns the process exit code"""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    store = None
    if args.data_dir:
        store = PersistenceStore(DirectoryStore(args.data_dir))
    tracker = HandballTracker(store)

    try:
        if args.command == "files":
            tracker.list_files()
        elif args.command == "create":
            print(tracker.store.create_file(args.name))
        elif args.command == "rename":
            tracker.store.rename_file(args.file_id, args.name)
        elif args.command == "delete":
            tracker.store.delete_file(args.file_id)
        elif args.command == "show":
            tracker.show(args.file_id, args.group)
        elif args.command == "edit":
            await tracker.edit(args.file_id, args.assignments, args.group, args.row)
        elif args.command == "export":
            print(await tracker.export(args.file_id, args.output))
        elif args.command == "import":
            print(await tracker.import_workbook(args.path, args.name))
    except (CommandError, SpreadsheetError, OSError) as e:
        logger.error(str(e))
        return 1

    return 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
