"""
Workbook import / export

One sheet per group, one header row, then one row per player in a fixed
column order. Reading is positional: header labels are never inspected.
Derived scores are taken from the sheet as they are (a score adjusted by
hand in the exported file survives the re-import).
"""

import asyncio
import math
from dataclasses import dataclass
from io import BytesIO
from typing import Any, List, Optional

from loguru import logger
from openpyxl import Workbook, load_workbook
from openpyxl.styles import Alignment, Font
from openpyxl.utils import get_column_letter
from pydantic import ValidationError

from records import Group, Player

XLSX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

COLUMNS = [
    "Imię",
    "Nazwisko",
    "Czas Biegu 30m",
    "Punkty Bieg 30m",
    "Rzut Piłką Lek. Do Przodu",
    "Rzut Piłką Lek. Do Tyłu",
    "Suma Rzutów Piłką Lek.",
    "Punkty Rzut Piłką Lek.",
    "Dystans Pięcioskoku",
    "Punkty Pięcioskok",
    "Dystans Rzutu Ręcznego",
    "Punkty Rzut Ręczny",
    "Czas Testu Koperta",
    "Punkty Test Koperta",
]

PLAYER_FIELDS = [
    "first_name",
    "last_name",
    "sprint30m_time",
    "sprint30m_score",
    "medicine_ball_forward",
    "medicine_ball_backward",
    "medicine_ball_sum",
    "medicine_ball_score",
    "five_jump_distance",
    "five_jump_score",
    "hand_throw_distance",
    "hand_throw_score",
    "envelope_time",
    "envelope_score",
]

TEXT_COLUMNS = 2
MIN_COLUMN_WIDTH = 14
MAX_SHEET_TITLE = 31


class SpreadsheetError(Exception):
    """Workbook could not be written or read"""


@dataclass
class WorkbookBlob:
    """Encoded workbook ready to be saved or sent"""
    content: bytes
    mime_type: str = XLSX_MIME_TYPE

    def __len__(self) -> int:
        return len(self.content)


# ==================== Cell conversion ====================

def to_number(value: Any) -> Optional[float]:
    """Cell value → number; empty or non-numeric → None"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else None
    text = str(value).strip()
    if text == "":
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def player_to_row(player: Player) -> List[Any]:
    # Names stay "" so that an otherwise empty row is still written
    row: List[Any] = [player.first_name, player.last_name]
    row.extend(getattr(player, name) for name in PLAYER_FIELDS[TEXT_COLUMNS:])
    return row


def row_to_player(values: tuple) -> Player:
    cells = list(values[: len(PLAYER_FIELDS)])
    cells.extend([None] * (len(PLAYER_FIELDS) - len(cells)))
    data = {
        name: to_text(cell) if i < TEXT_COLUMNS else to_number(cell)
        for i, (name, cell) in enumerate(zip(PLAYER_FIELDS, cells))
    }
    return Player.model_validate(data)


# ==================== Blocking workers ====================

def _write_sync(groups: List[Group]) -> bytes:
    if not groups:
        raise SpreadsheetError("No groups to export")

    # Excel compares sheet titles case-insensitively
    seen = set()
    for group in groups:
        if len(group.name) > MAX_SHEET_TITLE:
            raise SpreadsheetError(f"Sheet name longer than {MAX_SHEET_TITLE} characters: {group.name!r}")
        if group.name.lower() in seen:
            raise SpreadsheetError(f"Duplicate sheet name: {group.name!r}")
        seen.add(group.name.lower())

    wb = Workbook()
    wb.remove(wb.active)

    for group in groups:
        try:
            ws = wb.create_sheet(title=group.name)
        except ValueError as e:
            raise SpreadsheetError(f"Invalid sheet name {group.name!r}: {e}") from e

        ws.append(COLUMNS)
        for cell in ws[1]:
            cell.font = Font(bold=True)
            cell.alignment = Alignment(horizontal="center")

        for player in group.players:
            ws.append(player_to_row(player))

        for idx, label in enumerate(COLUMNS, start=1):
            ws.column_dimensions[get_column_letter(idx)].width = max(len(label) + 2, MIN_COLUMN_WIDTH)

        logger.debug(f"Sheet {group.name!r}: {len(group.players)} rows")

    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def _read_sync(data: bytes) -> List[Group]:
    try:
        wb = load_workbook(BytesIO(data), data_only=True)
    except Exception as e:
        raise SpreadsheetError(f"Not a readable .xlsx workbook: {e}") from e

    groups: List[Group] = []
    try:
        for ws in wb.worksheets:
            players = [
                row_to_player(values)
                for values in ws.iter_rows(min_row=2, values_only=True)
            ]
            groups.append(Group(name=ws.title, players=players))
            logger.debug(f"Sheet {ws.title!r}: {len(players)} players")
    except ValidationError as e:
        raise SpreadsheetError(f"Invalid player row: {e}") from e
    finally:
        wb.close()

    return groups


# ==================== Public API ====================

async def write_workbook(groups: List[Group]) -> WorkbookBlob:
    """Encode groups as an .xlsx workbook"""
    content = await asyncio.to_thread(_write_sync, list(groups))
    logger.info(f"Workbook written: {len(groups)} sheets, {len(content)} bytes")
    return WorkbookBlob(content=content)


async def read_workbook(data: bytes) -> List[Group]:
    """Decode an .xlsx workbook into groups (derived values kept as stored)"""
    if isinstance(data, WorkbookBlob):
        data = data.content
    groups = await asyncio.to_thread(_read_sync, data)
    logger.info(f"Workbook read: {len(groups)} sheets")
    return groups
