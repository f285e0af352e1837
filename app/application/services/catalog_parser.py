"""Catalog parser — turns an uploaded CSV text into canonical product records.

Handles:
- Separator detection (tab, semicolon, comma)
- Row extraction and header detection
- The vendor layout (code, name, quantity) and header-driven generic files
- Reporting every dropped row as a diagnostic instead of failing the file

Nothing here touches the database: ``parse_catalog`` is a pure function of the
text, so callers decide what to persist.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import structlog

from app.core.exceptions import CatalogFormatError
from app.domain.schemas.product import ProductCreate

logger = structlog.get_logger(__name__)

_NUMBER_RE = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")
_DIGITS_RE = re.compile(r"[0-9]+")
_LINE_BREAK_RE = re.compile(r"\r?\n")

# Header synonyms for generic files (compared lower-cased, exact match)
NAME_HEADERS = ("name", "nome", "produto", "descrição", "descricao")
CODE_HEADERS = ("code", "codigo", "sku", "id", "material")
CATEGORY_HEADERS = ("category", "categoria", "tipo", "grupo")

GENERIC_SEPARATOR = ","


class Delimiter(str, Enum):
    TAB = "\t"
    SEMICOLON = ";"
    COMMA = ","


class ImportMode(str, Enum):
    VENDOR = "vendor"
    GENERIC = "generic"


class SkipReason(str, Enum):
    INVALID_CODE = "invalid_code"  # vendor row whose code is not a number
    NUMERIC_NAME = "numeric_name"  # vendor row whose name is a number (stray header/footer)
    TOO_FEW_COLUMNS = "too_few_columns"
    BLANK_NAME = "blank_name"


@dataclass(frozen=True)
class Row:
    line: int
    fields: list[str]


@dataclass(frozen=True)
class ImportPlan:
    """Every format decision for one file, made once before rows are read."""

    delimiter: Delimiter
    mode: ImportMode
    has_header: bool
    header: list[str] = field(default_factory=list)
    name_index: Optional[int] = None
    code_index: Optional[int] = None
    category_index: Optional[int] = None


@dataclass(frozen=True)
class ImportDiagnostic:
    line: int
    reason: SkipReason
    raw: str


@dataclass
class ParsedCatalog:
    plan: ImportPlan
    candidates: list[ProductCreate]
    diagnostics: list[ImportDiagnostic]


def is_number(value: str) -> bool:
    """True for a non-blank decimal literal such as ``12``, ``-3.5`` or ``1e3``."""
    return bool(_NUMBER_RE.fullmatch(value.strip()))


def detect_delimiter(text: str) -> Delimiter:
    """Tab anywhere wins, then semicolon, then comma."""
    if "\t" in text:
        return Delimiter.TAB
    if ";" in text:
        return Delimiter.SEMICOLON
    return Delimiter.COMMA


def extract_rows(text: str, delimiter: Delimiter) -> list[Row]:
    """Split text into trimmed fields, dropping blank lines."""
    # Excel "CSV UTF-8" exports lead with a byte order mark
    if text.startswith("\ufeff"):
        text = text[1:]
    rows = []
    for number, line in enumerate(_LINE_BREAK_RE.split(text), start=1):
        if not line.strip():
            continue
        rows.append(Row(line=number, fields=[f.strip() for f in line.split(delimiter.value)]))
    return rows


def has_header(rows: list[Row]) -> bool:
    """The first row is a header unless it leads with a number.

    ``["codigo", "nome"]`` is a header; ``["123", "abc"]`` and all-numeric
    rows are data.
    """
    if not rows:
        return False
    return not is_number(rows[0].fields[0])


def _find_column(header: list[str], synonyms: tuple[str, ...]) -> Optional[int]:
    for index, token in enumerate(header):
        if token in synonyms:
            return index
    return None


def _looks_like_vendor(header: list[str], rows: list[Row]) -> bool:
    if any(token == "material" or "texto" in token for token in header):
        return True
    return len(rows) > 1 and bool(_DIGITS_RE.fullmatch(rows[1].fields[0]))


def plan_import(text: str) -> ImportPlan:
    """Inspect the raw text once and decide separator, layout and header."""
    delimiter = detect_delimiter(text)
    rows = extract_rows(text, delimiter)
    header = [f.lower() for f in rows[0].fields] if rows else []

    if _looks_like_vendor(header, rows):
        return ImportPlan(
            delimiter=delimiter,
            mode=ImportMode.VENDOR,
            has_header=has_header(rows),
            header=header,
        )

    name_index = _find_column(header, NAME_HEADERS)
    if name_index is None:
        raise CatalogFormatError(details={"header": header})

    return ImportPlan(
        delimiter=delimiter,
        mode=ImportMode.GENERIC,
        has_header=True,
        header=header,
        name_index=name_index,
        code_index=_find_column(header, CODE_HEADERS),
        category_index=_find_column(header, CATEGORY_HEADERS),
    )


def _raw(row: Row, separator: str) -> str:
    return separator.join(row.fields)


def _normalize_vendor(rows: list[Row], plan: ImportPlan) -> tuple[list[ProductCreate], list[ImportDiagnostic]]:
    candidates: list[ProductCreate] = []
    diagnostics: list[ImportDiagnostic] = []
    data = rows[1:] if plan.has_header else rows

    for row in data:
        raw = _raw(row, plan.delimiter.value)
        if len(row.fields) < 2:
            diagnostics.append(ImportDiagnostic(row.line, SkipReason.TOO_FEW_COLUMNS, raw))
            continue

        code, name = row.fields[0], row.fields[1]
        if not is_number(code):
            diagnostics.append(ImportDiagnostic(row.line, SkipReason.INVALID_CODE, raw))
            continue
        if is_number(name):
            diagnostics.append(ImportDiagnostic(row.line, SkipReason.NUMERIC_NAME, raw))
            continue

        candidates.append(
            ProductCreate(
                code=code,
                name=name or f"Produto {code}",
                category=f"Quantidade: {row.fields[2]}" if len(row.fields) > 2 else None,
            )
        )

    return candidates, diagnostics


def _pick(columns: list[str], index: Optional[int]) -> Optional[str]:
    if index is None or index >= len(columns):
        return None
    return columns[index]


def _normalize_generic(text: str, plan: ImportPlan) -> tuple[list[ProductCreate], list[ImportDiagnostic]]:
    candidates: list[ProductCreate] = []
    diagnostics: list[ImportDiagnostic] = []

    # Generic files are always read comma-separated, whatever the header used
    for row in extract_rows(text, Delimiter.COMMA)[1:]:
        name = _pick(row.fields, plan.name_index)
        if not name:
            diagnostics.append(ImportDiagnostic(row.line, SkipReason.BLANK_NAME, _raw(row, GENERIC_SEPARATOR)))
            continue

        candidates.append(
            ProductCreate(
                name=name,
                code=_pick(row.fields, plan.code_index) or None,
                category=_pick(row.fields, plan.category_index) or None,
            )
        )

    return candidates, diagnostics


def parse_catalog(text: str, log=None) -> ParsedCatalog:
    """
    Parse an uploaded catalog into canonical product candidates.
    Raises CatalogFormatError when a generic file has no name column.
    """
    log = log or logger
    plan = plan_import(text)
    log.info(
        "Catalog format detected",
        delimiter=plan.delimiter.name,
        mode=plan.mode.value,
        has_header=plan.has_header,
    )

    if plan.mode is ImportMode.VENDOR:
        candidates, diagnostics = _normalize_vendor(extract_rows(text, plan.delimiter), plan)
    else:
        candidates, diagnostics = _normalize_generic(text, plan)

    for diagnostic in diagnostics:
        log.debug("Catalog row skipped", line=diagnostic.line, reason=diagnostic.reason.value)

    log.info("Catalog parsed", candidates=len(candidates), skipped=len(diagnostics))
    return ParsedCatalog(plan=plan, candidates=candidates, diagnostics=diagnostics)
