"""
PDF report with every generated stage document of a project.

The file is written directly as a minimal PDF 1.4: standard Type1
Helvetica fonts with WinAnsi encoding, text laid out line by line on US
Letter pages, one content stream per page.
"""

import json
import logging
import textwrap
from datetime import datetime
from typing import Any, Iterator, List, NamedTuple, Optional, Tuple

from ideor import database
from ideor.entities import ProjectTask
from ideor.project_service import ProjectService

logger = logging.getLogger(__name__)

PAGE_WIDTH = 612
PAGE_HEIGHT = 792
MARGIN_X = 50
HEADER_Y = 755
TOP_Y = 720
BOTTOM_Y = 60
FOOTER_Y = 30
INDENT_STEP = 12

FONTS = {
    "regular": ("F1", "Helvetica"),
    "bold": ("F2", "Helvetica-Bold"),
    "italic": ("F3", "Helvetica-Oblique"),
}


class Line(NamedTuple):
    text: str
    font: str = "regular"
    size: int = 11
    indent: int = 0


# Forces the following lines onto a new page
PAGE_BREAK = Line("\f")


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def _wrap(line: Line) -> List[Line]:
    # Helvetica averages about half an em per character
    usable = PAGE_WIDTH - 2 * MARGIN_X - line.indent * INDENT_STEP
    width = max(20, int(usable / (line.size * 0.5)))
    cleaned = line.text.replace("\t", "    ").rstrip()
    if not cleaned:
        return [line._replace(text="")]
    return [line._replace(text=part) for part in textwrap.wrap(cleaned, width=width)] or [line]


def _scalar(value: Any) -> str:
    if isinstance(value, str):
        return value
    if value is None:
        return "null"
    return json.dumps(value, ensure_ascii=False)


def json_lines(value: Any, level: int = 0) -> Iterator[Line]:
    """Render a JSON value as an indented tree of ``key:`` and ``[i]`` lines."""
    if isinstance(value, dict):
        for key, child in value.items():
            yield Line(f"{key}:", "bold", 9, level)
            if isinstance(child, (dict, list)):
                yield from json_lines(child, level + 1)
            else:
                yield Line(_scalar(child), "regular", 9, level + 1)
    elif isinstance(value, list):
        for index, item in enumerate(value):
            yield Line(f"[{index}]", "bold", 9, level)
            yield from json_lines(item, level + 1)
    else:
        yield Line(_scalar(value), "regular", 9, level)


def content_lines(content: str) -> List[Line]:
    """JSON content as a tree; anything else as plain text."""
    try:
        parsed = json.loads(content)
    except (json.JSONDecodeError, TypeError):
        return [Line(text, "regular", 9) for text in (content or "").splitlines()]
    return list(json_lines(parsed))


def report_lines(project_name: str, tasks: List[ProjectTask], generated_at: datetime) -> List[Line]:
    lines = [
        Line(f"Projeto: {project_name}", "bold", 11),
        Line(f"Gerado em: {generated_at.strftime('%d/%m/%Y %H:%M')}", "regular", 11),
        Line(""),
        Line("Índice", "bold", 16),
    ]
    lines.extend(Line(f"• {task.title}", "regular", 10) for task in tasks)
    lines.append(PAGE_BREAK)

    for task in tasks:
        lines.append(Line(task.title, "bold", 16))
        if task.description:
            lines.append(Line(task.description, "italic", 10))
        lines.append(Line(""))
        lines.extend(content_lines(task.content))
        lines.append(Line(""))
        lines.append(Line("_" * 80, "regular", 9))
        lines.append(Line(""))
    return lines


def paginate(lines: List[Line]) -> List[List[Tuple[Line, int]]]:
    """Place lines on pages, returning (line, y) pairs per page."""
    pages: List[List[Tuple[Line, int]]] = [[]]
    y = TOP_Y
    for line in lines:
        if line is PAGE_BREAK:
            if pages[-1]:
                pages.append([])
                y = TOP_Y
            continue
        for wrapped in _wrap(line):
            step = wrapped.size + 4
            if y - step < BOTTOM_Y and pages[-1]:
                pages.append([])
                y = TOP_Y
            y -= step
            pages[-1].append((wrapped, y))
    return pages


def _text_command(font: str, size: int, x: float, y: float, text: str) -> str:
    font_ref = FONTS[font][0]
    return f"/{font_ref} {size} Tf 1 0 0 1 {x:.0f} {y} Tm ({_escape(text)}) Tj"


def build_page_stream(placed: List[Tuple[Line, int]], header: str, page_number: int, total_pages: int) -> str:
    commands = ["BT", _text_command("bold", 14, MARGIN_X, HEADER_Y, header)]
    for line, y in placed:
        if line.text:
            commands.append(_text_command(line.font, line.size, MARGIN_X + line.indent * INDENT_STEP, y, line.text))
    footer = f"Página {page_number} de {total_pages}"
    footer_x = (PAGE_WIDTH - len(footer) * 9 * 0.5) / 2
    commands.append(_text_command("regular", 9, footer_x, FOOTER_Y, footer))
    commands.append("ET")
    return "\n".join(commands)


def _encode(text: str) -> bytes:
    return text.encode("cp1252", errors="replace")


def write_pdf(page_streams: List[str]) -> bytes:
    """Assemble page content streams into PDF bytes."""
    objects: List[str] = []

    def add_object(body: str) -> int:
        objects.append(body)
        return len(objects)

    font_ids = {}
    for ref, base_font in FONTS.values():
        font_ids[ref] = add_object(
            f"<< /Type /Font /Subtype /Type1 /BaseFont /{base_font} /Encoding /WinAnsiEncoding >>"
        )
    font_resources = " ".join(f"/{ref} {obj_id} 0 R" for ref, obj_id in font_ids.items())

    # the Pages object id is known once every page has been added
    pages_id = len(font_ids) + 2 * len(page_streams) + 1
    page_ids = []
    for stream in page_streams:
        encoded_length = len(_encode(stream))
        content_id = add_object(f"<< /Length {encoded_length} >>\nstream\n{stream}\nendstream")
        page_ids.append(add_object(
            f"<< /Type /Page /Parent {pages_id} 0 R "
            f"/Resources << /Font << {font_resources} >> >> "
            f"/MediaBox [0 0 {PAGE_WIDTH} {PAGE_HEIGHT}] /Contents {content_id} 0 R >>"
        ))
    kids = " ".join(f"{page_id} 0 R" for page_id in page_ids)
    add_object(f"<< /Type /Pages /Kids [{kids}] /Count {len(page_ids)} >>")
    catalog_id = add_object(f"<< /Type /Catalog /Pages {pages_id} 0 R >>")

    pieces = [b"%PDF-1.4\n"]
    offsets = []
    for obj_id, body in enumerate(objects, start=1):
        offsets.append(sum(len(p) for p in pieces))
        pieces.append(_encode(f"{obj_id} 0 obj\n{body}\nendobj\n"))

    xref_start = sum(len(p) for p in pieces)
    xref = [f"xref\n0 {len(objects) + 1}\n", "0000000000 65535 f \n"]
    xref.extend(f"{offset:010} 00000 n \n" for offset in offsets)
    xref.append(f"trailer\n<< /Size {len(objects) + 1} /Root {catalog_id} 0 R >>\nstartxref\n{xref_start}\n%%EOF")
    pieces.append(_encode("".join(xref)))
    return b"".join(pieces)


def render_report(project_name: str, tasks: List[ProjectTask], generated_at: datetime) -> bytes:
    pages = paginate(report_lines(project_name, tasks, generated_at))
    header = f"Relatório Completo - {project_name}"
    streams = [build_page_stream(placed, header, number, len(pages))
               for number, placed in enumerate(pages, start=1)]
    return write_pdf(streams)


class PdfExporter:
    def __init__(self, db=database, projects: Optional[ProjectService] = None):
        self.db = db
        self.projects = projects or ProjectService(db)

    async def export_project(self, project_id: str, user_id: str,
                             generated_at: Optional[datetime] = None) -> Optional[bytes]:
        """
        PDF bytes for the project's documents.

        Returns None when the project is not accessible or none of its tasks
        has content.
        """
        project = await self.projects.get(project_id, user_id)
        if project is None:
            logger.warning(f"Project {project_id} not found for user {user_id}")
            return None

        tasks = await self.db.list_tasks(user_id, project_id)
        tasks = sorted((t for t in tasks if t.content), key=lambda t: (t.phase, t.created_at))
        if not tasks:
            logger.warning(f"No documents found for project {project_id}")
            return None

        pdf = render_report(project.name, tasks, generated_at or datetime.now())
        logger.info(f"PDF generated for project {project_id} ({len(pdf)} bytes, {len(tasks)} documents)")
        return pdf
