from io import BytesIO

from pypdf import PdfReader, PdfWriter
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas
from reportlab.platypus import (
    PageBreak,
    Paragraph,
    SimpleDocTemplate,
    Table,
    TableStyle,
)

FONT_NAME = "Courier"
FONT_NAME_BOLD = "Courier-Bold"
FONT_SIZE = 9
CELL_PADDING = 12

HEADERS = ["heat", "time", "station", "code", "name", "team", "event", "division"]
DISPLAY_HEADERS = [
    "Heat",
    "Time",
    "Station",
    "Code",
    "Name",
    "Team",
    "Event",
    "Division",
]


def generate_rundown_pdf(namelist, title, event_code=None, output_path=None):
    """
    Build the rundown PDF for a namelist.

    Rows are split into pages of `rows_per_page`, taken from the event's
    rundown settings (or the default settings when printing all events).

    Args:
        namelist: Namelist to render.
        title (str): Document title.
        event_code (str|None): Limit the rundown to one event.
        output_path (str|None): Optional path to also write the PDF to.

    Returns:
        bytes: The PDF document.
    """

    buffer = BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=landscape(A4), topMargin=0.5 * inch)
    available_width = landscape(A4)[0] - doc.leftMargin - doc.rightMargin
    styles = getSampleStyleSheet()

    rows = [
        [str(row[h]) for h in HEADERS] for row in namelist.get_rundown_rows(event_code)
    ]
    rows_per_page = namelist.get_rundown_config(event_code).rows_per_page

    # widths are computed once so every page lines up
    col_widths = _compute_scaled_col_widths(
        data=[DISPLAY_HEADERS] + rows,
        font_name=FONT_NAME,
        font_size=FONT_SIZE,
        padding=CELL_PADDING,
        total_width=available_width,
    )

    elements = [Paragraph(title, styles["Title"])]
    pages = [rows[i : i + rows_per_page] for i in range(0, len(rows), rows_per_page)]
    for i, page_rows in enumerate(pages or [[]]):
        if i:
            elements.append(PageBreak())
        elements.append(_build_rundown_table(page_rows, col_widths))

    doc.build(elements, canvasmaker=NumberedCanvas)
    data = buffer.getvalue()

    if output_path:
        with open(output_path, "wb") as f:
            f.write(data)
    return data


def merge_pdfs(payloads):
    """
    Concatenate PDF documents page-wise, in input order.

    Args:
        payloads (list[bytes]): PDF documents.

    Returns:
        bytes: The merged document; empty for no input.
    """
    payloads = list(payloads)
    if not payloads:
        return b""
    if len(payloads) == 1:
        return payloads[0]

    writer = PdfWriter()
    for payload in payloads:
        for page in PdfReader(BytesIO(payload)).pages:
            writer.add_page(page)
    buffer = BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


def _build_rundown_table(rows, col_widths):
    """Build one page of the rundown table."""

    table = Table([DISPLAY_HEADERS] + rows, colWidths=col_widths, repeatRows=1)
    name_idx = HEADERS.index("name")
    team_idx = HEADERS.index("team")

    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.black),
                ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
                ("ALIGN", (0, 0), (-1, -1), "CENTER"),
                ("ALIGN", (name_idx, 1), (team_idx, -1), "LEFT"),
                ("FONTNAME", (0, 0), (-1, 0), FONT_NAME_BOLD),
                ("FONTNAME", (0, 1), (-1, -1), FONT_NAME),
                ("FONTSIZE", (0, 0), (-1, -1), FONT_SIZE),
            ]
        )
    )
    return table


def _compute_scaled_col_widths(data, font_name, font_size, padding, total_width):
    """Compute column widths scaled to fit the available page width."""

    num_cols = len(data[0])
    max_widths = [0] * num_cols
    for row in data:
        for idx, cell in enumerate(row):
            width = stringWidth(str(cell), font_name, font_size)
            max_widths[idx] = max(max_widths[idx], width)
    raw_widths = [width + padding for width in max_widths]
    raw_total = sum(raw_widths)
    return [width * total_width / raw_total for width in raw_widths]


class NumberedCanvas(canvas.Canvas):
    """Canvas subclass that prints 'Page X of Y' in the footer."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._saved_page_states = []

    def showPage(self):
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        num_pages = len(self._saved_page_states)
        for state in self._saved_page_states:
            self.__dict__.update(state)
            self.draw_page_number(num_pages)
            super().showPage()
        super().save()

    def draw_page_number(self, total):
        self.setFont(FONT_NAME, FONT_SIZE)
        text = f"Page {self.getPageNumber()} of {total}"
        self.drawCentredString(self._pagesize[0] / 2, 0.4 * inch, text)
