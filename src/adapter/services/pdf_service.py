"""ReportLab PDF Generation Service Implementation

Implements the French invoice layout using the ReportLab canvas.
"""

from io import BytesIO
from typing import List, Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from src.app.services.pdf_service import PdfService
from src.domain.client import Client
from src.domain.formatting import format_currency, format_date, format_number
from src.domain.invoice import Invoice
from src.domain.issuer_profile import IssuerProfile
from src.domain.line_item import LineItem
from src.domain.text_wrap import truncate, wrap_text

PAGE_WIDTH, PAGE_HEIGHT = A4

REGULAR = "Helvetica"
BOLD = "Helvetica-Bold"

HEADER_FILL = colors.HexColor("#F5F5F5")
ODD_ROW_FILL = colors.HexColor("#FAFAFA")
TABLE_BORDER = colors.HexColor("#DDDDDD")

# Layout positions in mm, measured from the top of the page
ISSUER_X = 20
CLIENT_X = 120
HEADER_TOP = 30
ADDRESS_TOP = 45
LINE_STEP = 5
TITLE_MIN_Y = 90
TABLE_X = 20
TABLE_WIDTH = 185
COLUMNS = (20, 100, 120, 150, 175)
COLUMN_LABELS = ("Description", "Qté", "Prix HT", "Remise", "Total HT")
ROW_HEIGHT = 8
TEXT_BASELINE = 5
CONTINUED_TABLE_TOP = 20
BOTTOM_LIMIT = 287
SUMMARY_HEIGHT = 28
PAYMENT_BOX_OFFSET = 140
PAYMENT_BOX_WIDTH = 180
PAYMENT_BOX_HEIGHT = 25
PAYMENT_BLOCK_HEIGHT = 36
PENALTY_LINE_CHARS = 110

MISSING_CLIENT_NAME = "client inconnu"
MISSING_CLIENT_ADDRESS = "adresse inconnue"
EARLY_PAYMENT_NOTICE = "Conditions d'escompte : Pas d'escompte pour règlement anticipé"
VAT_NOTICE = "TVA non applicable, art. 293 B du CGI"
LATE_PAYMENT_NOTICE = (
    "Pour tout professionnel, en cas de retard de paiement, application de "
    "l’indemnité forfaitaire légale pour frais de recouvrement : 40,00 €"
)


class _Page:
    """Canvas wrapper working in mm from the top-left corner"""

    def __init__(self, pdf: canvas.Canvas):
        self.pdf = pdf

    def text(self, x: float, y: float, value: str, size: float = 10, bold: bool = False):
        self.pdf.setFillColor(colors.black)
        self.pdf.setFont(BOLD if bold else REGULAR, size)
        self.pdf.drawString(x * mm, PAGE_HEIGHT - y * mm, value)

    def box(self, x: float, y: float, width: float, height: float, fill=None, stroke=None):
        if fill is not None:
            self.pdf.setFillColor(fill)
        if stroke is not None:
            self.pdf.setStrokeColor(stroke)
        self.pdf.rect(
            x * mm,
            PAGE_HEIGHT - (y + height) * mm,
            width * mm,
            height * mm,
            stroke=1 if stroke is not None else 0,
            fill=1 if fill is not None else 0,
        )

    def new_page(self):
        self.pdf.showPage()


class ReportLabPdfService(PdfService):
    """
    ReportLab implementation of PdfService

    Reproduces a fixed A4 layout: issuer and client header, item table,
    dates and total, then the bank transfer box. Long tables continue on
    following pages with a repeated table header.
    """

    def __init__(self, address_line_chars: int = 45, description_max_chars: int = 42):
        self.address_line_chars = address_line_chars
        self.description_max_chars = description_max_chars

    def render_invoice(
        self,
        invoice: Invoice,
        client: Optional[Client],
        issuer: IssuerProfile,
    ) -> bytes:
        """
        Render an invoice as a PDF document

        Args:
            invoice: Invoice with its line items
            client: Billed client, None renders placeholder text
            issuer: Profile of the invoice owner

        Returns:
            PDF document as bytes
        """
        buffer = BytesIO()
        # invariant mode drops timestamps and random ids from the output
        pdf = canvas.Canvas(buffer, pagesize=A4, invariant=1)
        pdf.setTitle(f"Facture N°{invoice.invoice_number}")
        pdf.setAuthor(issuer.name or "")
        page = _Page(pdf)

        header_bottom = max(
            self._draw_issuer(page, issuer),
            self._draw_client(page, client),
        )

        title_y = max(TITLE_MIN_Y, header_bottom + 10)
        page.text(ISSUER_X, title_y, f"Facture N°{invoice.invoice_number}", size=18, bold=True)

        current_y = self._draw_items(page, invoice.line_items, title_y + 10)
        current_y = self._draw_summary(page, invoice, current_y)
        self._draw_payment(page, issuer, current_y)

        pdf.save()
        pdf_bytes = buffer.getvalue()
        buffer.close()

        return pdf_bytes

    def _wrap_address(self, address: str) -> List[str]:
        return wrap_text(address or "", self.address_line_chars)

    def _draw_issuer(self, page: _Page, issuer: IssuerProfile) -> float:
        page.text(ISSUER_X, HEADER_TOP, issuer.name or "", size=16, bold=True)
        page.text(ISSUER_X, HEADER_TOP + 10, issuer.email or "")

        y = ADDRESS_TOP
        for line in self._wrap_address(issuer.address):
            page.text(ISSUER_X, y, line)
            y += LINE_STEP

        siret_y = y + LINE_STEP
        page.text(ISSUER_X, siret_y, f"N° SIRET: {issuer.freelance_id or ''}")
        return siret_y

    def _draw_client(self, page: _Page, client: Optional[Client]) -> float:
        page.text(CLIENT_X, HEADER_TOP, "Facturer à:", size=12, bold=True)

        if client is None:
            name, address, legal_form = MISSING_CLIENT_NAME, MISSING_CLIENT_ADDRESS, None
        else:
            name, address, legal_form = client.name, client.address, client.legal_form

        page.text(CLIENT_X, HEADER_TOP + 10, name or MISSING_CLIENT_NAME, bold=True)

        y = ADDRESS_TOP
        for line in self._wrap_address(address):
            page.text(CLIENT_X, y, line)
            y += LINE_STEP

        if legal_form:
            y += LINE_STEP
            page.text(CLIENT_X, y, f"Forme juridique: {legal_form}")
            return y
        return y - LINE_STEP

    def _draw_table_header(self, page: _Page, y: float):
        page.box(TABLE_X, y, TABLE_WIDTH, ROW_HEIGHT, fill=HEADER_FILL)
        for x, label in zip(COLUMNS, COLUMN_LABELS):
            page.text(x + 2, y + TEXT_BASELINE, label, size=9, bold=True)
        page.box(TABLE_X, y, TABLE_WIDTH, ROW_HEIGHT, stroke=TABLE_BORDER)

    def _describe(self, item: LineItem) -> str:
        description = item.label
        if item.discount_text:
            description = f"{description} ({item.discount_text})"
        return truncate(description, self.description_max_chars)

    def _draw_items(self, page: _Page, items: List[LineItem], table_top: float) -> float:
        self._draw_table_header(page, table_top)
        current_y = table_top + ROW_HEIGHT

        for index, item in enumerate(items):
            if current_y + ROW_HEIGHT > BOTTOM_LIMIT:
                page.new_page()
                self._draw_table_header(page, CONTINUED_TABLE_TOP)
                current_y = CONTINUED_TABLE_TOP + ROW_HEIGHT

            if index % 2 == 1:
                page.box(TABLE_X, current_y, TABLE_WIDTH, ROW_HEIGHT, fill=ODD_ROW_FILL)

            if item.has_discount:
                discount = f"{format_number(item.discount_value)}{item.discount_unit.value}"
            else:
                discount = "-"

            cells = (
                self._describe(item),
                str(item.quantity),
                format_currency(item.unit_price),
                discount,
                format_currency(item.total),
            )
            for x, value in zip(COLUMNS, cells):
                page.text(x + 2, current_y + TEXT_BASELINE, value, size=9)

            page.box(TABLE_X, current_y, TABLE_WIDTH, ROW_HEIGHT, stroke=TABLE_BORDER)
            current_y += ROW_HEIGHT

        return current_y

    def _draw_summary(self, page: _Page, invoice: Invoice, current_y: float) -> float:
        """Dates, total box and VAT notice, all placed relative to the table end"""
        if current_y + SUMMARY_HEIGHT > BOTTOM_LIMIT:
            page.new_page()
            current_y = CONTINUED_TABLE_TOP

        page.text(ISSUER_X, current_y + 15, f"Date de facturation: {format_date(invoice.invoice_date)}", size=9)
        page.text(ISSUER_X, current_y + 20, f"Date de règlement: {format_date(invoice.due_date)}", size=9)
        page.text(ISSUER_X, current_y + 25, EARLY_PAYMENT_NOTICE, size=9)

        page.box(155, current_y + 11, 45, 9, stroke=colors.black)
        page.text(160, current_y + 17, f"Total HT: {format_currency(invoice.total_amount)}", size=12, bold=True)
        page.text(153, current_y + 23, VAT_NOTICE, size=8)

        return current_y

    def _payment_box_top(self, page: _Page, current_y: float) -> float:
        preferred = current_y + PAYMENT_BOX_OFFSET
        if preferred + PAYMENT_BLOCK_HEIGHT <= BOTTOM_LIMIT:
            return preferred

        anchored = BOTTOM_LIMIT - PAYMENT_BLOCK_HEIGHT
        if anchored < current_y + SUMMARY_HEIGHT:
            page.new_page()
        return anchored

    def _draw_payment(self, page: _Page, issuer: IssuerProfile, current_y: float):
        top = self._payment_box_top(page, current_y)

        page.box(ISSUER_X, top, PAYMENT_BOX_WIDTH, PAYMENT_BOX_HEIGHT, stroke=colors.black)
        page.text(22, top + 5, "Paiement par virement bancaire", bold=True)
        page.text(22, top + 10, f"IBAN: {issuer.iban or ''}")
        page.text(22, top + 15, f"BIC: {issuer.bic or ''}")
        page.text(22, top + 20, f"Banque: {issuer.bank or ''}")

        y = top + 30
        for line in wrap_text(LATE_PAYMENT_NOTICE, PENALTY_LINE_CHARS):
            page.text(ISSUER_X, y, line, size=8)
            y += 4
