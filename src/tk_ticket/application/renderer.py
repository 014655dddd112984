"""TicketRenderer: one printable, scannable ticket per purchased seat.

Layout (A4 portrait, offsets in mm from the top edge):
  header   title 20, date/time 30, location 37, reference 45, purchaser 52,
           separator 57 (first page only)
  tickets  first block at 67, each block 45 high; once the running offset
           passes 250 the next block starts a new page at 20
  footer   terms at 280 and 285 on every page

Output is byte-for-byte reproducible for the same order: reportlab runs in
invariant mode and the QR encoder is a pure function of the ticket ID.
"""

import io
import logging
from dataclasses import dataclass, field

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen.canvas import Canvas

from config.settings import settings
from src.tk_common.errors import TicketRenderError
from src.tk_common.money import money_display
from src.tk_order.domain.models import Order
from src.tk_ticket.domain.models import RenderedTicket, build_rendered_tickets
from src.tk_ticket.domain.qr import QrEncoderProtocol
from src.tk_ticket.infrastructure.qr_encoder import QrCodeEncoder

logger = logging.getLogger("tk.ticket")

PAGE_WIDTH, PAGE_HEIGHT = A4

FIRST_TICKET_OFFSET = 67
CONTINUATION_OFFSET = 20
TICKET_BLOCK_HEIGHT = 45
USABLE_HEIGHT = 250

_SEPARATOR_GREY = (200 / 255, 200 / 255, 200 / 255)
_FOOTER_LINES = (
    (280, "This ticket is valid only for the specified event and is non-transferable."),
    (285, "Please present this ticket (printed or digital) at the event entrance."),
)


@dataclass(frozen=True)
class TicketPlacement:
    ticket: RenderedTicket
    page: int
    offset_mm: int


@dataclass
class TicketDocument:
    filename: str
    content: bytes
    tickets: list[RenderedTicket]
    pages: list[list[str]]
    missing_codes: list[str] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def media_type(self) -> str:
        return "application/pdf"


def _y(offset_mm: float) -> float:
    """Top-based millimetre offset -> reportlab bottom-based points."""
    return PAGE_HEIGHT - offset_mm * mm


def layout_tickets(tickets: list[RenderedTicket]) -> list[TicketPlacement]:
    placements: list[TicketPlacement] = []
    page, offset = 0, FIRST_TICKET_OFFSET
    for ticket in tickets:
        placements.append(TicketPlacement(ticket=ticket, page=page, offset_mm=offset))
        offset += TICKET_BLOCK_HEIGHT
        if offset > USABLE_HEIGHT:
            page, offset = page + 1, CONTINUATION_OFFSET
    return placements


class TicketRenderer:
    def __init__(
        self,
        encoder: QrEncoderProtocol | None = None,
        currency_symbol: str | None = None,
    ) -> None:
        self._encoder: QrEncoderProtocol = encoder or QrCodeEncoder()
        self._symbol = currency_symbol or settings.CURRENCY_SYMBOL

    def render(self, order: Order) -> TicketDocument:
        tickets = build_rendered_tickets(order)
        if not tickets:
            raise TicketRenderError(order.reference, "order has no tickets")

        placements = layout_tickets(tickets)
        buffer = io.BytesIO()
        canvas = Canvas(buffer, pagesize=A4, invariant=1)
        canvas.setTitle(f"Tickets {order.reference}")
        canvas.setAuthor(order.event.organizer or settings.APP_NAME)

        self._draw_header(canvas, order)
        pages: list[list[str]] = [[]]
        missing: list[str] = []
        for placement in placements:
            if placement.page != len(pages) - 1:
                self._draw_footer(canvas)
                canvas.showPage()
                pages.append([])
            image = self._encode(order.reference, placement.ticket)
            if image is None:
                missing.append(placement.ticket.ticket_id)
            self._draw_ticket(canvas, placement, image)
            pages[-1].append(placement.ticket.ticket_id)
        self._draw_footer(canvas)
        canvas.save()

        if len(missing) == len(tickets):
            raise TicketRenderError(order.reference, "no ticket codes could be generated")
        return TicketDocument(
            filename=f"tickets-{order.reference}.pdf",
            content=buffer.getvalue(),
            tickets=tickets,
            pages=pages,
            missing_codes=missing,
        )

    def _encode(self, reference: str, ticket: RenderedTicket) -> ImageReader | None:
        try:
            return ImageReader(io.BytesIO(self._encoder.encode(ticket.qr_payload)))
        except Exception as exc:  # noqa: BLE001
            logger.warning("QR generation failed ref=%s ticket=%s: %s", reference, ticket.ticket_id, exc)
            return None

    def _draw_header(self, canvas: Canvas, order: Order) -> None:
        event = order.event
        centre = 105 * mm
        date = event.date.strftime("%d %B %Y") if event.date else "Date TBD"

        canvas.setFont("Helvetica-Bold", 20)
        canvas.drawCentredString(centre, _y(20), event.title)
        canvas.setFont("Helvetica", 12)
        canvas.drawCentredString(centre, _y(30), f"Date: {date} • Time: {event.time or 'Time TBD'}")
        canvas.drawCentredString(centre, _y(37), f"Location: {event.location}")
        canvas.setFont("Helvetica", 10)
        canvas.drawCentredString(centre, _y(45), f"Order Reference: {order.reference}")
        canvas.setFont("Helvetica", 11)
        canvas.drawCentredString(centre, _y(52), f"Purchased by: {order.billing.name}")

        canvas.setStrokeColorRGB(*_SEPARATOR_GREY)
        canvas.line(20 * mm, _y(57), 190 * mm, _y(57))

    def _draw_ticket(
        self, canvas: Canvas, placement: TicketPlacement, image: ImageReader | None
    ) -> None:
        ticket, y = placement.ticket, placement.offset_mm

        canvas.setFillColorRGB(0, 0, 0)
        canvas.setFont("Helvetica-Bold", 16)
        canvas.drawString(20 * mm, _y(y), ticket.tier_name)

        canvas.setFont("Helvetica", 12)
        canvas.drawString(20 * mm, _y(y + 7), f"Price: {money_display(ticket.unit_price, self._symbol)}")
        canvas.setFont("Helvetica", 10)
        canvas.drawString(20 * mm, _y(y + 14), f"Ticket ID: {ticket.ticket_id}")
        canvas.drawString(20 * mm, _y(y + 21), f"Seat {ticket.seat_index}")

        if image is not None:
            canvas.drawImage(image, 140 * mm, _y(y + 30), width=40 * mm, height=40 * mm)
        else:
            canvas.setFont("Helvetica-Oblique", 9)
            canvas.setFillColorRGB(0.5, 0.5, 0.5)
            canvas.drawCentredString(160 * mm, _y(y + 10), "QR code unavailable")
            canvas.setFillColorRGB(0, 0, 0)

        canvas.setStrokeColorRGB(*_SEPARATOR_GREY)
        canvas.line(20 * mm, _y(y + 35), 190 * mm, _y(y + 35))

    def _draw_footer(self, canvas: Canvas) -> None:
        canvas.setFillColorRGB(0, 0, 0)
        canvas.setFont("Helvetica", 8)
        for offset, line in _FOOTER_LINES:
            canvas.drawCentredString(105 * mm, _y(offset), line)
