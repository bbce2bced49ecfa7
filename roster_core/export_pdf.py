# roster_core/export_pdf.py
from __future__ import annotations
from typing import List, Optional
import io
from reportlab.graphics import renderPDF
from reportlab.graphics.barcode.qr import QrCodeWidget
from reportlab.graphics.shapes import Drawing
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.cidfonts import UnicodeCIDFont
from reportlab.pdfgen import canvas

from .badges import BadgeOptions, BadgePreset, grid_positions, qr_payload, with_ids
from .models import Participant

# CID font with Hangul glyphs, built into reportlab
FONT = "HYSMyeongJo-Medium"
_registered = False


def _ensure_font():
    global _registered
    if not _registered:
        pdfmetrics.registerFont(UnicodeCIDFont(FONT))
        _registered = True


def _fit(text: str, size: float, max_w: float) -> float:
    while size > 5 and pdfmetrics.stringWidth(text, FONT, size) > max_w:
        size -= 0.5
    return size


def _draw_qr(c: canvas.Canvas, payload: str, x: float, y: float, side: float):
    widget = QrCodeWidget(payload, barLevel="M")
    x0, y0, x1, y1 = widget.getBounds()
    w, h = x1 - x0, y1 - y0
    d = Drawing(side, side, transform=[side / w, 0, 0, side / h, 0, 0])
    d.add(widget)
    renderPDF.draw(d, c, x, y)


def _draw_badge(
    c: canvas.Canvas,
    p: Participant,
    event_name: str,
    event_id: str,
    preset: BadgePreset,
    options: BadgeOptions,
    left: float,
    top: float,
):
    w, h = preset.width_mm * mm, preset.height_mm * mm
    bottom = top - h
    pad = 5 * mm
    inner_w = w - 2 * pad
    cx = left + w / 2
    scale = options.font_scale

    if options.cut_line:
        c.setDash(2, 2)
        c.setStrokeColor(colors.HexColor("#999999"))
        c.roundRect(left, bottom, w, h, preset.radius_mm * mm, stroke=1, fill=0)
        c.setDash()

    y = top - pad - 10 * scale
    c.setFillColor(colors.HexColor("#666666"))
    c.setFont(FONT, _fit(event_name, 8 * scale, inner_w))
    c.drawCentredString(cx, y, event_name)

    c.setFillColor(colors.HexColor("#111111"))
    y -= 22 * scale
    c.setFont(FONT, _fit(p.name, 18 * scale, inner_w))
    c.drawCentredString(cx, y, p.name)

    c.setFillColor(colors.HexColor("#333333"))
    if options.show_company and p.company:
        y -= 14 * scale
        c.setFont(FONT, _fit(p.company, 10 * scale, inner_w))
        c.drawCentredString(cx, y, p.company)
    if options.show_title and p.role:
        y -= 12 * scale
        c.setFont(FONT, _fit(p.role, 9 * scale, inner_w))
        c.drawCentredString(cx, y, p.role)

    if options.show_qr:
        payload = qr_payload(event_id, p.id)
        side = preset.qr_mm * mm
        label_h = 3 * mm if options.qr_label else 0
        _draw_qr(c, payload, cx - side / 2, bottom + pad / 2 + label_h, side)
        if options.qr_label:
            c.setFillColor(colors.HexColor("#666666"))
            c.setFont(FONT, _fit(payload, 5, inner_w))
            c.drawCentredString(cx, bottom + pad / 2, payload)


def render_badges_pdf(
    event_name: str,
    event_id: str,
    participants: List[Participant],
    preset: BadgePreset,
    options: Optional[BadgeOptions] = None,
) -> bytes:
    _ensure_font()
    options = options or BadgeOptions()
    people = with_ids(participants)

    buf = io.BytesIO()
    _, page_h = A4
    c = canvas.Canvas(buf, pagesize=A4)
    c.setTitle(f"명찰 출력 - {event_name}")

    current_page = 0
    for p, (page, x_mm, y_mm) in zip(people, grid_positions(preset, len(people))):
        if page != current_page:
            c.showPage()
            current_page = page
        _draw_badge(c, p, event_name, event_id, preset, options, x_mm * mm, page_h - y_mm * mm)

    c.showPage()
    c.save()
    return buf.getvalue()
