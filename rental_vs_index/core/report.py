from __future__ import annotations

import io
import logging

from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer

from .model import SimulationParams, SimulationResult
from .solver import analyze_break_even
from .utils import dollar, percent

logger = logging.getLogger(__name__)


def build_pdf(params: SimulationParams, result: SimulationResult) -> bytes:
    """Render a one-page summary of a simulation run."""
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4)
    styles = getSampleStyleSheet()
    s = result.summary
    analysis = analyze_break_even(params)

    story = [
        Paragraph("Rental Property vs. S&P 500", styles["Title"]),
        Spacer(1, 12),
        Paragraph("Assumptions", styles["Heading2"]),
        Paragraph(f"Purchase price: {dollar(params.purchase_price)}", styles["Normal"]),
        Paragraph(f"Down payment: {percent(params.down_payment_percent)}", styles["Normal"]),
        Paragraph(
            f"Mortgage: {percent(params.mortgage_rate, 2)} over {int(params.amortization_years)} years "
            f"(payment {dollar(analysis.breakdown.mortgage_payment)}/month)",
            styles["Normal"],
        ),
        Paragraph(f"Monthly rent: {dollar(params.monthly_rent)}", styles["Normal"]),
        Paragraph(f"S&P 500 return: {percent(params.index_return)}", styles["Normal"]),
        Spacer(1, 12),
        Paragraph("Results", styles["Heading2"]),
        Paragraph(f"Real estate net worth: {dollar(s.total_re_net_worth)}", styles["Normal"]),
        Paragraph(f"S&P 500 net worth: {dollar(s.total_index_net_worth)}", styles["Normal"]),
        Paragraph(f"Initial cash invested: {dollar(s.initial_investment)}", styles["Normal"]),
        Paragraph(f"Total cash out of pocket: {dollar(s.total_out_of_pocket)}", styles["Normal"]),
        Paragraph(f"ROI (real estate): {percent(s.re_roi)}", styles["Normal"]),
        Paragraph(f"ROI (S&P 500): {percent(s.index_roi)}", styles["Normal"]),
        Spacer(1, 12),
        Paragraph("Year-one break-even", styles["Heading2"]),
        Paragraph(f"Monthly cash flow: {dollar(analysis.breakdown.cash_flow)}", styles["Normal"]),
        Paragraph(
            "Break-even rent: "
            + (dollar(analysis.rent.value) if analysis.rent.solvable else "not solvable"),
            styles["Normal"],
        ),
        Paragraph(
            "Break-even down payment: "
            + (percent(analysis.down_payment_percent.value) if analysis.down_payment_percent.solvable else "not solvable"),
            styles["Normal"],
        ),
    ]
    doc.build(story)
    logger.debug("Built PDF report (%d bytes)", buffer.tell())
    return buffer.getvalue()
