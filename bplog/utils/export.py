"""
Export utilities for CSV and PDF generation.
"""
import io
import logging
from datetime import date, datetime
from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import inch
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle

from bplog.utils.classifier import classify
from bplog.utils.store import serialize

logger = logging.getLogger(__name__)

RECENT_ROWS = 20


def export_filename(today: date, extension='csv') -> str:
    return f'bp-data-{today.isoformat()}.{extension}'


def generate_readings_csv(readings):
    """Generate CSV export of readings in the persisted format.

    Returns:
        StringIO object containing CSV data
    """
    output = io.StringIO(serialize(readings))
    output.seek(0)
    return output


def _bp(averages):
    if averages.systolic is None:
        return 'Insufficient data'
    return f"{averages.systolic}/{averages.diastolic} mmHg"


def generate_readings_pdf(readings, stats):
    """Generate a PDF report of the reading log.

    Args:
        readings: List of Reading objects, most recent first
        stats: Stats summary for the same collection

    Returns:
        BytesIO object containing PDF data
    """
    output = io.BytesIO()
    doc = SimpleDocTemplate(output, pagesize=letter, topMargin=0.5*inch, bottomMargin=0.5*inch)

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        'CustomTitle',
        parent=styles['Heading1'],
        fontSize=18,
        spaceAfter=20,
    )
    heading_style = ParagraphStyle(
        'CustomHeading',
        parent=styles['Heading2'],
        fontSize=14,
        spaceBefore=15,
        spaceAfter=10,
    )
    normal_style = styles['Normal']

    elements = []

    elements.append(Paragraph("Blood Pressure Report", title_style))
    elements.append(Paragraph(f"Generated: {datetime.now().strftime('%B %d, %Y at %H:%M')}", normal_style))
    elements.append(Spacer(1, 20))

    # Summary
    elements.append(Paragraph("Summary", heading_style))

    summary = []
    summary.append(['Total Readings:', str(stats.total)])
    summary.append(['Last 7 Days:', f"{stats.last_7_count} reading(s) on {stats.last_7_days} day(s)"])
    summary.append(['7-Day Average:', _bp(stats.last_7_average)])

    overall = _bp(stats.average)
    if stats.category:
        overall = f"{overall} ({stats.category.label})"
    summary.append(['Overall Average:', overall])

    heart_rate = stats.average.heart_rate
    summary.append(['Average Heart Rate:', f"{heart_rate} bpm" if heart_rate is not None else 'N/A'])

    if stats.range.systolic_max is not None:
        summary.append(['Highest:', f"{stats.range.systolic_max}/{stats.range.diastolic_max}"])
        summary.append(['Lowest:', f"{stats.range.systolic_min}/{stats.range.diastolic_min}"])

    if stats.trend is not None:
        summary.append(['7-Day Trend:', f"{stats.trend:+d} mmHg ({stats.trend_direction.value})"])
    else:
        summary.append(['7-Day Trend:', 'Insufficient data'])

    summary_table = Table(summary, colWidths=[2*inch, 4*inch])
    summary_table.setStyle(TableStyle([
        ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
        ('ALIGN', (0, 0), (0, -1), 'RIGHT'),
        ('ALIGN', (1, 0), (1, -1), 'LEFT'),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 5),
    ]))
    elements.append(summary_table)
    elements.append(Spacer(1, 15))

    # Recent Readings Table
    if readings:
        elements.append(Paragraph(f"Recent Readings (Last {RECENT_ROWS})", heading_style))

        reading_data = [['Date', 'Time', 'Systolic', 'Diastolic', 'Heart Rate', 'Category']]
        for r in readings[:RECENT_ROWS]:
            reading_data.append([
                r.date.strftime('%m/%d/%Y'),
                r.time.value,
                str(r.systolic),
                str(r.diastolic),
                str(r.heart_rate) if r.heart_rate else 'N/A',
                classify(r.systolic, r.diastolic).label,
            ])

        reading_table = Table(reading_data, colWidths=[1.2*inch, 0.7*inch, 1*inch, 1*inch, 1*inch, 1*inch])
        reading_table.setStyle(TableStyle([
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('BACKGROUND', (0, 0), (-1, 0), colors.grey),
            ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
            ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
            ('GRID', (0, 0), (-1, -1), 0.5, colors.black),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 5),
            ('TOPPADDING', (0, 0), (-1, -1), 5),
        ]))
        elements.append(reading_table)
    else:
        elements.append(Paragraph("No readings yet.", normal_style))

    doc.build(elements)
    output.seek(0)
    logger.info(f"Generated PDF report for {len(readings)} reading(s)")
    return output
