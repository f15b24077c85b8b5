"""
PDF Generator Service - render a sustainability report as PDF.

Uses WeasyPrint to convert the HTML report template into PDF.
"""

from wsg_check.logger import logger
from wsg_check.schemas.report import SustainabilityReport
from wsg_check.services.formatters import TEMPLATE_DIR, format_html


class PdfGenerator:
    """Generate PDF reports from sustainability reports."""

    def __init__(self):
        self.template_dir = TEMPLATE_DIR

    def generate(self, report: SustainabilityReport) -> bytes:
        """Generate PDF bytes for a report.

        Args:
            report: The report to render

        Returns:
            bytes: PDF file content
        """
        # WeasyPrint pulls in native libraries; import only when a PDF is requested
        from weasyprint import HTML

        try:
            html_string = format_html(report)
            pdf_bytes = HTML(string=html_string, base_url=self.template_dir).write_pdf()
        except Exception as e:
            logger.error(f"Failed to generate PDF for {report.url}: {e}")
            raise

        logger.info(f"Generated PDF report for {report.url} ({len(pdf_bytes)} bytes)")
        return pdf_bytes
