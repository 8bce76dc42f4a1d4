from .triage_pdf_builder import TriagePDFBuilder

__all__ = ['TriagePDFBuilder']
