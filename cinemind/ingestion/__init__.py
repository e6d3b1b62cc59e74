"""
Ingestion Module

Turns uploaded script files into raw text for a production run.
"""

from cinemind.ingestion.extractor import ExtractionError, extract_text

__all__ = ['ExtractionError', 'extract_text']
