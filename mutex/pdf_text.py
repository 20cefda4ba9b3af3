"""
PyMuPDF front end: opens (possibly encrypted) PDFs and turns each page into
positioned text fragments for the layout reconstructor.
"""

import logging
from typing import List, Optional

import fitz  # PyMuPDF

from mutex.layout import PositionedFragment, assemble_document, reconstruct_page_lines

logger = logging.getLogger(__name__)


class PdfTextError(Exception):
    # True when asking the user for a password could fix the problem
    needs_password = False


class PasswordRequiredError(PdfTextError):
    needs_password = True


class IncorrectPasswordError(PdfTextError):
    needs_password = True


class PdfDecodeError(PdfTextError):
    pass


def open_document(data: bytes, password: Optional[str] = None) -> fitz.Document:
    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except Exception as e:
        raise PdfDecodeError(f"Could not open PDF: {e}") from e

    if doc.needs_pass:
        if not password:
            doc.close()
            raise PasswordRequiredError("This PDF is password protected. Please provide a password.")
        # authenticate returns 0 when the password is wrong
        if not doc.authenticate(password):
            doc.close()
            raise IncorrectPasswordError("Incorrect password provided.")

    return doc


def page_fragments(page: fitz.Page) -> List[PositionedFragment]:
    # PyMuPDF measures y from the top; flip it so larger y is higher on the page
    height = page.rect.height
    fragments = []
    for block in page.get_text("dict")["blocks"]:
        if block.get("type") != 0:  # images
            continue
        for line in block["lines"]:
            for span in line["spans"]:
                x, y = span["origin"]
                fragments.append(PositionedFragment(
                    text=span["text"],
                    x=round(x),
                    y=round(height - y),
                ))
    return fragments


def extract_document_text(doc: fitz.Document) -> str:
    text_output = assemble_document(
        reconstruct_page_lines(page_fragments(page)) for page in doc
    )
    logger.debug("Extracted %d characters from %d pages", len(text_output), doc.page_count)
    return text_output
