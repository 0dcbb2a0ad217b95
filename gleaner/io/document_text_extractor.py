"""Document page-text extraction.

Responsibilities:
- Extract ordered per-page plain text from text-based PDF and plain-text inputs.
- Report corrupt, encrypted or unsupported inputs before segmentation runs.
"""

from __future__ import annotations

import re
import subprocess
from pathlib import Path

from ..models.datatypes import PageText

_PLAIN_TEXT_SUFFIXES = frozenset({".txt", ".text", ".md"})


class DocumentExtractionError(RuntimeError):
    """Raised when text extraction from a document cannot be completed."""


class DocumentTextExtractor:
    """Extract page texts using `pdftotext`, falling back to `pypdf`."""

    def extract_pages(self, path: Path) -> list[PageText]:
        """Extract ordered page texts from a PDF or plain-text file."""

        if not path.exists():
            raise DocumentExtractionError(f"Input document not found: {path}")

        suffix = path.suffix.lower()
        if suffix in _PLAIN_TEXT_SUFFIXES:
            return [PageText(page_number=1, text=path.read_text(encoding="utf-8"))]
        if suffix != ".pdf":
            raise DocumentExtractionError(
                f"Unsupported document type `{suffix or '(none)'}` for {path}."
            )

        try:
            page_count = self._page_count(path)
        except DocumentExtractionError as exc:
            if not self._is_missing_binary_error(exc):
                raise
            return self._extract_pages_with_pypdf(path)

        pages: list[PageText] = []
        for page in range(1, page_count + 1):
            try:
                page_text = self._run_pdftotext(path, first_page=page, last_page=page)
            except DocumentExtractionError as exc:
                if not self._is_missing_binary_error(exc):
                    raise
                return self._extract_pages_with_pypdf(path)
            pages.append(PageText(page_number=page, text=page_text.replace("\f", "\n").strip()))
        return pages

    def _run_pdftotext(self, pdf_path: Path, first_page: int, last_page: int) -> str:
        command = [
            "pdftotext",
            "-layout",
            "-enc",
            "UTF-8",
            "-f",
            str(first_page),
            "-l",
            str(last_page),
            str(pdf_path),
            "-",
        ]
        try:
            result = subprocess.run(
                command,
                check=False,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError as exc:
            raise DocumentExtractionError(
                "The `pdftotext` command is required but was not found."
            ) from exc

        if result.returncode != 0:
            details = result.stderr.strip() or "unknown error"
            raise DocumentExtractionError(f"pdftotext failed for {pdf_path}: {details}")

        return result.stdout

    def _page_count(self, pdf_path: Path) -> int:
        try:
            result = subprocess.run(
                ["pdfinfo", str(pdf_path)],
                check=False,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError as exc:
            raise DocumentExtractionError(
                "The `pdfinfo` command is required but was not found."
            ) from exc

        if result.returncode != 0:
            details = result.stderr.strip() or "unknown error"
            raise DocumentExtractionError(f"pdfinfo failed for {pdf_path}: {details}")

        match = re.search(r"(?m)^Pages:\s+(\d+)\s*$", result.stdout)
        if not match:
            raise DocumentExtractionError(
                f"Could not determine page count for PDF: {pdf_path}"
            )
        return int(match.group(1))

    def _extract_pages_with_pypdf(self, pdf_path: Path) -> list[PageText]:
        """Extract per-page text with `pypdf` when system PDF tools are unavailable."""

        from pypdf import PdfReader
        from pypdf.errors import PdfReadError

        try:
            reader = PdfReader(str(pdf_path))
            if reader.is_encrypted:
                raise DocumentExtractionError(
                    f"PDF is password-protected and cannot be read: {pdf_path}"
                )
            pages: list[PageText] = []
            for number, page in enumerate(reader.pages, start=1):
                extracted_text = page.extract_text()
                pages.append(
                    PageText(
                        page_number=number,
                        text=(extracted_text or "").replace("\f", "\n").strip(),
                    )
                )
        except PdfReadError as exc:
            raise DocumentExtractionError(f"Failed to parse PDF {pdf_path}: {exc}") from exc
        return pages

    def _is_missing_binary_error(self, error: DocumentExtractionError) -> bool:
        """Return whether extraction failed due to unavailable external PDF binaries."""

        detail = str(error)
        return detail.endswith("command is required but was not found.")
