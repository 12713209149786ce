"""
PDF Splitter Service.

Server side of the PDF splitter tool. Uploaded PDFs and the PDFs built from
a selection of their pages live in a temporary directory of the storage disk
until they are saved to a client, downloaded or discarded. Stale temporary
files are removed whenever a new PDF is uploaded.

All methods are blocking and meant to run in a worker thread.
"""

import uuid
from typing import BinaryIO, List, Tuple

import fitz

from docvault.core.logging_config import get_logger
from docvault.core.storage import LocalStorage, UnsafePathError

logger = get_logger(__name__)


class PdfSplitterError(Exception):
    """Base error of the PDF splitter."""


class InvalidPdfError(PdfSplitterError):
    """The uploaded file cannot be read as a PDF."""


class PageOutOfRangeError(PdfSplitterError):
    """A requested page does not exist in the source PDF."""


class TempFileNotFoundError(PdfSplitterError):
    """The temporary path is unknown or outside the splitter directory."""


def count_pages(path) -> int:
    """Number of pages of a PDF file, raising ``InvalidPdfError`` if it is unreadable."""
    try:
        with fitz.open(str(path)) as document:
            if not document.is_pdf or document.page_count < 1:
                raise InvalidPdfError("The file is not a PDF with pages.")
            return document.page_count
    except (RuntimeError, ValueError) as e:
        raise InvalidPdfError(str(e)) from e


def extract_pages(source, destination, pages: List[int]) -> int:
    """
    Write the 1-based ``pages`` of ``source`` to a new PDF at ``destination``, in order.

    Returns:
        Number of pages written
    """
    with fitz.open(str(source)) as original:
        invalid = [page for page in pages if page < 1 or page > original.page_count]
        if invalid:
            raise PageOutOfRangeError(
                f"Pages out of range (1-{original.page_count}): {', '.join(str(page) for page in invalid)}"
            )
        with fitz.open() as result:
            for page in pages:
                result.insert_pdf(original, from_page=page - 1, to_page=page - 1)
            result.save(str(destination))
            return result.page_count


class PdfSplitter:
    """Manage the temporary files of the splitter tool on a storage disk."""

    def __init__(self, storage: LocalStorage, temp_dir: str, ttl_minutes: int):
        self.storage = storage
        self.temp_dir = temp_dir.strip("/")
        self.ttl_seconds = ttl_minutes * 60

    @property
    def temp_root(self):
        return self.storage.path(self.temp_dir)

    def resolve(self, temp_path: str):
        """Absolute path of an existing temporary file, given its storage-relative path."""
        try:
            path = self.storage.path(temp_path)
        except UnsafePathError as e:
            raise TempFileNotFoundError(str(e)) from e
        if self.temp_root not in path.parents:
            raise TempFileNotFoundError(f"Not a splitter temporary file: {temp_path}")
        if not path.is_file():
            raise TempFileNotFoundError(f"Temporary file not found: {temp_path}")
        return path

    def cleanup_stale(self) -> int:
        return self.storage.delete_older_than(self.temp_dir, self.ttl_seconds)

    def store_upload(self, stream: BinaryIO) -> Tuple[str, int]:
        """
        Keep an uploaded PDF in the temp directory.

        Returns:
            ``(temp_path, page_count)``
        """
        self.cleanup_stale()
        temp_path = self.storage.put_stream(f"{self.temp_dir}/{uuid.uuid4().hex}.pdf", stream)
        try:
            page_count = count_pages(self.storage.path(temp_path))
        except InvalidPdfError:
            self.storage.delete(temp_path)
            raise
        logger.info(f"Stored splitter upload {temp_path} ({page_count} pages)")
        return temp_path, page_count

    def split(self, temp_path: str, pages: List[int]) -> Tuple[str, int]:
        """
        Build a PDF from the given pages of an uploaded PDF.

        Returns:
            ``(split_path, page_count)``
        """
        source = self.resolve(temp_path)
        split_path = f"{self.temp_dir}/{uuid.uuid4().hex}_split.pdf"
        destination = self.storage.path(split_path)
        destination.parent.mkdir(parents=True, exist_ok=True)
        page_count = extract_pages(source, destination, pages)
        logger.info(f"Split {temp_path} into {split_path} with pages {pages}")
        return split_path, page_count

    def discard(self, temp_path: str) -> bool:
        """Delete a temporary file; unknown paths are ignored."""
        try:
            path = self.resolve(temp_path)
        except TempFileNotFoundError:
            return False
        path.unlink()
        logger.debug(f"Discarded splitter file {temp_path}")
        return True
