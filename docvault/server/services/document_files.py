"""
Document File Service.

Validation of uploaded PDFs and the layout of document files on the storage
disk: ``documents/{client_code}/{YYYY}/{MM}/{file}.pdf``.
"""

import os
import re
import time
import uuid
from datetime import datetime
from pathlib import PurePosixPath
from typing import Optional

from fastapi import UploadFile

from docvault.core.database.entities.legacy import LegacyClient
from docvault.core.logging_config import get_logger
from docvault.core.models.io import ClientSummary
from docvault.core.storage import LocalStorage
from docvault.server.exception_handlers import FormValidationError

logger = get_logger(__name__)

PDF_SIGNATURE = b"%PDF"
UNKNOWN_CLIENT_NAME = "Unknown"
# Size of the title and filename columns
MAX_NAME_LENGTH = 255
# Leaves room for a "-N" suffix and the extension
_MAX_STEM_LENGTH = MAX_NAME_LENGTH - 16

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9_\-\.]")


def upload_size(upload: UploadFile) -> int:
    if upload.size is not None:
        return upload.size
    position = upload.file.tell()
    upload.file.seek(0, os.SEEK_END)
    size = upload.file.tell()
    upload.file.seek(position)
    return size


async def validate_pdf_upload(upload: Optional[UploadFile], max_kb: int, field: str = "file") -> int:
    """
    Check that ``upload`` is a PDF within the size limit.

    Returns:
        The upload size in bytes

    Raises:
        FormValidationError: Keyed on ``field``
    """
    if upload is None or not upload.filename:
        raise FormValidationError.single(field, f"The {field} field is required.")
    if len(upload.filename) > MAX_NAME_LENGTH:
        raise FormValidationError.single(
            field, f"The {field} name must not be greater than {MAX_NAME_LENGTH} characters."
        )

    header = await upload.read(len(PDF_SIGNATURE))
    await upload.seek(0)
    if not upload.filename.lower().endswith(".pdf") or header != PDF_SIGNATURE:
        raise FormValidationError.single(field, f"The {field} field must be a file of type: pdf.")

    size = upload_size(upload)
    if size > max_kb * 1024:
        raise FormValidationError.single(field, f"The {field} field must not be greater than {max_kb} kilobytes.")
    return size


def default_title(filename: str) -> str:
    """Title used when none is given: the original file name without extension."""
    return PurePosixPath(filename.replace("\\", "/")).stem or filename


def client_folder(client_code: str, moment: Optional[datetime] = None) -> str:
    moment = moment or datetime.now()
    return f"documents/{client_code}/{moment:%Y}/{moment:%m}"


def generated_document_path(client_code: str, moment: Optional[datetime] = None) -> str:
    """Unique storage path for an uploaded document: ``{unix_ts}_{uuid}.pdf``."""
    return f"{client_folder(client_code, moment)}/{int(time.time())}_{uuid.uuid4()}.pdf"


def sanitize_filename(title: str) -> str:
    """Turn a title into a file name, replacing characters outside ``[A-Za-z0-9_.-]``."""
    return _UNSAFE_FILENAME_CHARS.sub("_", title)[:_MAX_STEM_LENGTH] + ".pdf"


def available_path(storage: LocalStorage, relative: str) -> str:
    """``relative`` or, when taken, the first free ``name-N.pdf`` variant."""
    if not storage.exists(relative):
        return relative
    path = PurePosixPath(relative)
    counter = 1
    while True:
        candidate = str(path.with_name(f"{path.stem}-{counter}{path.suffix}"))
        if not storage.exists(candidate):
            return candidate
        counter += 1


def client_summary(client_code: str, client: Optional[LegacyClient]) -> ClientSummary:
    """Client reference for document payloads, tolerant of clients missing from the ERP."""
    name = client.cli_des if client is not None and client.cli_des else UNKNOWN_CLIENT_NAME
    return ClientSummary(id=client_code, code=client_code, name=name)
