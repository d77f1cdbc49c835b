import os
import re
import time

from django.conf import settings
from django.core.files.storage import default_storage

from apps.cores.constants import UPLOAD_PURPOSES

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def sanitize_filename(filename):
    """
    Keep only [A-Za-z0-9._-]; everything else becomes "_".
    """
    base = os.path.basename(filename or "") or "file"
    return _UNSAFE_CHARS.sub("_", base)


def store_upload(uploaded_file, purpose):
    """
    Write one uploaded file under MEDIA_ROOT/<purpose>/ and return its
    public path, e.g. "/uploads/donation-proofs/1718000000000_receipt.png".
    """
    if purpose not in UPLOAD_PURPOSES:
        raise ValueError(f"Unknown upload purpose: {purpose}")

    filename = f"{int(time.time() * 1000)}_{sanitize_filename(uploaded_file.name)}"
    saved_name = default_storage.save(f"{purpose}/{filename}", uploaded_file)
    return f"{settings.MEDIA_URL}{saved_name}"


def store_uploads(files, purpose):
    return [store_upload(f, purpose) for f in files]


def uploaded_files(request, field):
    """All files posted under `field` in a multipart request."""
    return request.FILES.getlist(field) if request.FILES else []
