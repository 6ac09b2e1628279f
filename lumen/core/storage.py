"""
Storage Utility
===============

Image upload for admin records: local static folder or inline data URI.
"""

import base64
import os
import uuid

from flask import current_app
from werkzeug.utils import secure_filename

from .config import get_config_value

ALLOWED_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp'}

CONTENT_TYPES = {
    'jpg': 'image/jpeg', 'jpeg': 'image/jpeg',
    'png': 'image/png', 'gif': 'image/gif', 'webp': 'image/webp',
}


def file_extension(filename):
    filename = secure_filename(filename or '')
    return filename.rsplit('.', 1)[1].lower() if '.' in filename else ''


def allowed_file(filename):
    return file_extension(filename) in ALLOWED_EXTENSIONS


def upload_file(file_bytes, filename, subfolder):
    """Store an uploaded image.

    Args:
        file_bytes: Raw bytes of the file.
        filename: Original filename, used for the extension only.
        subfolder: Subfolder name (e.g. "blog", "coaches", "products").

    Returns:
        A "/static/uploads/<subfolder>/<uuid>.<ext>" URL, or a data URI
        when UPLOAD_MODE is "data-uri".
    """
    ext = file_extension(filename)
    if get_config_value('UPLOAD_MODE', 'local') == 'data-uri':
        return as_data_uri(file_bytes, ext)
    return _save_locally(file_bytes, f"{uuid.uuid4().hex}.{ext}", subfolder)


def as_data_uri(file_bytes, ext):
    content_type = CONTENT_TYPES.get(ext, 'application/octet-stream')
    encoded = base64.b64encode(file_bytes).decode('ascii')
    return f"data:{content_type};base64,{encoded}"


def _save_locally(file_bytes, filename, subfolder):
    """Save to the app's static folder"""
    upload_root = get_config_value('UPLOAD_FOLDER', 'uploads')
    subfolder = secure_filename(subfolder) or 'misc'
    upload_dir = os.path.join(current_app.static_folder, upload_root, subfolder)
    os.makedirs(upload_dir, exist_ok=True)
    with open(os.path.join(upload_dir, filename), 'wb') as f:
        f.write(file_bytes)
    return f"{current_app.static_url_path}/{upload_root}/{subfolder}/{filename}"
