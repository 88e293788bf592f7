import os
import uuid
from werkzeug.utils import secure_filename
from werkzeug.exceptions import BadRequest, RequestEntityTooLarge
from flask import current_app

MEDIA_MIME_TYPES = {
    "image/jpeg": "image",
    "image/png": "image",
    "image/webp": "image",
    "image/gif": "image",
    "video/mp4": "video",
    "video/webm": "video",
    "application/pdf": "file",
}

ATTACHMENT_MIME_TYPES = {
    "image/jpeg",
    "image/png",
    "image/gif",
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


def file_size(file):
    stream = file.stream
    position = stream.tell()
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(position)
    return size


def check_upload(file, allowed_types):
    """
    Validates an uploaded FileStorage and returns its size in bytes.
    """
    if file is None or not file.filename:
        raise BadRequest("No file provided")

    if file.mimetype not in allowed_types:
        raise BadRequest(f"File type not allowed: {file.mimetype}")

    size = file_size(file)
    max_size = current_app.config.get("MAX_UPLOAD_SIZE", 10 * 1024 * 1024)
    if size > max_size:
        raise RequestEntityTooLarge(
            f"File too large. Maximum size is {max_size // (1024 * 1024)}MB"
        )
    return size


def save_file(file, subfolder=""):
    """
    Stores the file under UPLOAD_FOLDER with a random name.
    Returns (stored filename, public URL).
    """
    filename = secure_filename(file.filename)
    ext = filename.rsplit(".", 1)[1].lower() if "." in filename else "bin"
    unique_filename = f"{uuid.uuid4().hex}.{ext}"

    upload_folder = os.path.join(current_app.config["UPLOAD_FOLDER"], subfolder)
    os.makedirs(upload_folder, exist_ok=True)
    file.save(os.path.join(upload_folder, unique_filename))

    relative = f"{subfolder}/{unique_filename}" if subfolder else unique_filename
    return unique_filename, f"/uploads/{relative}"


def delete_file(file_url):
    """
    Deletes a file given its public URL.
    """
    if not file_url or not file_url.startswith("/uploads/"):
        return False

    relative = file_url[len("/uploads/"):]
    file_path = os.path.join(current_app.config["UPLOAD_FOLDER"], relative)

    if os.path.exists(file_path):
        try:
            os.remove(file_path)
            return True
        except OSError as e:
            current_app.logger.error(f"Failed to delete file {file_path}: {e}")
            return False
    return False
