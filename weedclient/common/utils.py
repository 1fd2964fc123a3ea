# weedclient/common/utils.py
from weedclient.models.schemas import FileHandle, Location

DEFAULT_FILE_NAME = "file"
MAX_FILE_NAME_LENGTH = 256


def sanitize_file_name(file_name: str) -> str:
    """Name sent with an upload: blank names become "file", long ones are cut"""
    if not file_name or not file_name.strip():
        return DEFAULT_FILE_NAME
    if len(file_name) > MAX_FILE_NAME_LENGTH:
        return file_name[: MAX_FILE_NAME_LENGTH - 1]
    return file_name


def node_base_url(location: Location) -> str:
    # Deployed nodes advertise both "host:port" and full urls; anything that
    # mentions "http" anywhere (https included) is used untouched.
    if "http" not in location.public_url:
        return f"http://{location.public_url}"
    return location.public_url


def file_url(file: FileHandle, location: Location) -> str:
    return f"{node_base_url(location)}/{file.path}"
