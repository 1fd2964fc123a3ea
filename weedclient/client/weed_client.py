# weedclient/client/weed_client.py
import logging
import os
from pathlib import Path
from typing import BinaryIO, List, Optional, Type, TypeVar, Union

import httpx
from pydantic import BaseModel, ValidationError

from weedclient.common.config import settings
from weedclient.common.exceptions import (
    AssignmentError,
    DeleteError,
    ReadError,
    ResponseParseError,
    VolumeLookupError,
    WeedFSFileNotFoundError,
    WeedFSTransportError,
    WriteError,
)
from weedclient.common.interfaces import ILookupCache
from weedclient.common.utils import file_url, node_base_url, sanitize_file_name
from weedclient.models.schemas import (
    Assignation,
    AssignParams,
    AssignResult,
    FileHandle,
    Location,
    LookupResult,
    MasterStatus,
    VolumeStatus,
    WriteResult,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

UPLOAD_CONTENT_TYPE = "application/octet-stream"


class WeedFSClient:
    """Client for a weed-fs master and its volume servers.

    Every call is a blocking round trip on the shared ``httpx.Client``; the
    client keeps no other state than the master url, the transport and the
    optional lookup cache, so one instance can serve many threads.
    """

    def __init__(
        self,
        master_url: str,
        http_client: Optional[httpx.Client] = None,
        lookup_cache: Optional[ILookupCache] = None,
        timeout: Optional[float] = None,
    ):
        self.master_url = master_url
        self.lookup_cache = lookup_cache
        self._owns_http_client = http_client is None
        if http_client is None:
            http_client = httpx.Client(
                timeout=settings.HTTP_TIMEOUT if timeout is None else timeout
            )
        self.http_client = http_client

    def close(self) -> None:
        """Close the transport if this client created it"""
        if self._owns_http_client:
            self.http_client.close()

    def __enter__(self) -> "WeedFSClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def assign(self, params: Optional[AssignParams] = None) -> Assignation:
        """Ask the master for a new file id and the node that should store it"""
        params = params or AssignParams()
        response = self._send(
            "GET", self._master_endpoint("/dir/assign"), params=params.query_params()
        )
        result = self._decode(response, AssignResult)
        if result.error:
            logger.error(f"Master refused assignment: {result.error}")
            raise AssignmentError(result.error, body=response.text)

        logger.info(f"Assigned fid {result.fid} on {result.public_url}")
        return Assignation.from_result(result)

    def lookup(self, volume_id: int) -> List[Location]:
        """Resolve a volume id to the nodes hosting it, through the cache if any"""
        if self.lookup_cache is not None:
            cached = self.lookup_cache.lookup(volume_id)
            if cached is not None:
                return cached

        response = self._send(
            "GET",
            self._master_endpoint("/dir/lookup"),
            params={"volumeId": str(volume_id)},
        )
        result = self._decode(response, LookupResult)
        if result.error:
            logger.warning(f"Lookup of volume {volume_id} failed: {result.error}")
            raise VolumeLookupError(result.error, body=response.text)

        if self.lookup_cache is not None and result.locations:
            self.lookup_cache.set_location(volume_id, result.locations)

        return result.locations

    def write(
        self,
        file: FileHandle,
        location: Location,
        *,
        path: Union[str, os.PathLike, None] = None,
        data: Optional[bytes] = None,
        stream: Optional[BinaryIO] = None,
        file_name: Optional[str] = None,
    ) -> int:
        """Upload one payload for ``file`` to the node at ``location``.

        Exactly one of ``path``, ``data`` or ``stream`` must be given. For a
        ``path`` the upload name defaults to the file's basename. Returns the
        size reported by the storage node.
        """
        given = [p for p in (path, data, stream) if p is not None]
        if len(given) != 1:
            raise ValueError("Exactly one of path, data or stream must be given")

        url = file_url(file, location)

        if path is not None:
            path = Path(path)
            if path.stat().st_size == 0:
                raise WriteError(f"Cannot write a zero-length file: {path}")
            name = path.name if file_name is None else file_name
            with path.open("rb") as f:
                return self._upload(url, f, sanitize_file_name(name))

        content = data if data is not None else stream
        return self._upload(url, content, sanitize_file_name(file_name))

    def read(self, file: FileHandle, location: Location) -> httpx.Response:
        """Open a download of ``file`` from ``location``.

        The returned response is not read yet: iterate ``iter_bytes()`` and
        call ``close()``, or wrap it in ``contextlib.closing``. It is the
        caller's to release.
        """
        url = file_url(file, location)
        response = self._send("GET", url, stream=True)

        if response.status_code == 404:
            response.close()
            raise WeedFSFileNotFoundError(file, location)
        if response.status_code != 200:
            response.close()
            logger.error(
                f"Node {location.public_url} returned {response.status_code} for {file.path}"
            )
            raise ReadError(
                f"Error reading file {file.fid} on {location.public_url}: "
                f"{response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
                reason=response.reason_phrase,
            )
        return response

    def delete(self, file: FileHandle, location: Location) -> None:
        url = file_url(file, location)
        response = self._send("DELETE", url)

        if not 200 <= response.status_code <= 299:
            logger.error(
                f"Node {location.public_url} returned {response.status_code} "
                f"deleting {file.path}: {response.text}"
            )
            raise DeleteError(
                f"Error deleting file {file.fid} on {location.public_url}: "
                f"{response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
                reason=response.reason_phrase,
                body=response.text,
            )

    # The status calls report a non-200 answer as a plain transport error
    # with no status attributes, unlike every other operation.

    def get_master_status(self) -> MasterStatus:
        url = self._master_endpoint("/dir/status")
        response = self._send("GET", url)
        if response.status_code != 200:
            raise WeedFSTransportError(
                f"Not 200 status received for master status url: {url}"
            )
        return self._decode(response, MasterStatus)

    def get_volume_status(self, location: Location) -> VolumeStatus:
        url = f"{node_base_url(location)}/status"
        response = self._send("GET", url)
        if response.status_code != 200:
            raise WeedFSTransportError(
                f"Not 200 status received for volume status url: {url}"
            )
        return self._decode(response, VolumeStatus)

    def _master_endpoint(self, path: str) -> str:
        return str(httpx.URL(self.master_url).join(path))

    def _upload(self, url: str, content, file_name: str) -> int:
        files = {"file": (file_name, content, UPLOAD_CONTENT_TYPE)}
        response = self._send("POST", url, files=files)
        result = self._decode(response, WriteResult)
        if result.error:
            logger.error(f"Upload to {url} failed: {result.error}")
            raise WriteError(result.error, body=response.text)
        return result.size

    def _send(self, method: str, url: str, stream: bool = False, **kwargs) -> httpx.Response:
        try:
            request = self.http_client.build_request(method, url, **kwargs)
            response = self.http_client.send(request, stream=stream)
        except (httpx.RequestError, httpx.InvalidURL) as e:
            logger.error(f"Connection failed to {url}: {str(e)}")
            raise WeedFSTransportError(
                f"Failed to communicate with {url}: {str(e)}"
            ) from e

        logger.debug(
            f'HTTP Request: {method} {request.url} "{response.status_code} {response.reason_phrase}"'
        )
        return response

    def _decode(self, response: httpx.Response, model: Type[M]) -> M:
        try:
            return model.model_validate_json(response.content)
        except ValidationError as e:
            # Undecodable bytes stay visible as escapes rather than U+FFFD.
            body = response.content.decode("utf-8", errors="backslashreplace")
            logger.error(f"Unparseable response from {response.request.url}: {body!r}")
            raise ResponseParseError(
                f"Unable to parse JSON from weed-fs from: {body}",
                body=body,
                content=response.content,
            ) from e
