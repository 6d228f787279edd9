"""Document providers that supply the JSON document for each rebuild."""

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import ParseResult, unquote, urlparse

import requests

from jsonql.common import JsonQlError
from jsonql.constants import DEFAULT_FETCH_TIMEOUT

logger = logging.getLogger(__name__)


class DocumentFetchError(JsonQlError):
    """Raised when a document cannot be read or decoded."""


@dataclass(frozen=True)
class Document:
    """A decoded JSON document together with the bytes it was decoded from."""
    data: Dict[str, Any]
    raw: bytes


def decode_document(raw: bytes, source: str = '') -> Document:
    """Decodes raw JSON bytes into a Document.

    Raises:
        DocumentFetchError: If the bytes are not JSON or the root is not an object
    """
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise DocumentFetchError("Document is not valid JSON", context=source, cause=e) from e
    except RecursionError as e:
        raise DocumentFetchError("Document is nested too deeply to decode", context=source, cause=e) from e
    if not isinstance(data, dict):
        raise DocumentFetchError(f"Document root must be a JSON object, got {type(data).__name__}",
                                 context=source)
    return Document(data=data, raw=raw)


class DocumentProvider:
    """Base class for document sources. fetch() is called once per rebuild."""

    source = ''

    def fetch(self) -> Document:
        raise NotImplementedError


class FileDocumentProvider(DocumentProvider):
    """Reads the document from a local file on every fetch."""

    def __init__(self, path: str):
        self.path = path
        self.source = path

    def fetch(self) -> Document:
        try:
            with open(self.path, 'rb') as f:
                raw = f.read()
        except OSError as e:
            raise DocumentFetchError("Could not read document", context=self.path, cause=e) from e
        logger.debug("read %d bytes from %s", len(raw), self.path)
        return decode_document(raw, self.path)


class UrlDocumentProvider(DocumentProvider):
    """Downloads the document over HTTP(S) on every fetch."""

    def __init__(self, url: str, timeout: float = DEFAULT_FETCH_TIMEOUT):
        self.url = url
        self.source = url
        self.timeout = timeout

    def fetch(self) -> Document:
        try:
            response = requests.get(self.url, timeout=self.timeout)
            # Raises an HTTPError if the response status code is 4XX/5XX
            response.raise_for_status()
        except requests.RequestException as e:
            raise DocumentFetchError("Could not download document", context=self.url, cause=e) from e
        logger.debug("downloaded %d bytes from %s", len(response.content), self.url)
        return decode_document(response.content, self.url)


class StaticDocumentProvider(DocumentProvider):
    """Serves an in-memory document that can be replaced between fetches."""

    def __init__(self, data: Optional[Dict[str, Any]] = None, raw: Optional[bytes] = None):
        self.source = '<memory>'
        self._raw = b'{}'
        self.update(data=data, raw=raw)

    def update(self, data: Optional[Dict[str, Any]] = None, raw: Optional[bytes] = None) -> None:
        if raw is not None:
            self._raw = raw
        elif data is not None:
            self._raw = json.dumps(data).encode('utf-8')

    def fetch(self) -> Document:
        # decoding on every fetch hands out a fresh, unshared tree
        return decode_document(self._raw, self.source)


def provider_for(source: str | ParseResult, timeout: float = DEFAULT_FETCH_TIMEOUT) -> DocumentProvider:
    """Returns a provider for a file path, a file:// URL or an http(s):// URL."""
    if isinstance(source, str):
        parsed_url = urlparse(source)
    else:
        parsed_url = source
        source = parsed_url.geturl()

    if parsed_url.scheme in ['http', 'https']:
        return UrlDocumentProvider(parsed_url.geturl(), timeout=timeout)
    if parsed_url.scheme == 'file':
        file_path = parsed_url.path
        if parsed_url.netloc and parsed_url.netloc != "localhost":
            file_path = parsed_url.netloc + parsed_url.path
        # On Windows, a file URL might start with a '/' but it's not part of the actual path
        if len(file_path) > 2 and file_path[0] == '/' and file_path[2] == ':':
            file_path = file_path[1:]
        return FileDocumentProvider(unquote(file_path))
    return FileDocumentProvider(source)
