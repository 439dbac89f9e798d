"""
Request-aware /__api endpoint.

Serves a static API description, but rewrites host, schemes, basePath and
info.version to match the URL the client used to reach us through the proxy.
The proxy passes that URL in a forwarding header (X-Original-Request-URL by
default). A missing or malformed header is never an error: the original
document is returned byte for byte.
"""
# Type hints
from typing import Optional

# Standard library imports
import logging

# Third-party imports
from flask import Flask, Response, request

# Internal imports
from api_endpoint.buildinfo import get_build_info
from api_endpoint.document import YAML_CONTENT_TYPE, DocumentStore
from api_endpoint.rewrite import DEFAULT_FORWARDED_URL_HEADER, parse_forwarded_url, rewrite_document
from api_endpoint.schemas import BuildInfo

logger = logging.getLogger(__name__)

# Path the endpoint is mounted at unless the service says otherwise
DEFAULT_API_PATH = "/__api"


class APIEndpoint:
    """
    Flask view serving one API description document.

    Args:
        store: the document to serve.
        header_name: request header carrying the client-facing URL.
        build_info: pins the build info for this endpoint; when None the
            process-wide build info is read on every request.
    """

    def __init__(
        self,
        store: DocumentStore,
        header_name: str = DEFAULT_FORWARDED_URL_HEADER,
        build_info: Optional[BuildInfo] = None,
    ):
        self.store = store
        self.header_name = header_name
        self.build_info = build_info

    def current_build_info(self) -> BuildInfo:
        if self.build_info is not None:
            return self.build_info
        return get_build_info()

    def render(self, header_value: Optional[str], local_path: str) -> bytes:
        """
        Produce the response body for one request.

        Args:
            header_value: value of the forwarding header, None if not sent.
            local_path: path this request arrived on, e.g. '/__api'.

        Returns:
            The raw document when there is nothing usable to rewrite with,
            otherwise the rewritten document serialised as YAML.
        """
        # 1️⃣ No header, blank header or unparsable URL: serve the original bytes
        forwarded = parse_forwarded_url(header_value)
        if forwarded is None:
            if header_value is not None and header_value.strip():
                logger.debug("Ignoring unparsable %s header: %r", self.header_name, header_value)
            return self.store.raw_bytes()
        # 2️⃣ Patch a private copy of the document
        document = self.store.fresh_parse()
        rewrite_document(document, forwarded, local_path, self.current_build_info().version)
        # 3️⃣ Serialise the rewritten copy
        return self.store.serialize(document)

    def serve(self) -> Response:
        """GET handler: always answers 200 with the (possibly rewritten) document."""
        local_path = request.script_root + request.path
        body = self.render(request.headers.get(self.header_name), local_path)
        return Response(body, status=200, mimetype=YAML_CONTENT_TYPE)

    def register(self, app: Flask, path: str = DEFAULT_API_PATH, endpoint: str = "api") -> None:
        """Mount the endpoint on a Flask app for GET (and implicitly HEAD)."""
        app.add_url_rule(path, endpoint=endpoint, view_func=self.serve, methods=["GET"])
        logger.info("Serving API description at %s (forwarding header %s)", path, self.header_name)


def new_api_endpoint_for_yaml(raw: bytes, **kwargs) -> APIEndpoint:
    """Build an endpoint from YAML bytes. Raises InvalidDocumentError on bad input."""
    return APIEndpoint(DocumentStore(raw), **kwargs)


def new_api_endpoint_for_file(path: str, **kwargs) -> APIEndpoint:
    """Build an endpoint from a YAML file. Raises InvalidDocumentError or OSError."""
    return APIEndpoint(DocumentStore.from_file(path), **kwargs)
