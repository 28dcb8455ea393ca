"""HTTP client for the external upload functions (product images, payment proofs).

The functions own storage and file-type allow-lists; this client only
forwards the file and reads back where it landed. Any failure is logged and
reported as ``None``.
"""

import os

import httpx

from storefront.domain import logger

DEFAULT_FUNCTIONS_BASE_URL = "http://localhost:7071/api"


class FunctionsClient:
    def __init__(self, base_url: str | None = None, transport: httpx.BaseTransport | None = None):
        self.base_url = (base_url or os.getenv("FUNCTIONS_BASE_URL") or DEFAULT_FUNCTIONS_BASE_URL).rstrip("/")
        self.client = httpx.Client(
            base_url=self.base_url,
            timeout=httpx.Timeout(10.0, read=30.0),
            transport=transport,
        )

    def close(self) -> None:
        self.client.close()

    def upload_product_image(self, filename: str, content: bytes, content_type: str | None = None) -> str | None:
        """Upload a product image. Returns the public image URL."""
        body = self._post_file("/images/product", filename, content, content_type)
        if body is None:
            return None
        return body.get("imageUrl") or body.get("ImageUrl")

    def upload_payment_proof(self, filename: str, content: bytes, content_type: str | None = None) -> str | None:
        """Upload a proof-of-payment document. Returns the stored file name."""
        body = self._post_file("/files/payment-proof", filename, content, content_type)
        if body is None:
            return None
        return body.get("fileName") or body.get("FileName")

    def _post_file(self, path: str, filename: str, content: bytes, content_type: str | None) -> dict | None:
        files = {"file": (filename, content, content_type or "application/octet-stream")}
        try:
            response = self.client.post(path, files=files)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Upload function rejected file",
                path=path,
                filename=filename,
                status_code=exc.response.status_code,
                detail=exc.response.text,
            )
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Upload function call failed", path=path, filename=filename, error=str(exc))
        return None


_current_client: FunctionsClient | None = None


def get_functions_client() -> FunctionsClient:
    global _current_client
    if _current_client is None:
        _current_client = FunctionsClient()
    return _current_client


def set_functions_client(client: FunctionsClient) -> None:
    """Override the active client (useful for tests)."""
    global _current_client
    _current_client = client


def reset_functions_client() -> None:
    global _current_client
    if _current_client is not None:
        _current_client.close()
    _current_client = None
