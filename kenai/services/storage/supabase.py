"""
Supabase Storage upload client.

Sends a finished WAV artifact to the Supabase Storage REST API with a single
``POST`` and returns the public URL of the stored object. No retries: a
failed upload is reported once and the artifact stays available locally.
"""

import logging
from urllib.parse import quote

import httpx

from kenai.core.config import get_settings
from kenai.core.exceptions import UploadError

logger = logging.getLogger(__name__)


class SupabaseStorage:
    """Minimal client for ``/storage/v1/object`` uploads.

    Args:
        base_url: Supabase project URL (falls back to settings).
        api_key: Publishable/anon key sent as a Bearer token.
        bucket: Target bucket name.
        path: Logical folder inside the bucket.
        timeout: Request timeout in seconds.
        transport: Optional httpx transport (used by tests).
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        bucket: str | None = None,
        path: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self._base_url = (base_url if base_url is not None else settings.supabase_url).rstrip("/")
        self._api_key = api_key if api_key is not None else settings.supabase_anon_key
        self._bucket = bucket or settings.supabase_bucket
        self._path = (path if path is not None else settings.supabase_path).strip("/")
        self._timeout = timeout or settings.upload_timeout
        self._transport = transport

    @property
    def configured(self) -> bool:
        """True when a usable https URL and key are present."""
        return self._base_url.startswith("https") and len(self._api_key) >= 20

    def _object_path(self, filename: str, *, encode: bool) -> str:
        bucket = quote(self._bucket, safe="") if encode else self._bucket
        name = quote(filename, safe="") if encode else filename
        parts = [bucket, self._path, name] if self._path else [bucket, name]
        return "/".join(parts)

    def upload_url(self, filename: str) -> str:
        return f"{self._base_url}/storage/v1/object/{self._object_path(filename, encode=True)}"

    def public_url(self, filename: str) -> str:
        return f"{self._base_url}/storage/v1/object/public/{self._object_path(filename, encode=False)}"

    async def upload(self, data: bytes, filename: str, content_type: str = "audio/wav") -> str:
        """Upload one object (upsert) and return its public URL.

        Raises:
            UploadError: On a non-2xx response or a transport failure.
        """
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": content_type,
            "x-upsert": "true",
        }
        url = self.upload_url(filename)
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.post(url, content=data, headers=headers)
        except httpx.HTTPError as exc:
            logger.warning("Upload of %s failed: %s", filename, exc)
            raise UploadError(f"Upload failed: {exc}") from exc

        if not resp.is_success:
            logger.warning("Upload of %s rejected: %s", filename, resp.status_code)
            raise UploadError(f"Upload failed: {resp.status_code} {resp.text}")

        logger.info("Uploaded %s (%d bytes) to bucket %s", filename, len(data), self._bucket)
        return self.public_url(filename)
