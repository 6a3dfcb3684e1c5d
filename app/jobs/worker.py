"""Background worker: runs one effect's vendor call chain for a task.

run() either returns the result URL or raises. The dispatcher turns the
outcome into the task's single terminal transition, so a record can never
stay pending because of an exception raised here.
"""

import json
import logging
from typing import Optional

from app.effects.base import EffectSpec, InlineMedia, Params, extract_path
from app.errors import StorageError, UpstreamError
from app.jobs.models import TaskRecord
from app.storage.media_store import MediaStore, to_data_url
from app.vendor.segmind import SegmindClient, VendorResponse

logger = logging.getLogger(__name__)

ERROR_DETAIL_CHARS = 200
UNSUPPORTED_BODY_CHARS = 500


class EffectWorker:
    def __init__(self, vendor: SegmindClient, media_store: Optional[MediaStore] = None):
        self._vendor = vendor
        self._media_store = media_store

    async def run(self, task: TaskRecord, spec: EffectSpec, params: Params) -> str:
        logger.info("Task %s (%s): starting", task.id, spec.slug)

        media: InlineMedia = {}
        for field_name in spec.inline_media:
            logger.info("Task %s: fetching %s", task.id, field_name)
            media[field_name] = await self._vendor.fetch_base64(params[field_name])

        payload = spec.build_payload(params, media)
        response = await self._vendor.generate(
            spec.endpoint, payload, auth=spec.auth, accept=spec.accept
        )
        logger.info(
            "Task %s: Segmind %s responded %d (%s, %d bytes)",
            task.id, spec.endpoint, response.status_code,
            response.content_type or "no content-type", len(response.body),
        )
        return await self.interpret(task, spec, response)

    async def interpret(self, task: TaskRecord, spec: EffectSpec, response: VendorResponse) -> str:
        """Map a vendor reply to a result URL, or raise UpstreamError."""
        if not response.ok:
            logger.error(
                "Task %s: Segmind API error %d: %s",
                task.id, response.status_code, response.text[:UNSUPPORTED_BODY_CHARS],
            )
            raise UpstreamError(
                f"Segmind API error ({response.status_code}): {_error_detail(response)}",
                status_code=response.status_code,
            )

        if spec.is_binary(response.content_type):
            return await self._store_artifact(task, spec, response)

        if "application/json" in response.content_type.lower():
            try:
                data = json.loads(response.body)
            except ValueError as exc:
                raise UpstreamError("Failed to parse JSON response from Segmind") from exc
            url = extract_path(data, spec.result_path)
            if not isinstance(url, str) or not url:
                logger.error("Task %s: no result URL in %s", task.id, response.text[:UNSUPPORTED_BODY_CHARS])
                raise UpstreamError(f"Segmind API JSON missing {spec.result_key}")
            return url

        body = response.text[:UNSUPPORTED_BODY_CHARS]
        if "<html" in body.lower():
            logger.error("Task %s: Segmind returned an HTML page (gateway error or rate limit?)", task.id)
        raise UpstreamError(
            f"Unsupported content type: {response.content_type or 'none'}. Body: {body}"
        )

    async def _store_artifact(self, task: TaskRecord, spec: EffectSpec, response: VendorResponse) -> str:
        media_type = response.media_type or "application/octet-stream"
        if not spec.upload_folder:
            return to_data_url(response.body, media_type)
        if self._media_store is None:
            logger.warning("Task %s: storage not configured, inlining %s artifact", task.id, media_type)
            return to_data_url(response.body, media_type)

        try:
            url = await self._media_store.upload(response.body, media_type, spec.upload_folder, task.id)
        except StorageError as exc:
            logger.warning("Task %s: upload failed (%s), falling back to data URL", task.id, exc)
            return to_data_url(response.body, media_type)
        logger.info("Task %s: artifact uploaded to %s", task.id, url)
        return url


def _error_detail(response: VendorResponse) -> str:
    text = response.text
    if "application/json" in response.content_type.lower():
        try:
            data = json.loads(text)
        except ValueError:
            data = None
        if isinstance(data, dict):
            detail = data.get("error") or data.get("message")
            if isinstance(detail, str) and detail:
                return detail
    return text[:ERROR_DETAIL_CHARS].strip() or "empty response body"
