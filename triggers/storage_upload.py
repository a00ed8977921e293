# ============================================================================
# STORAGE UPLOAD HTTP TRIGGERS
# ============================================================================
# STATUS: Trigger layer - POST /api/products/images, POST /api/contracts/files
# PURPOSE: Write text content to the product image container / contracts share
# EXPORTS: ProductImageUploadTrigger, ContractFileSaveTrigger
# DEPENDENCIES: azure.functions, infrastructure.blob, infrastructure.file_share
# ============================================================================
"""
Storage Upload - Write small text payloads to blob and file storage.

Routes:
    POST /api/products/images   {name?, content?} -> {uri, blobName, container}
    POST /api/contracts/files   {name?, content?} -> {share, file}

Both bodies are optional. A missing or blank name becomes a timestamped
file name and missing content becomes a timestamp line, so an empty POST
is a quick end-to-end storage check. Content that is present is written
as given, empty string included.

Blob names may contain "/" (virtual directories). Contract files are
written to the share root, so their names may not contain separators.

Example Usage:
    curl -X POST "https://{app-url}/api/products/images" \\
        -H "Content-Type: application/json" \\
        -d '{"name": "shoe-001.txt", "content": "red, size 9"}'
"""

from datetime import datetime, timezone
from typing import Callable, Dict, Any, List, Optional

import azure.functions as func

from infrastructure.interface_repository import IBlobRepository, IFileShareRepository
from .http_base import BaseHttpTrigger

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _text_field(body: Optional[Dict[str, Any]], key: str) -> Optional[str]:
    """
    Read an optional string field; only a missing or null field is absent.

    Raises:
        ValueError: Field present but not a string
    """
    if not body or body.get(key) is None:
        return None
    value = body[key]
    if not isinstance(value, str):
        raise ValueError(f"'{key}' must be a string")
    return value


def _name_field(body: Optional[Dict[str, Any]]) -> Optional[str]:
    name = _text_field(body, "name")
    return name if name and name.strip() else None


def _validate_file_name(name: str) -> str:
    if "/" in name or "\\" in name:
        raise ValueError(f"Name must not contain path separators: {name}")
    return name


class ProductImageUploadTrigger(BaseHttpTrigger):

    def __init__(self, blob_repo: IBlobRepository, container: str, clock: Clock = _utc_now):
        super().__init__("product_image_upload")
        self.blob_repo = blob_repo
        self.container = container
        self.clock = clock

    def get_allowed_methods(self) -> List[str]:
        return ["POST"]

    def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        body = self.extract_json_body(req, required=False)
        now = self.clock()

        name = _name_field(body) or f"upload-{now:%Y%m%d%H%M%S}.txt"
        content = _text_field(body, "content")
        if content is None:
            content = f"Uploaded at {now.isoformat()}"

        uri = self.blob_repo.upload_text(self.container, name, content, overwrite=True)
        return {"uri": uri, "blobName": name, "container": self.container}


class ContractFileSaveTrigger(BaseHttpTrigger):

    def __init__(self, file_repo: IFileShareRepository, share: str, clock: Clock = _utc_now):
        super().__init__("contract_file_save")
        self.file_repo = file_repo
        self.share = share
        self.clock = clock

    def get_allowed_methods(self) -> List[str]:
        return ["POST"]

    def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        body = self.extract_json_body(req, required=False)
        now = self.clock()

        name = _validate_file_name(_name_field(body) or f"contract-{now:%Y%m%d%H%M%S}.txt")
        content = _text_field(body, "content")
        if content is None:
            content = f"Saved at {now.isoformat()}"

        path = self.file_repo.write_text(self.share, name, content)
        return {"share": self.share, "file": path}
