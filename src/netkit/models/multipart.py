from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class MultipartField(BaseModel):
    """A single field of a multipart/form-data body.

    ``parameters`` become the ``Content-Disposition`` parameters of the part
    (e.g. ``name`` and ``filename``) and keep their insertion order.

    Examples:
        ```python
        MultipartField(
            parameters={"name": "avatar", "filename": "me.png"},
            data=png_bytes,
            mime_type="image/png",
        )
        ```
    """

    model_config = ConfigDict(frozen=True)

    parameters: Dict[str, str] = Field(default_factory=dict)
    data: bytes
    mime_type: Optional[str] = None
