from datetime import datetime, timezone
from typing import Any

from bson import ObjectId
from fastapi.encoders import jsonable_encoder

from quizhub.schemas.ServerResponse import ServerResponse


class Utils:
    @staticmethod
    def create_response(data: Any, success: bool, error: str = "") -> ServerResponse:
        """
        Wrap a service payload in the common response envelope.
        ObjectIds become strings so raw Mongo documents can be returned as is.
        """
        return ServerResponse(
            data=jsonable_encoder(data, custom_encoder={ObjectId: str}),
            success=success,
            error=error or "",
        )

    @staticmethod
    def new_id() -> str:
        return str(ObjectId())

    @staticmethod
    def utcnow() -> datetime:
        return datetime.now(timezone.utc)
