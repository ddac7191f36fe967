"""异常类与全局异常处理器测试"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel, Field

from ytagging.exceptions import (
    BusinessException,
    ErrorCode,
    TaggableTypeNotFound,
    register_exception_handlers,
    tagging_error_status,
)
from ytagging.orm.taggable import TaggableNotPersistedError, TaggingConfigError, TaggingError


class TestBusinessException:

    def test_defaults(self):
        exc = BusinessException("操作失败")
        assert exc.code == ErrorCode.BUSINESS_ERROR
        assert exc.status_code == 400
        assert exc.details == []
        assert str(exc) == "操作失败"

    def test_taggable_type_not_found(self):
        exc = TaggableTypeNotFound("Video", supported={"shop.Product": None, "Article": None})
        assert exc.status_code == 404
        assert exc.code == ErrorCode.TAGGABLE_TYPE_NOT_FOUND
        assert exc.details == ["可用类型: Article, shop.Product"]
        assert exc.context == {"taggable_type": "Video"}
        assert "TAGGABLE_TYPE_NOT_FOUND" in repr(exc)

    def test_no_supported_types(self):
        assert TaggableTypeNotFound("Video").details == []

    @pytest.mark.parametrize("exc, expected", [
        (TaggableNotPersistedError("Article"), (409, ErrorCode.TAGGABLE_NOT_PERSISTED)),
        (TaggingConfigError(), (500, ErrorCode.TAGGING_MISCONFIGURED)),
        (TaggingError("其他"), (400, ErrorCode.BUSINESS_ERROR)),
    ])
    def test_tagging_error_status(self, exc, expected):
        assert tagging_error_status(exc) == expected


class TagBody(BaseModel):
    name: str = Field(..., min_length=1)


@pytest.fixture
def client():
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/missing")
    def missing():
        raise TaggableTypeNotFound("Video", supported=["Article"])

    @app.post("/tags")
    def create(body: TagBody):
        return {"name": body.name}

    @app.get("/unsaved")
    def unsaved():
        raise TaggableNotPersistedError("Article")

    @app.get("/boom")
    def boom():
        raise RuntimeError("db down")

    return TestClient(app, raise_server_exceptions=False)


class TestExceptionHandlers:

    def test_business_exception(self, client):
        response = client.get("/missing")
        assert response.status_code == 404

        body = response.json()
        assert body["status"] == "error"
        assert body["message"] == "不支持的标签目标类型: Video"
        assert body["msg_details"] == ["可用类型: Article"]
        assert body["error_code"] == "TAGGABLE_TYPE_NOT_FOUND"
        assert body["data"] == {}

    def test_tagging_error(self, client):
        response = client.get("/unsaved")
        assert response.status_code == 409

        body = response.json()
        assert body["error_code"] == "TAGGABLE_NOT_PERSISTED"
        assert body["message"] == "Article 必须先保存记录才能操作标签"

    def test_validation_error(self, client):
        response = client.post("/tags", json={"name": ""})
        assert response.status_code == 422

        body = response.json()
        assert body["error_code"] == ErrorCode.VALIDATION_ERROR.value
        assert body["msg_details"][0].startswith("name: ")

    def test_unhandled_exception(self, client):
        response = client.get("/boom")
        assert response.status_code == 500
        assert response.json()["error_code"] == "INTERNAL_SERVER_ERROR"
        assert response.json()["msg_details"] == []
