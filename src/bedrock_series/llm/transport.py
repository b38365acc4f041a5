"""Bedrock InvokeModel transports."""

from __future__ import annotations

import logging
from typing import Any, Dict
from urllib.parse import quote

import boto3
import requests

from ..config import Credentials
from .providers.base import CONTENT_TYPE, Invoker
from .types import ConfigurationError

logger = logging.getLogger(__name__)


class Boto3Invoker:
    """Signs requests with static access keys through the bedrock-runtime client."""

    def __init__(self, credentials: Credentials, client: Any = None) -> None:
        self._credentials = credentials
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            client_kwargs: Dict[str, Any] = {"region_name": self._credentials.region}
            if self._credentials.access_key_id and self._credentials.secret_access_key:
                client_kwargs["aws_access_key_id"] = self._credentials.access_key_id
                client_kwargs["aws_secret_access_key"] = self._credentials.secret_access_key
            self._client = boto3.client("bedrock-runtime", **client_kwargs)
        return self._client

    def invoke(
        self,
        model_id: str,
        body: bytes,
        content_type: str = CONTENT_TYPE,
        accept: str = CONTENT_TYPE,
    ) -> bytes:
        response = self.client.invoke_model(
            modelId=model_id,
            contentType=content_type,
            accept=accept,
            body=body,
        )
        return response["body"].read()


class HttpInvoker:
    """Calls the InvokeModel REST endpoint with a Bedrock API key."""

    def __init__(self, credentials: Credentials, timeout_seconds: int = 60) -> None:
        self._region = credentials.region
        self._api_key = credentials.api_key
        self._timeout = timeout_seconds

    def endpoint(self, model_id: str) -> str:
        return (
            f"https://bedrock-runtime.{self._region}.amazonaws.com"
            f"/model/{quote(model_id, safe='')}/invoke"
        )

    def invoke(
        self,
        model_id: str,
        body: bytes,
        content_type: str = CONTENT_TYPE,
        accept: str = CONTENT_TYPE,
    ) -> bytes:
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": content_type,
            "Accept": accept,
        }
        res = requests.post(self.endpoint(model_id), headers=headers, data=body, timeout=self._timeout)
        res.raise_for_status()
        return res.content


def build_invoker(settings: Dict[str, Any], credentials: Credentials) -> Invoker:
    transport = str(settings.get("transport", "boto3"))
    logger.debug("Using %s transport in %s", transport, credentials.region)
    if transport == "boto3":
        return Boto3Invoker(credentials)
    if transport == "http":
        return HttpInvoker(credentials, timeout_seconds=int(settings.get("timeout_seconds", 60)))
    raise ConfigurationError(f"Unknown transport '{transport}'")
