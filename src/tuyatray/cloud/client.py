"""Tuya cloud client

Wraps a ``tuya_connector.TuyaOpenAPI`` instance built from one
Configuration. Request signing stays inside the SDK; this class shapes
requests, logs them, renews the access token ahead of concurrent
requests and turns every failure into a failed FetchResult.
"""

import threading
import time
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional

import requests
from tuya_connector import TuyaOpenAPI

from ..core.config.configuration import Configuration
from ..core.interfaces.cloud import ICloudClient
from ..utils import CloudAPIError, ConfigurationError, ErrorCategory, LogCategory, app_logger
from ..utils.constants import CloudPaths, Timing
from .models import Device, FetchResult, StatusItem

ApiFactory = Callable[[str, str, str], Any]


class TokenGate:
    """Shared/exclusive gate around the SDK's token state

    Requests hold the gate shared and run concurrently. A token renewal
    holds it exclusively: it waits for in-flight requests to finish and
    blocks new ones until the new token is in place.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._active = 0
        self._renewing = False

    @contextmanager
    def request(self) -> Iterator[None]:
        with self._cond:
            while self._renewing:
                self._cond.wait()
            self._active += 1
        try:
            yield
        finally:
            with self._cond:
                self._active -= 1
                self._cond.notify_all()

    @contextmanager
    def renewal(self) -> Iterator[None]:
        with self._cond:
            while self._renewing:
                self._cond.wait()
            self._renewing = True
            while self._active:
                self._cond.wait()
        try:
            yield
        finally:
            with self._cond:
                self._renewing = False
                self._cond.notify_all()


class TuyaCloudClient(ICloudClient):
    """Immutable client for one set of credentials

    A configuration change builds a new client; nothing on an existing
    instance is ever reassigned after construction apart from the SDK's
    own token state.
    """

    def __init__(self, config: Configuration, api_factory: ApiFactory = TuyaOpenAPI):
        """
        Args:
            config: Complete credential configuration
            api_factory: Callable(endpoint, access_id, access_secret) returning
                an object with connect/get/post and a ``token_info``
                attribute; TuyaOpenAPI by default

        Raises:
            ConfigurationError: If any credential field is empty
        """
        if not config.is_complete():
            raise ConfigurationError(
                "Cannot create cloud client from incomplete configuration",
                context={"missing": config.missing_fields()},
            )

        self._config = config
        self._api = api_factory(config.base_url, config.access_key, config.secret_key)
        self._token_gate = TokenGate()

    @property
    def config(self) -> Configuration:
        return self._config

    @property
    def user_id(self) -> str:
        return self._config.user_id

    # ========== Requests ==========

    def _token_is_fresh(self) -> bool:
        token_info = self._api.token_info
        if token_info is None or not token_info.access_token:
            return False
        now_ms = int(time.time() * 1000)
        return token_info.expire_time - Timing.TOKEN_RENEW_MARGIN_MS > now_ms

    def _ensure_token(self) -> None:
        """Obtain or renew the access token before a request

        The SDK renews an expiring token inside whichever request notices
        it first and blanks the shared token meanwhile, and it drops the
        token entirely on error 1010. Both are unsafe with concurrent
        requests, so the token is renewed here first, once, with no
        request in flight.
        """
        if self._token_is_fresh():
            return

        with self._token_gate.renewal():
            if self._token_is_fresh():
                return

            renewing = self._api.token_info is not None
            # a fresh grant instead of the SDK's refresh-token call, which
            # needs the shared token blanked while it runs
            self._api.token_info = None
            response = self._api.connect()
            if not isinstance(response, dict):
                raise CloudAPIError("Authentication failed: no response from token endpoint")
            if not response.get("success", False):
                raise CloudAPIError(
                    f"Authentication failed: {response.get('msg', 'unknown error')}",
                    context={"api_code": response.get("code")},
                )

        app_logger.debug(
            "Access token renewed" if renewing else "Access token obtained",
            LogCategory.API,
            component="cloud_client",
        )

    def _request(
        self, service: str, method: str, path: str, body: Optional[Dict[str, Any]] = None
    ) -> Any:
        """Perform one SDK request and return its ``result`` field

        Raises:
            CloudAPIError: If the response reports ``success: false``
        """
        self._ensure_token()

        with self._token_gate.request():
            if method == "GET":
                response = self._api.get(path)
            else:
                response = self._api.post(path, body)

        if not isinstance(response, dict):
            raise CloudAPIError(
                f"Unexpected response type from {service}",
                context={"path": path, "type": type(response).__name__},
            )
        if not response.get("success", False):
            raise CloudAPIError(
                f"{service} failed: {response.get('msg', 'unknown error')}",
                context={"path": path, "api_code": response.get("code")},
            )
        return response.get("result")

    def _call(
        self,
        service: str,
        method: str,
        path: str,
        parse: Callable[[Any], List[Any]],
        body: Optional[Dict[str, Any]] = None,
    ) -> FetchResult:
        start_time = time.time()
        try:
            result = self._request(service, method, path, body)
            items = parse(result)
        except requests.RequestException as e:
            error = CloudAPIError(
                f"Network error during {service}: {e}",
                category=ErrorCategory.NETWORK,
                context={"path": path},
                original_exception=e,
            )
            app_logger.log_api_call(service, time.time() - start_time, False, error.message)
            return FetchResult.failure(error.message)
        except CloudAPIError as e:
            app_logger.log_api_call(
                service,
                time.time() - start_time,
                False,
                e.message,
                details={"api_code": e.api_code},
            )
            return FetchResult.failure(e.message)
        except Exception as e:
            app_logger.log_error(e, f"cloud_client_{service}")
            app_logger.log_api_call(service, time.time() - start_time, False, str(e))
            return FetchResult.failure(f"{service} failed: {e}")

        app_logger.log_api_call(
            service, time.time() - start_time, True, details={"items": len(items)}
        )
        return FetchResult.success(items)

    # ========== Parsers ==========

    @staticmethod
    def _parse_list(result: Any) -> List[Dict[str, Any]]:
        if result is None:
            return []
        if not isinstance(result, list):
            raise CloudAPIError(
                "Expected a list in response result",
                context={"type": type(result).__name__},
            )
        return [entry for entry in result if isinstance(entry, dict)]

    @classmethod
    def _parse_devices(cls, result: Any) -> List[Device]:
        return [Device.from_api(entry) for entry in cls._parse_list(result)]

    @classmethod
    def _parse_status(cls, result: Any) -> List[StatusItem]:
        return [StatusItem.from_api(entry) for entry in cls._parse_list(result)]

    # ========== Public API ==========

    def list_devices(self, user_id: str) -> FetchResult[Device]:
        return self._call(
            "list_devices",
            "GET",
            CloudPaths.USER_DEVICES.format(user_id=user_id),
            self._parse_devices,
        )

    def fetch_status(self, device_id: str) -> FetchResult[StatusItem]:
        return self._call(
            "fetch_status",
            "GET",
            CloudPaths.DEVICE_STATUS.format(device_id=device_id),
            self._parse_status,
        )

    def send_command(self, device_id: str, code: str, new_value: Any) -> FetchResult[Any]:
        body = {"commands": [{"code": code, "value": new_value}]}
        return self._call(
            "send_command",
            "POST",
            CloudPaths.DEVICE_COMMANDS.format(device_id=device_id),
            lambda result: [],
            body=body,
        )

    def __repr__(self) -> str:
        return f"TuyaCloudClient(base_url={self._config.base_url!r}, user_id={self.user_id!r})"
