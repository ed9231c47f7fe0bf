"""HTTP client for querying the power state of a smart switch."""
import json
from typing import Any, Optional

import httpx

from .exceptions import ScanError
from .models import SwitchStatus

STATUS_PATH = "/cm"
STATUS_PARAMS = {"cmnd": "Status"}

_OFF_VALUES = {"0", "off", "false"}


def parse_power_state(payload: Any) -> int:
    """
    Extract the power state from a switch status response.

    Args:
        payload: Decoded JSON body, expected as {"Status": {"Power": ...}}

    Returns:
        SwitchStatus.OFF or SwitchStatus.ON

    Raises:
        ValueError: If the payload has no power state
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("Status"), dict):
        raise ValueError("response has no Status object")
    status = payload["Status"]
    if "Power" not in status or status["Power"] is None:
        raise ValueError("response has no Status.Power field")

    power = status["Power"]
    if isinstance(power, str):
        return SwitchStatus.OFF if power.strip().lower() in _OFF_VALUES else SwitchStatus.ON
    return SwitchStatus.ON if power else SwitchStatus.OFF


class SwitchStatusClient:
    """Client for the status endpoint of Tasmota-style smart switches."""

    def __init__(
        self,
        timeout: float = 3.0,
        transport: Optional[httpx.BaseTransport] = None
    ):
        """
        Initialize the status client.

        Args:
            timeout: Connect/read timeout in seconds for each probe
            transport: Optional httpx transport (used to stub responses)
        """
        self.timeout = timeout
        self._transport = transport

    def _get_client(self) -> httpx.Client:
        """Get an HTTP client with appropriate settings."""
        return httpx.Client(timeout=self.timeout, transport=self._transport)

    def get_status(self, ip: str) -> dict:
        """
        Fetch the raw status document of a switch.

        Args:
            ip: Switch IPv4 address

        Returns:
            Decoded JSON body

        Raises:
            ScanError: On network or HTTP errors, an unusable address, or a non-JSON body
        """
        try:
            with self._get_client() as client:
                response = client.get(f"http://{ip}{STATUS_PATH}", params=STATUS_PARAMS)
                response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ScanError(ip, str(e) or type(e).__name__) from e

        if not response.content.strip():
            raise ScanError(ip, "empty response")
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ScanError(ip, f"malformed response: {e}") from e

    def get_power_state(self, ip: str) -> int:
        """
        Query whether a switch is on or off.

        Returns:
            SwitchStatus.ON or SwitchStatus.OFF

        Raises:
            ScanError: If the switch could not be queried or the response is malformed
        """
        data = self.get_status(ip)
        try:
            return parse_power_state(data)
        except ValueError as e:
            raise ScanError(ip, str(e)) from e
