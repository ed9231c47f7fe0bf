"""Reachability scan of configured switches."""
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Iterable

from sinks import SwitchStatusClient
from sinks.exceptions import ScanError
from sinks.models import Document, Switch, SwitchStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanResult:
    """Outcome of probing one switch."""
    status: int
    reachable: bool


NO_IP_RESULT = ScanResult(status=int(SwitchStatus.NO_IP), reachable=False)


class SwitchScanner:
    """Probes switches for their power state."""

    def __init__(
        self,
        client_factory: Callable[[], SwitchStatusClient] = SwitchStatusClient,
        max_workers: int = 8
    ):
        self._client_factory = client_factory
        self.max_workers = max_workers

    def scan_switch(self, ip: str) -> ScanResult:
        """
        Probe a single switch.

        A switch without an IP is reported as NO_IP without any request.
        Failures are contained here and reported as SCAN_ERROR.
        """
        ip = (ip or "").strip()
        if not ip:
            return NO_IP_RESULT

        try:
            power = self._client_factory().get_power_state(ip)
        except ScanError as e:
            logger.debug(f"Switch {ip} unreachable: {e.reason}")
            return ScanResult(status=int(SwitchStatus.SCAN_ERROR), reachable=False)

        logger.debug(f"Switch {ip} power state: {power}")
        return ScanResult(status=int(power), reachable=True)

    def scan(self, switches: Iterable[Switch]) -> dict[int, ScanResult]:
        """
        Probe all switches in parallel.

        Returns:
            Dict of {switch_id: ScanResult}, complete only once every probe finished
        """
        targets = [(sw.id, sw.ip) for sw in switches]
        if not targets:
            return {}

        def probe(target: tuple[int, str]) -> tuple[int, ScanResult]:
            switch_id, ip = target
            return switch_id, self.scan_switch(ip)

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            results = dict(executor.map(probe, targets))

        reachable = sum(1 for r in results.values() if r.reachable)
        logger.info(f"Scanned {len(results)} switches, {reachable} reachable")
        return results


def apply_scan_results(doc: Document, results: dict[int, ScanResult]) -> None:
    """Write scan results back into the switches of a document."""
    for sw in doc.switches:
        result = results.get(sw.id)
        if result is None:
            continue
        sw.status = result.status
        sw.reachable = result.reachable
