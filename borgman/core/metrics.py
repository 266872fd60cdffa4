from __future__ import annotations

import requests

from .run_log import RunLog

CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"
DURATION_BUCKETS = (
    1.0,
    5.0,
    15.0,
    30.0,
    60.0,
    300.0,
    600.0,
    1800.0,
    3600.0,
    7200.0,
    14400.0,
    28800.0,
)


class PushgatewayMetricsSink:
    """Pushes the outcome of a run to a Prometheus Pushgateway.

    Pushing is best effort: a failed push is reported and otherwise ignored.
    """

    def __init__(
        self,
        address: str,
        log: RunLog | None = None,
        *,
        job: str = "borgman",
        timeout_seconds: float = 10.0,
    ) -> None:
        self._address = address
        self._log = log or RunLog()
        self._job = job
        self._timeout_seconds = timeout_seconds

    @property
    def url(self) -> str:
        base = self._address.rstrip("/")
        if "://" not in base:
            base = f"http://{base}"
        return f"{base}/metrics/job/{self._job}"

    def render(
        self,
        succeeded: bool,
        timestamp_seconds: int,
        duration_seconds: float,
    ) -> str:
        lines = [
            "# HELP borgman_last_run_success Whether the last borgman run succeeded.",
            "# TYPE borgman_last_run_success gauge",
            f"borgman_last_run_success {1 if succeeded else 0}",
            "# HELP borgman_last_run_timestamp_seconds Unix time the last borgman run finished.",
            "# TYPE borgman_last_run_timestamp_seconds gauge",
            f"borgman_last_run_timestamp_seconds {timestamp_seconds}",
            "# HELP borgman_run_duration_seconds Duration of borgman runs.",
            "# TYPE borgman_run_duration_seconds histogram",
        ]
        for bound in DURATION_BUCKETS:
            count = 1 if duration_seconds <= bound else 0
            lines.append(f'borgman_run_duration_seconds_bucket{{le="{bound}"}} {count}')
        lines.extend(
            [
                'borgman_run_duration_seconds_bucket{le="+Inf"} 1',
                f"borgman_run_duration_seconds_sum {duration_seconds}",
                "borgman_run_duration_seconds_count 1",
            ]
        )
        return "\n".join(lines) + "\n"

    def push_outcome(
        self,
        succeeded: bool,
        timestamp_seconds: int,
        duration_seconds: float,
    ) -> None:
        body = self.render(succeeded, timestamp_seconds, duration_seconds)
        try:
            response = requests.put(
                self.url,
                data=body.encode("utf-8"),
                headers={"Content-Type": CONTENT_TYPE},
                timeout=self._timeout_seconds,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            self._log.warning(f"Could not push metrics to {self.url}: {exc}")
            return
        self._log.info(f"Metrics pushed to {self.url}")
