"""
Benchmark transaction confirmation latency across Solana RPC endpoints.

Each transaction is signed once and submitted unchanged to every configured
endpoint; every endpoint then reports finalization through its own
signatureSubscribe stream. Endpoints are ranked per transaction by
notification time and summed over the run.

Environment Variables:
- APP_LOG_LEVEL: default log level (default: INFO)
- SENTRY_DSN: enables Sentry error reporting when set
- RPC_COMMITMENT: default subscription commitment (default: finalized)
- FAILURE_SCORE_MODE / TIMED_OUT_PENALTY: default scoring policy
"""

from __future__ import annotations

import sys
import asyncio
import logging
import argparse

from rpcbench.logging import configure_logging
from rpcbench.errors import ConfigurationError
from rpcbench.telemetry import init_sentry, shutdown_sentry
from rpcbench.report import REPORT_FORMATS, write_reports, render_markdown

logger = logging.getLogger("rpcbench.scripts.bench")

EXIT_OK = 0
EXIT_RUN_FAILED = 1
EXIT_CONFIG_ERROR = 2


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Benchmark Solana RPC endpoints by confirmation latency")
    p.add_argument("--config", "-c", required=True, help="path to the JSON config file")
    p.add_argument(
        "--output-dir",
        "-o",
        default=None,
        help="directory for report.md / report.json (default: print only)",
    )
    p.add_argument(
        "--format",
        dest="fmt",
        choices=REPORT_FORMATS,
        default="both",
        help="report files to write when --output-dir is set",
    )
    p.add_argument(
        "--run-timeout",
        type=float,
        default=None,
        help="abort the whole run after this many seconds",
    )
    p.add_argument("--log-level", default=None, help="log level override (default env APP_LOG_LEVEL)")
    return p.parse_args(argv)


async def _run(config, run_timeout: float | None):
    from rpcbench.pipeline import run_benchmark  # noqa: PLC0415

    if run_timeout is None:
        return await run_benchmark(config)
    return await asyncio.wait_for(run_benchmark(config), timeout=run_timeout)


def main(argv: list[str] | None = None) -> int:
    """Parse CLI args, run the benchmark and print the Markdown report."""
    from rpcbench.scoring import score  # noqa: PLC0415
    from rpcbench.helpers.config_file import load_config  # noqa: PLC0415

    args = _parse_args(argv)
    configure_logging(args.log_level)
    init_sentry()
    try:
        try:
            config = load_config(args.config)
        except ConfigurationError as exc:
            logger.error("Invalid configuration (%s): %s", exc.error_code, exc.message)
            return EXIT_CONFIG_ERROR

        try:
            result = asyncio.run(_run(config, args.run_timeout))
        except asyncio.TimeoutError:
            logger.error("Run aborted after %.1fs", args.run_timeout)
            return EXIT_RUN_FAILED

        report = score(result, config.failure_policy)
        print(render_markdown(result, report))
        if args.output_dir:
            write_reports(args.output_dir, result, report, fmt=args.fmt)
        return EXIT_OK
    finally:
        shutdown_sentry()


if __name__ == "__main__":
    sys.exit(main())
